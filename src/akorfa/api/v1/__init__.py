"""Version 1 API endpoints."""

from .endpoints import (
    credit_router,
    follow_router,
    gift_router,
    leaderboard_router,
    payout_router,
    profile_router,
    score_router,
    streak_router,
    wallet_router,
)

__all__ = [
    "profile_router",
    "wallet_router",
    "credit_router",
    "gift_router",
    "payout_router",
    "follow_router",
    "streak_router",
    "leaderboard_router",
    "score_router",
]
