"""API endpoint modules for version 1."""

from .credit import router as credit_router
from .follows import router as follow_router
from .gifts import router as gift_router
from .leaderboard import router as leaderboard_router
from .payouts import router as payout_router
from .profiles import router as profile_router
from .scores import router as score_router
from .streaks import router as streak_router
from .wallet import router as wallet_router

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
