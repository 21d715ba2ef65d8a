# src/akorfa/scoring/credit.py
"""Credit score calculation and tier lookup for coin micro-loans."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

__all__ = [
    "CREDIT_TIERS",
    "CreditHistory",
    "CreditTier",
    "ProfileSnapshot",
    "WalletSnapshot",
    "calculate_credit_score",
    "loan_interest",
    "resolve_tier",
]

BASE_SCORE = 300
MIN_SCORE = 100
MAX_SCORE = 850


@dataclass(frozen=True)
class CreditTier:
    name: str
    min_score: int
    max_score: int
    limit: int
    interest_rate: Decimal  # percent per loan term


# Ordered high to low; the first tier whose floor is met wins.
CREDIT_TIERS: tuple[CreditTier, ...] = (
    CreditTier("diamond", 800, 850, 2000, Decimal("2")),
    CreditTier("platinum", 700, 799, 1000, Decimal("3")),
    CreditTier("gold", 550, 699, 500, Decimal("5")),
    CreditTier("silver", 400, 549, 300, Decimal("7.5")),
    CreditTier("bronze", 0, 399, 100, Decimal("10")),
)


def resolve_tier(score: int) -> CreditTier:
    """Map a credit score to its tier."""
    for tier in CREDIT_TIERS:
        if score >= tier.min_score:
            return tier
    return CREDIT_TIERS[-1]


def loan_interest(amount: int, tier: CreditTier) -> int:
    """Flat interest for a loan of ``amount`` coins, rounded up."""
    return math.ceil(Decimal(amount) * tier.interest_rate / 100)


@dataclass(frozen=True)
class WalletSnapshot:
    creator_level: int = 1
    total_earned: int = 0
    follower_count: int = 0


@dataclass(frozen=True)
class ProfileSnapshot:
    total_xp: int = 0
    level: int = 1
    created_at: datetime | None = None


@dataclass(frozen=True)
class CreditHistory:
    total_loans_completed: int = 0
    on_time_payments: int = 0
    late_payments: int = 0
    total_loans_defaulted: int = 0


def _wallet_bonus(wallet: WalletSnapshot) -> int:
    return (
        min((wallet.creator_level or 1) * 30, 300)
        + min((wallet.total_earned or 0) // 100, 100)
        + min((wallet.follower_count or 0) * 2, 50)
    )


def _profile_bonus(profile: ProfileSnapshot, now: datetime) -> int:
    bonus = min((profile.total_xp or 0) // 500, 50) + min((profile.level or 1) * 5, 50)
    if profile.created_at is not None:
        age_days = max((now - profile.created_at).days, 0)
        bonus += min((age_days // 30) * 10, 50)
    return bonus


def _history_adjustment(history: CreditHistory) -> int:
    return (
        history.total_loans_completed * 20
        + history.on_time_payments * 10
        - history.late_payments * 30
        - history.total_loans_defaulted * 100
    )


def calculate_credit_score(
    wallet: WalletSnapshot | None,
    profile: ProfileSnapshot | None,
    history: CreditHistory | None,
    now: datetime,
) -> int:
    """Recompute a credit score from the current ledger snapshot.

    Each missing snapshot contributes nothing. The result is clamped to
    ``[100, 850]``.
    """
    score = BASE_SCORE
    if wallet is not None:
        score += _wallet_bonus(wallet)
    if profile is not None:
        score += _profile_bonus(profile, now)
    if history is not None:
        score += _history_adjustment(history)
    return max(MIN_SCORE, min(MAX_SCORE, score))
