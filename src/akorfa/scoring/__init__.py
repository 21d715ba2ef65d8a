# src/akorfa/scoring/__init__.py
"""Pure scoring functions and rule tables.

Nothing in this package touches the database; the ledger services feed it
snapshots and apply the results.
"""

from .activity import ActivityCounters, calculate_akorfa_score
from .credit import (
    CREDIT_TIERS,
    CreditHistory,
    CreditTier,
    ProfileSnapshot,
    WalletSnapshot,
    calculate_credit_score,
    loan_interest,
    resolve_tier,
)
from .leaderboard import LeaderboardMetric, RankedEntry, rank_entries
from .stability import StabilityMetrics, calculate_stability
from .streaks import StreakUpdate, advance_streak

__all__ = [
    "ActivityCounters", "calculate_akorfa_score",
    "CREDIT_TIERS", "CreditHistory", "CreditTier", "ProfileSnapshot", "WalletSnapshot",
    "calculate_credit_score", "loan_interest", "resolve_tier",
    "LeaderboardMetric", "RankedEntry", "rank_entries",
    "StabilityMetrics", "calculate_stability",
    "StreakUpdate", "advance_streak",
]
