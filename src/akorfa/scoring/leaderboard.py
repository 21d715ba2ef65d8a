# src/akorfa/scoring/leaderboard.py
"""Leaderboard ranking over profile metrics."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class LeaderboardMetric(str, Enum):
    """Metrics a leaderboard can be ordered by."""

    XP = "xp"
    SCORE = "score"
    STREAK = "streak"

    @property
    def attribute(self) -> str:
        """Profile attribute holding the metric."""
        return {
            LeaderboardMetric.XP: "total_xp",
            LeaderboardMetric.SCORE: "akorfa_score",
            LeaderboardMetric.STREAK: "current_streak",
        }[self]


@dataclass(frozen=True)
class RankedEntry:
    rank: int
    entry: Any
    value: float


def clamp_limit(limit: int | None) -> int:
    if not limit or limit < 1:
        return DEFAULT_LIMIT
    return min(limit, MAX_LIMIT)


def _metric_value(entry: Any, metric: LeaderboardMetric) -> float:
    value = getattr(entry, metric.attribute, 0) or 0
    if isinstance(value, Decimal):
        return float(value)
    return value


def rank_entries(
    entries: Iterable[Any],
    metric: LeaderboardMetric,
    limit: int | None = None,
) -> list[RankedEntry]:
    """Rank ``entries`` by ``metric`` descending.

    Ties are broken by ascending ``id`` (compared as strings) so the order is
    reproducible regardless of how the rows were fetched.
    """
    ordered = sorted(entries, key=lambda e: str(e.id))
    ordered.sort(key=lambda e: _metric_value(e, metric), reverse=True)
    return [
        RankedEntry(rank=index, entry=entry, value=_metric_value(entry, metric))
        for index, entry in enumerate(ordered[: clamp_limit(limit)], start=1)
    ]
