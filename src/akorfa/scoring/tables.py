# src/akorfa/scoring/tables.py
"""Static rule tables for the points and coins economy.

These are loaded once with the module and never mutated. String values are
what the ledger tables store, so renaming a member is a data migration.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

__all__ = [
    "CREATOR_CUT",
    "CREATOR_LEVELS",
    "CreatorLevel",
    "GIFT_POINTS_PER_COIN",
    "GiftType",
    "LOAN_TERMS",
    "MIN_PAYOUT_POINTS",
    "POINTS_TO_USD",
    "PointsAction",
    "STREAK_EVENT_POINTS",
    "conversion_rate_label",
    "gift_payout",
    "gift_points_equivalent",
    "next_creator_level",
    "points_to_usd",
    "resolve_creator_level",
]


class PointsAction(str, Enum):
    """Closed set of actions that earn points, with their default weight."""

    POST = "post"
    LIKE_RECEIVED = "like_received"
    COMMENT_RECEIVED = "comment_received"
    CHALLENGE_COMPLETE = "challenge_complete"
    DAILY_STREAK = "daily_streak"
    HIGH_ASSESSMENT = "high_assessment"
    HELPING_OTHERS = "helping_others"
    AI_BONUS = "ai_bonus"

    @property
    def weight(self) -> int:
        return _POINTS_WEIGHTS[self]


_POINTS_WEIGHTS: dict[PointsAction, int] = {
    PointsAction.POST: 5,
    PointsAction.LIKE_RECEIVED: 1,
    PointsAction.COMMENT_RECEIVED: 2,
    PointsAction.CHALLENGE_COMPLETE: 10,
    PointsAction.DAILY_STREAK: 3,
    PointsAction.HIGH_ASSESSMENT: 20,
    PointsAction.HELPING_OTHERS: 30,
    PointsAction.AI_BONUS: 5,
}


class GiftType(str, Enum):
    """Gifts a user can send, each with a fixed coin cost."""

    STAR = "star"
    HEART = "heart"
    DIAMOND = "diamond"
    CROWN = "crown"
    ROCKET = "rocket"
    TROPHY = "trophy"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def coins(self) -> int:
        return _GIFT_COSTS[self]


_GIFT_COSTS: dict[GiftType, int] = {
    GiftType.STAR: 10,
    GiftType.HEART: 20,
    GiftType.DIAMOND: 50,
    GiftType.CROWN: 100,
    GiftType.ROCKET: 200,
    GiftType.TROPHY: 500,
}

# Share of a gift's cost credited to the receiving creator.
CREATOR_CUT = Decimal("0.5")


def gift_payout(cost: int) -> int:
    """Coins credited to the receiver of a gift costing ``cost``."""
    return math.floor(cost * CREATOR_CUT)


# Points credited to total_earned per coin of gift income.
GIFT_POINTS_PER_COIN = 10


def gift_points_equivalent(cost: int) -> int:
    """Points a gift costing ``cost`` adds to the receiver's lifetime earnings."""
    return gift_payout(cost) * GIFT_POINTS_PER_COIN


@dataclass(frozen=True)
class CreatorLevel:
    level: int
    name: str
    min_followers: int
    can_monetize: bool


CREATOR_LEVELS: tuple[CreatorLevel, ...] = (
    CreatorLevel(1, "Starter", 0, False),
    CreatorLevel(2, "Verified Contributor", 500, True),
    CreatorLevel(3, "Expert Coach", 1500, True),
    CreatorLevel(4, "Akorfa Ambassador", 5000, True),
)


def resolve_creator_level(follower_count: int) -> CreatorLevel:
    """Return the highest creator level whose follower threshold is met."""
    for level in reversed(CREATOR_LEVELS):
        if follower_count >= level.min_followers:
            return level
    return CREATOR_LEVELS[0]


def next_creator_level(level: CreatorLevel) -> CreatorLevel | None:
    """Return the level above ``level``, or None at the top."""
    if level.level >= len(CREATOR_LEVELS):
        return None
    return CREATOR_LEVELS[level.level]


MIN_PAYOUT_POINTS = 1000
POINTS_TO_USD = Decimal("0.001")


def points_to_usd(points: int) -> Decimal:
    """Cash value of ``points`` rounded to cents."""
    return (Decimal(points) * POINTS_TO_USD).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def conversion_rate_label() -> str:
    return f"{int(1 / POINTS_TO_USD)} AP = $1"


LOAN_TERMS: tuple[int, ...] = (7, 14, 30)

STREAK_EVENT_POINTS = 2
