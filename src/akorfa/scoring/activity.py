# src/akorfa/scoring/activity.py
"""Deterministic Akorfa activity score."""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import ROUND_HALF_UP, Decimal

__all__ = ["ActivityCounters", "calculate_akorfa_score", "streak_bonus"]

# Per-event weights inside each category.
POST_CREATED = 5
COMMENT_ADDED = 2
REACTION_RECEIVED = 1
HELPFUL_CONTENT = 8
ASSESSMENT_COMPLETED = 10
SCORE_IMPROVEMENT = 15
CONSISTENCY_STREAK = 5
CHALLENGE_JOINED = 3
CHALLENGE_COMPLETED = 15
PROGRESS_CONSISTENCY = 10
USER_HELPED = 8
CONTENT_SHARED = 3
INVITATION_SENT = 5

# Category weights applied to the sub-scores.
ACTIVITY_WEIGHT = Decimal("0.4")
ASSESSMENT_WEIGHT = Decimal("0.3")
CHALLENGE_WEIGHT = Decimal("0.2")
COMMUNITY_WEIGHT = Decimal("0.1")

STREAK_BONUS_PER_DAY = 2
STREAK_BONUS_CAP = 20

_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class ActivityCounters:
    """Snapshot of a user's recent behaviour. Missing counts are zero."""

    posts_created: int | None = 0
    comments_made: int | None = 0
    reactions_received: int | None = 0
    helpful_marked: int | None = 0
    assessment_completions: int | None = 0
    score_improvement: float | None = 0
    consistency_streak: int | None = 0
    challenges_joined: int | None = 0
    challenges_completed: int | None = 0
    progress_consistency: int | None = 0
    users_helped: int | None = 0
    content_shared: int | None = 0
    invitations_sent: int | None = 0

    def normalized(self) -> dict[str, Decimal]:
        """Return every counter as a Decimal with ``None`` mapped to zero."""
        return {
            f.name: Decimal(str(getattr(self, f.name) or 0))
            for f in fields(self)
        }


def streak_bonus(streak: int | None) -> int:
    """Flat bonus for a consistency streak, capped at 20."""
    return min((streak or 0) * STREAK_BONUS_PER_DAY, STREAK_BONUS_CAP)


def calculate_akorfa_score(counters: ActivityCounters) -> float:
    """Weighted engagement score rounded to two decimals.

    ``consistency_streak`` feeds both the assessment sub-score and the flat
    streak bonus. Both terms are kept so existing scores stay comparable.
    """
    c = counters.normalized()

    activity = (
        c["posts_created"] * POST_CREATED
        + c["comments_made"] * COMMENT_ADDED
        + c["reactions_received"] * REACTION_RECEIVED
        + c["helpful_marked"] * HELPFUL_CONTENT
    )
    assessment = (
        c["assessment_completions"] * ASSESSMENT_COMPLETED
        + c["score_improvement"] * SCORE_IMPROVEMENT
        + c["consistency_streak"] * CONSISTENCY_STREAK
    )
    challenge = (
        c["challenges_joined"] * CHALLENGE_JOINED
        + c["challenges_completed"] * CHALLENGE_COMPLETED
        + c["progress_consistency"] * PROGRESS_CONSISTENCY
    )
    community = (
        c["users_helped"] * USER_HELPED
        + c["content_shared"] * CONTENT_SHARED
        + c["invitations_sent"] * INVITATION_SENT
    )

    bonus = Decimal(str(streak_bonus(counters.consistency_streak)))
    # Reserved for a per-layer balance signal; nothing feeds it yet.
    layer_balance_bonus = Decimal(0)

    total = (
        activity * ACTIVITY_WEIGHT
        + assessment * ASSESSMENT_WEIGHT
        + challenge * CHALLENGE_WEIGHT
        + community * COMMUNITY_WEIGHT
        + bonus
        + layer_balance_bonus
    )
    return float(total.quantize(_CENTS, rounding=ROUND_HALF_UP))
