"""Streaks, leaderboards and the scores stored on profiles."""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from akorfa.db.time import as_utc, utcnow
from akorfa.models import Assessment, Profile, UserEvent
from akorfa.scoring import (
    ActivityCounters,
    LeaderboardMetric,
    RankedEntry,
    StabilityMetrics,
    StreakUpdate,
    advance_streak,
    calculate_akorfa_score,
    calculate_stability,
    rank_entries,
)
from akorfa.scoring.leaderboard import clamp_limit
from akorfa.scoring.tables import STREAK_EVENT_POINTS

from .wallet_service import get_profile

__all__ = [
    "activity_dates",
    "leaderboard",
    "record_activity",
    "record_akorfa_score",
    "record_stability",
]

logger = logging.getLogger(__name__)

DAILY_ACTIVITY = "daily_activity"


@dataclass(frozen=True)
class StreakResult:
    profile: Profile
    update: StreakUpdate


def record_activity(db: Session, user_id: uuid.UUID, today: date | None = None) -> StreakResult:
    """Count today towards the user's streak.

    A second call on the same day changes nothing and reports
    ``already_recorded``. The profile row stays locked until the caller
    commits, so concurrent calls see each other's streak.
    """
    today = today or utcnow().date()
    profile = get_profile(db, user_id, lock=True)
    update = advance_streak(
        profile.last_active_date,
        today,
        profile.current_streak,
        profile.longest_streak,
    )
    if update.already_recorded:
        return StreakResult(profile=profile, update=update)

    profile.current_streak = update.current
    profile.longest_streak = update.longest
    profile.last_active_date = today
    db.add(
        UserEvent(
            user_id=user_id,
            event_type=DAILY_ACTIVITY,
            points_earned=STREAK_EVENT_POINTS,
            metadata_={"source": "streak_update", "streak": update.current},
        )
    )
    db.flush()
    logger.debug("Streak for %s is now %d", user_id, update.current)
    return StreakResult(profile=profile, update=update)


def activity_dates(db: Session, user_id: uuid.UUID, now: datetime | None = None) -> list[str]:
    """Distinct ISO dates with recorded activity over the last twelve months."""
    since = (now or utcnow()) - timedelta(days=365)
    stmt = (
        select(UserEvent.created_at)
        .where(UserEvent.user_id == user_id, UserEvent.created_at >= since)
        .order_by(UserEvent.created_at.desc())
    )
    seen: dict[str, None] = {}
    for created_at in db.execute(stmt).scalars():
        seen.setdefault(as_utc(created_at).date().isoformat(), None)
    return list(seen)


def leaderboard(
    db: Session,
    metric: LeaderboardMetric,
    limit: int | None = None,
) -> list[RankedEntry]:
    """Top profiles by ``metric`` with reproducible tie ordering."""
    column = getattr(Profile, metric.attribute)
    stmt = select(Profile).order_by(column.desc(), Profile.id).limit(clamp_limit(limit))
    return rank_entries(db.execute(stmt).scalars(), metric, limit)


def record_akorfa_score(
    db: Session,
    counters: ActivityCounters,
    user_id: uuid.UUID | None = None,
) -> float:
    """Score ``counters`` and store the result on the profile when given."""
    score = calculate_akorfa_score(counters)
    if user_id is not None:
        profile = get_profile(db, user_id)
        profile.akorfa_score = Decimal(str(score))
        db.flush()
    return score


def record_stability(
    db: Session,
    metrics: StabilityMetrics,
    user_id: uuid.UUID | None = None,
) -> Assessment:
    """Calculate stability and keep the inputs and result as an assessment."""
    if user_id is not None:
        get_profile(db, user_id)
    stability = calculate_stability(metrics)
    assessment = Assessment(
        user_id=user_id,
        layer_scores={
            "R": metrics.R, "L": metrics.L, "G": metrics.G,
            "C": metrics.C, "A": metrics.A, "n": metrics.n,
        },
        overall_score=stability,
        insights='{"note": "stability-calc"}',
    )
    db.add(assessment)
    db.flush()
    return assessment
