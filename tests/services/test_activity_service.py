# mypy: ignore-errors
"""Tests for streaks, leaderboards and stored scores."""

import math
from datetime import date
from decimal import Decimal

from sqlalchemy import select

from akorfa.db.session import atomic
from akorfa.db.time import utcnow
from akorfa.models import Assessment, Profile, UserEvent
from akorfa.scoring import ActivityCounters, LeaderboardMetric, StabilityMetrics
from akorfa.services import activity_service
from akorfa.services.activity_service import (
    activity_dates,
    leaderboard,
    record_activity,
    record_akorfa_score,
    record_stability,
)


def _record(db_session, user_id, today):
    with atomic(db_session):
        result = record_activity(db_session, user_id, today)
    return result.update


def test_streak_progression(db_session, make_profile) -> None:
    member = make_profile()

    assert _record(db_session, member.id, date(2026, 2, 1)).current == 1
    repeat = _record(db_session, member.id, date(2026, 2, 1))
    assert repeat.already_recorded
    assert _record(db_session, member.id, date(2026, 2, 2)).current == 2
    assert _record(db_session, member.id, date(2026, 2, 3)).current == 3
    reset = _record(db_session, member.id, date(2026, 2, 6))
    assert (reset.current, reset.longest) == (1, 3)

    profile = db_session.get(Profile, member.id)
    assert (profile.current_streak, profile.longest_streak) == (1, 3)
    assert profile.last_active_date == date(2026, 2, 6)
    events = db_session.execute(select(UserEvent)).scalars().all()
    assert len(events) == 4
    assert {e.points_earned for e in events} == {2}


def test_activity_dates_are_distinct(db_session, make_profile) -> None:
    member = make_profile()
    _record(db_session, member.id, date(2026, 2, 1))
    with atomic(db_session):
        db_session.add(UserEvent(user_id=member.id, event_type="daily_activity", points_earned=2))

    assert activity_dates(db_session, member.id) == [utcnow().date().isoformat()]


def test_leaderboard_orders_by_metric(db_session, make_profile) -> None:
    low = make_profile(total_xp=10)
    high = make_profile(total_xp=300)
    mid = make_profile(total_xp=90, current_streak=12)

    by_xp = leaderboard(db_session, LeaderboardMetric.XP)
    assert [r.entry.id for r in by_xp] == [high.id, mid.id, low.id]

    by_streak = leaderboard(db_session, LeaderboardMetric.STREAK, limit=1)
    assert [(r.rank, r.entry.id, r.value) for r in by_streak] == [(1, mid.id, 12)]


def test_akorfa_score_is_saved_on_profile(db_session, make_profile) -> None:
    member = make_profile()

    with atomic(db_session):
        score = record_akorfa_score(db_session, ActivityCounters(posts_created=3), member.id)

    assert score == 6.0
    assert db_session.get(Profile, member.id).akorfa_score == Decimal("6.00")


def test_stability_is_stored(db_session) -> None:
    with atomic(db_session):
        finite = record_stability(db_session, StabilityMetrics(R=100, L=6, G=7, C=2, A=0.5, n=2))
        unbounded = record_stability(db_session, StabilityMetrics(R=1, L=2, G=2, C=0, A=0, n=1))

    assert db_session.get(Assessment, finite.id).overall_score == 650.0
    stored = db_session.get(Assessment, unbounded.id)
    assert math.isinf(stored.overall_score)
    assert stored.layer_scores["C"] == 0
    assert stored.user_id is None


def test_streak_reads_profile_under_row_lock(db_session, make_profile, mocker) -> None:
    member = make_profile()
    spy = mocker.spy(activity_service, "get_profile")

    _record(db_session, member.id, date(2026, 2, 1))

    spy.assert_called_once_with(db_session, member.id, lock=True)
