# src/akorfa/scoring/streaks.py
"""Daily activity streak transitions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class StreakUpdate:
    current: int
    longest: int
    already_recorded: bool = False


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def advance_streak(
    last_active: date | datetime | None,
    today: date | datetime,
    current: int,
    longest: int,
) -> StreakUpdate:
    """Apply one day of activity to a streak.

    Gaps are counted in calendar days, so 23:59 followed by 00:01 the next
    morning continues the streak while anything two days apart resets it.
    """
    current = current or 0
    longest = longest or 0
    if last_active is None:
        return StreakUpdate(current=1, longest=max(longest, 1))

    gap = (_as_date(today) - _as_date(last_active)).days
    if gap == 0:
        return StreakUpdate(current=current, longest=max(longest, current), already_recorded=True)
    if gap == 1:
        new_current = current + 1
    else:
        new_current = 1
    return StreakUpdate(current=new_current, longest=max(longest, new_current))
