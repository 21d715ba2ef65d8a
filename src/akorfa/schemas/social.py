"""Follow, streak and leaderboard schemas."""
from __future__ import annotations

import uuid
from datetime import date

from .common import CamelModel


class CreatorLevelResponse(CamelModel):
    level: int
    name: str
    min_followers: int
    can_monetize: bool


class CreatorInfoResponse(CamelModel):
    follower_count: int
    creator_level: int
    level_info: CreatorLevelResponse
    next_level: CreatorLevelResponse | None
    all_levels: list[CreatorLevelResponse]


class FollowRequest(CamelModel):
    follower_id: uuid.UUID
    following_id: uuid.UUID


class FollowResponse(CamelModel):
    following: bool
    follower_count: int
    creator_level: int
    can_monetize: bool
    message: str


class StreakRequest(CamelModel):
    user_id: uuid.UUID


class StreakResponse(CamelModel):
    current_streak: int
    longest_streak: int
    last_active_date: date | None
    already_recorded: bool = False
    message: str | None = None


class StreakInfoResponse(StreakResponse):
    activity_dates: list[str]


class LeaderboardEntryResponse(CamelModel):
    rank: int
    user_id: uuid.UUID
    username: str
    avatar_url: str | None
    value: float
    total_xp: int
    akorfa_score: float
    current_streak: int
    level: int


class LeaderboardResponse(CamelModel):
    type: str
    entries: list[LeaderboardEntryResponse]
