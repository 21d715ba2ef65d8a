# src/akorfa/api/v1/endpoints/leaderboard.py
"""Leaderboard endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from akorfa.db.session import get_db
from akorfa.schemas.social import LeaderboardEntryResponse, LeaderboardResponse
from akorfa.scoring import LeaderboardMetric
from akorfa.services.activity_service import leaderboard

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])

SessionDep = Annotated[Session, Depends(get_db)]


@router.get("", response_model=LeaderboardResponse)
async def read_leaderboard(
    db: SessionDep,
    metric: Annotated[LeaderboardMetric, Query(alias="type")] = LeaderboardMetric.XP,
    limit: int | None = None,
) -> LeaderboardResponse:
    """Rank profiles by XP, Akorfa score or current streak.

    ``limit`` defaults to 20 and is capped at 100.
    """
    ranked = leaderboard(db, metric, limit)
    return LeaderboardResponse(
        type=metric.value,
        entries=[
            LeaderboardEntryResponse(
                rank=item.rank,
                user_id=item.entry.id,
                username=item.entry.username,
                avatar_url=item.entry.avatar_url,
                value=item.value,
                total_xp=item.entry.total_xp,
                akorfa_score=item.entry.akorfa_score,
                current_streak=item.entry.current_streak,
                level=item.entry.level,
            )
            for item in ranked
        ],
    )
