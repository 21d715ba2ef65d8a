# src/akorfa/api/v1/endpoints/streaks.py
"""Daily activity streak endpoints."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from akorfa.db.session import atomic, get_db
from akorfa.schemas.social import StreakInfoResponse, StreakRequest, StreakResponse
from akorfa.services.activity_service import activity_dates, record_activity
from akorfa.services.wallet_service import get_profile

router = APIRouter(prefix="/streaks", tags=["streaks"])

SessionDep = Annotated[Session, Depends(get_db)]


@router.get("/{user_id}", response_model=StreakInfoResponse)
async def read_streak(user_id: uuid.UUID, db: SessionDep) -> StreakInfoResponse:
    profile = get_profile(db, user_id)
    return StreakInfoResponse(
        current_streak=profile.current_streak,
        longest_streak=profile.longest_streak,
        last_active_date=profile.last_active_date,
        activity_dates=activity_dates(db, user_id),
    )


@router.post("", response_model=StreakResponse)
async def update_streak(payload: StreakRequest, db: SessionDep) -> StreakResponse:
    """Record today's activity. Repeat calls on the same day are no-ops."""
    with atomic(db):
        result = record_activity(db, payload.user_id)
        update = result.update
        response = StreakResponse(
            current_streak=update.current,
            longest_streak=update.longest,
            last_active_date=result.profile.last_active_date,
            already_recorded=update.already_recorded,
            message="Already recorded today" if update.already_recorded else "Streak updated",
        )
    return response
