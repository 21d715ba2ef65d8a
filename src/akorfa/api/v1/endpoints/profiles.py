# src/akorfa/api/v1/endpoints/profiles.py
"""Profile endpoints."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from akorfa.db.session import atomic, get_db
from akorfa.schemas.profile import ProfileCreate, ProfileResponse
from akorfa.services.profile_service import create_profile
from akorfa.services.wallet_service import get_profile

router = APIRouter(prefix="/profiles", tags=["profiles"])

SessionDep = Annotated[Session, Depends(get_db)]


@router.post("", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def register_profile(payload: ProfileCreate, db: SessionDep) -> ProfileResponse:
    """Create a profile and its empty wallet."""
    with atomic(db):
        profile = create_profile(
            db,
            payload.username,
            user_id=payload.id,
            full_name=payload.full_name,
            avatar_url=payload.avatar_url,
        )
    return ProfileResponse.model_validate(profile)


@router.get("/{user_id}", response_model=ProfileResponse)
async def read_profile(user_id: uuid.UUID, db: SessionDep) -> ProfileResponse:
    return ProfileResponse.model_validate(get_profile(db, user_id))
