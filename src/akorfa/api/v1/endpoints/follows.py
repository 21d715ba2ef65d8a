# src/akorfa/api/v1/endpoints/follows.py
"""Follow endpoints and creator level standing."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from akorfa.db.session import atomic, get_db
from akorfa.schemas.social import (
    CreatorInfoResponse,
    CreatorLevelResponse,
    FollowRequest,
    FollowResponse,
)
from akorfa.scoring.tables import CREATOR_LEVELS
from akorfa.services.follow_service import FollowResult, creator_info, follow, unfollow

router = APIRouter(prefix="/follows", tags=["follows"])

SessionDep = Annotated[Session, Depends(get_db)]

ALL_LEVELS = [CreatorLevelResponse.model_validate(level) for level in CREATOR_LEVELS]


def _follow_response(result: FollowResult) -> FollowResponse:
    return FollowResponse(
        following=result.following,
        follower_count=result.wallet.follower_count,
        creator_level=result.level.level,
        can_monetize=result.level.can_monetize,
        message=result.message,
    )


@router.get("/{user_id}", response_model=CreatorInfoResponse)
async def read_creator_info(user_id: uuid.UUID, db: SessionDep) -> CreatorInfoResponse:
    with atomic(db):
        info = creator_info(db, user_id)
    return CreatorInfoResponse(
        follower_count=info.follower_count,
        creator_level=info.level.level,
        level_info=CreatorLevelResponse.model_validate(info.level),
        next_level=CreatorLevelResponse.model_validate(info.next_level) if info.next_level else None,
        all_levels=ALL_LEVELS,
    )


@router.post("", response_model=FollowResponse)
async def create_follow(payload: FollowRequest, db: SessionDep) -> FollowResponse:
    """Follow a member. Following twice is reported, not rejected."""
    with atomic(db):
        result = follow(db, payload.follower_id, payload.following_id)
        response = _follow_response(result)
    return response


@router.delete("", response_model=FollowResponse)
async def delete_follow(payload: FollowRequest, db: SessionDep) -> FollowResponse:
    with atomic(db):
        result = unfollow(db, payload.follower_id, payload.following_id)
        response = _follow_response(result)
    return response
