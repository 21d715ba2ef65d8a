# src/akorfa/api/v1/endpoints/gifts.py
"""Gift endpoints."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from akorfa.db.session import atomic, get_db
from akorfa.schemas.gift import (
    GiftHistoryResponse,
    GiftRequest,
    GiftResponse,
    GiftSentResponse,
    GiftStatsResponse,
    GiftTypeResponse,
)
from akorfa.scoring.tables import GiftType, gift_payout
from akorfa.services.gift_service import gift_stats, send_gift

router = APIRouter(prefix="/gifts", tags=["gifts"])

SessionDep = Annotated[Session, Depends(get_db)]


@router.get("/types", response_model=list[GiftTypeResponse])
async def list_gift_types() -> list[GiftTypeResponse]:
    """Return the gift catalog with costs and creator payouts."""
    return [
        GiftTypeResponse(
            type=gift,
            name=gift.display_name,
            coins=gift.coins,
            creator_receives=gift_payout(gift.coins),
        )
        for gift in GiftType
    ]


@router.get("/{user_id}", response_model=GiftHistoryResponse)
async def read_gifts(user_id: uuid.UUID, db: SessionDep) -> GiftHistoryResponse:
    gifts, stats = gift_stats(db, user_id)
    return GiftHistoryResponse(
        gifts=[GiftResponse.model_validate(g) for g in gifts],
        stats=GiftStatsResponse.model_validate(stats),
    )


@router.post("", response_model=GiftSentResponse, status_code=status.HTTP_201_CREATED)
async def create_gift(payload: GiftRequest, db: SessionDep) -> GiftSentResponse:
    with atomic(db):
        result = send_gift(
            db,
            payload.sender_id,
            payload.receiver_id,
            payload.gift_type,
            post_id=payload.post_id,
            message=payload.message,
        )
    return GiftSentResponse(
        gift=GiftResponse.model_validate(result.gift),
        creator_received=result.receiver_credit,
        sender_balance=result.sender_balance,
        message=f"Sent {payload.gift_type.display_name}!",
    )
