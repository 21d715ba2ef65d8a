# src/akorfa/api/v1/endpoints/payouts.py
"""Payout endpoints."""

import uuid
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from akorfa.db.session import atomic, get_db
from akorfa.schemas.wallet import (
    PayoutCreatedResponse,
    PayoutRequest,
    PayoutResponse,
    PayoutStats,
    PayoutSummaryResponse,
    WalletResponse,
)
from akorfa.scoring.tables import MIN_PAYOUT_POINTS, points_to_usd
from akorfa.services.wallet_service import payout_summary, request_payout

router = APIRouter(prefix="/payouts", tags=["payouts"])

SessionDep = Annotated[Session, Depends(get_db)]


@router.get("/{user_id}", response_model=PayoutSummaryResponse)
async def read_payouts(user_id: uuid.UUID, db: SessionDep) -> PayoutSummaryResponse:
    summary = payout_summary(db, user_id)
    wallet = summary.wallet
    return PayoutSummaryResponse(
        payouts=[PayoutResponse.model_validate(p) for p in summary.payouts],
        stats=PayoutStats(
            available_points=summary.available_points,
            cash_value=summary.cash_value,
            can_withdraw=summary.can_withdraw,
            min_payout=MIN_PAYOUT_POINTS,
            min_payout_value=points_to_usd(MIN_PAYOUT_POINTS),
            total_withdrawn=wallet.total_withdrawn if wallet else Decimal("0.00"),
            can_monetize=wallet.can_monetize if wallet else False,
            creator_level=wallet.creator_level if wallet else 1,
        ),
    )


@router.post("", response_model=PayoutCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_payout(payload: PayoutRequest, db: SessionDep) -> PayoutCreatedResponse:
    """Convert points into a pending cash payout."""
    with atomic(db):
        result = request_payout(
            db, payload.user_id, payload.points_to_convert, payload.payment_method
        )
    return PayoutCreatedResponse(
        payout=PayoutResponse.model_validate(result.payout),
        wallet=WalletResponse.model_validate(result.wallet),
        message=f"Payout request for ${result.payout.amount} submitted",
    )
