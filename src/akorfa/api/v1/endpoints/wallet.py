# src/akorfa/api/v1/endpoints/wallet.py
"""Wallet and points endpoints."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from akorfa.db.session import atomic, get_db
from akorfa.schemas.wallet import (
    CoinTransactionResponse,
    PointsAwardRequest,
    PointsAwardResponse,
    PointsEntryResponse,
    WalletResponse,
    WalletSummaryResponse,
)
from akorfa.scoring.tables import PointsAction, conversion_rate_label
from akorfa.services.wallet_service import award_points, wallet_summary

router = APIRouter(prefix="/wallet", tags=["wallet"])

SessionDep = Annotated[Session, Depends(get_db)]

POINTS_CONFIG = {action.value: action.weight for action in PointsAction}


@router.get("/{user_id}", response_model=WalletSummaryResponse)
async def read_wallet(user_id: uuid.UUID, db: SessionDep) -> WalletSummaryResponse:
    """Return balances and recent history, creating the wallet on first access."""
    with atomic(db):
        summary = wallet_summary(db, user_id)
    return WalletSummaryResponse(
        wallet=WalletResponse.model_validate(summary.wallet),
        cash_value=summary.cash_value,
        can_withdraw=summary.can_withdraw,
        history=[PointsEntryResponse.model_validate(e) for e in summary.points_history],
        coin_history=[CoinTransactionResponse.model_validate(t) for t in summary.coin_history],
        points_config=POINTS_CONFIG,
        conversion_rate=conversion_rate_label(),
    )


@router.post("/points", response_model=PointsAwardResponse)
async def add_points(payload: PointsAwardRequest, db: SessionDep) -> PointsAwardResponse:
    with atomic(db):
        award = award_points(
            db,
            payload.user_id,
            payload.action,
            amount=payload.amount,
            description=payload.description,
            reference_id=payload.reference_id,
            reference_type=payload.reference_type,
        )
    return PointsAwardResponse(
        entry=PointsEntryResponse.model_validate(award.entry),
        wallet=WalletResponse.model_validate(award.wallet),
        points_awarded=award.entry.amount,
        message=f"Earned {award.entry.amount} points!",
    )
