"""Wallet, points and payout schemas."""
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import Field

from akorfa.scoring.tables import PointsAction

from .common import CamelModel


class WalletResponse(CamelModel):
    user_id: uuid.UUID
    points_balance: int
    coins_balance: int
    total_earned: int
    total_withdrawn: Decimal
    creator_level: int
    follower_count: int
    can_monetize: bool


class PointsEntryResponse(CamelModel):
    id: uuid.UUID
    amount: int
    action: str
    description: str | None
    reference_id: uuid.UUID | None
    reference_type: str | None
    created_at: datetime


class CoinTransactionResponse(CamelModel):
    id: uuid.UUID
    amount: int
    transaction_type: str
    description: str | None
    reference_id: uuid.UUID | None
    created_at: datetime


class WalletSummaryResponse(CamelModel):
    """Wallet balances with recent history and the points price list."""

    wallet: WalletResponse
    cash_value: Decimal
    can_withdraw: bool
    history: list[PointsEntryResponse]
    coin_history: list[CoinTransactionResponse]
    points_config: dict[str, int]
    conversion_rate: str


class PointsAwardRequest(CamelModel):
    """Schema for awarding points for an action."""

    user_id: uuid.UUID
    action: PointsAction
    amount: int | None = Field(None, gt=0, description="Overrides the action's default weight")
    description: str | None = Field(None, max_length=500)
    reference_id: uuid.UUID | None = None
    reference_type: str | None = None


class PointsAwardResponse(CamelModel):
    entry: PointsEntryResponse
    wallet: WalletResponse
    points_awarded: int
    message: str


class PayoutRequest(CamelModel):
    """Schema for converting points into a cash payout."""

    user_id: uuid.UUID
    points_to_convert: int = Field(..., gt=0)
    payment_method: str | None = Field(None, max_length=100)


class PayoutResponse(CamelModel):
    id: uuid.UUID
    amount: Decimal
    points_converted: int
    payment_method: str
    status: str
    created_at: datetime


class PayoutCreatedResponse(CamelModel):
    payout: PayoutResponse
    wallet: WalletResponse
    message: str


class PayoutStats(CamelModel):
    available_points: int
    cash_value: Decimal
    can_withdraw: bool
    min_payout: int
    min_payout_value: Decimal
    total_withdrawn: Decimal
    can_monetize: bool
    creator_level: int


class PayoutSummaryResponse(CamelModel):
    payouts: list[PayoutResponse]
    stats: PayoutStats
