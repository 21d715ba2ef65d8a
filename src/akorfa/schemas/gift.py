"""Gift schemas."""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import Field

from akorfa.scoring.tables import GiftType

from .common import CamelModel


class GiftTypeResponse(CamelModel):
    type: GiftType
    name: str
    coins: int
    creator_receives: int


class GiftRequest(CamelModel):
    """Schema for sending a gift."""

    sender_id: uuid.UUID
    receiver_id: uuid.UUID
    gift_type: GiftType
    post_id: uuid.UUID | None = None
    message: str | None = Field(None, max_length=280)


class GiftResponse(CamelModel):
    id: uuid.UUID
    sender_id: uuid.UUID
    receiver_id: uuid.UUID
    post_id: uuid.UUID | None
    gift_type: str
    coin_amount: int
    message: str | None
    created_at: datetime


class GiftSentResponse(CamelModel):
    gift: GiftResponse
    creator_received: int
    sender_balance: int
    message: str


class GiftStatsResponse(CamelModel):
    received: int
    sent: int
    total_coins_received: int
    total_coins_sent: int
    earnings: int


class GiftHistoryResponse(CamelModel):
    gifts: list[GiftResponse]
    stats: GiftStatsResponse
