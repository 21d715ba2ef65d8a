# src/akorfa/models/wallet.py
"""Wallet balances and their append-only audit trail."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from akorfa.db.session import Base
from akorfa.db.time import utcnow

PAYOUT_STATUS_PENDING = "pending"


class Wallet(Base):
    """Per-user balances. Created lazily, never deleted."""

    __tablename__ = "wallets"
    __table_args__ = (
        CheckConstraint("points_balance >= 0", name="ck_wallets_points_non_negative"),
        CheckConstraint("coins_balance >= 0", name="ck_wallets_coins_non_negative"),
        CheckConstraint("creator_level BETWEEN 1 AND 4", name="ck_wallets_creator_level"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    points_balance: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    coins_balance: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Only ever incremented.
    total_earned: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # USD paid out through payouts.
    total_withdrawn: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False, default=0)

    creator_level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    follower_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    can_monetize: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )


class PointsLogEntry(Base):
    """Immutable record of one change to a points balance."""

    __tablename__ = "points_log"
    __table_args__ = (Index("ix_points_log_user_id_created_at", "user_id", "created_at"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    action: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    reference_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    reference_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class CoinTransaction(Base):
    """Immutable record of one change to a coin balance.

    Debits carry a negative amount.
    """

    __tablename__ = "coin_transactions"
    __table_args__ = (
        Index("ix_coin_transactions_user_id_created_at", "user_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    transaction_type: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    reference_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class Payout(Base):
    """Request to convert points into cash."""

    __tablename__ = "payouts"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    points_converted: Mapped[int] = mapped_column(Integer, nullable=False)
    payment_method: Mapped[str] = mapped_column(Text, nullable=False, default="pending")
    status: Mapped[str] = mapped_column(Text, nullable=False, default=PAYOUT_STATUS_PENDING)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
