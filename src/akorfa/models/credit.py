# src/akorfa/models/credit.py
"""Models for credit scores and coin loans."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Numeric, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from akorfa.db.session import Base
from akorfa.db.time import utcnow


class LoanStatus(str, Enum):
    ACTIVE = "active"
    REPAID = "repaid"
    # Nothing transitions a loan here yet; lateness is only recorded on repayment.
    DEFAULTED = "defaulted"


class CreditScore(Base):
    """Latest computed credit score plus the repayment history that feeds it."""

    __tablename__ = "credit_scores"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        primary_key=True,
    )
    score: Mapped[int] = mapped_column(Integer, nullable=False, default=300)
    tier: Mapped[str] = mapped_column(Text, nullable=False, default="bronze")
    credit_limit: Mapped[int] = mapped_column(Integer, nullable=False, default=100)

    total_loans_completed: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    on_time_payments: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    late_payments: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_loans_defaulted: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    last_calculated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )


class Loan(Base):
    """Coin loan with flat interest fixed at the time of borrowing."""

    __tablename__ = "loans"
    __table_args__ = (Index("ix_loans_user_id_status", "user_id", "status"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    # Percent, copied from the tier so later tier changes never reprice the loan.
    interest_rate: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    total_due: Mapped[int] = mapped_column(Integer, nullable=False)
    term_days: Mapped[int] = mapped_column(Integer, nullable=False)
    due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False, default=LoanStatus.ACTIVE.value)
    amount_repaid: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    repaid_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    @property
    def remaining_due(self) -> int:
        return max(self.total_due - self.amount_repaid, 0)


class LoanRepayment(Base):
    """A single payment applied to a loan."""

    __tablename__ = "loan_repayments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    loan_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("loans.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    is_late: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
