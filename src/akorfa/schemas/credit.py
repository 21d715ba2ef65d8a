"""Credit score and loan schemas."""
from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import Field

from .common import CamelModel


class CreditTierResponse(CamelModel):
    name: str
    min_score: int
    max_score: int
    limit: int
    interest_rate: Decimal


class CreditScoreResponse(CamelModel):
    user_id: uuid.UUID
    score: int
    tier: str
    credit_limit: int
    interest_rate: Decimal
    total_loans_completed: int
    on_time_payments: int
    late_payments: int
    total_loans_defaulted: int
    last_calculated_at: datetime


class LoanResponse(CamelModel):
    id: uuid.UUID
    amount: int
    interest_rate: Decimal
    total_due: int
    term_days: int
    due_date: datetime
    status: str
    amount_repaid: int
    repaid_at: datetime | None
    created_at: datetime


class CreditSummaryResponse(CamelModel):
    """Current credit standing and loans for one member."""

    credit_score: CreditScoreResponse
    active_loans: list[LoanResponse]
    loan_history: list[LoanResponse]
    can_borrow: bool
    max_borrow_amount: int
    tiers: list[CreditTierResponse]
    current_balance: int


class BorrowRequest(CamelModel):
    user_id: uuid.UUID
    amount: int = Field(..., gt=0)
    term_days: int = Field(7, description="Loan term; one of 7, 14 or 30")


class BorrowResponse(CamelModel):
    loan: LoanResponse
    message: str


class RepaymentRequest(CamelModel):
    user_id: uuid.UUID
    amount: int = Field(..., gt=0)


class RepaymentResponse(CamelModel):
    loan: LoanResponse
    payment_amount: int
    remaining_balance: int
    is_fully_repaid: bool
    is_late: bool
    message: str
