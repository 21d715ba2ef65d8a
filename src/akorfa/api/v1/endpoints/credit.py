# src/akorfa/api/v1/endpoints/credit.py
"""Credit score and coin loan endpoints."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from akorfa.db.session import atomic, get_db
from akorfa.schemas.credit import (
    BorrowRequest,
    BorrowResponse,
    CreditScoreResponse,
    CreditSummaryResponse,
    CreditTierResponse,
    LoanResponse,
    RepaymentRequest,
    RepaymentResponse,
)
from akorfa.scoring.credit import CREDIT_TIERS
from akorfa.services.credit_service import borrow, credit_summary, repay

router = APIRouter(prefix="/credit", tags=["credit"])

SessionDep = Annotated[Session, Depends(get_db)]

TIERS = [CreditTierResponse.model_validate(tier) for tier in CREDIT_TIERS]


@router.get("/{user_id}", response_model=CreditSummaryResponse)
async def read_credit(user_id: uuid.UUID, db: SessionDep) -> CreditSummaryResponse:
    """Recompute the member's score and list their loans."""
    with atomic(db):
        summary = credit_summary(db, user_id)
        record = summary.record
        score = CreditScoreResponse(
            user_id=record.user_id,
            score=record.score,
            tier=record.tier,
            credit_limit=record.credit_limit,
            interest_rate=summary.tier.interest_rate,
            total_loans_completed=record.total_loans_completed,
            on_time_payments=record.on_time_payments,
            late_payments=record.late_payments,
            total_loans_defaulted=record.total_loans_defaulted,
            last_calculated_at=record.last_calculated_at,
        )
    return CreditSummaryResponse(
        credit_score=score,
        active_loans=[LoanResponse.model_validate(loan) for loan in summary.active_loans],
        loan_history=[LoanResponse.model_validate(loan) for loan in summary.loan_history],
        can_borrow=summary.can_borrow,
        max_borrow_amount=summary.max_borrow_amount,
        tiers=TIERS,
        current_balance=summary.coins_balance,
    )


@router.post("/loans", response_model=BorrowResponse, status_code=status.HTTP_201_CREATED)
async def take_loan(payload: BorrowRequest, db: SessionDep) -> BorrowResponse:
    with atomic(db):
        loan = borrow(db, payload.user_id, payload.amount, payload.term_days)
    return BorrowResponse(
        loan=LoanResponse.model_validate(loan),
        message=f"Loan approved! {loan.amount} coins added to your wallet.",
    )


@router.post("/loans/{loan_id}/repayments", response_model=RepaymentResponse)
async def repay_loan(
    loan_id: uuid.UUID, payload: RepaymentRequest, db: SessionDep
) -> RepaymentResponse:
    """Apply a repayment; amounts above the remaining balance are capped."""
    with atomic(db):
        result = repay(db, payload.user_id, loan_id, payload.amount)
    if result.is_fully_repaid:
        message = "Loan fully repaid!"
    else:
        message = f"Payment of {result.payment_amount} coins applied"
    return RepaymentResponse(
        loan=LoanResponse.model_validate(result.loan),
        payment_amount=result.payment_amount,
        remaining_balance=result.remaining_balance,
        is_fully_repaid=result.is_fully_repaid,
        is_late=result.is_late,
        message=message,
    )
