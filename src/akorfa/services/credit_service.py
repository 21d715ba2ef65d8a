"""Credit score refresh and the coin loan lifecycle."""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from akorfa.db.time import as_utc, utcnow
from akorfa.models import CreditScore, Loan, LoanRepayment, LoanStatus, Profile, Wallet
from akorfa.scoring.credit import (
    CreditHistory,
    CreditTier,
    ProfileSnapshot,
    WalletSnapshot,
    calculate_credit_score,
    loan_interest,
    resolve_tier,
)
from akorfa.scoring.tables import LOAN_TERMS

from .errors import (
    ActiveLoanError,
    CreditLimitExceededError,
    InsufficientBalanceError,
    LedgerValidationError,
    LoanNotActiveError,
    NotFoundError,
)
from .wallet_service import credit_coins, debit_coins, get_profile, get_wallet

__all__ = [
    "borrow",
    "compute_credit",
    "credit_summary",
    "get_active_loans",
    "get_loan_history",
    "refresh_credit_score",
    "repay",
]

logger = logging.getLogger(__name__)

LOAN_DISBURSED = "loan_disbursed"
LOAN_REPAYMENT = "loan_repayment"


@dataclass(frozen=True)
class CreditAssessment:
    score: int
    tier: CreditTier


@dataclass(frozen=True)
class RepaymentResult:
    loan: Loan
    payment_amount: int
    remaining_balance: int
    is_fully_repaid: bool
    is_late: bool


def _snapshots(
    wallet: Wallet | None,
    profile: Profile | None,
    credit: CreditScore | None,
) -> tuple[WalletSnapshot | None, ProfileSnapshot | None, CreditHistory | None]:
    wallet_snapshot = None
    if wallet is not None:
        wallet_snapshot = WalletSnapshot(
            creator_level=wallet.creator_level,
            total_earned=wallet.total_earned,
            follower_count=wallet.follower_count,
        )
    profile_snapshot = None
    if profile is not None:
        profile_snapshot = ProfileSnapshot(
            total_xp=profile.total_xp,
            level=profile.level,
            created_at=as_utc(profile.created_at) if profile.created_at else None,
        )
    history = None
    if credit is not None:
        history = CreditHistory(
            total_loans_completed=credit.total_loans_completed,
            on_time_payments=credit.on_time_payments,
            late_payments=credit.late_payments,
            total_loans_defaulted=credit.total_loans_defaulted,
        )
    return wallet_snapshot, profile_snapshot, history


def compute_credit(db: Session, user_id: uuid.UUID, now: datetime | None = None) -> CreditAssessment:
    """Recompute the user's score from current wallet, profile and history rows."""
    now = now or utcnow()
    wallet = get_wallet(db, user_id)
    profile = db.get(Profile, user_id)
    credit = db.get(CreditScore, user_id)
    score = calculate_credit_score(*_snapshots(wallet, profile, credit), now=now)
    return CreditAssessment(score=score, tier=resolve_tier(score))


def refresh_credit_score(
    db: Session, user_id: uuid.UUID, now: datetime | None = None
) -> tuple[CreditScore, CreditTier]:
    """Recompute and persist the user's credit score row."""
    now = now or utcnow()
    get_profile(db, user_id)
    assessment = compute_credit(db, user_id, now)
    record = db.get(CreditScore, user_id)
    if record is None:
        record = CreditScore(
            user_id=user_id,
            total_loans_completed=0,
            on_time_payments=0,
            late_payments=0,
            total_loans_defaulted=0,
        )
        db.add(record)
    record.score = assessment.score
    record.tier = assessment.tier.name
    record.credit_limit = assessment.tier.limit
    record.last_calculated_at = now
    db.flush()
    return record, assessment.tier


def get_active_loans(db: Session, user_id: uuid.UUID) -> list[Loan]:
    stmt = (
        select(Loan)
        .where(Loan.user_id == user_id, Loan.status == LoanStatus.ACTIVE.value)
        .order_by(Loan.created_at.desc())
    )
    return list(db.execute(stmt).scalars())


def get_loan_history(db: Session, user_id: uuid.UUID, limit: int = 10) -> list[Loan]:
    stmt = select(Loan).where(Loan.user_id == user_id).order_by(Loan.created_at.desc()).limit(limit)
    return list(db.execute(stmt).scalars())


def borrow(
    db: Session,
    user_id: uuid.UUID,
    amount: int,
    term_days: int = 7,
    now: datetime | None = None,
) -> Loan:
    """Open a loan against the user's current credit limit.

    Interest is flat for the term: ``ceil(amount * rate / 100)``.
    """
    now = now or utcnow()
    if term_days not in LOAN_TERMS:
        raise LedgerValidationError("Term must be 7, 14, or 30 days")
    if amount <= 0:
        raise LedgerValidationError("Valid loan amount required")

    get_profile(db, user_id)
    # Serialise borrowers on the same wallet so two requests cannot both pass
    # the active-loan check.
    get_wallet(db, user_id, lock=True)
    if get_active_loans(db, user_id):
        raise ActiveLoanError("You have an active loan. Repay it first.")

    _, tier = refresh_credit_score(db, user_id, now)
    if amount > tier.limit:
        raise CreditLimitExceededError(
            f"Loan amount exceeds your credit limit of {tier.limit} coins"
        )

    loan = Loan(
        user_id=user_id,
        amount=amount,
        interest_rate=tier.interest_rate,
        total_due=amount + loan_interest(amount, tier),
        term_days=term_days,
        due_date=now + timedelta(days=term_days),
        status=LoanStatus.ACTIVE.value,
        amount_repaid=0,
        created_at=now,
    )
    db.add(loan)
    db.flush()
    credit_coins(
        db,
        user_id,
        amount,
        transaction_type=LOAN_DISBURSED,
        description=f"Loan of {amount} coins",
        reference_id=loan.id,
    )
    db.flush()
    logger.info(
        "Loan %s opened for %s: %d coins, %s%% over %d days",
        loan.id, user_id, amount, tier.interest_rate, term_days,
    )
    return loan


def repay(
    db: Session,
    user_id: uuid.UUID,
    loan_id: uuid.UUID,
    amount: int,
    now: datetime | None = None,
) -> RepaymentResult:
    """Apply a payment to an active loan.

    Overpayment is capped at the remaining balance. A payment made after the
    due date is late; the final payment decides whether the completed loan
    counts as on time or late.
    """
    now = now or utcnow()
    if amount <= 0:
        raise LedgerValidationError("Valid loanId and amount required")

    stmt = select(Loan).where(Loan.id == loan_id, Loan.user_id == user_id).with_for_update()
    loan = db.execute(stmt).scalars().first()
    if loan is None:
        raise NotFoundError("Loan not found")
    if loan.status != LoanStatus.ACTIVE.value:
        raise LoanNotActiveError("Loan is not active")

    wallet = get_wallet(db, user_id, lock=True)
    if wallet is None or wallet.coins_balance < amount:
        raise InsufficientBalanceError("Insufficient coin balance")

    remaining = loan.remaining_due
    payment = min(amount, remaining)
    is_late = now > as_utc(loan.due_date)

    debit_coins(
        db,
        user_id,
        payment,
        transaction_type=LOAN_REPAYMENT,
        description=f"Repayment of {payment} coins",
        reference_id=loan.id,
    )
    db.add(LoanRepayment(loan_id=loan.id, user_id=user_id, amount=payment, is_late=is_late))

    loan.amount_repaid += payment
    fully_repaid = loan.amount_repaid >= loan.total_due
    if fully_repaid:
        loan.status = LoanStatus.REPAID.value
        loan.repaid_at = now
        _record_completed_loan(db, user_id, is_late, now)
    db.flush()

    logger.info(
        "Applied %d coins to loan %s (late=%s, repaid=%s)", payment, loan.id, is_late, fully_repaid
    )
    return RepaymentResult(
        loan=loan,
        payment_amount=payment,
        remaining_balance=remaining - payment,
        is_fully_repaid=fully_repaid,
        is_late=is_late,
    )


def _record_completed_loan(db: Session, user_id: uuid.UUID, is_late: bool, now: datetime) -> None:
    if db.get(CreditScore, user_id) is None:
        refresh_credit_score(db, user_id, now)
    counter = "late_payments" if is_late else "on_time_payments"
    db.execute(
        update(CreditScore)
        .where(CreditScore.user_id == user_id)
        .values(
            **{
                "total_loans_completed": CreditScore.total_loans_completed + 1,
                counter: getattr(CreditScore, counter) + 1,
                "updated_at": now,
            }
        )
    )


@dataclass(frozen=True)
class CreditSummary:
    record: CreditScore
    tier: CreditTier
    active_loans: list[Loan]
    loan_history: list[Loan]
    coins_balance: int

    @property
    def can_borrow(self) -> bool:
        return not self.active_loans

    @property
    def max_borrow_amount(self) -> int:
        return self.tier.limit if self.can_borrow else 0


def credit_summary(db: Session, user_id: uuid.UUID, now: datetime | None = None) -> CreditSummary:
    """Refresh the score row and gather the user's loans."""
    record, tier = refresh_credit_score(db, user_id, now)
    wallet = get_wallet(db, user_id)
    return CreditSummary(
        record=record,
        tier=tier,
        active_loans=get_active_loans(db, user_id),
        loan_history=get_loan_history(db, user_id),
        coins_balance=wallet.coins_balance if wallet is not None else 0,
    )
