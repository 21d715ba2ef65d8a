# mypy: ignore-errors
"""Tests for credit refresh, borrowing and repayment."""

import uuid
from datetime import timedelta

import pytest

from akorfa.db.session import atomic
from akorfa.db.time import utcnow
from akorfa.models import CoinTransaction, CreditScore, Loan, LoanStatus
from akorfa.services.credit_service import borrow, credit_summary, refresh_credit_score, repay
from akorfa.services.errors import (
    ActiveLoanError,
    CreditLimitExceededError,
    InsufficientBalanceError,
    LedgerValidationError,
    LoanNotActiveError,
    NotFoundError,
)


def _borrow(db_session, user_id, amount=100, term_days=7, now=None):
    with atomic(db_session):
        loan = borrow(db_session, user_id, amount, term_days, now=now)
    return loan.id


def test_refresh_creates_score_row(db_session, make_profile) -> None:
    profile = make_profile()

    with atomic(db_session):
        record, tier = refresh_credit_score(db_session, profile.id)

    assert record.score == 335
    assert tier.name == "bronze"
    assert record.credit_limit == 100
    assert db_session.get(CreditScore, profile.id) is not None


def test_borrow_credits_coins(db_session, make_profile, wallet_of) -> None:
    profile = make_profile()

    loan_id = _borrow(db_session, profile.id, 100, 14)

    loan = db_session.get(Loan, loan_id)
    assert loan.status == LoanStatus.ACTIVE.value
    assert loan.total_due == 110
    assert loan.term_days == 14
    assert wallet_of(profile).coins_balance == 100
    tx = db_session.query(CoinTransaction).one()
    assert (tx.amount, tx.transaction_type) == (100, "loan_disbursed")


def test_borrow_and_repay_round_trip(db_session, make_profile, wallet_of) -> None:
    profile = make_profile(coins=10)
    loan_id = _borrow(db_session, profile.id)

    with atomic(db_session):
        result = repay(db_session, profile.id, loan_id, 110)

    assert result.is_fully_repaid
    assert result.is_late is False
    assert result.remaining_balance == 0
    loan = db_session.get(Loan, loan_id)
    assert loan.status == LoanStatus.REPAID.value
    assert loan.repaid_at is not None
    # Net effect is the interest paid.
    assert wallet_of(profile).coins_balance == 0
    credit = db_session.get(CreditScore, profile.id)
    assert credit.total_loans_completed == 1
    assert credit.on_time_payments == 1
    assert credit.late_payments == 0


def test_partial_then_capped_repayment(db_session, make_profile, wallet_of) -> None:
    profile = make_profile(coins=500)
    loan_id = _borrow(db_session, profile.id)

    with atomic(db_session):
        first = repay(db_session, profile.id, loan_id, 50)
    assert (first.payment_amount, first.remaining_balance, first.is_fully_repaid) == (50, 60, False)

    with atomic(db_session):
        second = repay(db_session, profile.id, loan_id, 400)
    assert second.payment_amount == 60
    assert second.is_fully_repaid
    assert wallet_of(profile).coins_balance == 500 + 100 - 110


def test_late_repayment_is_counted(db_session, make_profile) -> None:
    profile = make_profile(coins=10)
    start = utcnow()
    loan_id = _borrow(db_session, profile.id, now=start)

    with atomic(db_session):
        result = repay(db_session, profile.id, loan_id, 110, now=start + timedelta(days=8))

    assert result.is_late
    credit = db_session.get(CreditScore, profile.id)
    assert credit.late_payments == 1
    assert credit.on_time_payments == 0
    assert credit.total_loans_completed == 1


def test_second_active_loan_is_rejected(db_session, make_profile) -> None:
    profile = make_profile()
    _borrow(db_session, profile.id, 50)

    with pytest.raises(ActiveLoanError):
        _borrow(db_session, profile.id, 10)


def test_amount_above_limit_is_rejected(db_session, make_profile, wallet_of) -> None:
    profile = make_profile()

    with pytest.raises(CreditLimitExceededError):
        _borrow(db_session, profile.id, 101)

    assert wallet_of(profile).coins_balance == 0
    assert db_session.query(Loan).count() == 0


@pytest.mark.parametrize("term_days", [0, 10, 31])
def test_invalid_term_is_rejected(db_session, make_profile, term_days) -> None:
    profile = make_profile()
    with pytest.raises(LedgerValidationError):
        _borrow(db_session, profile.id, 50, term_days)


def test_repay_checks(db_session, make_profile) -> None:
    profile = make_profile()
    other = make_profile()
    loan_id = _borrow(db_session, profile.id)

    with pytest.raises(NotFoundError):
        repay(db_session, profile.id, uuid.uuid4(), 10)
    with pytest.raises(NotFoundError):
        repay(db_session, other.id, loan_id, 10)
    with pytest.raises(InsufficientBalanceError):
        repay(db_session, profile.id, loan_id, 101)
    db_session.rollback()

    with atomic(db_session):
        db_session.get(Loan, loan_id).status = LoanStatus.REPAID.value
    with pytest.raises(LoanNotActiveError):
        repay(db_session, profile.id, loan_id, 10)


def test_credit_summary(db_session, make_profile) -> None:
    profile = make_profile(coins=25)
    _borrow(db_session, profile.id, 40)

    with atomic(db_session):
        summary = credit_summary(db_session, profile.id)

    assert summary.can_borrow is False
    assert summary.max_borrow_amount == 0
    assert len(summary.active_loans) == 1
    assert len(summary.loan_history) == 1
    assert summary.coins_balance == 65
