# src/akorfa/services/__init__.py
"""Ledger rules for wallets, credit, gifts, follows and streaks."""

from .errors import (
    ActiveLoanError,
    BelowMinimumPayoutError,
    BusinessRuleError,
    CreditLimitExceededError,
    InsufficientBalanceError,
    LedgerError,
    LedgerValidationError,
    LoanNotActiveError,
    NotEligibleError,
    NotFoundError,
    SelfActionError,
)

__all__ = [
    "ActiveLoanError",
    "BelowMinimumPayoutError",
    "BusinessRuleError",
    "CreditLimitExceededError",
    "InsufficientBalanceError",
    "LedgerError",
    "LedgerValidationError",
    "LoanNotActiveError",
    "NotEligibleError",
    "NotFoundError",
    "SelfActionError",
]
