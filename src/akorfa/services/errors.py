# src/akorfa/services/errors.py
"""Errors raised by ledger rules.

Every rule checks its preconditions before writing, so raising one of these
means nothing was mutated. The API maps ``status_code`` straight onto the
HTTP response.
"""

from __future__ import annotations

from fastapi import status


class LedgerError(Exception):
    """Base class for caller-visible ledger rejections."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class LedgerValidationError(LedgerError):
    """Input that is well-formed JSON but not an acceptable value."""


class NotFoundError(LedgerError):
    """A referenced profile, wallet or loan does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class BusinessRuleError(LedgerError):
    """A precondition on current ledger state failed."""


class InsufficientBalanceError(BusinessRuleError):
    pass


class ActiveLoanError(BusinessRuleError):
    pass


class CreditLimitExceededError(BusinessRuleError):
    pass


class LoanNotActiveError(BusinessRuleError):
    pass


class BelowMinimumPayoutError(BusinessRuleError):
    pass


class NotEligibleError(BusinessRuleError):
    pass


class SelfActionError(BusinessRuleError):
    """Tipping, gifting or following oneself."""
