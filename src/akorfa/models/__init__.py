# src/akorfa/models/__init__.py
"""SQLAlchemy models for the Akorfa ledger."""

from .assessment import Assessment
from .credit import CreditScore, Loan, LoanRepayment, LoanStatus
from .profile import Profile
from .social import Follow, Gift, Notification, NotificationType, UserEvent
from .wallet import CoinTransaction, Payout, PointsLogEntry, Wallet

__all__ = [
    "Assessment",
    "CreditScore", "Loan", "LoanRepayment", "LoanStatus",
    "Profile",
    "Follow", "Gift", "Notification", "NotificationType", "UserEvent",
    "CoinTransaction", "Payout", "PointsLogEntry", "Wallet",
]
