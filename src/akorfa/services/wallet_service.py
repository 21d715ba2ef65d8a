"""Wallet ledger rules: lazy creation, points awards and payouts."""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from akorfa.db.time import utcnow
from akorfa.models import CoinTransaction, Payout, PointsLogEntry, Profile, Wallet
from akorfa.scoring.tables import MIN_PAYOUT_POINTS, PointsAction, points_to_usd

from .errors import (
    BelowMinimumPayoutError,
    InsufficientBalanceError,
    LedgerValidationError,
    NotEligibleError,
    NotFoundError,
)

__all__ = [
    "award_points",
    "credit_coins",
    "debit_coins",
    "get_or_create_wallet",
    "get_profile",
    "get_wallet",
    "payout_summary",
    "request_payout",
    "wallet_summary",
]

logger = logging.getLogger(__name__)

PAYOUT_ACTION = "payout_request"


@dataclass(frozen=True)
class PointsAward:
    entry: PointsLogEntry
    wallet: Wallet


@dataclass(frozen=True)
class PayoutResult:
    payout: Payout
    wallet: Wallet


def get_profile(db: Session, user_id: uuid.UUID, *, lock: bool = False) -> Profile:
    """Return the profile or raise :class:`NotFoundError`.

    With ``lock`` the row is re-read under a row lock held until the
    transaction ends.
    """
    if lock:
        stmt = (
            select(Profile)
            .where(Profile.id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        profile = db.execute(stmt).scalars().first()
    else:
        profile = db.get(Profile, user_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


def get_wallet(db: Session, user_id: uuid.UUID, *, lock: bool = False) -> Wallet | None:
    """Read a wallet row, optionally taking a row lock for the transaction."""
    stmt = select(Wallet).where(Wallet.user_id == user_id)
    if lock:
        stmt = stmt.with_for_update()
    return db.execute(stmt).scalars().first()


def get_or_create_wallet(db: Session, user_id: uuid.UUID, *, lock: bool = False) -> Wallet:
    """Return the user's wallet, creating it in its initial state if missing.

    This is the only place a wallet is created. Raises :class:`NotFoundError`
    when the profile itself does not exist.
    """
    wallet = get_wallet(db, user_id, lock=lock)
    if wallet is not None:
        return wallet

    get_profile(db, user_id)
    wallet = Wallet(
        user_id=user_id,
        points_balance=0,
        coins_balance=0,
        total_earned=0,
        total_withdrawn=Decimal("0"),
        creator_level=1,
        follower_count=0,
        can_monetize=False,
    )
    db.add(wallet)
    db.flush()
    logger.info("Created wallet for %s", user_id)
    return wallet


def _increment_wallet(db: Session, user_id: uuid.UUID, **deltas: Any) -> None:
    values = {name: getattr(Wallet, name) + delta for name, delta in deltas.items()}
    values["updated_at"] = utcnow()
    db.execute(update(Wallet).where(Wallet.user_id == user_id).values(**values))


def credit_coins(
    db: Session,
    user_id: uuid.UUID,
    amount: int,
    *,
    transaction_type: str,
    description: str,
    reference_id: uuid.UUID | None = None,
    earned: int = 0,
) -> Wallet:
    """Add coins to a wallet and append the matching coin transaction.

    ``earned`` is added to the wallet's lifetime ``total_earned`` in the same
    update.
    """
    wallet = get_or_create_wallet(db, user_id)
    deltas: dict[str, int] = {"coins_balance": amount}
    if earned:
        deltas["total_earned"] = earned
    _increment_wallet(db, user_id, **deltas)
    db.add(
        CoinTransaction(
            user_id=user_id,
            amount=amount,
            transaction_type=transaction_type,
            description=description,
            reference_id=reference_id,
        )
    )
    return wallet


def debit_coins(
    db: Session,
    user_id: uuid.UUID,
    amount: int,
    *,
    transaction_type: str,
    description: str,
    reference_id: uuid.UUID | None = None,
) -> None:
    """Remove coins from a wallet if, and only if, the balance covers them.

    The balance check and the update are one conditional statement, so two
    transactions racing for the same coins cannot both succeed.
    """
    result = db.execute(
        update(Wallet)
        .where(Wallet.user_id == user_id, Wallet.coins_balance >= amount)
        .values(coins_balance=Wallet.coins_balance - amount, updated_at=utcnow())
    )
    if result.rowcount != 1:
        raise InsufficientBalanceError("Insufficient coins")
    db.add(
        CoinTransaction(
            user_id=user_id,
            amount=-amount,
            transaction_type=transaction_type,
            description=description,
            reference_id=reference_id,
        )
    )


def award_points(
    db: Session,
    user_id: uuid.UUID,
    action: PointsAction,
    *,
    amount: int | None = None,
    description: str | None = None,
    reference_id: uuid.UUID | None = None,
    reference_type: str | None = None,
) -> PointsAward:
    """Credit points for an action.

    ``amount`` overrides the action's configured weight, which is how
    externally computed bonuses (e.g. AI content scoring) are applied. The
    same amount lands on the points balance, ``total_earned`` and the
    profile's XP.
    """
    if amount is not None and amount <= 0:
        raise LedgerValidationError("Points amount must be positive")
    points = amount if amount is not None else action.weight

    get_or_create_wallet(db, user_id)
    entry = PointsLogEntry(
        user_id=user_id,
        amount=points,
        action=action.value,
        description=description or f"Earned points for {action.value}",
        reference_id=reference_id,
        reference_type=reference_type,
    )
    db.add(entry)
    _increment_wallet(db, user_id, points_balance=points, total_earned=points)
    db.execute(
        update(Profile)
        .where(Profile.id == user_id)
        .values(total_xp=Profile.total_xp + points, updated_at=utcnow())
    )
    db.flush()
    logger.info("Awarded %d points to %s for %s", points, user_id, action.value)
    return PointsAward(entry=entry, wallet=get_or_create_wallet(db, user_id))


def request_payout(
    db: Session,
    user_id: uuid.UUID,
    points: int,
    payment_method: str | None = None,
) -> PayoutResult:
    """Convert points to a pending cash payout."""
    if points <= 0:
        raise LedgerValidationError("pointsToConvert must be positive")

    wallet = get_wallet(db, user_id, lock=True)
    if wallet is None:
        raise NotFoundError("Wallet not found")
    if not wallet.can_monetize:
        raise NotEligibleError("Not eligible for monetization. Reach 500 followers to unlock.")
    if wallet.points_balance < points:
        raise InsufficientBalanceError("Insufficient points")
    if points < MIN_PAYOUT_POINTS:
        raise BelowMinimumPayoutError(
            f"Minimum payout is {MIN_PAYOUT_POINTS} points (${points_to_usd(MIN_PAYOUT_POINTS)})"
        )

    usd = points_to_usd(points)
    result = db.execute(
        update(Wallet)
        .where(Wallet.user_id == user_id, Wallet.points_balance >= points)
        .values(
            points_balance=Wallet.points_balance - points,
            total_withdrawn=Wallet.total_withdrawn + usd,
            updated_at=utcnow(),
        )
    )
    if result.rowcount != 1:
        raise InsufficientBalanceError("Insufficient points")

    payout = Payout(
        user_id=user_id,
        amount=usd,
        points_converted=points,
        payment_method=payment_method or "pending",
    )
    db.add(payout)
    db.flush()
    db.add(
        PointsLogEntry(
            user_id=user_id,
            amount=-points,
            action=PAYOUT_ACTION,
            description=f"Payout request for ${usd}",
            reference_id=payout.id,
            reference_type="payout",
        )
    )
    db.flush()
    logger.info("Payout of %d points ($%s) requested by %s", points, usd, user_id)
    return PayoutResult(payout=payout, wallet=wallet)


@dataclass(frozen=True)
class WalletSummary:
    wallet: Wallet
    cash_value: Decimal
    can_withdraw: bool
    points_history: list[PointsLogEntry]
    coin_history: list[CoinTransaction]


@dataclass(frozen=True)
class PayoutSummary:
    payouts: list[Payout]
    wallet: Wallet | None
    available_points: int
    cash_value: Decimal
    can_withdraw: bool


def _can_withdraw(wallet: Wallet | None) -> bool:
    return wallet is not None and wallet.can_monetize and wallet.points_balance >= MIN_PAYOUT_POINTS


def wallet_summary(db: Session, user_id: uuid.UUID) -> WalletSummary:
    """Balances plus the most recent points and coin history."""
    wallet = get_or_create_wallet(db, user_id)
    points_stmt = (
        select(PointsLogEntry)
        .where(PointsLogEntry.user_id == user_id)
        .order_by(PointsLogEntry.created_at.desc())
        .limit(50)
    )
    coins_stmt = (
        select(CoinTransaction)
        .where(CoinTransaction.user_id == user_id)
        .order_by(CoinTransaction.created_at.desc())
        .limit(20)
    )
    return WalletSummary(
        wallet=wallet,
        cash_value=points_to_usd(wallet.points_balance),
        can_withdraw=_can_withdraw(wallet),
        points_history=list(db.execute(points_stmt).scalars()),
        coin_history=list(db.execute(coins_stmt).scalars()),
    )


def payout_summary(db: Session, user_id: uuid.UUID) -> PayoutSummary:
    stmt = select(Payout).where(Payout.user_id == user_id).order_by(Payout.created_at.desc())
    wallet = get_wallet(db, user_id)
    available = wallet.points_balance if wallet is not None else 0
    return PayoutSummary(
        payouts=list(db.execute(stmt).scalars()),
        wallet=wallet,
        available_points=available,
        cash_value=points_to_usd(available),
        can_withdraw=_can_withdraw(wallet),
    )
