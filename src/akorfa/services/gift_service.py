"""Coin gifts between members."""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from akorfa.models import Gift, Notification, NotificationType, PointsLogEntry
from akorfa.scoring.tables import GiftType, gift_payout, gift_points_equivalent

from .errors import SelfActionError
from .wallet_service import credit_coins, debit_coins, get_or_create_wallet, get_profile

__all__ = ["GiftResult", "GiftStats", "gift_stats", "send_gift"]

logger = logging.getLogger(__name__)

GIFT_SENT = "gift_sent"
GIFT_RECEIVED = "gift_received"


@dataclass(frozen=True)
class GiftResult:
    gift: Gift
    receiver_credit: int
    sender_balance: int


@dataclass(frozen=True)
class GiftStats:
    received: int
    sent: int
    total_coins_received: int
    total_coins_sent: int
    earnings: int


def send_gift(
    db: Session,
    sender_id: uuid.UUID,
    receiver_id: uuid.UUID,
    gift_type: GiftType,
    *,
    post_id: uuid.UUID | None = None,
    message: str | None = None,
) -> GiftResult:
    """Transfer a gift's cost from sender to receiver.

    The sender pays the full cost and the receiver is credited the creator
    cut, with ten points per credited coin added to its lifetime earnings and
    logged as a ``gift_received`` points entry. Both balance changes, both
    coin transactions, the gift row and the receiver's notification are
    written in the caller's transaction; the sender debit is a conditional
    update, so a concurrent gift that drains the balance first makes this
    one fail with nothing written.
    """
    if sender_id == receiver_id:
        raise SelfActionError("Cannot tip yourself")

    sender = get_profile(db, sender_id)
    get_profile(db, receiver_id)
    get_or_create_wallet(db, sender_id)

    cost = gift_type.coins
    credit = gift_payout(cost)
    points_equivalent = gift_points_equivalent(cost)
    gift = Gift(
        id=uuid.uuid4(),
        sender_id=sender_id,
        receiver_id=receiver_id,
        post_id=post_id,
        gift_type=gift_type.value,
        coin_amount=cost,
        message=message,
    )

    debit_coins(
        db,
        sender_id,
        cost,
        transaction_type=GIFT_SENT,
        description=f"Sent {gift_type.display_name} to user",
        reference_id=gift.id,
    )
    receiver_wallet = credit_coins(
        db,
        receiver_id,
        credit,
        transaction_type=GIFT_RECEIVED,
        description=f"Received {gift_type.display_name} gift",
        reference_id=gift.id,
        earned=points_equivalent,
    )
    db.add(gift)
    db.add(
        PointsLogEntry(
            user_id=receiver_id,
            amount=points_equivalent,
            action=GIFT_RECEIVED,
            description=f"Received {gift_type.display_name} gift",
            reference_id=gift.id,
            reference_type="gift",
        )
    )

    note = f"{sender.username} sent you a {gift_type.display_name} ({cost} coins)"
    if message:
        note = f'{note}: "{message}"'
    db.add(
        Notification(
            user_id=receiver_id,
            actor_id=sender_id,
            type=NotificationType.GIFT.value,
            title=f"New Gift: {gift_type.display_name}",
            message=note,
            reference_id=post_id or gift.id,
            reference_type="post" if post_id else "gift",
        )
    )
    db.flush()

    sender_wallet = get_or_create_wallet(db, sender_id)
    logger.info(
        "Gift %s: %s sent %s (%d coins) to %s",
        gift.id, sender_id, gift_type.value, cost, receiver_wallet.user_id,
    )
    return GiftResult(gift=gift, receiver_credit=credit, sender_balance=sender_wallet.coins_balance)


def gift_stats(db: Session, user_id: uuid.UUID, limit: int = 100) -> tuple[list[Gift], GiftStats]:
    """Recent gifts involving the user and totals over them."""
    stmt = (
        select(Gift)
        .where(or_(Gift.sender_id == user_id, Gift.receiver_id == user_id))
        .order_by(Gift.created_at.desc())
        .limit(limit)
    )
    gifts = list(db.execute(stmt).scalars())
    received = [g for g in gifts if g.receiver_id == user_id]
    sent = [g for g in gifts if g.sender_id == user_id]
    total_received = sum(g.coin_amount for g in received)
    stats = GiftStats(
        received=len(received),
        sent=len(sent),
        total_coins_received=total_received,
        total_coins_sent=sum(g.coin_amount for g in sent),
        earnings=gift_payout(total_received),
    )
    return gifts, stats
