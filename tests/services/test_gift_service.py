# mypy: ignore-errors
"""Tests for sending gifts."""

import uuid

import pytest
from sqlalchemy import select

from akorfa.db.session import atomic
from akorfa.models import CoinTransaction, Gift, Notification, PointsLogEntry
from akorfa.scoring.tables import GiftType
from akorfa.services.errors import InsufficientBalanceError, NotFoundError, SelfActionError
from akorfa.services.gift_service import gift_stats, send_gift


def test_gift_moves_coins_and_notifies(db_session, make_profile, wallet_of) -> None:
    sender = make_profile("sender", coins=120)
    receiver = make_profile("receiver")
    post_id = uuid.uuid4()

    with atomic(db_session):
        result = send_gift(
            db_session, sender.id, receiver.id, GiftType.CROWN, post_id=post_id, message="great post"
        )

    assert result.receiver_credit == 50
    assert result.sender_balance == 20
    assert wallet_of(sender).coins_balance == 20
    receiver_wallet = wallet_of(receiver)
    assert receiver_wallet.coins_balance == 50
    assert receiver_wallet.total_earned == 500
    assert receiver_wallet.points_balance == 0

    gift = db_session.execute(select(Gift)).scalars().one()
    assert (gift.gift_type, gift.coin_amount, gift.post_id) == ("crown", 100, post_id)
    txs = {t.transaction_type: t.amount for t in db_session.execute(select(CoinTransaction)).scalars()}
    assert txs == {"gift_sent": -100, "gift_received": 50}
    note = db_session.execute(select(Notification)).scalars().one()
    assert note.user_id == receiver.id
    assert note.type == "gift"
    assert note.reference_id == post_id
    assert "great post" in note.message

    entry = db_session.execute(select(PointsLogEntry)).scalars().one()
    assert (entry.user_id, entry.amount, entry.action) == (receiver.id, 500, "gift_received")
    assert (entry.reference_id, entry.reference_type) == (gift.id, "gift")


def test_gift_to_self_is_rejected(db_session, make_profile) -> None:
    member = make_profile(coins=100)
    with pytest.raises(SelfActionError):
        send_gift(db_session, member.id, member.id, GiftType.STAR)


def test_gift_to_unknown_receiver_is_rejected(db_session, make_profile) -> None:
    sender = make_profile(coins=100)
    with pytest.raises(NotFoundError):
        send_gift(db_session, sender.id, uuid.uuid4(), GiftType.STAR)


def test_failed_gift_writes_nothing(db_session, make_profile, wallet_of) -> None:
    sender = make_profile(coins=499)
    receiver = make_profile()

    with pytest.raises(InsufficientBalanceError):
        with atomic(db_session):
            send_gift(db_session, sender.id, receiver.id, GiftType.TROPHY)

    assert wallet_of(sender).coins_balance == 499
    assert wallet_of(receiver).coins_balance == 0
    assert db_session.execute(select(Gift)).first() is None
    assert db_session.execute(select(CoinTransaction)).first() is None
    assert db_session.execute(select(Notification)).first() is None
    assert db_session.execute(select(PointsLogEntry)).first() is None


def test_gift_stats(db_session, make_profile) -> None:
    alice = make_profile(coins=200)
    bob = make_profile(coins=200)
    with atomic(db_session):
        send_gift(db_session, alice.id, bob.id, GiftType.HEART)
    with atomic(db_session):
        send_gift(db_session, alice.id, bob.id, GiftType.STAR)
    with atomic(db_session):
        send_gift(db_session, bob.id, alice.id, GiftType.DIAMOND)

    gifts, stats = gift_stats(db_session, bob.id)

    assert len(gifts) == 3
    assert (stats.received, stats.sent) == (2, 1)
    assert stats.total_coins_received == 30
    assert stats.total_coins_sent == 50
    assert stats.earnings == 15
