# mypy: ignore-errors
"""Concurrent ledger writes against a file-backed SQLite ledger."""

import threading
import uuid
from datetime import date

from sqlalchemy.orm import Session

from akorfa.db.session import atomic
from akorfa.models import Gift, Profile, UserEvent, Wallet
from akorfa.scoring.tables import GiftType
from akorfa.services.activity_service import record_activity
from akorfa.services.errors import InsufficientBalanceError
from akorfa.services.gift_service import send_gift


def test_only_one_of_two_concurrent_gifts_succeeds(file_engine) -> None:
    sender_id, receiver_id = uuid.uuid4(), uuid.uuid4()
    with Session(file_engine) as setup, atomic(setup):
        setup.add_all([Profile(id=sender_id, username="sender"), Profile(id=receiver_id, username="receiver")])
        setup.flush()
        setup.add_all(
            [
                Wallet(user_id=sender_id, coins_balance=GiftType.DIAMOND.coins),
                Wallet(user_id=receiver_id),
            ]
        )

    barrier = threading.Barrier(2)
    outcomes: list[object] = []
    lock = threading.Lock()

    def attempt() -> None:
        barrier.wait()
        with Session(file_engine) as session:
            try:
                with atomic(session):
                    send_gift(session, sender_id, receiver_id, GiftType.DIAMOND)
                outcome: object = "sent"
            except InsufficientBalanceError as exc:
                outcome = exc
        with lock:
            outcomes.append(outcome)

    threads = [threading.Thread(target=attempt) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)

    assert outcomes.count("sent") == 1
    assert sum(isinstance(o, InsufficientBalanceError) for o in outcomes) == 1
    with Session(file_engine) as check:
        assert check.get(Wallet, sender_id).coins_balance == 0
        assert check.get(Wallet, receiver_id).coins_balance == 25
        assert check.query(Gift).count() == 1


def test_concurrent_same_day_activity_counts_once(file_engine) -> None:
    member_id = uuid.uuid4()
    with Session(file_engine) as setup, atomic(setup):
        setup.add(Profile(id=member_id, username="member"))
    today = date(2026, 3, 1)

    barrier = threading.Barrier(2)
    recorded: list[bool] = []
    lock = threading.Lock()

    def attempt() -> None:
        barrier.wait()
        with Session(file_engine) as session, atomic(session):
            result = record_activity(session, member_id, today)
        with lock:
            recorded.append(result.update.already_recorded)

    threads = [threading.Thread(target=attempt) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)

    assert sorted(recorded) == [False, True]
    with Session(file_engine) as check:
        profile = check.get(Profile, member_id)
        assert (profile.current_streak, profile.longest_streak) == (1, 1)
        assert check.query(UserEvent).count() == 1
