# tests/conftest.py
from __future__ import annotations

import os
import uuid
from collections.abc import Callable, Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")

from akorfa.db.session import Base, build_engine  # noqa: E402
from akorfa.db.session import get_db as app_get_session  # noqa: E402
from akorfa.main import app as fastapi_app  # noqa: E402
from akorfa.models import Profile, Wallet  # noqa: E402
from akorfa.services.wallet_service import get_or_create_wallet  # noqa: E402

TEST_DB_URL = "sqlite://"

_USERNAME_COUNTER = count(1)


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def file_engine(tmp_path) -> Generator[Engine, None, None]:
    """File-backed SQLite engine for tests that need real concurrent connections."""
    engine = build_engine(f"sqlite:///{tmp_path / 'ledger.db'}")
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def make_profile(db_session: Session) -> Callable[..., Profile]:
    """Create a committed profile with a wallet holding the given balances."""

    def _make(
        username: str | None = None,
        *,
        coins: int = 0,
        points: int = 0,
        followers: int = 0,
        **profile_fields,
    ) -> Profile:
        profile = Profile(
            id=uuid.uuid4(),
            username=username or f"member{next(_USERNAME_COUNTER)}",
            **profile_fields,
        )
        db_session.add(profile)
        db_session.flush()
        wallet = get_or_create_wallet(db_session, profile.id)
        wallet.coins_balance = coins
        wallet.points_balance = points
        wallet.follower_count = followers
        if followers >= 500:
            wallet.creator_level = 2
            wallet.can_monetize = True
        db_session.commit()
        return profile

    return _make


@pytest.fixture()
def wallet_of(db_session: Session) -> Callable[[Profile], Wallet]:
    """Return a freshly loaded wallet for ``profile``."""

    def _wallet(profile: Profile) -> Wallet:
        db_session.expire_all()
        return db_session.get(Wallet, profile.id)

    return _wallet
