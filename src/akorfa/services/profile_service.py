"""Profile registration."""
from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from akorfa.models import Profile

from .errors import BusinessRuleError, LedgerValidationError
from .wallet_service import get_or_create_wallet

__all__ = ["create_profile"]

logger = logging.getLogger(__name__)


def create_profile(
    db: Session,
    username: str,
    *,
    user_id: uuid.UUID | None = None,
    full_name: str | None = None,
    avatar_url: str | None = None,
) -> Profile:
    """Register a profile together with its empty wallet."""
    username = username.strip()
    if not username:
        raise LedgerValidationError("Username required")
    if db.execute(select(Profile.id).where(Profile.username == username)).first() is not None:
        raise BusinessRuleError("Username already taken")
    if user_id is not None and db.get(Profile, user_id) is not None:
        raise BusinessRuleError("Profile already exists")

    profile = Profile(
        id=user_id or uuid.uuid4(),
        username=username,
        full_name=full_name,
        avatar_url=avatar_url,
    )
    db.add(profile)
    db.flush()
    get_or_create_wallet(db, profile.id)
    logger.info("Registered profile %s (%s)", profile.id, username)
    return profile
