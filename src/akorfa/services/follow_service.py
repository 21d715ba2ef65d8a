"""Follow graph mutations and the creator levels they drive."""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from akorfa.db.time import utcnow
from akorfa.models import Follow, Notification, NotificationType, Wallet
from akorfa.scoring.tables import CreatorLevel, next_creator_level, resolve_creator_level

from .errors import SelfActionError
from .wallet_service import get_or_create_wallet, get_profile

__all__ = [
    "CreatorInfo",
    "FollowResult",
    "apply_follower_delta",
    "creator_info",
    "follow",
    "is_following",
    "unfollow",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FollowResult:
    following: bool
    changed: bool
    wallet: Wallet
    level: CreatorLevel
    message: str


def _find_follow(db: Session, follower_id: uuid.UUID, following_id: uuid.UUID) -> Follow | None:
    stmt = select(Follow).where(
        Follow.follower_id == follower_id,
        Follow.following_id == following_id,
    )
    return db.execute(stmt).scalars().first()


def is_following(db: Session, follower_id: uuid.UUID, following_id: uuid.UUID) -> bool:
    return _find_follow(db, follower_id, following_id) is not None


def apply_follower_delta(db: Session, user_id: uuid.UUID, delta: int) -> tuple[Wallet, CreatorLevel]:
    """Change a follower count and recompute the creator level with it.

    The wallet row is locked for the rest of the transaction so the level can
    never be computed from a count another request is changing.
    """
    wallet = get_or_create_wallet(db, user_id, lock=True)
    wallet.follower_count = max(wallet.follower_count + delta, 0)
    level = resolve_creator_level(wallet.follower_count)
    if level.level != wallet.creator_level:
        logger.info(
            "Creator level for %s: %d -> %d (%s)",
            user_id, wallet.creator_level, level.level, level.name,
        )
    wallet.creator_level = level.level
    wallet.can_monetize = level.can_monetize
    wallet.updated_at = utcnow()
    db.flush()
    return wallet, level


def follow(db: Session, follower_id: uuid.UUID, following_id: uuid.UUID) -> FollowResult:
    """Follow a member, notifying them and bumping their follower count."""
    if follower_id == following_id:
        raise SelfActionError("Cannot follow yourself")
    follower = get_profile(db, follower_id)
    get_profile(db, following_id)

    if _find_follow(db, follower_id, following_id) is not None:
        wallet = get_or_create_wallet(db, following_id)
        return FollowResult(
            following=True,
            changed=False,
            wallet=wallet,
            level=resolve_creator_level(wallet.follower_count),
            message="Already following",
        )

    db.add(Follow(follower_id=follower_id, following_id=following_id))
    wallet, level = apply_follower_delta(db, following_id, +1)
    db.add(
        Notification(
            user_id=following_id,
            actor_id=follower_id,
            type=NotificationType.FOLLOW.value,
            title="New Follower",
            message=f"{follower.username} started following you",
        )
    )
    db.flush()
    return FollowResult(True, True, wallet, level, "Now following")


def unfollow(db: Session, follower_id: uuid.UUID, following_id: uuid.UUID) -> FollowResult:
    """Remove a follow edge if present; unfollowing a stranger is a no-op."""
    if follower_id == following_id:
        raise SelfActionError("Cannot follow yourself")
    get_profile(db, following_id)

    existing = _find_follow(db, follower_id, following_id)
    if existing is None:
        wallet = get_or_create_wallet(db, following_id)
        return FollowResult(
            following=False,
            changed=False,
            wallet=wallet,
            level=resolve_creator_level(wallet.follower_count),
            message="Not following",
        )

    db.delete(existing)
    wallet, level = apply_follower_delta(db, following_id, -1)
    return FollowResult(False, True, wallet, level, "Unfollowed")


@dataclass(frozen=True)
class CreatorInfo:
    follower_count: int
    level: CreatorLevel
    next_level: CreatorLevel | None


def creator_info(db: Session, user_id: uuid.UUID) -> CreatorInfo:
    """Creator level standing derived from the stored follower count."""
    wallet = get_or_create_wallet(db, user_id)
    level = resolve_creator_level(wallet.follower_count)
    return CreatorInfo(
        follower_count=wallet.follower_count,
        level=level,
        next_level=next_creator_level(level),
    )
