"""Profile schemas."""
from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import Field

from .common import CamelModel


class ProfileCreate(CamelModel):
    """Schema for registering a profile."""

    id: uuid.UUID | None = Field(None, description="Identifier issued by the auth provider")
    username: str = Field(..., min_length=1, max_length=50)
    full_name: str | None = Field(None, max_length=100)
    avatar_url: str | None = None


class ProfileResponse(CamelModel):
    id: uuid.UUID
    username: str
    full_name: str | None
    avatar_url: str | None
    akorfa_score: float
    total_xp: int
    level: int
    current_streak: int
    longest_streak: int
    last_active_date: date | None
    created_at: datetime
