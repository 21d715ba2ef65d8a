"""Stability and activity score schemas."""
from __future__ import annotations

import uuid
from typing import Any

from pydantic import Field, ValidationInfo, field_validator

from akorfa.scoring import ActivityCounters

from .common import CamelModel

STABILITY_DEFAULTS = {"R": 0, "L": 0, "G": 0, "C": 0.1, "A": 0, "n": 1}


class StabilityRequest(CamelModel):
    """Inputs to the stability formula.

    Missing, null or zero inputs fall back to the values the assessment flow
    uses; an explicit zero ``C`` or ``n`` is read as 0.1 or 1.
    """

    R: float = Field(0, alias="R")
    L: float = Field(0, alias="L")
    G: float = Field(0, alias="G")
    C: float = Field(0.1, alias="C")
    A: float = Field(0, alias="A")
    n: float = Field(1, alias="n")
    user_id: uuid.UUID | None = None

    @field_validator("R", "L", "G", "C", "A", "n", mode="before")
    @classmethod
    def _fall_back_when_unset(cls, value: Any, info: ValidationInfo) -> Any:
        return value or STABILITY_DEFAULTS[info.field_name]


class StabilityResponse(CamelModel):
    """A null ``stability`` with ``unbounded`` set means the denominator was zero."""

    stability: float | None
    unbounded: bool
    assessment_id: uuid.UUID


class AkorfaScoreRequest(CamelModel):
    """Activity counters; omitted or null counters count as zero."""

    posts_created: int | None = Field(None, ge=0)
    comments_made: int | None = Field(None, ge=0)
    reactions_received: int | None = Field(None, ge=0)
    helpful_marked: int | None = Field(None, ge=0)
    assessment_completions: int | None = Field(None, ge=0)
    score_improvement: float | None = None
    consistency_streak: int | None = Field(None, ge=0)
    challenges_joined: int | None = Field(None, ge=0)
    challenges_completed: int | None = Field(None, ge=0)
    progress_consistency: int | None = Field(None, ge=0)
    users_helped: int | None = Field(None, ge=0)
    content_shared: int | None = Field(None, ge=0)
    invitations_sent: int | None = Field(None, ge=0)
    user_id: uuid.UUID | None = None

    def to_counters(self) -> ActivityCounters:
        return ActivityCounters(**self.model_dump(exclude={"user_id"}))


class AkorfaScoreResponse(CamelModel):
    score: float
    saved: bool
