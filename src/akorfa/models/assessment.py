# src/akorfa/models/assessment.py
"""Stored stability assessments."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from akorfa.db.session import Base
from akorfa.db.time import utcnow


class Assessment(Base):
    """One stability calculation and the inputs it was made from."""

    __tablename__ = "assessments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # Anonymous calculations are allowed.
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=True
    )
    layer_scores: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    # May be +inf for a degenerate configuration.
    overall_score: Mapped[float] = mapped_column(Float, nullable=False)
    insights: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
