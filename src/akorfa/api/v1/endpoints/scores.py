# src/akorfa/api/v1/endpoints/scores.py
"""Stability and Akorfa score calculators."""

import math
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from akorfa.db.session import atomic, get_db
from akorfa.schemas.scores import (
    AkorfaScoreRequest,
    AkorfaScoreResponse,
    StabilityRequest,
    StabilityResponse,
)
from akorfa.scoring import StabilityMetrics
from akorfa.services.activity_service import record_akorfa_score, record_stability

router = APIRouter(tags=["scores"])

SessionDep = Annotated[Session, Depends(get_db)]


@router.post("/stability", response_model=StabilityResponse)
async def calculate_stability_score(payload: StabilityRequest, db: SessionDep) -> StabilityResponse:
    """Evaluate the stability formula and store it as an assessment.

    JSON has no infinity, so an unbounded result is returned as
    ``stability: null`` with ``unbounded: true``.
    """
    metrics = StabilityMetrics(
        R=payload.R, L=payload.L, G=payload.G, C=payload.C, A=payload.A, n=payload.n
    )
    with atomic(db):
        assessment = record_stability(db, metrics, payload.user_id)
        stability = assessment.overall_score
        assessment_id = assessment.id
    unbounded = math.isinf(stability)
    return StabilityResponse(
        stability=None if unbounded else stability,
        unbounded=unbounded,
        assessment_id=assessment_id,
    )


@router.post("/scores/akorfa", response_model=AkorfaScoreResponse)
async def calculate_akorfa_score(payload: AkorfaScoreRequest, db: SessionDep) -> AkorfaScoreResponse:
    with atomic(db):
        score = record_akorfa_score(db, payload.to_counters(), payload.user_id)
    return AkorfaScoreResponse(score=score, saved=payload.user_id is not None)
