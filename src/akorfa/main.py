# src/akorfa/main.py
"""Main entry point for the Akorfa service."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from akorfa.api.v1 import (
    credit_router,
    follow_router,
    gift_router,
    leaderboard_router,
    payout_router,
    profile_router,
    score_router,
    streak_router,
    wallet_router,
)
from akorfa.core.settings import settings
from akorfa.schemas.common import ErrorResponse
from akorfa.services.errors import LedgerError

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Initialize FastAPI app
app = FastAPI(
    title="Akorfa API",
    description="Deterministic scoring engine and points economy",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers; ledger rejections share one documented error body
ERROR_RESPONSES = {
    code: {"model": ErrorResponse}
    for code in (
        status.HTTP_400_BAD_REQUEST,
        status.HTTP_404_NOT_FOUND,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
}
app.include_router(profile_router, prefix="/api/v1", responses=ERROR_RESPONSES)
app.include_router(wallet_router, prefix="/api/v1", responses=ERROR_RESPONSES)
app.include_router(credit_router, prefix="/api/v1", responses=ERROR_RESPONSES)
app.include_router(gift_router, prefix="/api/v1", responses=ERROR_RESPONSES)
app.include_router(payout_router, prefix="/api/v1", responses=ERROR_RESPONSES)
app.include_router(follow_router, prefix="/api/v1", responses=ERROR_RESPONSES)
app.include_router(streak_router, prefix="/api/v1", responses=ERROR_RESPONSES)
app.include_router(leaderboard_router, prefix="/api/v1", responses=ERROR_RESPONSES)
app.include_router(score_router, prefix="/api/v1", responses=ERROR_RESPONSES)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    logger.warning(
        "Rejected %s %s: %s (%s)",
        request.method, request.url.path, exc.message, type(exc).__name__,
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "Ledger store failure on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Ledger store unavailable"},
    )


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging(settings.log_level)
    logger.info("%s %s starting", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Akorfa API",
        "version": settings.app_version,
        "description": "Deterministic scoring engine and points economy",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("akorfa.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
