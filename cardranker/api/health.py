"""
Health check endpoints.

Liveness, plus readiness covering both the catalog load phase and
database connectivity.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from cardranker.api.state import AppPhase, AppState, get_app_state
from cardranker.db.database import get_session

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    catalog: str | None = None
    database: str | None = None
    detail: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness check.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    app_state: Annotated[AppState, Depends(get_app_state)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> HealthResponse:
    """
    Readiness check.

    Ready once the catalog is loaded and the database answers. Returns 503
    while loading, after a failed catalog load, or if the database is down.
    """
    try:
        await session.execute(text("SELECT 1"))
        database = "connected"
    except Exception:
        database = "disconnected"

    detail = app_state.error.detail if app_state.error is not None else None
    if app_state.phase != AppPhase.READY or database != "connected":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(
            status="not ready",
            catalog=app_state.phase.value,
            database=database,
            detail=detail,
        )

    return HealthResponse(status="ready", catalog=app_state.phase.value, database=database)
