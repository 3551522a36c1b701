"""
Health check endpoints.

Liveness reports the number of live engines; readiness also checks the
database.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pixelfate.api.dependencies import get_registry
from pixelfate.db.database import get_session
from pixelfate.services.registry import EngineRegistry

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    engines: int = 0
    database: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health(
    engines: Annotated[EngineRegistry, Depends(get_registry)],
) -> HealthResponse:
    """Liveness probe. Does not touch the database."""
    return HealthResponse(status="healthy", engines=len(engines))


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
    engines: Annotated[EngineRegistry, Depends(get_registry)],
) -> HealthResponse:
    """
    Readiness probe.

    Returns 503 if the state database cannot be reached.
    """
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", engines=len(engines), database="disconnected")
    return HealthResponse(status="ready", engines=len(engines), database="connected")
