"""
Shared FastAPI dependencies.

The process-wide EngineRegistry persists through the configured database.
Tests replace `get_registry` via app.dependency_overrides.
"""

from typing import Annotated

from fastapi import Depends

from pixelfate.db.database import async_session_factory
from pixelfate.services.engine import FateEngine
from pixelfate.services.registry import EngineRegistry

registry = EngineRegistry(session_factory=async_session_factory)


def get_registry() -> EngineRegistry:
    return registry


async def get_engine(
    player_id: str,
    engines: Annotated[EngineRegistry, Depends(get_registry)],
) -> FateEngine:
    """The engine for the `player_id` path parameter, loaded on first use."""
    return await engines.get(player_id)


EngineDep = Annotated[FateEngine, Depends(get_engine)]
