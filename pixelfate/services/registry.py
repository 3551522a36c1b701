"""
Engine registry: one FateEngine per player.

Engines are created and loaded on first use and kept in memory for the life
of the process. Durable state goes through SqlStateStore when a session
factory is configured, otherwise through an in-memory store.
"""

import asyncio
import logging
from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pixelfate.config import settings
from pixelfate.services.engine import FateEngine
from pixelfate.services.persistence import (
    InMemoryStateStore,
    PersistenceStore,
    SqlStateStore,
    StateStore,
)

logger = logging.getLogger(__name__)


class EngineRegistry:
    """
    Owns the live engines, keyed by player id.

    Args:
        session_factory: Async session factory for durable storage. None
            keeps every player's state in memory.
        engine_factory: Builds an engine around a PersistenceStore. Tests
            use it to inject seeded random sources and zero delays.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        engine_factory: Callable[[PersistenceStore], FateEngine] | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._engine_factory = engine_factory or (lambda store: FateEngine(persistence=store))
        self._engines: dict[str, FateEngine] = {}
        self._lock = asyncio.Lock()

    def _store_for(self, player_id: str) -> StateStore:
        if self._session_factory is None:
            return InMemoryStateStore()
        return SqlStateStore(self._session_factory, player_id)

    async def get(self, player_id: str) -> FateEngine:
        """Return the player's engine, creating and loading it if needed."""
        engine = self._engines.get(player_id)
        if engine is not None:
            return engine

        async with self._lock:
            # Another request may have created it while we waited
            engine = self._engines.get(player_id)
            if engine is not None:
                return engine

            store = PersistenceStore(self._store_for(player_id), history_limit=settings.history_limit)
            engine = self._engine_factory(store)
            await engine.load()
            self._engines[player_id] = engine
            logger.info("Engine created for player %s", player_id, extra={"player_id": player_id})
            return engine

    def __contains__(self, player_id: str) -> bool:
        return player_id in self._engines

    def __len__(self) -> int:
        return len(self._engines)

    async def flush_all(self) -> None:
        """Write every engine's pending changes."""
        for player_id, engine in list(self._engines.items()):
            try:
                await engine.flush()
            except Exception:
                logger.exception("Failed to flush state for player %s", player_id)

    async def close(self) -> None:
        await self.flush_all()
        for engine in self._engines.values():
            engine.writer.cancel()
        self._engines.clear()
