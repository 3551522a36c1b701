"""Tests for scheduled jobs."""

from unittest.mock import AsyncMock, patch

from pixelfate.db.database import build_session_factory
from pixelfate.db.operations import read_state_blob
from pixelfate.jobs.simulate_rituals import play_session, run_simulation
from pixelfate.models.outcome import Phase
from pixelfate.services.engine import FateEngine
from pixelfate.services.personality import PERSONALITY_CODES


class TestPlaySession:
    async def test_plays_to_completion(self, engine: FateEngine) -> None:
        """Drawing from the top of an ordered deck fills one slot per axis."""
        code = await play_session(engine)

        assert code == "ESTJ"
        assert engine.phase is Phase.RESULT
        assert len(engine.history) == 1
        assert engine.inventory.total_cards() == 4

    async def test_consecutive_sessions(self, engine: FateEngine) -> None:
        await play_session(engine)
        await play_session(engine)

        assert len(engine.history) == 2
        assert engine.inventory.count(0, 1) == 2


class TestRunSimulation:
    async def test_persists_results(self, async_engine) -> None:
        factory = build_session_factory(async_engine)

        with (
            patch("pixelfate.jobs.simulate_rituals.init_db", new=AsyncMock()),
            patch("pixelfate.jobs.simulate_rituals.async_session_factory", new=factory),
        ):
            codes = await run_simulation(player_id="sim", sessions=5)

        assert sum(codes.values()) == 5
        assert set(codes) <= set(PERSONALITY_CODES)
        async with factory() as session:
            assert await read_state_blob(session, "sim", "history") is not None
            assert await read_state_blob(session, "other", "history") is None
