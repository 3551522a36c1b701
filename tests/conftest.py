from collections.abc import Iterable, Sequence
from typing import TypeVar

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine

from pixelfate.api.dependencies import get_registry
from pixelfate.config import Settings, settings
from pixelfate.db.database import (
    build_engine,
    build_session_factory,
    drop_db,
    get_session,
    init_db,
)
from pixelfate.main import app
from pixelfate.services.engine import FateEngine
from pixelfate.services.narrative import StaticNarrativeProvider
from pixelfate.services.persistence import InMemoryStateStore, PersistenceStore
from pixelfate.services.registry import EngineRegistry

T = TypeVar("T")


class ScriptedRandomSource:
    """
    RandomSource that replays scripted values.

    Shuffles keep the input order, picks take the first candidate. Tiers and
    orientations are consumed from their scripts and fall back to tier 1
    and upright once exhausted.
    """

    def __init__(
        self,
        tiers: Iterable[int] = (),
        orientations: Iterable[bool] = (),
        pick_index: int = 0,
    ) -> None:
        self.tiers = list(tiers)
        self.orientations = list(orientations)
        self.pick_index = pick_index
        self.picked_from: list[Sequence[object]] = []

    def shuffle(self, items: Sequence[T]) -> list[T]:
        return list(items)

    def assign_tier(self) -> int:
        return self.tiers.pop(0) if self.tiers else 1

    def flip_orientation(self) -> bool:
        return self.orientations.pop(0) if self.orientations else True

    def pick(self, candidates: Sequence[T]) -> T:
        self.picked_from.append(candidates)
        return candidates[self.pick_index]


def first_line(lines: Sequence[str]) -> str:
    return lines[0]


@pytest.fixture
def fast_settings() -> Settings:
    """Settings with no pacing delays and a debounce window tests never reach."""
    return settings.model_copy(
        update={
            "shuffle_settle_seconds": 0.0,
            "reforge_resolve_seconds": 0.0,
            "persist_debounce_seconds": 60.0,
        }
    )


@pytest.fixture
def rng() -> ScriptedRandomSource:
    return ScriptedRandomSource()


@pytest.fixture
def state_store() -> InMemoryStateStore:
    return InMemoryStateStore()


@pytest.fixture
def engine(
    rng: ScriptedRandomSource,
    state_store: InMemoryStateStore,
    fast_settings: Settings,
) -> FateEngine:
    """Engine with scripted randomness, deterministic text and an in-memory store."""
    return FateEngine(
        rng=rng,
        narrative=StaticNarrativeProvider(choose=first_line),
        persistence=PersistenceStore(state_store, history_limit=fast_settings.history_limit),
        config=fast_settings,
    )


@pytest.fixture
def make_engine(
    rng: ScriptedRandomSource,
    state_store: InMemoryStateStore,
    fast_settings: Settings,
):
    """Build an engine sharing the scripted rng and store, with settings overrides."""

    def _make(**overrides: object) -> FateEngine:
        config = fast_settings.model_copy(update=overrides)
        return FateEngine(
            rng=rng,
            narrative=StaticNarrativeProvider(choose=first_line),
            persistence=PersistenceStore(state_store, history_limit=config.history_limit),
            config=config,
        )

    return _make


@pytest.fixture
def registry(rng: ScriptedRandomSource, fast_settings: Settings) -> EngineRegistry:
    """In-memory registry whose engines use scripted randomness and no delays."""
    return EngineRegistry(
        engine_factory=lambda store: FateEngine(
            rng=rng,
            narrative=StaticNarrativeProvider(choose=first_line),
            persistence=store,
            config=fast_settings,
        )
    )


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine with the state table."""
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await init_db(engine)
    yield engine
    await drop_db(engine)
    await engine.dispose()


@pytest.fixture
async def client(async_engine: AsyncEngine, registry: EngineRegistry):
    """Provide an async test client with overridden database session and registry."""
    async_session = build_session_factory(async_engine)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_registry] = lambda: registry

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
