"""
Persistence Store - durable inventory, codex and history.

Wire schema (JSON, one payload per category):

    owned:   {"<card id>": {"<tier>": count}}
    codex:   {"<code>": [tier, ...]}            sorted, unique
    history: [{id, time, mbti, profession, narrative, cards: [...]}]

INVARIANTS:
- Each category loads independently. A missing or corrupt payload falls back
  to that category's empty default and never blocks the others.
- Legacy single-tier owned payloads ({"<card id>": count}) load as tier-1
  counts.
- In-memory state is authoritative. Writes are debounced and idempotent:
  a flush always writes the current state, so coalescing is safe.
"""

import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Protocol

from pydantic import BaseModel, Field, NonNegativeInt, TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from pixelfate.config import MAX_TIER, MIN_TIER
from pixelfate.db.operations import delete_player_state, read_state_blob, write_state_blob
from pixelfate.models.codex import Codex
from pixelfate.models.history import HistoryLog, HistoryRecord
from pixelfate.models.inventory import Inventory

logger = logging.getLogger(__name__)


class Category(str, Enum):
    """Persisted state categories."""

    OWNED = "owned"
    CODEX = "codex"
    HISTORY = "history"


ALL_CATEGORIES: frozenset[Category] = frozenset(Category)


# =============================================================================
# WIRE SCHEMA
# =============================================================================


class HistoryEntryModel(BaseModel):
    """One persisted history record."""

    id: int
    time: str
    mbti: str
    profession: str = ""
    narrative: str = ""
    cards: list[dict[str, Any]] = Field(default_factory=list)


# Each card entry is either a legacy bare count or a tier -> count map
_OwnedAdapter = TypeAdapter(dict[int, NonNegativeInt | dict[int, NonNegativeInt]])
_CodexAdapter = TypeAdapter(dict[str, list[Annotated[int, Field(ge=MIN_TIER, le=MAX_TIER)]]])
_HistoryAdapter = TypeAdapter(list[HistoryEntryModel])


def encode_owned(inventory: Inventory) -> dict[str, dict[str, int]]:
    return {
        str(card_id): {str(tier): count for tier, count in sorted(tiers.items())}
        for card_id, tiers in sorted(inventory.owned.items())
    }


def decode_owned(raw: Any) -> Inventory:
    """
    Build an Inventory from a decoded owned payload.

    Raises:
        ValidationError: If the payload does not match either schema
    """
    parsed = _OwnedAdapter.validate_python(raw)
    owned: dict[int, dict[int, int]] = {}
    migrated = 0
    for card_id, value in parsed.items():
        if isinstance(value, int):
            owned[card_id] = {1: value}
            migrated += 1
        else:
            owned[card_id] = dict(value)
    if migrated:
        logger.info("Migrated %d legacy single-tier owned entries to tier 1", migrated)
    return Inventory(owned=owned)


def encode_codex(codex: Codex) -> dict[str, list[int]]:
    return {code: sorted(tiers) for code, tiers in sorted(codex.entries.items())}


def decode_codex(raw: Any) -> Codex:
    parsed = _CodexAdapter.validate_python(raw)
    return Codex(entries={code: set(tiers) for code, tiers in parsed.items()})


def encode_history(history: HistoryLog) -> list[dict[str, Any]]:
    return [
        {
            "id": record.id,
            "time": record.time,
            "mbti": record.mbti,
            "profession": record.profession,
            "narrative": record.narrative,
            "cards": [dict(card) for card in record.cards],
        }
        for record in history
    ]


def decode_history(raw: Any, limit: int | None = None) -> HistoryLog:
    entries = _HistoryAdapter.validate_python(raw)
    records = [
        HistoryRecord(
            id=entry.id,
            time=entry.time,
            mbti=entry.mbti,
            profession=entry.profession,
            narrative=entry.narrative,
            cards=tuple(entry.cards),
        )
        for entry in entries
    ]
    if limit is None:
        return HistoryLog(records=records)
    return HistoryLog(records=records, limit=limit)


# =============================================================================
# STATE STORES
# =============================================================================


class StateStore(Protocol):
    """Raw payload storage, one text blob per category."""

    async def read(self, category: Category) -> str | None: ...

    async def write(self, category: Category, payload: str) -> None: ...

    async def clear(self) -> None: ...


class InMemoryStateStore:
    """StateStore kept in a dict. Used when no database is configured."""

    def __init__(self, initial: dict[Category, str] | None = None) -> None:
        self.payloads: dict[Category, str] = dict(initial or {})
        self.write_count = 0

    async def read(self, category: Category) -> str | None:
        return self.payloads.get(category)

    async def write(self, category: Category, payload: str) -> None:
        self.payloads[category] = payload
        self.write_count += 1

    async def clear(self) -> None:
        self.payloads.clear()


class SqlStateStore:
    """StateStore backed by the persisted_state table."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession], player_id: str) -> None:
        self._session_factory = session_factory
        self.player_id = player_id

    async def read(self, category: Category) -> str | None:
        async with self._session_factory() as session:
            return await read_state_blob(session, self.player_id, category.value)

    async def write(self, category: Category, payload: str) -> None:
        async with self._session_factory() as session:
            await write_state_blob(session, self.player_id, category.value, payload)
            await session.commit()

    async def clear(self) -> None:
        async with self._session_factory() as session:
            await delete_player_state(session, self.player_id)
            await session.commit()


# =============================================================================
# PERSISTENCE STORE
# =============================================================================


@dataclass
class LoadedState:
    """Result of a load: each category plus the ones that fell back to defaults."""

    inventory: Inventory = field(default_factory=Inventory)
    codex: Codex = field(default_factory=Codex)
    history: HistoryLog = field(default_factory=HistoryLog)
    recovered: set[Category] = field(default_factory=set)


class PersistenceStore:
    """
    Loads and saves the three persisted categories through a StateStore.

    Corruption is contained per category: it is logged and replaced by the
    empty default, never raised.
    """

    def __init__(self, store: StateStore, history_limit: int | None = None) -> None:
        self.store = store
        self.history_limit = history_limit

    async def load(self) -> LoadedState:
        state = LoadedState()
        if self.history_limit is not None:
            state.history = HistoryLog(limit=self.history_limit)

        inventory = await self._load_category(Category.OWNED, decode_owned, state)
        if inventory is not None:
            state.inventory = inventory

        codex = await self._load_category(Category.CODEX, decode_codex, state)
        if codex is not None:
            state.codex = codex

        history = await self._load_category(
            Category.HISTORY,
            lambda raw: decode_history(raw, self.history_limit),
            state,
        )
        if history is not None:
            state.history = history

        return state

    async def _load_category(
        self,
        category: Category,
        decode: Callable[[Any], Any],
        state: LoadedState,
    ) -> Any:
        payload = await self.store.read(category)
        if payload is None or not payload.strip():
            return None
        try:
            return decode(json.loads(payload))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(
                "Discarding corrupt %s payload, using empty default: %s",
                category.value,
                e,
                extra={"category": category.value},
            )
            state.recovered.add(category)
            return None

    async def save_inventory(self, inventory: Inventory) -> None:
        await self.store.write(Category.OWNED, json.dumps(encode_owned(inventory)))

    async def save_codex(self, codex: Codex) -> None:
        await self.store.write(Category.CODEX, json.dumps(encode_codex(codex)))

    async def save_history(self, history: HistoryLog) -> None:
        await self.store.write(
            Category.HISTORY,
            json.dumps(encode_history(history), ensure_ascii=False),
        )

    async def clear(self) -> None:
        await self.store.clear()


# =============================================================================
# DEBOUNCED WRITES
# =============================================================================


class DebouncedWriter:
    """
    Coalesces repeated save requests into one write per category.

    `mark()` records a dirty category and (re)arms a timer on the running
    event loop. When the timer fires, `flush()` hands every dirty category to
    `flush_fn`, which must write the CURRENT in-memory state. Outside an
    event loop `mark()` only records the category; call `flush()` explicitly.
    """

    def __init__(
        self,
        flush_fn: Callable[[set[Category]], Awaitable[None]],
        delay: float,
    ) -> None:
        self._flush_fn = flush_fn
        self.delay = delay
        self.dirty: set[Category] = set()
        self._handle: asyncio.TimerHandle | None = None
        self._task: asyncio.Task[None] | None = None

    def mark(self, *categories: Category) -> None:
        self.dirty.update(categories)
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return
        self._handle = loop.call_later(self.delay, self._fire)

    def _fire(self) -> None:
        self._handle = None
        self._task = asyncio.ensure_future(self._background_flush())

    async def _background_flush(self) -> None:
        try:
            await self.flush()
        except Exception:
            # Already logged by flush(); the categories stay dirty for the next one
            return

    @property
    def pending(self) -> bool:
        return bool(self.dirty)

    async def flush(self) -> None:
        """Write every dirty category now."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if not self.dirty:
            return
        categories, self.dirty = self.dirty, set()
        try:
            await self._flush_fn(categories)
        except Exception:
            # Keep them dirty so the next flush retries
            self.dirty.update(categories)
            logger.exception("Failed to persist %s", sorted(c.value for c in categories))
            raise

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def discard(self) -> None:
        """Cancel the timer and forget every dirty category."""
        self.cancel()
        self.dirty.clear()
