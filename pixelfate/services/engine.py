"""
Fate Engine - one player's session orchestrator.

Owns the full mutable state of a player (phase, deck, slots, inventory,
codex, history) and exposes the mutation API:

    begin_ritual  START/SPREAD/RESULT -> SHUFFLING -> (settle) -> SPREAD
    draw          SPREAD -> SPREAD, or RESULT on the fourth card
    reforge       any phase with a filled slot; resolves after a delay
    synthesize    any phase
    toggle_lock   any phase
    reset_all     anything -> START, wipes inventory, codex and history
    erase         reset_all, then deletes the stored state

CONCURRENCY:
The engine runs on one event loop. Synchronous operations apply atomically
between awaits. The two delayed operations (begin_ritual, reforge) capture a
token before sleeping and re-read the CURRENT state after waking; a token
made stale by a reset or a slot change drops the effect.

Persistence is a boundary concern: mutations mark categories dirty and a
debounced writer saves them later. In-memory state is authoritative.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timezone

from pixelfate.config import Settings, settings
from pixelfate.models.card import CardDefinition, CardInstance, rarity_for_tier
from pixelfate.models.codex import Codex
from pixelfate.models.failure import UnknownSlotError
from pixelfate.models.history import HistoryLog, HistoryRecord
from pixelfate.models.inventory import Inventory
from pixelfate.models.outcome import (
    CompletionSummary,
    DrawOutcome,
    DrawResult,
    Phase,
    ReforgeOutcome,
    ReforgeResult,
    RitualOutcome,
    RitualResult,
    SynthesisOutcome,
    SynthesisResult,
)
from pixelfate.models.slots import SLOT_ORDER, SlotBoard, SlotKey
from pixelfate.services import economy
from pixelfate.services.catalogue import catalogue, get_card
from pixelfate.services.narrative import NarrativeProvider, StaticNarrativeProvider
from pixelfate.services.persistence import (
    ALL_CATEGORIES,
    Category,
    DebouncedWriter,
    PersistenceStore,
)
from pixelfate.services.personality import derive, derive_final, result_tier
from pixelfate.services.randomness import RandomSource, SystemRandomSource
from pixelfate.services.scheduler import EffectScheduler
from pixelfate.services.slot_resolver import build_instance, resolve_slot

logger = logging.getLogger(__name__)


def parse_slot(value: str | SlotKey) -> SlotKey:
    """
    Resolve a slot name.

    Raises:
        UnknownSlotError: If `value` is not fire, air, water or earth
    """
    if isinstance(value, SlotKey):
        return value
    try:
        return SlotKey(value.strip().lower())
    except ValueError:
        raise UnknownSlotError(value) from None


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class EngineSnapshot:
    """Read-only view of a session for presentation."""

    phase: Phase
    slots: dict[SlotKey, CardInstance | None]
    locked: frozenset[SlotKey]
    pending: frozenset[SlotKey]
    code: str
    deck_size: int


class FateEngine:
    """
    Session state container plus the operations that mutate it.

    Args:
        rng: Source of every random decision (seeded or scripted in tests)
        narrative: Text lookups
        persistence: Durable store; None keeps everything in memory only
        config: Settings for delays and the history cap
        clock: Monotonic clock for the idle prompt
        wall_clock: Timestamp source for history records
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        narrative: NarrativeProvider | None = None,
        persistence: PersistenceStore | None = None,
        config: Settings | None = None,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.config = config or settings
        self.rng: RandomSource = rng or SystemRandomSource()
        self.narrative: NarrativeProvider = narrative or StaticNarrativeProvider()
        self.persistence = persistence

        self.phase = Phase.START
        self.board = SlotBoard()
        self.inventory = Inventory()
        self.codex = Codex()
        self.history = HistoryLog(limit=self.config.history_limit)
        self.deck: list[CardDefinition] = self.rng.shuffle(catalogue())
        self.recovered: set[Category] = set()

        self.scheduler = EffectScheduler(self.board)
        self.writer = DebouncedWriter(self._persist, self.config.persist_debounce_seconds)

        self._clock = clock
        self._wall_clock = wall_clock
        self._last_interaction = clock()

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def load(self) -> None:
        """Replace inventory, codex and history with the persisted state."""
        if self.persistence is None:
            return
        state = await self.persistence.load()
        self.inventory = state.inventory
        self.codex = state.codex
        self.history = HistoryLog(records=list(state.history), limit=self.config.history_limit)
        self.recovered = state.recovered
        if state.recovered:
            logger.warning(
                "Loaded with defaults for: %s",
                ", ".join(sorted(c.value for c in state.recovered)),
            )

    async def flush(self) -> None:
        """Write every pending change now."""
        await self.writer.flush()

    async def _persist(self, categories: set[Category]) -> None:
        if self.persistence is None:
            return
        if Category.OWNED in categories:
            await self.persistence.save_inventory(self.inventory)
        if Category.CODEX in categories:
            await self.persistence.save_codex(self.codex)
        if Category.HISTORY in categories:
            await self.persistence.save_history(self.history)

    def touch(self) -> None:
        """Record player interaction for the idle prompt."""
        self._last_interaction = self._clock()

    # =========================================================================
    # PHASE MACHINE
    # =========================================================================

    async def begin_ritual(self) -> RitualResult:
        """
        Clear the slots and reshuffle.

        The phase is SHUFFLING for the settle delay, then SPREAD with a fresh
        deck order. A reset during the delay supersedes the ritual.
        """
        self.touch()
        if self.phase is Phase.SHUFFLING:
            return RitualResult(outcome=RitualOutcome.REJECTED, phase=self.phase)

        self.board.clear()
        self.phase = Phase.SHUFFLING
        token = self.scheduler.issue()

        if not await self.scheduler.wait(token, self.config.shuffle_settle_seconds):
            return RitualResult(
                outcome=RitualOutcome.SUPERSEDED,
                phase=self.phase,
                deck_size=len(self.deck),
            )

        self.deck = self.rng.shuffle(catalogue())
        self.phase = Phase.SPREAD
        logger.debug("Ritual settled, %d cards spread", len(self.deck))
        return RitualResult(
            outcome=RitualOutcome.SETTLED,
            phase=self.phase,
            deck_size=len(self.deck),
        )

    def draw(self, card_id: int) -> DrawResult:
        """
        Draw one card from the spread into a slot.

        Wrong phase, full slots and repeated cards are rejected without any
        state change.

        Raises:
            UnknownCardError: If `card_id` is not in the catalogue
        """
        self.touch()
        card = get_card(card_id)

        if self.phase is not Phase.SPREAD:
            return self._reject_draw(f"drawing is closed during {self.phase.value}")
        if self.board.is_complete():
            return self._reject_draw("all four slots are filled")
        if card.id in self.board.occupied_card_ids():
            return self._reject_draw(f"{card.name} is already on the board")

        slot = resolve_slot(card, self.board)
        if slot is None:
            return self._reject_draw("no empty slot")

        tier = self.rng.assign_tier()
        is_upright = self.rng.flip_orientation()
        instance = build_instance(card, slot, tier=tier, is_upright=is_upright)

        self.board.place(slot, instance)
        self.inventory.add(card.id, tier)
        self.writer.mark(Category.OWNED)

        reaction = self.narrative.reaction(derive(self.board), tier)
        comment = self.narrative.comment(is_upright)
        completion = self._complete() if self.board.is_complete() else None

        return DrawResult(
            outcome=DrawOutcome.COMPLETED if completion else DrawOutcome.DRAWN,
            slot=slot,
            instance=instance,
            cross_dimension=card.dimension is not slot.axis,
            reaction=reaction,
            comment=comment,
            completion=completion,
        )

    def _reject_draw(self, reason: str) -> DrawResult:
        logger.debug("Draw rejected: %s", reason)
        return DrawResult(outcome=DrawOutcome.REJECTED, reason=reason)

    def _complete(self) -> CompletionSummary:
        code = derive_final(self.board)
        tier = result_tier(self.board)
        rarity = rarity_for_tier(tier)
        profession = self.narrative.title(code)
        text = self.narrative.narrative(code, rarity)
        new_entry = self.codex.record(code, tier)

        now = self._wall_clock()
        record = HistoryRecord(
            id=self.history.next_id(int(now.timestamp() * 1000)),
            time=now.isoformat(),
            mbti=code,
            profession=profession,
            narrative=text,
            cards=tuple(instance.to_record() for _, instance in self.board.in_order() if instance),
        )
        self.history.append(record)
        self.phase = Phase.RESULT
        self.writer.mark(Category.CODEX, Category.HISTORY)

        logger.info(
            "Session complete: %s (%s)",
            code,
            rarity.value,
            extra={"code": code, "tier": tier, "new_codex_entry": new_entry},
        )
        return CompletionSummary(
            code=code,
            result_tier=tier,
            rarity=rarity,
            profession=profession,
            narrative=text,
            result_message=self.narrative.result_message(rarity),
            new_codex_entry=new_entry,
            record=record,
        )

    # =========================================================================
    # ECONOMY
    # =========================================================================

    def synthesize(self, card_id: int, tier: int) -> SynthesisResult:
        """Merge three copies into one of the next tier. See economy.synthesize."""
        self.touch()
        result = economy.synthesize(self.inventory, card_id, tier)
        if result.outcome is SynthesisOutcome.SYNTHESIZED:
            self.writer.mark(Category.OWNED)
        return result

    async def reforge(self, slot: str | SlotKey) -> ReforgeResult:
        """
        Replace a slot's card with a random card of the same axis.

        Without a duplicate the attempt fails at once and burns the slot's
        reforge right. Otherwise the slot is pending for the resolve delay,
        after which the reforge is applied to the state as it is THEN. If the
        slot changed or the session was reset meanwhile, nothing is applied.
        """
        key = parse_slot(slot)
        self.touch()

        gate = economy.reforge_precheck(self.board, key)
        if gate is not None:
            return ReforgeResult(outcome=gate, slot=key, previous=self.board.get(key))

        # One resolving reforge per slot, even if its duplicate has since been spent
        if self.scheduler.is_pending(key):
            return self._reject_reforge(key)

        if not economy.has_duplicate(self.board, self.inventory, key):
            return self._with_message(economy.forfeit_reforge(self.board, key))

        token = self.scheduler.reserve(key)
        if token is None:
            return self._reject_reforge(key)

        try:
            current = await self.scheduler.wait(token, self.config.reforge_resolve_seconds)
        finally:
            self.scheduler.release(token)

        if not current:
            return ReforgeResult(
                outcome=ReforgeOutcome.SUPERSEDED,
                slot=key,
                previous=self.board.get(key),
            )

        result = economy.apply_reforge(self.board, self.inventory, key, self.rng)
        if result.outcome.succeeded:
            self.writer.mark(Category.OWNED)
        return self._with_message(result)

    def _reject_reforge(self, key: SlotKey) -> ReforgeResult:
        return ReforgeResult(
            outcome=ReforgeOutcome.REJECTED,
            slot=key,
            previous=self.board.get(key),
        )

    def _with_message(self, result: ReforgeResult) -> ReforgeResult:
        return replace(result, message=self.narrative.reforge_message(result.outcome))

    def toggle_lock(self, slot: str | SlotKey) -> bool:
        """Flip a slot's lock. Returns the new state."""
        key = parse_slot(slot)
        self.touch()
        locked = self.board.toggle_lock(key)
        logger.debug("Slot %s %s", key.value, "locked" if locked else "unlocked")
        return locked

    # =========================================================================
    # RESET
    # =========================================================================

    def reset_all(self) -> None:
        """
        Wipe inventory, codex, history, slots and locks; return to START.

        Irreversible. Confirmation belongs to the caller. Any delayed effect
        still in flight is invalidated.
        """
        self.touch()
        self.inventory.clear()
        self.codex.clear()
        self.history.clear()
        self.board.clear()
        self.board.locked.clear()
        self.scheduler.advance_epoch()
        self.phase = Phase.START
        self.deck = self.rng.shuffle(catalogue())
        self.writer.mark(*ALL_CATEGORIES)
        logger.warning("Full reset: inventory, codex and history cleared")

    async def erase(self) -> None:
        """
        Full reset that also deletes the stored state.

        Pending writes are dropped instead of writing empty payloads.
        """
        self.reset_all()
        self.writer.discard()
        if self.persistence is not None:
            await self.persistence.clear()

    # =========================================================================
    # READ-ONLY VIEWS
    # =========================================================================

    @property
    def code(self) -> str:
        """In-progress personality code (shorter than four letters until complete)."""
        return derive(self.board)

    def snapshot(self) -> EngineSnapshot:
        return EngineSnapshot(
            phase=self.phase,
            slots={key: self.board.get(key) for key in SLOT_ORDER},
            locked=frozenset(self.board.locked),
            pending=self.scheduler.pending_slots,
            code=self.code,
            deck_size=len(self.deck),
        )

    def idle_hint(self, now: float | None = None) -> str | None:
        """
        A hint line if the player has been idle for the prompt window.

        Showing a hint restarts the window. Nothing else changes.
        """
        now = self._clock() if now is None else now
        if now - self._last_interaction < self.config.idle_prompt_seconds:
            return None
        self._last_interaction = now
        return self.narrative.idle_hint()
