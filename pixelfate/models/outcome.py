"""
Outcome classification for engine operations.

Every engine operation resolves to a well-defined state plus one of these
classifications. None of them aborts the caller.

- REJECTED outcomes: precondition violations the caller should have
  prevented (wrong phase, slot full, card already drawn). No state change.
- INSUFFICIENT outcomes: recoverable, user-communicable resource shortages.
- Everything else: success variants.
"""

from dataclasses import dataclass
from enum import Enum

from pixelfate.models.card import CardInstance, Rarity
from pixelfate.models.history import HistoryRecord
from pixelfate.models.slots import SlotKey


class Phase(str, Enum):
    """Session phase."""

    START = "START"
    SHUFFLING = "SHUFFLING"
    SPREAD = "SPREAD"
    RESULT = "RESULT"


class RitualOutcome(str, Enum):
    SETTLED = "settled"  # Shuffle finished, phase is SPREAD
    REJECTED = "rejected"  # Already shuffling
    SUPERSEDED = "superseded"  # A reset or newer ritual replaced this one


class DrawOutcome(str, Enum):
    DRAWN = "drawn"
    COMPLETED = "completed"  # Drawn, and it filled the fourth slot
    REJECTED = "rejected"


class SynthesisOutcome(str, Enum):
    SYNTHESIZED = "synthesized"
    INSUFFICIENT_COPIES = "insufficient_copies"
    MAX_TIER = "max_tier"


class ReforgeOutcome(str, Enum):
    UPGRADE = "upgrade"
    NO_CHANGE = "no_change"
    DOWNGRADE = "downgrade"
    INSUFFICIENT_DUPLICATE = "insufficient_duplicate"
    LOCKED = "locked"  # Silent no-op, no feedback needed
    REJECTED = "rejected"  # Empty slot, already reforged, or already pending
    SUPERSEDED = "superseded"  # Slot changed while resolving; nothing applied

    @property
    def succeeded(self) -> bool:
        return self in (ReforgeOutcome.UPGRADE, ReforgeOutcome.NO_CHANGE, ReforgeOutcome.DOWNGRADE)


def classify_reforge(old_tier: int, new_tier: int) -> ReforgeOutcome:
    """Compare tiers across a successful reforge."""
    if new_tier > old_tier:
        return ReforgeOutcome.UPGRADE
    if new_tier == old_tier:
        return ReforgeOutcome.NO_CHANGE
    return ReforgeOutcome.DOWNGRADE


@dataclass(frozen=True, slots=True)
class CompletionSummary:
    """What a completed session produced."""

    code: str
    result_tier: int
    rarity: Rarity
    profession: str
    narrative: str
    result_message: str
    new_codex_entry: bool
    record: HistoryRecord


@dataclass(frozen=True, slots=True)
class DrawResult:
    outcome: DrawOutcome
    slot: SlotKey | None = None
    instance: CardInstance | None = None
    cross_dimension: bool = False
    reaction: str = ""
    comment: str = ""
    completion: CompletionSummary | None = None
    reason: str = ""


@dataclass(frozen=True, slots=True)
class SynthesisResult:
    outcome: SynthesisOutcome
    card_id: int
    tier: int
    remaining: int = 0
    produced_tier: int | None = None


@dataclass(frozen=True, slots=True)
class ReforgeResult:
    outcome: ReforgeOutcome
    slot: SlotKey
    previous: CardInstance | None = None
    instance: CardInstance | None = None
    message: str = ""


@dataclass(frozen=True, slots=True)
class RitualResult:
    outcome: RitualOutcome
    phase: Phase
    deck_size: int = 0
