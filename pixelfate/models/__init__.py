from pixelfate.models.card import (
    ArcanaType,
    CardDefinition,
    CardInstance,
    Dimension,
    Rarity,
    Suit,
    is_valid_tier,
    rarity_for_tier,
)
from pixelfate.models.codex import Codex
from pixelfate.models.failure import (
    ConfirmationRequiredError,
    FailureDetail,
    FailureKind,
    InvalidTierError,
    KnownError,
    UnknownCardError,
    UnknownSlotError,
)
from pixelfate.models.history import HistoryLog, HistoryRecord
from pixelfate.models.inventory import InsufficientCopiesError, Inventory
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
    classify_reforge,
)
from pixelfate.models.slots import SLOT_AXIS, SLOT_ORDER, SlotBoard, SlotKey

__all__ = [
    "ArcanaType",
    "CardDefinition",
    "CardInstance",
    "Codex",
    "CompletionSummary",
    "ConfirmationRequiredError",
    "Dimension",
    "DrawOutcome",
    "DrawResult",
    "FailureDetail",
    "FailureKind",
    "HistoryLog",
    "HistoryRecord",
    "InsufficientCopiesError",
    "InvalidTierError",
    "Inventory",
    "KnownError",
    "Phase",
    "Rarity",
    "ReforgeOutcome",
    "ReforgeResult",
    "RitualOutcome",
    "RitualResult",
    "SLOT_AXIS",
    "SLOT_ORDER",
    "SlotBoard",
    "SlotKey",
    "Suit",
    "SynthesisOutcome",
    "SynthesisResult",
    "UnknownCardError",
    "UnknownSlotError",
    "classify_reforge",
    "is_valid_tier",
    "rarity_for_tier",
]
