"""
PixelFate services.

Game rules, randomness, persistence and the per-player engine.
"""

from pixelfate.services.catalogue import (
    catalogue,
    cards_for_dimension,
    get_card,
    has_card,
)
from pixelfate.services.economy import apply_reforge, synthesize
from pixelfate.services.engine import EngineSnapshot, FateEngine, parse_slot
from pixelfate.services.narrative import NarrativeProvider, StaticNarrativeProvider
from pixelfate.services.persistence import (
    Category,
    DebouncedWriter,
    InMemoryStateStore,
    PersistenceStore,
    SqlStateStore,
)
from pixelfate.services.personality import PERSONALITY_CODES, derive, derive_final, result_tier
from pixelfate.services.randomness import RandomSource, SystemRandomSource, assign_tier, shuffle
from pixelfate.services.registry import EngineRegistry
from pixelfate.services.scheduler import EffectScheduler, EffectToken
from pixelfate.services.slot_resolver import resolve_slot

__all__ = [
    "PERSONALITY_CODES",
    "Category",
    "DebouncedWriter",
    "EffectScheduler",
    "EffectToken",
    "EngineRegistry",
    "EngineSnapshot",
    "FateEngine",
    "InMemoryStateStore",
    "NarrativeProvider",
    "PersistenceStore",
    "RandomSource",
    "SqlStateStore",
    "StaticNarrativeProvider",
    "SystemRandomSource",
    "apply_reforge",
    "assign_tier",
    "cards_for_dimension",
    "catalogue",
    "derive",
    "derive_final",
    "get_card",
    "has_card",
    "parse_slot",
    "resolve_slot",
    "result_tier",
    "shuffle",
    "synthesize",
]
