"""
Elemental slots.

Four fixed slots, each bound to one personality axis:

    fire  -> E/I
    air   -> S/N
    water -> T/F
    earth -> J/P

INVARIANT: A slot holds at most one CardInstance.
INVARIANT: Every held instance's dimension equals its slot's axis.
INVARIANT: Each slot carries a version that increases on every mutation, so
delayed effects captured against an older version can be detected as stale.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from pixelfate.models.card import CardInstance, Dimension


class SlotKey(str, Enum):
    """Slot names."""

    FIRE = "fire"
    AIR = "air"
    WATER = "water"
    EARTH = "earth"

    @property
    def axis(self) -> Dimension:
        return SLOT_AXIS[self]

    @property
    def label(self) -> str:
        return SLOT_LABELS[self]


# Canonical order: fallback resolution and personality codes both follow it
SLOT_ORDER: tuple[SlotKey, ...] = (SlotKey.FIRE, SlotKey.AIR, SlotKey.WATER, SlotKey.EARTH)

SLOT_AXIS: dict[SlotKey, Dimension] = {
    SlotKey.FIRE: Dimension.ENERGY,
    SlotKey.AIR: Dimension.PERCEPTION,
    SlotKey.WATER: Dimension.JUDGMENT,
    SlotKey.EARTH: Dimension.LIFESTYLE,
}

SLOT_LABELS: dict[SlotKey, str] = {
    SlotKey.FIRE: "Fire Slot (Energy)",
    SlotKey.AIR: "Air Slot (Perception)",
    SlotKey.WATER: "Water Slot (Judgment)",
    SlotKey.EARTH: "Earth Slot (Lifestyle)",
}


@dataclass
class SlotBoard:
    """
    The four slots of one session plus their lock flags.

    Locks are independent of slot contents: clearing the board keeps them,
    only a full reset drops them.
    """

    cards: dict[SlotKey, CardInstance] = field(default_factory=dict)
    locked: set[SlotKey] = field(default_factory=set)
    versions: dict[SlotKey, int] = field(default_factory=lambda: {key: 0 for key in SLOT_ORDER})

    def get(self, key: SlotKey) -> CardInstance | None:
        return self.cards.get(key)

    def is_empty(self, key: SlotKey) -> bool:
        return key not in self.cards

    def place(self, key: SlotKey, instance: CardInstance) -> None:
        """Put an instance in a slot, replacing whatever was there."""
        if instance.dimension is not key.axis:
            raise ValueError(
                f"Instance dimension {instance.dimension.value} does not match "
                f"slot {key.value} axis {key.axis.value}"
            )
        self.cards[key] = instance
        self.versions[key] += 1

    def clear(self) -> None:
        """Empty every slot. Locks survive."""
        for key in list(self.cards):
            self.versions[key] += 1
        self.cards.clear()

    def version(self, key: SlotKey) -> int:
        return self.versions[key]

    def filled_count(self) -> int:
        return len(self.cards)

    def is_complete(self) -> bool:
        return all(key in self.cards for key in SLOT_ORDER)

    def occupied_card_ids(self) -> set[int]:
        return {instance.card_id for instance in self.cards.values()}

    def in_order(self) -> Iterator[tuple[SlotKey, CardInstance | None]]:
        """Iterate (key, instance-or-None) in canonical slot order."""
        for key in SLOT_ORDER:
            yield key, self.cards.get(key)

    def is_locked(self, key: SlotKey) -> bool:
        return key in self.locked

    def toggle_lock(self, key: SlotKey) -> bool:
        """Flip the lock on a slot. Returns the new lock state."""
        if key in self.locked:
            self.locked.discard(key)
            return False
        self.locked.add(key)
        return True
