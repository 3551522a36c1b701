"""
Slot resolution for drawn cards.

Priority:
1. The slot whose axis matches the card's native dimension, if empty
2. Otherwise the first empty slot in canonical order (fire, air, water, earth)
3. No empty slot: no target (the draw should have been rejected earlier)

A card placed in a non-native slot takes that slot's axis as its effective
dimension. Personality derivation reads slot-axis truth only.
"""

from pixelfate.models.card import CardDefinition, CardInstance
from pixelfate.models.slots import SLOT_ORDER, SlotBoard, SlotKey


def resolve_slot(card: CardDefinition, board: SlotBoard) -> SlotKey | None:
    """Pick the slot a drawn card lands in, or None if all four are filled."""
    for key in SLOT_ORDER:
        if key.axis is card.dimension and board.is_empty(key):
            return key
    for key in SLOT_ORDER:
        if board.is_empty(key):
            return key
    return None


def build_instance(
    card: CardDefinition,
    slot: SlotKey,
    tier: int,
    is_upright: bool,
    reforged: bool = False,
) -> CardInstance:
    """Create the instance that will occupy `slot`, with the slot's axis as its dimension."""
    return CardInstance(
        definition=card,
        tier=tier,
        is_upright=is_upright,
        dimension=slot.axis,
        reforged=reforged,
    )
