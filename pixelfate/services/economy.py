"""
Card economy: synthesis and reforge.

Synthesis: 3 copies of (card, tier) -> 1 copy of (card, tier + 1).
Reforge: 1 duplicate of the slot card's (card, tier) -> a new random card
drawn from the slot's axis, with a fresh tier and the same orientation.

INVARIANTS:
- Inventory counts never go negative
- Every check-then-act runs inside a single synchronous call, so no other
  event can interleave between the check and the mutation
- A reforge never changes the slot's axis ("soul lock")
- A reforge attempt always consumes the slot's one reforge right, even when
  it fails for lack of a duplicate
"""

import logging

from pixelfate.config import MAX_TIER, REFORGE_COST, SYNTHESIS_COST
from pixelfate.models.card import is_valid_tier
from pixelfate.models.failure import InvalidTierError
from pixelfate.models.inventory import InsufficientCopiesError, Inventory
from pixelfate.models.outcome import (
    ReforgeOutcome,
    ReforgeResult,
    SynthesisOutcome,
    SynthesisResult,
    classify_reforge,
)
from pixelfate.models.slots import SlotBoard, SlotKey
from pixelfate.services.catalogue import cards_for_dimension, get_card
from pixelfate.services.randomness import RandomSource
from pixelfate.services.slot_resolver import build_instance

logger = logging.getLogger(__name__)


# =============================================================================
# SYNTHESIS
# =============================================================================


def synthesize(inventory: Inventory, card_id: int, tier: int) -> SynthesisResult:
    """
    Merge three copies of a card at `tier` into one copy at `tier + 1`.

    A shortage or a top-tier request is reported through the outcome and
    leaves the inventory unchanged.

    Raises:
        UnknownCardError: If `card_id` is not in the catalogue
        InvalidTierError: If `tier` is outside 1-3
    """
    get_card(card_id)
    if not is_valid_tier(tier):
        raise InvalidTierError(tier)

    if tier >= MAX_TIER:
        return SynthesisResult(
            outcome=SynthesisOutcome.MAX_TIER,
            card_id=card_id,
            tier=tier,
            remaining=inventory.count(card_id, tier),
        )

    try:
        inventory.remove(card_id, tier, SYNTHESIS_COST)
    except InsufficientCopiesError as e:
        logger.debug(
            "Synthesis refused: card %d tier %d has %d copies",
            card_id,
            tier,
            e.available,
        )
        return SynthesisResult(
            outcome=SynthesisOutcome.INSUFFICIENT_COPIES,
            card_id=card_id,
            tier=tier,
            remaining=e.available,
        )

    inventory.add(card_id, tier + 1)
    logger.info(
        "Synthesized card %d: tier %d -> %d",
        card_id,
        tier,
        tier + 1,
        extra={"card_id": card_id, "tier": tier},
    )
    return SynthesisResult(
        outcome=SynthesisOutcome.SYNTHESIZED,
        card_id=card_id,
        tier=tier,
        remaining=inventory.count(card_id, tier),
        produced_tier=tier + 1,
    )


# =============================================================================
# REFORGE
# =============================================================================


def reforge_precheck(board: SlotBoard, slot: SlotKey) -> ReforgeOutcome | None:
    """
    Gate a reforge request against the slot state.

    Returns a terminal outcome if the request must stop here, or None if it
    may proceed.
    """
    if board.is_locked(slot):
        return ReforgeOutcome.LOCKED
    instance = board.get(slot)
    if instance is None or instance.reforged:
        return ReforgeOutcome.REJECTED
    return None


def has_duplicate(board: SlotBoard, inventory: Inventory, slot: SlotKey) -> bool:
    instance = board.get(slot)
    return instance is not None and inventory.owns(instance.card_id, instance.tier, REFORGE_COST)


def forfeit_reforge(board: SlotBoard, slot: SlotKey) -> ReforgeResult:
    """
    Failure path: no duplicate to consume.

    The slot keeps its card but loses its reforge right.
    """
    instance = board.get(slot)
    if instance is None:
        return ReforgeResult(outcome=ReforgeOutcome.REJECTED, slot=slot)
    marked = instance.mark_reforged()
    board.place(slot, marked)
    logger.info(
        "Reforge of %s failed: no duplicate of card %d tier %d",
        slot.value,
        instance.card_id,
        instance.tier,
    )
    return ReforgeResult(
        outcome=ReforgeOutcome.INSUFFICIENT_DUPLICATE,
        slot=slot,
        previous=instance,
        instance=marked,
    )


def apply_reforge(
    board: SlotBoard,
    inventory: Inventory,
    slot: SlotKey,
    rng: RandomSource,
) -> ReforgeResult:
    """
    Commit a reforge against the CURRENT board and inventory.

    Consumes one duplicate, draws a replacement from the slot's axis
    (excluding the current card), rolls a fresh tier, keeps the orientation
    and records the new copy in the inventory.
    """
    gate = reforge_precheck(board, slot)
    if gate is not None:
        return ReforgeResult(outcome=gate, slot=slot, previous=board.get(slot))

    old = board.get(slot)
    if old is None:
        return ReforgeResult(outcome=ReforgeOutcome.REJECTED, slot=slot)

    try:
        inventory.remove(old.card_id, old.tier, REFORGE_COST)
    except InsufficientCopiesError:
        return forfeit_reforge(board, slot)

    candidates = cards_for_dimension(slot.axis, exclude_id=old.card_id)
    new_card = rng.pick(candidates)
    new_tier = rng.assign_tier()
    inventory.add(new_card.id, new_tier)

    new_instance = build_instance(
        new_card,
        slot,
        tier=new_tier,
        is_upright=old.is_upright,
        reforged=True,
    )
    board.place(slot, new_instance)

    outcome = classify_reforge(old.tier, new_tier)
    logger.info(
        "Reforged %s: %s (tier %d) -> %s (tier %d), %s",
        slot.value,
        old.name,
        old.tier,
        new_card.name,
        new_tier,
        outcome.value,
    )
    return ReforgeResult(outcome=outcome, slot=slot, previous=old, instance=new_instance)
