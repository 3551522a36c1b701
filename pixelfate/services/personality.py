"""
Personality derivation.

Each filled slot contributes one letter from its axis pair: the first letter
when the card is upright, the second when reversed. Letters are joined in
canonical slot order. Empty slots contribute nothing, so a partial board
yields a shorter in-progress code.
"""

import math
from itertools import product

from pixelfate.models.slots import SLOT_ORDER, SlotBoard

PERSONALITY_CODES: tuple[str, ...] = tuple(
    "".join(letters)
    for letters in product(*((key.axis.first, key.axis.second) for key in SLOT_ORDER))
)


def derive(board: SlotBoard) -> str:
    """Personality code for the current slot contents. Pure."""
    return "".join(instance.letter for _, instance in board.in_order() if instance is not None)


def derive_final(board: SlotBoard) -> str:
    """
    Finalized four-letter code.

    Raises:
        ValueError: If any slot is empty
    """
    if not board.is_complete():
        raise ValueError(
            f"A final code needs all four slots filled ({board.filled_count()} filled)"
        )
    return derive(board)


def result_tier(board: SlotBoard) -> int:
    """Average tier of the four slots, rounded up. Empty slots count as 0."""
    total = sum(instance.tier for _, instance in board.in_order() if instance is not None)
    return math.ceil(total / len(SLOT_ORDER))


def is_personality_code(code: str) -> bool:
    return code in PERSONALITY_CODES
