"""
Card models.

INVARIANTS:
- CardDefinition is catalogue data and is never mutated after construction
- CardInstance is a drawn copy; "changes" produce a new instance via replace()
- A CardInstance's dimension is its EFFECTIVE dimension (the axis of the slot
  it occupies), which may differ from its definition's native dimension
"""

from dataclasses import dataclass, replace
from enum import Enum

from pixelfate.config import MAX_TIER, MIN_TIER


class ArcanaType(str, Enum):
    """Major or Minor arcana."""

    MAJOR = "Major"
    MINOR = "Minor"


class Suit(str, Enum):
    """Minor arcana suits."""

    WANDS = "Wands"
    CUPS = "Cups"
    SWORDS = "Swords"
    PENTACLES = "Pentacles"


class Dimension(str, Enum):
    """
    Personality axis, written as a two-letter pair.

    The first letter is contributed by an upright card, the second by a
    reversed one.
    """

    ENERGY = "E/I"
    PERCEPTION = "S/N"
    JUDGMENT = "T/F"
    LIFESTYLE = "J/P"

    @property
    def first(self) -> str:
        return self.value[0]

    @property
    def second(self) -> str:
        return self.value[-1]

    def letter(self, is_upright: bool) -> str:
        """Letter contributed by a card on this axis."""
        return self.first if is_upright else self.second


class Rarity(str, Enum):
    """Display rarity label for a tier."""

    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"


_RARITY_BY_TIER: dict[int, Rarity] = {
    1: Rarity.BRONZE,
    2: Rarity.SILVER,
    3: Rarity.GOLD,
}


def rarity_for_tier(tier: int) -> Rarity:
    """
    Map a tier to its display rarity.

    Total over integers: anything at or above the top tier is Gold, anything
    else below Silver is Bronze.
    """
    if tier >= MAX_TIER:
        return Rarity.GOLD
    return _RARITY_BY_TIER.get(tier, Rarity.BRONZE)


def is_valid_tier(tier: int) -> bool:
    return MIN_TIER <= tier <= MAX_TIER


@dataclass(frozen=True, slots=True)
class CardDefinition:
    """
    Immutable catalogue entry.

    Attributes:
        id: Unique card id (0-21 Major, 22-77 Minor)
        name: Display name, e.g. "The Fool" or "Ace of Wands"
        arcana: Major or Minor
        suit: Suit for Minor arcana, None for Major
        dimension: Native personality axis
        meaning: Keyword text
        color: Display colour for the card face
        image_path: Card-art reference relative to the art root
    """

    id: int
    name: str
    arcana: ArcanaType
    suit: Suit | None
    dimension: Dimension
    meaning: str
    color: str = ""
    image_path: str = ""


@dataclass(frozen=True, slots=True)
class CardInstance:
    """
    A drawn card held by a slot.

    Attributes:
        definition: The catalogue card this copy was drawn from
        tier: 1 (common), 2 (superior) or 3 (legendary)
        is_upright: Orientation, decided at draw time
        dimension: Effective axis (the holding slot's axis)
        reforged: Sticky once set; the slot may not be reforged again
    """

    definition: CardDefinition
    tier: int
    is_upright: bool
    dimension: Dimension
    reforged: bool = False

    @property
    def card_id(self) -> int:
        return self.definition.id

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def rarity(self) -> Rarity:
        return rarity_for_tier(self.tier)

    @property
    def letter(self) -> str:
        return self.dimension.letter(self.is_upright)

    def mark_reforged(self) -> "CardInstance":
        """Return a copy flagged as reforged."""
        return replace(self, reforged=True)

    def to_record(self) -> dict[str, object]:
        """Serializable snapshot used by history records and API responses."""
        return {
            "id": self.definition.id,
            "name": self.definition.name,
            "type": self.definition.arcana.value,
            "suit": self.definition.suit.value if self.definition.suit else None,
            "dimension": self.dimension.value,
            "meaning": self.definition.meaning,
            "isUpright": self.is_upright,
            "level": self.tier,
            "rarity": self.rarity.value,
            "reforged": self.reforged,
        }
