"""
Card catalogue service.

The full 78-card deck: 22 Major arcana with curated personality dimensions,
then 56 Minor arcana whose dimension is fixed by suit.

The catalogue is a constant table built once and cached.
"""

from functools import lru_cache

from pixelfate.models.card import ArcanaType, CardDefinition, Dimension, Suit
from pixelfate.models.failure import UnknownCardError

MAJOR_COLOR = "#B19CD9"

SUIT_COLORS: dict[Suit, str] = {
    Suit.WANDS: "#4f46e5",
    Suit.SWORDS: "#8A2BE2",
    Suit.CUPS: "#3b82f6",
    Suit.PENTACLES: "#94a3b8",
}

SUIT_DIMENSIONS: dict[Suit, Dimension] = {
    Suit.WANDS: Dimension.ENERGY,
    Suit.SWORDS: Dimension.PERCEPTION,
    Suit.CUPS: Dimension.JUDGMENT,
    Suit.PENTACLES: Dimension.LIFESTYLE,
}

SUIT_MEANINGS: dict[Suit, str] = {
    Suit.WANDS: "action, energy, passion",
    Suit.SWORDS: "thought, intellect, conflict",
    Suit.CUPS: "emotion, relationships, creativity",
    Suit.PENTACLES: "material, money, work",
}

# Minor arcana are numbered in this suit order
SUIT_ORDER: tuple[Suit, ...] = (Suit.WANDS, Suit.CUPS, Suit.SWORDS, Suit.PENTACLES)

MINOR_RANKS: tuple[str, ...] = (
    "Ace",
    "Two",
    "Three",
    "Four",
    "Five",
    "Six",
    "Seven",
    "Eight",
    "Nine",
    "Ten",
    "Page",
    "Knight",
    "Queen",
    "King",
)

# (id, name, dimension, meaning)
MAJOR_ARCANA: tuple[tuple[int, str, Dimension, str], ...] = (
    (0, "The Fool", Dimension.ENERGY, "freedom, beginnings, adventure"),
    (1, "The Magician", Dimension.PERCEPTION, "creativity, will, potential"),
    (2, "The High Priestess", Dimension.JUDGMENT, "intuition, mystery, inner wisdom"),
    (3, "The Empress", Dimension.JUDGMENT, "abundance, nature, motherhood"),
    (4, "The Emperor", Dimension.LIFESTYLE, "authority, structure, fatherhood"),
    (5, "The Hierophant", Dimension.LIFESTYLE, "tradition, belief, mentorship"),
    (6, "The Lovers", Dimension.JUDGMENT, "choice, relationships, harmony"),
    (7, "The Chariot", Dimension.ENERGY, "willpower, victory, control"),
    (8, "Strength", Dimension.ENERGY, "courage, gentle strength, confidence"),
    (9, "The Hermit", Dimension.PERCEPTION, "solitude, introspection, seeking truth"),
    (10, "Wheel of Fortune", Dimension.LIFESTYLE, "fate, cycles, change"),
    (11, "Justice", Dimension.JUDGMENT, "fairness, truth, law"),
    (12, "The Hanged Man", Dimension.PERCEPTION, "sacrifice, pause, new perspective"),
    (13, "Death", Dimension.LIFESTYLE, "endings, transformation, rebirth"),
    (14, "Temperance", Dimension.JUDGMENT, "moderation, balance, blending"),
    (15, "The Devil", Dimension.ENERGY, "bondage, desire, materialism"),
    (16, "The Tower", Dimension.LIFESTYLE, "upheaval, awakening, release"),
    (17, "The Star", Dimension.PERCEPTION, "hope, inspiration, serenity"),
    (18, "The Moon", Dimension.PERCEPTION, "illusion, fear, the subconscious"),
    (19, "The Sun", Dimension.ENERGY, "joy, success, vitality"),
    (20, "Judgement", Dimension.JUDGMENT, "rebirth, calling, reckoning"),
    (21, "The World", Dimension.LIFESTYLE, "completion, integration, travel"),
)

MINOR_START_ID = len(MAJOR_ARCANA)


def _major_image_path(card_id: int) -> str:
    return f"major/{card_id:02d}.jpg"


def _minor_image_path(suit: Suit, rank_index: int) -> str:
    return f"{suit.value.lower()}/{rank_index + 1:02d}.jpg"


def _build_major_arcana() -> list[CardDefinition]:
    return [
        CardDefinition(
            id=card_id,
            name=name,
            arcana=ArcanaType.MAJOR,
            suit=None,
            dimension=dimension,
            meaning=meaning,
            color=MAJOR_COLOR,
            image_path=_major_image_path(card_id),
        )
        for card_id, name, dimension, meaning in MAJOR_ARCANA
    ]


def _build_minor_arcana(start_id: int) -> list[CardDefinition]:
    cards: list[CardDefinition] = []
    card_id = start_id
    for suit in SUIT_ORDER:
        for rank_index, rank in enumerate(MINOR_RANKS):
            cards.append(
                CardDefinition(
                    id=card_id,
                    name=f"{rank} of {suit.value}",
                    arcana=ArcanaType.MINOR,
                    suit=suit,
                    dimension=SUIT_DIMENSIONS[suit],
                    meaning=f"{rank}: {SUIT_MEANINGS[suit]}",
                    color=SUIT_COLORS[suit],
                    image_path=_minor_image_path(suit, rank_index),
                )
            )
            card_id += 1
    return cards


@lru_cache(maxsize=1)
def catalogue() -> tuple[CardDefinition, ...]:
    """
    The fixed, ordered sequence of all 78 card definitions.

    Major arcana first (ids 0-21), then Minor arcana (ids 22-77).
    """
    return tuple(_build_major_arcana() + _build_minor_arcana(MINOR_START_ID))


@lru_cache(maxsize=1)
def _index() -> dict[int, CardDefinition]:
    return {card.id: card for card in catalogue()}


def get_card(card_id: int) -> CardDefinition:
    """
    Look up a definition by id.

    Raises:
        UnknownCardError: If the id is not in the catalogue
    """
    card = _index().get(card_id)
    if card is None:
        raise UnknownCardError(card_id)
    return card


def has_card(card_id: int) -> bool:
    return card_id in _index()


def cards_for_dimension(
    dimension: Dimension,
    exclude_id: int | None = None,
) -> list[CardDefinition]:
    """All definitions whose native dimension is `dimension`, optionally minus one id."""
    return [
        card for card in catalogue() if card.dimension is dimension and card.id != exclude_id
    ]
