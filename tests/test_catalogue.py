"""Tests for the card catalogue."""

import pytest

from pixelfate.models.card import ArcanaType, Dimension, Suit
from pixelfate.models.failure import FailureKind, UnknownCardError
from pixelfate.services.catalogue import (
    catalogue,
    cards_for_dimension,
    get_card,
    has_card,
)


class TestCatalogueShape:
    def test_has_78_cards(self) -> None:
        """The deck is 22 Major plus 56 Minor arcana."""
        cards = catalogue()

        assert len(cards) == 78
        assert sum(1 for c in cards if c.arcana is ArcanaType.MAJOR) == 22
        assert sum(1 for c in cards if c.arcana is ArcanaType.MINOR) == 56

    def test_ids_are_sequential(self) -> None:
        """Ids run 0..77 in catalogue order."""
        assert [card.id for card in catalogue()] == list(range(78))

    def test_catalogue_is_stable(self) -> None:
        """Repeated calls return the same sequence."""
        assert catalogue() == catalogue()

    def test_every_dimension_is_covered(self) -> None:
        """Each axis has enough cards to reforge into."""
        counts = {dim: len(cards_for_dimension(dim)) for dim in Dimension}

        assert counts == {
            Dimension.ENERGY: 19,
            Dimension.PERCEPTION: 19,
            Dimension.JUDGMENT: 20,
            Dimension.LIFESTYLE: 20,
        }


class TestMajorArcana:
    def test_fool_is_first(self) -> None:
        fool = get_card(0)

        assert fool.name == "The Fool"
        assert fool.suit is None
        assert fool.dimension is Dimension.ENERGY
        assert fool.image_path == "major/00.jpg"

    def test_world_is_last_major(self) -> None:
        world = get_card(21)

        assert world.name == "The World"
        assert world.dimension is Dimension.LIFESTYLE

    def test_curated_dimensions(self) -> None:
        """Major arcana dimensions follow the curated table, not a formula."""
        assert get_card(1).dimension is Dimension.PERCEPTION  # Magician
        assert get_card(2).dimension is Dimension.JUDGMENT  # High Priestess
        assert get_card(13).dimension is Dimension.LIFESTYLE  # Death
        assert get_card(15).dimension is Dimension.ENERGY  # Devil


class TestMinorArcana:
    @pytest.mark.parametrize(
        ("card_id", "name", "suit", "dimension"),
        [
            (22, "Ace of Wands", Suit.WANDS, Dimension.ENERGY),
            (35, "King of Wands", Suit.WANDS, Dimension.ENERGY),
            (36, "Ace of Cups", Suit.CUPS, Dimension.JUDGMENT),
            (50, "Ace of Swords", Suit.SWORDS, Dimension.PERCEPTION),
            (64, "Ace of Pentacles", Suit.PENTACLES, Dimension.LIFESTYLE),
            (77, "King of Pentacles", Suit.PENTACLES, Dimension.LIFESTYLE),
        ],
    )
    def test_suit_layout(self, card_id: int, name: str, suit: Suit, dimension: Dimension) -> None:
        """Suits run Wands, Cups, Swords, Pentacles; each maps to one axis."""
        card = get_card(card_id)

        assert card.name == name
        assert card.suit is suit
        assert card.dimension is dimension

    def test_meaning_starts_with_rank(self) -> None:
        assert get_card(22).meaning.startswith("Ace: ")

    def test_image_path_uses_suit_folder(self) -> None:
        assert get_card(22).image_path == "wands/01.jpg"
        assert get_card(77).image_path == "pentacles/14.jpg"

    def test_suits_have_distinct_colours(self) -> None:
        colours = {get_card(card_id).color for card_id in (22, 36, 50, 64)}

        assert len(colours) == 4


class TestLookup:
    def test_unknown_id_raises(self) -> None:
        """Unknown ids are a caller error, not a silent None."""
        with pytest.raises(UnknownCardError) as exc_info:
            get_card(78)

        assert exc_info.value.kind is FailureKind.NOT_FOUND
        assert exc_info.value.status_code == 404

    def test_has_card(self) -> None:
        assert has_card(0)
        assert has_card(77)
        assert not has_card(-1)
        assert not has_card(78)

    def test_cards_for_dimension_excludes_id(self) -> None:
        """Reforge candidates never include the card being replaced."""
        candidates = cards_for_dimension(Dimension.ENERGY, exclude_id=0)

        assert all(card.id != 0 for card in candidates)
        assert all(card.dimension is Dimension.ENERGY for card in candidates)
        assert len(candidates) == 18
