"""Tests for the built-in narrative provider."""

import pytest

from pixelfate.models.card import Rarity
from pixelfate.models.outcome import ReforgeOutcome
from pixelfate.services.narrative import (
    DEFAULT_TITLE,
    NARRATIVES,
    REACTIONS,
    TITLES,
    UNKNOWN_CODE,
    StaticNarrativeProvider,
)
from pixelfate.services.personality import PERSONALITY_CODES


@pytest.fixture
def provider() -> StaticNarrativeProvider:
    return StaticNarrativeProvider(choose=lambda lines: lines[0])


class TestTables:
    def test_every_code_is_covered(self) -> None:
        """Lookups are total over the 16 codes."""
        for code in PERSONALITY_CODES:
            assert code in TITLES
            assert code in NARRATIVES
            assert code in REACTIONS
            assert set(REACTIONS[code]) == {1, 2, 3}


class TestStaticNarrativeProvider:
    def test_narrative_by_rarity(self, provider: StaticNarrativeProvider) -> None:
        bronze = provider.narrative("INTJ", Rarity.BRONZE)
        gold = provider.narrative("INTJ", Rarity.GOLD)

        assert bronze == NARRATIVES["INTJ"][0]
        assert gold == NARRATIVES["INTJ"][2]

    def test_unknown_code_uses_stock_narrative(self, provider: StaticNarrativeProvider) -> None:
        assert provider.narrative("XXXX", Rarity.SILVER) == NARRATIVES[UNKNOWN_CODE][1]

    def test_title_fallback(self, provider: StaticNarrativeProvider) -> None:
        assert provider.title("ENFP") == "Whimsical Voyager"
        assert provider.title("") == DEFAULT_TITLE

    def test_reaction_for_partial_code_falls_back(
        self, provider: StaticNarrativeProvider
    ) -> None:
        """In-progress codes are not in the table; the fallback still answers."""
        assert provider.reaction("EN", 3) == REACTIONS["INTJ"][3][0]

    def test_comment_depends_on_orientation(self, provider: StaticNarrativeProvider) -> None:
        assert provider.comment(True) != provider.comment(False)

    def test_result_message_per_rarity(self, provider: StaticNarrativeProvider) -> None:
        messages = {provider.result_message(rarity) for rarity in Rarity}

        assert len(messages) == 3

    def test_reforge_messages(self, provider: StaticNarrativeProvider) -> None:
        assert provider.reforge_message(ReforgeOutcome.UPGRADE)
        assert provider.reforge_message(ReforgeOutcome.INSUFFICIENT_DUPLICATE)
        assert provider.reforge_message(ReforgeOutcome.LOCKED) == ""

    def test_idle_hint(self, provider: StaticNarrativeProvider) -> None:
        assert provider.idle_hint()
