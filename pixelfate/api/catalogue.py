"""
Catalogue API endpoints.

Read-only access to the 78 card definitions.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from pixelfate.models.card import CardDefinition, Dimension
from pixelfate.services.catalogue import catalogue, cards_for_dimension, get_card

router = APIRouter(prefix="/catalogue", tags=["catalogue"])


class CardResponse(BaseModel):
    """One catalogue definition."""

    id: int
    name: str
    arcana: str
    suit: str | None = None
    dimension: str = Field(..., description="Native personality axis, e.g. 'E/I'")
    meaning: str
    color: str = ""
    image_path: str = ""

    @classmethod
    def from_definition(cls, card: CardDefinition) -> "CardResponse":
        return cls(
            id=card.id,
            name=card.name,
            arcana=card.arcana.value,
            suit=card.suit.value if card.suit else None,
            dimension=card.dimension.value,
            meaning=card.meaning,
            color=card.color,
            image_path=card.image_path,
        )


class CatalogueResponse(BaseModel):
    total: int
    cards: list[CardResponse] = Field(default_factory=list)


@router.get("", response_model=CatalogueResponse)
async def list_cards(dimension: Dimension | None = None) -> CatalogueResponse:
    """
    List card definitions in id order.

    Pass `dimension` (E/I, S/N, T/F or J/P) to list one axis only.
    """
    cards = cards_for_dimension(dimension) if dimension else list(catalogue())
    return CatalogueResponse(
        total=len(cards),
        cards=[CardResponse.from_definition(card) for card in cards],
    )


@router.get("/{card_id}", response_model=CardResponse)
async def get_card_definition(card_id: int) -> CardResponse:
    """Get one definition. Unknown ids return 404."""
    return CardResponse.from_definition(get_card(card_id))
