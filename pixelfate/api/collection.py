"""
Collection API endpoints.

Read-only views of a player's owned cards, codex and history.
"""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from pixelfate.api.dependencies import EngineDep
from pixelfate.config import MAX_TIER
from pixelfate.services.catalogue import get_card, has_card
from pixelfate.services.personality import PERSONALITY_CODES

router = APIRouter(prefix="/collection", tags=["collection"])


class OwnedCardResponse(BaseModel):
    """Copies of one card, by tier."""

    card_id: int
    name: str
    dimension: str
    tiers: dict[int, int] = Field(default_factory=dict, description="Tier -> copies")
    total: int = 0
    highest_tier: int | None = None
    synthesizable_tier: int | None = Field(
        default=None,
        description="Lowest tier that can be synthesized right now, if any",
    )


class CollectionResponse(BaseModel):
    player_id: str
    total_cards: int = 0
    unique_cards: int = 0
    cards: list[OwnedCardResponse] = Field(default_factory=list)


class CodexEntryResponse(BaseModel):
    code: str
    title: str
    tiers: list[int] = Field(default_factory=list)
    progress: int = Field(0, description=f"Tiers achieved out of {MAX_TIER}")


class CodexResponse(BaseModel):
    player_id: str
    discovered: int = Field(0, description="Codes achieved at any tier")
    total_codes: int = len(PERSONALITY_CODES)
    completed: list[str] = Field(default_factory=list)
    entries: list[CodexEntryResponse] = Field(default_factory=list)


class HistoryRecordResponse(BaseModel):
    id: int
    time: str
    mbti: str
    profession: str
    narrative: str
    cards: list[dict[str, Any]] = Field(default_factory=list)


class HistoryResponse(BaseModel):
    player_id: str
    records: list[HistoryRecordResponse] = Field(
        default_factory=list,
        description="Most recent first",
    )


@router.get("/{player_id}", response_model=CollectionResponse)
async def get_player_collection(player_id: str, engine: EngineDep) -> CollectionResponse:
    """
    Get a player's owned cards.

    Cards with no copies left at any tier are omitted.
    """
    inventory = engine.inventory
    cards = []
    for card_id in sorted(inventory.owned):
        tiers = {tier: count for tier, count in inventory.tiers_for(card_id).items() if count > 0}
        if not tiers or not has_card(card_id):
            continue
        card = get_card(card_id)
        cards.append(
            OwnedCardResponse(
                card_id=card_id,
                name=card.name,
                dimension=card.dimension.value,
                tiers=tiers,
                total=sum(tiers.values()),
                highest_tier=inventory.highest_tier(card_id),
                synthesizable_tier=inventory.synthesizable_tier(card_id),
            )
        )
    return CollectionResponse(
        player_id=player_id,
        total_cards=inventory.total_cards(),
        unique_cards=inventory.unique_cards(),
        cards=cards,
    )


@router.get("/{player_id}/codex", response_model=CodexResponse)
async def get_player_codex(player_id: str, engine: EngineDep) -> CodexResponse:
    """Get every personality code the player has achieved, with tiers."""
    codex = engine.codex
    entries = [
        CodexEntryResponse(
            code=code,
            title=engine.narrative.title(code),
            tiers=sorted(codex.tiers(code)),
            progress=codex.progress(code),
        )
        for code in sorted(codex.entries)
        if codex.tiers(code)
    ]
    return CodexResponse(
        player_id=player_id,
        discovered=len(entries),
        completed=codex.completed_codes(),
        entries=entries,
    )


@router.get("/{player_id}/history", response_model=HistoryResponse)
async def get_player_history(player_id: str, engine: EngineDep) -> HistoryResponse:
    """Get the player's completed sessions, newest first."""
    return HistoryResponse(
        player_id=player_id,
        records=[
            HistoryRecordResponse(
                id=record.id,
                time=record.time,
                mbti=record.mbti,
                profession=record.profession,
                narrative=record.narrative,
                cards=[dict(card) for card in record.cards],
            )
            for record in reversed(engine.history.records)
        ],
    )
