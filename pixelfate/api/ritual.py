"""
Ritual API endpoints.

Drives one player's session: begin, draw, reforge, lock, synthesize and the
full reset. Expected game outcomes (wrong phase, not enough copies, locked
slot) come back as 200 responses with an `outcome` field; only unknown
cards, slots or tiers are HTTP errors.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from pixelfate.api.dependencies import EngineDep
from pixelfate.models.card import CardInstance
from pixelfate.models.failure import ConfirmationRequiredError
from pixelfate.models.outcome import CompletionSummary
from pixelfate.models.slots import SLOT_ORDER
from pixelfate.services.engine import FateEngine, parse_slot

router = APIRouter(prefix="/ritual", tags=["ritual"])


# =============================================================================
# RESPONSE MODELS
# =============================================================================


class InstanceResponse(BaseModel):
    """A card held by a slot."""

    id: int
    name: str
    arcana: str
    suit: str | None = None
    dimension: str = Field(..., description="Effective axis: the holding slot's axis")
    native_dimension: str
    meaning: str
    is_upright: bool
    tier: int
    rarity: str
    reforged: bool = False
    image_path: str = ""

    @classmethod
    def from_instance(cls, instance: CardInstance) -> "InstanceResponse":
        card = instance.definition
        return cls(
            id=card.id,
            name=card.name,
            arcana=card.arcana.value,
            suit=card.suit.value if card.suit else None,
            dimension=instance.dimension.value,
            native_dimension=card.dimension.value,
            meaning=card.meaning,
            is_upright=instance.is_upright,
            tier=instance.tier,
            rarity=instance.rarity.value,
            reforged=instance.reforged,
            image_path=card.image_path,
        )


def _instance(instance: CardInstance | None) -> InstanceResponse | None:
    return InstanceResponse.from_instance(instance) if instance else None


class SlotResponse(BaseModel):
    slot: str
    label: str
    axis: str
    locked: bool = False
    pending: bool = Field(default=False, description="A reforge is resolving on this slot")
    card: InstanceResponse | None = None


class SnapshotResponse(BaseModel):
    """Current session state."""

    player_id: str
    phase: str
    code: str = Field(..., description="Personality code so far; four letters once complete")
    deck_size: int
    slots: list[SlotResponse] = Field(default_factory=list)


class RitualResponse(BaseModel):
    outcome: str
    phase: str
    deck_size: int = 0


class DrawRequest(BaseModel):
    card_id: int = Field(..., description="Id of the face-down card picked from the spread")


class CompletionResponse(BaseModel):
    """What a completed session produced."""

    code: str
    result_tier: int
    rarity: str
    profession: str
    narrative: str
    result_message: str
    new_codex_entry: bool
    record_id: int

    @classmethod
    def from_summary(cls, summary: CompletionSummary) -> "CompletionResponse":
        return cls(
            code=summary.code,
            result_tier=summary.result_tier,
            rarity=summary.rarity.value,
            profession=summary.profession,
            narrative=summary.narrative,
            result_message=summary.result_message,
            new_codex_entry=summary.new_codex_entry,
            record_id=summary.record.id,
        )


class DrawResponse(BaseModel):
    outcome: str
    phase: str
    slot: str | None = None
    card: InstanceResponse | None = None
    cross_dimension: bool = False
    reaction: str = ""
    comment: str = ""
    reason: str = ""
    completion: CompletionResponse | None = None


class ReforgeResponse(BaseModel):
    outcome: str
    slot: str
    previous: InstanceResponse | None = None
    card: InstanceResponse | None = None
    message: str = ""


class LockResponse(BaseModel):
    slot: str
    locked: bool


class SynthesizeRequest(BaseModel):
    card_id: int
    tier: int = Field(..., description="Tier to merge from (1 or 2)")


class SynthesizeResponse(BaseModel):
    outcome: str
    card_id: int
    tier: int
    remaining: int = Field(0, description="Copies left at the source tier")
    produced_tier: int | None = None


class ResetResponse(BaseModel):
    player_id: str
    reset: bool
    message: str = ""


# =============================================================================
# ENDPOINTS
# =============================================================================


def _snapshot(player_id: str, engine: FateEngine) -> SnapshotResponse:
    snap = engine.snapshot()
    return SnapshotResponse(
        player_id=player_id,
        phase=snap.phase.value,
        code=snap.code,
        deck_size=snap.deck_size,
        slots=[
            SlotResponse(
                slot=key.value,
                label=key.label,
                axis=key.axis.value,
                locked=key in snap.locked,
                pending=key in snap.pending,
                card=_instance(snap.slots[key]),
            )
            for key in SLOT_ORDER
        ],
    )


@router.get("/{player_id}", response_model=SnapshotResponse)
async def get_ritual(player_id: str, engine: EngineDep) -> SnapshotResponse:
    """Get the phase, slots, locks and in-progress code."""
    return _snapshot(player_id, engine)


@router.post("/{player_id}/begin", response_model=RitualResponse)
async def begin_ritual(player_id: str, engine: EngineDep) -> RitualResponse:
    """
    Clear the slots and reshuffle.

    Responds once the shuffle has settled. Rejected while a shuffle is
    already running.
    """
    result = await engine.begin_ritual()
    return RitualResponse(
        outcome=result.outcome.value,
        phase=result.phase.value,
        deck_size=result.deck_size,
    )


@router.post("/{player_id}/draw", response_model=DrawResponse)
async def draw_card(player_id: str, request: DrawRequest, engine: EngineDep) -> DrawResponse:
    """
    Draw one card into a slot.

    The fourth draw completes the session and includes the completion
    summary.
    """
    result = engine.draw(request.card_id)
    return DrawResponse(
        outcome=result.outcome.value,
        phase=engine.phase.value,
        slot=result.slot.value if result.slot else None,
        card=_instance(result.instance),
        cross_dimension=result.cross_dimension,
        reaction=result.reaction,
        comment=result.comment,
        reason=result.reason,
        completion=CompletionResponse.from_summary(result.completion)
        if result.completion
        else None,
    )


@router.post("/{player_id}/reforge/{slot}", response_model=ReforgeResponse)
async def reforge_slot(player_id: str, slot: str, engine: EngineDep) -> ReforgeResponse:
    """
    Reforge the card in a slot.

    Responds after the resolve delay with the classified outcome.
    """
    result = await engine.reforge(slot)
    return ReforgeResponse(
        outcome=result.outcome.value,
        slot=result.slot.value,
        previous=_instance(result.previous),
        card=_instance(result.instance),
        message=result.message,
    )


@router.post("/{player_id}/lock/{slot}", response_model=LockResponse)
async def toggle_lock(player_id: str, slot: str, engine: EngineDep) -> LockResponse:
    """Flip a slot's reforge lock."""
    key = parse_slot(slot)
    return LockResponse(slot=key.value, locked=engine.toggle_lock(key))


@router.post("/{player_id}/synthesize", response_model=SynthesizeResponse)
async def synthesize(
    player_id: str,
    request: SynthesizeRequest,
    engine: EngineDep,
) -> SynthesizeResponse:
    """Merge three copies of a card at one tier into one copy at the next."""
    result = engine.synthesize(request.card_id, request.tier)
    return SynthesizeResponse(
        outcome=result.outcome.value,
        card_id=result.card_id,
        tier=result.tier,
        remaining=result.remaining,
        produced_tier=result.produced_tier,
    )


@router.delete("/{player_id}", response_model=ResetResponse)
async def reset_all(player_id: str, engine: EngineDep, confirm: bool = False) -> ResetResponse:
    """
    Full reset: wipe inventory, codex and history.

    This is an explicit, irreversible operation and requires `confirm=true`.
    The player's stored state is deleted immediately.
    """
    if not confirm:
        raise ConfirmationRequiredError("reset")

    await engine.erase()
    return ResetResponse(
        player_id=player_id,
        reset=True,
        message="All cards, codex entries and history have been cleared.",
    )
