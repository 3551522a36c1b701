"""Tests for ritual API endpoints."""

from httpx import AsyncClient

from pixelfate.services.persistence import Category
from pixelfate.services.registry import EngineRegistry

FOOL, MAGICIAN, HIGH_PRIESTESS, EMPEROR, CHARIOT = 0, 1, 2, 4, 7


async def play_session(client: AsyncClient, player: str = "alice") -> dict:
    await client.post(f"/ritual/{player}/begin")
    data: dict = {}
    for card_id in (FOOL, MAGICIAN, HIGH_PRIESTESS, EMPEROR):
        response = await client.post(f"/ritual/{player}/draw", json={"card_id": card_id})
        assert response.status_code == 200
        data = response.json()
    return data


class TestSnapshot:
    async def test_new_player_starts_empty(self, client: AsyncClient) -> None:
        response = await client.get("/ritual/alice")

        assert response.status_code == 200
        data = response.json()
        assert data["player_id"] == "alice"
        assert data["phase"] == "START"
        assert data["code"] == ""
        assert data["deck_size"] == 78
        assert [slot["slot"] for slot in data["slots"]] == ["fire", "air", "water", "earth"]
        assert [slot["axis"] for slot in data["slots"]] == ["E/I", "S/N", "T/F", "J/P"]
        assert all(slot["card"] is None for slot in data["slots"])


class TestBeginAndDraw:
    async def test_begin_ritual(self, client: AsyncClient) -> None:
        response = await client.post("/ritual/alice/begin")

        assert response.status_code == 200
        assert response.json() == {"outcome": "settled", "phase": "SPREAD", "deck_size": 78}

    async def test_draw_before_begin_is_rejected(self, client: AsyncClient) -> None:
        """Wrong-phase draws are outcomes, not HTTP errors."""
        response = await client.post("/ritual/alice/draw", json={"card_id": FOOL})

        assert response.status_code == 200
        data = response.json()
        assert data["outcome"] == "rejected"
        assert data["phase"] == "START"
        assert data["card"] is None

    async def test_draw_places_card(self, client: AsyncClient) -> None:
        await client.post("/ritual/alice/begin")

        response = await client.post("/ritual/alice/draw", json={"card_id": CHARIOT})

        data = response.json()
        assert data["outcome"] == "drawn"
        assert data["slot"] == "fire"
        assert data["card"]["name"] == "The Chariot"
        assert data["card"]["tier"] == 1
        assert data["card"]["rarity"] == "Bronze"
        assert data["reaction"]
        assert data["completion"] is None

    async def test_cross_dimension_draw(self, client: AsyncClient) -> None:
        await client.post("/ritual/alice/begin")
        await client.post("/ritual/alice/draw", json={"card_id": FOOL})

        data = (await client.post("/ritual/alice/draw", json={"card_id": CHARIOT})).json()

        assert data["slot"] == "air"
        assert data["cross_dimension"] is True
        assert data["card"]["dimension"] == "S/N"
        assert data["card"]["native_dimension"] == "E/I"

    async def test_fourth_draw_completes(self, client: AsyncClient) -> None:
        data = await play_session(client)

        assert data["outcome"] == "completed"
        assert data["phase"] == "RESULT"
        completion = data["completion"]
        assert completion["code"] == "ESTJ"
        assert completion["result_tier"] == 1
        assert completion["rarity"] == "Bronze"
        assert completion["profession"] == "Workshop Overseer"
        assert completion["new_codex_entry"] is True

        snapshot = (await client.get("/ritual/alice")).json()
        assert snapshot["code"] == "ESTJ"
        assert all(slot["card"] is not None for slot in snapshot["slots"])

    async def test_unknown_card(self, client: AsyncClient) -> None:
        await client.post("/ritual/alice/begin")

        response = await client.post("/ritual/alice/draw", json={"card_id": 99})

        assert response.status_code == 404
        assert response.json()["detail"]["kind"] == "not_found"

    async def test_missing_card_id(self, client: AsyncClient) -> None:
        response = await client.post("/ritual/alice/draw", json={})

        assert response.status_code == 422

    async def test_players_are_isolated(self, client: AsyncClient) -> None:
        await play_session(client, "alice")

        bob = (await client.get("/ritual/bob")).json()

        assert bob["phase"] == "START"


class TestReforgeAndLock:
    async def test_reforge(self, client: AsyncClient) -> None:
        await play_session(client)

        response = await client.post("/ritual/alice/reforge/fire")

        assert response.status_code == 200
        data = response.json()
        assert data["outcome"] == "no_change"
        assert data["previous"]["name"] == "The Fool"
        assert data["card"]["name"] == "The Chariot"
        assert data["card"]["dimension"] == "E/I"
        assert data["card"]["reforged"] is True
        assert data["message"]

    async def test_second_reforge_rejected(self, client: AsyncClient) -> None:
        await play_session(client)
        await client.post("/ritual/alice/reforge/fire")

        data = (await client.post("/ritual/alice/reforge/fire")).json()

        assert data["outcome"] == "rejected"

    async def test_lock_blocks_reforge(self, client: AsyncClient) -> None:
        await play_session(client)

        lock = await client.post("/ritual/alice/lock/Water")
        assert lock.json() == {"slot": "water", "locked": True}

        data = (await client.post("/ritual/alice/reforge/water")).json()
        assert data["outcome"] == "locked"

        snapshot = (await client.get("/ritual/alice")).json()
        water = next(slot for slot in snapshot["slots"] if slot["slot"] == "water")
        assert water["locked"] is True
        assert water["card"]["reforged"] is False

    async def test_unknown_slot(self, client: AsyncClient) -> None:
        response = await client.post("/ritual/alice/reforge/aether")

        assert response.status_code == 400
        detail = response.json()["detail"]
        assert detail["kind"] == "invalid_input"
        assert "fire" in detail["suggestion"]

    async def test_unknown_slot_lock(self, client: AsyncClient) -> None:
        response = await client.post("/ritual/alice/lock/aether")

        assert response.status_code == 400


class TestSynthesize:
    async def test_insufficient_copies(self, client: AsyncClient) -> None:
        await play_session(client)

        response = await client.post(
            "/ritual/alice/synthesize", json={"card_id": FOOL, "tier": 1}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["outcome"] == "insufficient_copies"
        assert data["remaining"] == 1

    async def test_synthesize_after_three_sessions(self, client: AsyncClient) -> None:
        for _ in range(3):
            await play_session(client)

        data = (
            await client.post("/ritual/alice/synthesize", json={"card_id": FOOL, "tier": 1})
        ).json()

        assert data["outcome"] == "synthesized"
        assert data["produced_tier"] == 2
        assert data["remaining"] == 0

    async def test_invalid_tier(self, client: AsyncClient) -> None:
        response = await client.post(
            "/ritual/alice/synthesize", json={"card_id": FOOL, "tier": 5}
        )

        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "invalid_input"


class TestReset:
    async def test_reset_requires_confirmation(self, client: AsyncClient) -> None:
        await play_session(client)

        response = await client.delete("/ritual/alice")

        assert response.status_code == 409
        assert response.json()["detail"]["kind"] == "confirmation_required"
        snapshot = (await client.get("/ritual/alice")).json()
        assert snapshot["phase"] == "RESULT"

    async def test_confirmed_reset(self, client: AsyncClient, registry: EngineRegistry) -> None:
        await play_session(client)
        await client.post("/ritual/alice/lock/fire")
        engine = await registry.get("alice")
        await engine.flush()
        assert engine.persistence is not None
        assert await engine.persistence.store.read(Category.OWNED) is not None

        response = await client.delete("/ritual/alice", params={"confirm": "true"})

        assert response.status_code == 200
        assert response.json()["reset"] is True
        for category in Category:
            assert await engine.persistence.store.read(category) is None
        assert engine.inventory.total_cards() == 0
        assert len(engine.history) == 0
        snapshot = (await client.get("/ritual/alice")).json()
        assert snapshot["phase"] == "START"
        assert not any(slot["locked"] for slot in snapshot["slots"])
