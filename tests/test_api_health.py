"""Tests for health check endpoints."""

from httpx import AsyncClient


class TestHealthEndpoint:
    async def test_health_returns_healthy(self, client: AsyncClient) -> None:
        """Liveness probe returns healthy."""
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] is None

    async def test_health_counts_engines(self, client: AsyncClient) -> None:
        """Engines are created lazily, one per player."""
        assert (await client.get("/health")).json()["engines"] == 0

        await client.get("/ritual/alice")
        await client.get("/ritual/bob")
        await client.get("/ritual/alice")

        assert (await client.get("/health")).json()["engines"] == 2


class TestReadyEndpoint:
    async def test_ready_with_database(self, client: AsyncClient) -> None:
        """Readiness probe checks the database."""
        response = await client.get("/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["database"] == "connected"
