"""Tests for recommendation API endpoints."""

import pytest
from httpx import AsyncClient

from vibematch.exceptions import ConfigurationError


class TestRecommendEndpoint:
    """Tests for POST /api/recommendations."""

    @pytest.mark.asyncio
    async def test_recommend(self, client: AsyncClient):
        """Test a successful recommendation request."""
        response = await client.post(
            "/api/recommendations",
            json={"query": "funny comedy that will make me laugh", "media_type": "movie", "region": "us"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["query"] == "funny comedy that will make me laugh"
        assert data["media_type"] == "movie"
        assert data["region"] == "US"
        assert data["hidden_gems"] is False
        assert data["count"] == 3
        first = data["results"][0]
        assert first["title"] == "Game Night"
        assert first["match_percentage"] == 85
        assert first["source"] == "ai"
        assert first["streaming_platforms"] == ["Netflix"]
        assert first["streaming_providers"][0]["access_type"] == "flatrate"
        assert len(first["reviews"]) == 2
        assert first["genres"] == ["Comedy"]

    @pytest.mark.asyncio
    async def test_query_trimmed(self, client: AsyncClient, fake_generator):
        response = await client.post("/api/recommendations", json={"query": "   cozy rainy day film   "})

        assert response.status_code == 200
        assert fake_generator.calls[0]["prompt"] == "cozy rainy day film"

    @pytest.mark.asyncio
    async def test_short_query(self, client: AsyncClient, fake_generator):
        """Test that queries under three words are rejected without calling services."""
        response = await client.post("/api/recommendations", json={"query": "sad movie"})

        assert response.status_code == 422
        assert "3 words" in response.json()["detail"]
        assert fake_generator.calls == []

    @pytest.mark.asyncio
    async def test_invalid_media_type(self, client: AsyncClient):
        response = await client.post(
            "/api/recommendations",
            json={"query": "funny comedy that will make me laugh", "media_type": "podcast"},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_missing_generative_key(self, client: AsyncClient, fake_generator):
        """Test that a configuration error surfaces as 503."""
        fake_generator.error = ConfigurationError("GEMINI_API_KEY")

        response = await client.post(
            "/api/recommendations",
            json={"query": "funny comedy that will make me laugh"},
        )

        assert response.status_code == 503
        assert "GEMINI_API_KEY" in response.json()["detail"]


class TestReferenceEndpoints:
    """Tests for the analysis, moods and regions endpoints."""

    @pytest.mark.asyncio
    async def test_analyze(self, client: AsyncClient):
        response = await client.post(
            "/api/recommendations/analyze",
            json={"query": "intense but cozy korean detective thriller"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["genres"] == ["crime", "thriller"]
        assert data["intensity"] == 3
        assert data["language"] == "ko"
        assert data["wants_recent"] is False

    @pytest.mark.asyncio
    async def test_moods(self, client: AsyncClient):
        response = await client.get("/api/recommendations/moods")

        assert response.status_code == 200
        moods = response.json()
        assert len(moods) == 8
        assert all({"id", "label", "prompt", "icon"} <= set(m) for m in moods)

    @pytest.mark.asyncio
    async def test_regions(self, client: AsyncClient):
        response = await client.get("/api/recommendations/regions")

        assert response.status_code == 200
        assert [r["code"] for r in response.json()] == ["IN", "US", "GB", "JP", "KR"]
