"""Tests for API endpoints."""

import json

import pytest
from httpx import AsyncClient, ASGITransport
from unittest.mock import AsyncMock, patch

from app.engine.metrics import METRICS
from app.main import app
from app.services.chat_gateway import UPSTREAM_FAILURE_REPLY
from app.services.llm_client import LLMError
from app.services.location_store import get_location_store


@pytest.fixture
def client():
    """Create test client."""
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


def model_reply(reply, place_name=None, report_type="none", report_intensity=None) -> str:
    return json.dumps({
        "reply": reply,
        "placeName": place_name,
        "reportType": report_type,
        "reportIntensity": report_intensity,
    })


def mock_llm(content=None, error=None):
    """Patch the client used by the chat router."""
    patcher = patch("app.routers.chat.LLMClient")
    mock_cls = patcher.start()
    mock_cls.return_value.complete = AsyncMock(return_value=content, side_effect=error)
    return patcher, mock_cls


class TestObservability:
    """Tests for observability endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, client):
        """Test health check endpoint."""
        async with client:
            response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "athens-cooling-map"

    @pytest.mark.asyncio
    async def test_metrics(self, client):
        """Test metric catalogue endpoint."""
        async with client:
            response = await client.get("/api/metrics")

        assert response.status_code == 200
        data = response.json()
        assert len(data["metrics"]) == len(METRICS)
        assert data["report_deltas"] == {"high": 2.0, "medium": 1.0, "low": 0.1}

    @pytest.mark.asyncio
    async def test_llm_stats(self, client):
        async with client:
            response = await client.get("/api/llm-stats")

        assert response.status_code == 200
        assert response.json()["total_calls"] == 0

    @pytest.mark.asyncio
    async def test_debug_reset(self, client):
        get_location_store().record_report("Monastiraki", "high")
        async with client:
            response = await client.post("/api/debug/reset")

        assert response.status_code == 200
        assert get_location_store().get_location(3).metrics.citizen_cooling_score == 85


class TestLocations:
    """Tests for location endpoints."""

    @pytest.mark.asyncio
    async def test_list_sorted_by_default(self, client):
        async with client:
            response = await client.get("/api/locations")

        assert response.status_code == 200
        locations = response.json()["locations"]
        assert [loc["id"] for loc in locations] == [3, 2, 5, 1, 4]
        indices = [loc["priorityIndex"] for loc in locations]
        assert indices == sorted(indices, reverse=True)

    @pytest.mark.asyncio
    async def test_list_unsorted(self, client):
        async with client:
            response = await client.get("/api/locations", params={"sorted": "false"})

        assert [loc["id"] for loc in response.json()["locations"]] == [1, 2, 3, 4, 5]

    @pytest.mark.asyncio
    async def test_record_shape(self, client):
        """Records use the camelCase keys the map UI reads."""
        async with client:
            response = await client.get("/api/locations/3")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Monastiraki"
        assert data["coordinates"] == [37.976, 23.7258]
        assert data["priorityIndex"] == 76.6
        assert data["metrics"]["citizenCoolingScore"] == 85
        assert data["metrics"]["feasibilityScore"] == 0.8

    @pytest.mark.asyncio
    async def test_unknown_location_404(self, client):
        async with client:
            response = await client.get("/api/locations/42")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_search_fuzzy(self, client):
        async with client:
            response = await client.get("/api/locations/search", params={"name": "acropolis"})

        assert response.json()["location"]["name"] == "Acropolis of Athens"

    @pytest.mark.asyncio
    async def test_search_no_match(self, client):
        async with client:
            response = await client.get("/api/locations/search", params={"name": "nonexistent place"})

        assert response.status_code == 200
        assert response.json()["location"] is None


class TestChat:
    """Tests for the chat endpoint."""

    @pytest.mark.asyncio
    async def test_plain_question(self, client):
        patcher, mock_cls = mock_llm(model_reply("Syntagma is central.", "Syntagma Square"))
        try:
            async with client:
                response = await client.post("/api/chat", json={"message": "Where is syntagma?"})
        finally:
            patcher.stop()

        assert response.status_code == 200
        assert response.json() == {
            "reply": "Syntagma is central.",
            "placeName": "Syntagma Square",
            "reportType": "none",
            "reportIntensity": None,
        }
        system_prompt = mock_cls.return_value.complete.call_args.args[0]
        assert "Monastiraki (priority index 76.6)" in system_prompt

    @pytest.mark.asyncio
    async def test_cooling_report_updates_score(self, client):
        patcher, _ = mock_llm(
            model_reply("Thanks, noted.", "Monastiraki", "cooling_problem", "medium")
        )
        try:
            async with client:
                chat = await client.post("/api/chat", json={"message": "Monastiraki is boiling"})
                locations = await client.get("/api/locations", params={"sorted": "false"})
        finally:
            patcher.stop()

        assert chat.status_code == 200
        assert chat.json()["reportType"] == "cooling_problem"

        by_id = {loc["id"]: loc for loc in locations.json()["locations"]}
        assert by_id[3]["metrics"]["citizenCoolingScore"] == 86
        assert by_id[3]["priorityIndex"] == 76.7
        assert by_id[1]["priorityIndex"] == 32.9
        assert by_id[2]["priorityIndex"] == 74.4

    @pytest.mark.asyncio
    async def test_report_with_backticks_in_reply_still_applied(self, client):
        patcher, _ = mock_llm(
            model_reply("Try ```shade``` there", "Monastiraki", "cooling_problem", "high")
        )
        try:
            async with client:
                chat = await client.post("/api/chat", json={"message": "Monastiraki is boiling"})
        finally:
            patcher.stop()

        assert chat.status_code == 200
        assert chat.json()["reply"] == "Try ```shade``` there"
        assert chat.json()["placeName"] == "Monastiraki"
        assert get_location_store().get_location(3).metrics.citizen_cooling_score == 87

    @pytest.mark.asyncio
    async def test_report_for_unknown_place_changes_nothing(self, client):
        before = get_location_store().list_locations()
        patcher, _ = mock_llm(model_reply("Sorry to hear.", "Plaka", "cooling_problem", "high"))
        try:
            async with client:
                response = await client.post("/api/chat", json={"message": "Plaka is hot"})
        finally:
            patcher.stop()

        assert response.status_code == 200
        assert response.json()["placeName"] is None
        assert get_location_store().list_locations() == before

    @pytest.mark.asyncio
    async def test_loose_place_name_highlights_but_does_not_report(self, client):
        """A partial name is matched for the map, not for scoring."""
        before = get_location_store().list_locations()
        patcher, _ = mock_llm(model_reply("So hot up there!", "acropolis", "cooling_problem", "high"))
        try:
            async with client:
                response = await client.post("/api/chat", json={"message": "acropolis is hot"})
        finally:
            patcher.stop()

        assert response.json()["placeName"] == "Acropolis of Athens"
        assert get_location_store().list_locations() == before

    @pytest.mark.asyncio
    async def test_malformed_payload_falls_back(self, client):
        patcher, _ = mock_llm("Just some text, not JSON")
        try:
            async with client:
                response = await client.post("/api/chat", json={"message": "hello"})
        finally:
            patcher.stop()

        assert response.status_code == 200
        data = response.json()
        assert data["reply"] == "Just some text, not JSON"
        assert data["placeName"] is None
        assert data["reportType"] is None

    @pytest.mark.asyncio
    async def test_upstream_failure_returns_500(self, client):
        before = get_location_store().list_locations()
        patcher, _ = mock_llm(error=LLMError(401, "invalid api key"))
        try:
            async with client:
                response = await client.post("/api/chat", json={"message": "Monastiraki is hot"})
        finally:
            patcher.stop()

        assert response.status_code == 500
        assert response.json() == {
            "reply": UPSTREAM_FAILURE_REPLY,
            "placeName": None,
            "reportType": "none",
            "reportIntensity": None,
        }
        assert get_location_store().list_locations() == before

    @pytest.mark.asyncio
    async def test_missing_api_key_returns_500(self, client):
        with patch("app.routers.chat.LLMClient", side_effect=LLMError(0, "OPENAI_API_KEY not configured")):
            async with client:
                response = await client.post("/api/chat", json={"message": "hi"})

        assert response.status_code == 500
        assert response.json()["reply"] == UPSTREAM_FAILURE_REPLY

    @pytest.mark.asyncio
    async def test_empty_message_rejected(self, client):
        async with client:
            empty = await client.post("/api/chat", json={"message": ""})
            blank = await client.post("/api/chat", json={"message": "   "})

        assert empty.status_code == 422
        assert blank.status_code == 400


class TestRoot:
    """Tests for root endpoint."""

    @pytest.mark.asyncio
    async def test_root(self, client):
        """Test root endpoint."""
        async with client:
            response = await client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Athens Cooling Map"
        assert "version" in data
