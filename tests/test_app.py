"""Tests for the knowledge API endpoints, validation, and error handling."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from slack_knowledge.api.dependencies import (
    get_app_settings,
    get_classifier,
    get_extractor,
    get_store,
)
from slack_knowledge.app import app
from slack_knowledge.config import Settings
from slack_knowledge.models.api import ExtractResponse
from slack_knowledge.models.knowledge import Category, KnowledgeStats, ProcessedKnowledge
from slack_knowledge.models.slack import ChannelInfo, ExtractedMessage


def _make_item() -> ProcessedKnowledge:
    return ProcessedKnowledge(
        id="knowledge_1.0",
        original_message=ExtractedMessage(
            id="1.0",
            text="We decided to move standup to 10am.",
            user="U01",
            username="Ada",
            channel="C0123456789",
            channel_name="general",
            timestamp="2023-11-14T22:13:20.000Z",
        ),
        category=Category.DECISIONS,
        summary="Standup moves",
        key_points=["Standup at 10am"],
        action_items=[],
        relevant_context="Team schedule",
        confidence=0.8,
        extracted_at="2023-11-15T00:00:00.000Z",
    )


@pytest.fixture
def extractor() -> MagicMock:
    extractor = MagicMock()
    extractor.get_channels = AsyncMock(
        return_value=[ChannelInfo(id="C0123456789", name="general", member_count=10)]
    )
    return extractor


@pytest.fixture
def store() -> MagicMock:
    store = MagicMock()
    store.search = AsyncMock(return_value=[_make_item()])
    store.load = AsyncMock(return_value=[_make_item()])
    store.stats = AsyncMock(
        return_value=KnowledgeStats(
            total_messages=1,
            total_knowledge_items=1,
            category_counts={"decisions": 1},
            top_contributors=[],
            channel_stats={"general": 1},
        )
    )
    return store


@pytest.fixture
def client(settings: Settings, extractor: MagicMock, store: MagicMock):
    """TestClient with service components replaced by stubs."""
    app.dependency_overrides[get_app_settings] = lambda: settings
    app.dependency_overrides[get_extractor] = lambda: extractor
    app.dependency_overrides[get_classifier] = lambda: MagicMock()
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


# -- /api/channels --


def test_channels_returns_camel_case(client: TestClient, extractor: MagicMock):
    response = client.get("/api/channels")
    assert response.status_code == 200
    assert response.json() == [{"id": "C0123456789", "name": "general", "memberCount": 10}]
    extractor.get_channels.assert_awaited_once_with(refresh=False)


def test_channels_passes_refresh_flag(client: TestClient, extractor: MagicMock):
    client.get("/api/channels", params={"refresh": "true"})
    extractor.get_channels.assert_awaited_once_with(refresh=True)


@pytest.mark.parametrize("value", ["foo", "1", "TRUE", ""])
def test_channels_other_refresh_values_mean_false(
    client: TestClient, extractor: MagicMock, value: str
):
    response = client.get("/api/channels", params={"refresh": value})
    assert response.status_code == 200
    extractor.get_channels.assert_awaited_once_with(refresh=False)


def test_channels_internal_error(client: TestClient, extractor: MagicMock):
    extractor.get_channels.side_effect = Exception("boom")
    response = client.get("/api/channels")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch channels"}


# -- /api/extract --


def test_extract_success(client: TestClient):
    result = ExtractResponse(success=True, total_messages=0, knowledge_items=0, channels=["general"])
    with patch("slack_knowledge.api.router.run_extraction", new_callable=AsyncMock) as mock_run:
        mock_run.return_value = result
        response = client.post("/api/extract", json={"channelIds": ["C123"], "daysBack": 7})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "totalMessages": 0,
        "knowledgeItems": 0,
        "channels": ["general"],
    }
    assert mock_run.await_args.args[3:] == (["C123"], 7)


def test_extract_defaults_days_back(client: TestClient, settings: Settings):
    result = ExtractResponse(success=True, total_messages=0, knowledge_items=0, channels=[])
    with patch("slack_knowledge.api.router.run_extraction", new_callable=AsyncMock) as mock_run:
        mock_run.return_value = result
        client.post("/api/extract", json={"channelIds": ["G0123456789"]})

    assert mock_run.await_args.args[4] == settings.default_days_back


@pytest.mark.parametrize(
    ("body", "field"),
    [
        ({}, "channelIds"),
        ({"channelIds": "C123"}, "channelIds"),
        ({"channelIds": []}, "channelIds"),
        ({"channelIds": [123]}, "channelIds.0"),
        ({"channelIds": ["general"]}, "channelIds.0"),
        ({"channelIds": ["C123"], "daysBack": 0}, "daysBack"),
        ({"channelIds": ["C123"], "daysBack": 91}, "daysBack"),
    ],
)
def test_extract_validation_errors(client: TestClient, body: dict, field: str):
    response = client.post("/api/extract", json=body)
    assert response.status_code == 400
    fields = [e["field"] for e in response.json()["errors"]]
    assert field in fields


def test_extract_internal_error(client: TestClient):
    with patch("slack_knowledge.api.router.run_extraction", new_callable=AsyncMock) as mock_run:
        mock_run.side_effect = Exception("slack down")
        response = client.post("/api/extract", json={"channelIds": ["C123"]})

    assert response.status_code == 500
    assert response.json() == {"error": "Extraction failed"}


# -- /api/search --


def test_search_returns_items(client: TestClient, store: MagicMock):
    response = client.get("/api/search", params={"q": "standup", "category": "decisions"})

    assert response.status_code == 200
    body = response.json()
    assert body[0]["id"] == "knowledge_1.0"
    assert body[0]["originalMessage"]["text"] == "We decided to move standup to 10am."
    store.search.assert_awaited_once_with("standup", Category.DECISIONS)


@pytest.mark.parametrize(
    ("params", "field"),
    [
        ({}, "q"),
        ({"q": "x"}, "q"),
        ({"q": "x" * 101}, "q"),
        ({"q": "standup", "category": "gossip"}, "category"),
    ],
)
def test_search_validation_errors(client: TestClient, params: dict, field: str):
    response = client.get("/api/search", params=params)
    assert response.status_code == 400
    assert field in [e["field"] for e in response.json()["errors"]]


def test_search_internal_error(client: TestClient, store: MagicMock):
    store.search.side_effect = Exception("disk")
    response = client.get("/api/search", params={"q": "standup"})
    assert response.status_code == 500
    assert response.json() == {"error": "Search failed"}


# -- /api/stats, /api/knowledge --


def test_stats(client: TestClient):
    response = client.get("/api/stats")
    assert response.status_code == 200
    assert response.json() == {
        "totalMessages": 1,
        "totalKnowledgeItems": 1,
        "categoryCounts": {"decisions": 1},
        "topContributors": [],
        "channelStats": {"general": 1},
    }


def test_knowledge_lists_everything(client: TestClient):
    response = client.get("/api/knowledge")
    assert response.status_code == 200
    assert [i["id"] for i in response.json()] == ["knowledge_1.0"]


def test_knowledge_internal_error(client: TestClient, store: MagicMock):
    store.load.side_effect = Exception("disk")
    response = client.get("/api/knowledge")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to load knowledge"}
