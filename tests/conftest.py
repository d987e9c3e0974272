"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from slack_knowledge.app import app
from slack_knowledge.config import Settings


@pytest.fixture(scope="session")
def client() -> TestClient:
    """Create a TestClient for the FastAPI app (lifespan not run)."""
    return TestClient(app)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from the environment, storing data under tmp_path."""
    return Settings(
        _env_file=None,
        slack_bot_token="xoxb-test",
        gemini_api_key="",
        data_dir=str(tmp_path / "data"),
    )
