"""Tests for settings loading."""

from slack_knowledge.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.port == 3000
    assert settings.min_confidence == 0.6
    assert settings.max_rate_limit_retries == 3
    assert settings.min_channel_members == 3
    assert settings.min_message_length == 20


def test_reads_environment(monkeypatch):
    """Tokens and port come from environment variables (case-insensitive)."""
    monkeypatch.setenv("SLACK_BOT_TOKEN", "xoxb-env")
    monkeypatch.setenv("GEMINI_API_KEY", "gm-key")
    monkeypatch.setenv("PORT", "8081")

    settings = Settings(_env_file=None)

    assert settings.slack_bot_token == "xoxb-env"
    assert settings.gemini_api_key == "gm-key"
    assert settings.port == 8081
