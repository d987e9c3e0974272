"""Slack channel and message models."""

from pydantic import Field

from slack_knowledge.models.base import CamelModel


class ChannelInfo(CamelModel):
    """A workspace channel as returned by the channel listing."""

    id: str
    name: str
    member_count: int | None = None


class ExtractedMessage(CamelModel):
    """A human-authored Slack message that passed the extraction filters."""

    id: str  # Slack message ts, e.g., "1700000000.000100"
    text: str
    user: str  # Author user ID
    username: str | None = None  # Display name, falls back to user ID
    channel: str  # Channel ID
    channel_name: str | None = None
    timestamp: str  # ISO-8601 UTC
    thread_ts: str | None = Field(default=None, alias="thread_ts")  # Kept snake_case on the wire
    reactions: list[str] | None = None
