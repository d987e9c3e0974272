"""Knowledge item model, category enum, and aggregate stats."""

from enum import Enum

from pydantic import Field

from slack_knowledge.models.base import CamelModel
from slack_knowledge.models.slack import ExtractedMessage


class Category(str, Enum):
    """Fixed categories for knowledge items (5 values)."""

    DECISIONS = "decisions"
    DISCUSSIONS = "discussions"
    RESOURCES = "resources"
    PROCESSES = "processes"
    ANNOUNCEMENTS = "announcements"


class ProcessedKnowledge(CamelModel):
    """A classified, summarized record derived from one source message."""

    id: str  # "knowledge_" + original message ts
    original_message: ExtractedMessage
    category: Category
    summary: str
    key_points: list[str] = []
    action_items: list[str] = []
    relevant_context: str = ""
    confidence: float = Field(ge=0.0, le=1.0)
    extracted_at: str  # ISO-8601 UTC


class ContributorCount(CamelModel):
    """One entry of the top-contributors ranking."""

    user: str
    count: int


class KnowledgeStats(CamelModel):
    """Aggregate counts over the stored knowledge list."""

    total_messages: int
    total_knowledge_items: int
    category_counts: dict[str, int]
    top_contributors: list[ContributorCount]
    channel_stats: dict[str, int]


def knowledge_id(message_id: str) -> str:
    """Derive the knowledge item ID from the source message ID."""
    return f"knowledge_{message_id}"
