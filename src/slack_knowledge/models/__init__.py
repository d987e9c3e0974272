"""Data models for the Slack knowledge pipeline."""

from slack_knowledge.models.api import ExtractRequest, ExtractResponse, HealthResponse
from slack_knowledge.models.knowledge import (
    Category,
    ContributorCount,
    KnowledgeStats,
    ProcessedKnowledge,
    knowledge_id,
)
from slack_knowledge.models.slack import ChannelInfo, ExtractedMessage

__all__ = [
    "ChannelInfo",
    "ExtractedMessage",
    "Category",
    "ProcessedKnowledge",
    "ContributorCount",
    "KnowledgeStats",
    "knowledge_id",
    "ExtractRequest",
    "ExtractResponse",
    "HealthResponse",
]
