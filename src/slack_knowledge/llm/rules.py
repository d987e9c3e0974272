"""Deterministic keyword classifier used when the remote classifier is unavailable.

Category is decided by the first keyword group with a substring hit, checked
in a fixed order; action items and key points come from naive sentence
splitting on terminal punctuation.
"""

import re

from slack_knowledge.models.knowledge import Category, ProcessedKnowledge, knowledge_id
from slack_knowledge.models.slack import ExtractedMessage
from slack_knowledge.timestamps import utc_now_iso

# Checked in order; first group with any hit wins
CATEGORY_RULES: list[tuple[Category, float, tuple[str, ...]]] = [
    (
        Category.DECISIONS,
        0.8,
        ("decided", "decision", "approved", "final", "policy", "change"),
    ),
    (
        Category.RESOURCES,
        0.7,
        ("http", "document", "link", "resource", "tool", "guide"),
    ),
    (
        Category.PROCESSES,
        0.7,
        ("process", "how to", "steps", "workflow", "procedure", "guide"),
    ),
    (
        Category.ANNOUNCEMENTS,
        0.8,
        ("announce", "important", "everyone", "update", "news", "notice"),
    ),
]

DEFAULT_CATEGORY = Category.DISCUSSIONS
DEFAULT_CONFIDENCE = 0.5

ACTION_WORDS = (
    "todo",
    "action item",
    "need to",
    "should",
    "must",
    "will do",
    "task",
    "assign",
    "deadline",
    "due",
    "schedule",
    "plan",
)

_SENTENCE_SPLIT = re.compile(r"[.!?]")

_SUMMARY_CHARS = 100
_FALLBACK_POINT_CHARS = 50
_MAX_KEY_POINTS = 3


def categorize(text: str) -> tuple[Category, float]:
    """Return (category, confidence) for a message text."""
    lowered = text.lower()
    for category, confidence, keywords in CATEGORY_RULES:
        if any(keyword in lowered for keyword in keywords):
            return category, confidence
    return DEFAULT_CATEGORY, DEFAULT_CONFIDENCE


def split_sentences(text: str) -> list[str]:
    return _SENTENCE_SPLIT.split(text)


def extract_action_items(sentences: list[str]) -> list[str]:
    """Sentences containing any action word, trimmed."""
    items = []
    for sentence in sentences:
        lowered = sentence.lower()
        if any(word in lowered for word in ACTION_WORDS):
            items.append(sentence.strip())
    return items


def extract_key_points(text: str, sentences: list[str]) -> list[str]:
    """Up to three mid-length sentences; falls back to a truncated prefix of the text."""
    points = [s.strip() for s in sentences if 20 < len(s) < 200][:_MAX_KEY_POINTS]
    if points:
        return points
    return [text[:_FALLBACK_POINT_CHARS] + "..."]


def summarize(text: str) -> str:
    if len(text) > _SUMMARY_CHARS:
        return text[:_SUMMARY_CHARS] + "..."
    return text


def classify_by_rules(message: ExtractedMessage) -> ProcessedKnowledge:
    """Classify a message with keyword heuristics. Total for any non-empty text."""
    category, confidence = categorize(message.text)
    sentences = split_sentences(message.text)

    channel = message.channel_name or message.channel
    author = message.username or message.user

    return ProcessedKnowledge(
        id=knowledge_id(message.id),
        original_message=message,
        category=category,
        summary=summarize(message.text),
        key_points=extract_key_points(message.text, sentences),
        action_items=extract_action_items(sentences),
        relevant_context=f"Discussion in #{channel} by {author}",
        confidence=confidence,
        extracted_at=utc_now_iso(),
    )
