"""Knowledge classification: Gemini structured output with a rule-based fallback.

Public API:
    KnowledgeClassifier(settings).classify(message) -> ProcessedKnowledge | None
    classify_by_rules(message) -> ProcessedKnowledge
    is_low_value(text) -> bool
"""

from slack_knowledge.llm.classifier import KnowledgeClassifier, is_low_value
from slack_knowledge.llm.client import build_gemini_client
from slack_knowledge.llm.rules import classify_by_rules
from slack_knowledge.llm.schemas import LLMClassification

__all__ = [
    "KnowledgeClassifier",
    "is_low_value",
    "build_gemini_client",
    "classify_by_rules",
    "LLMClassification",
]
