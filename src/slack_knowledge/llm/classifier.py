"""Knowledge classifier: ExtractedMessage -> ProcessedKnowledge.

Tries one Gemini structured-output call per message and validates the reply
via Pydantic. Any failure (API error, malformed JSON, invalid fields, no
client configured) falls back to the deterministic keyword classifier. The
remote call is never retried.
"""

import logging
import re

from google import genai
from google.genai import types
from google.genai.errors import APIError
from pydantic import ValidationError

from slack_knowledge.config import Settings
from slack_knowledge.llm.client import build_gemini_client
from slack_knowledge.llm.prompts import build_prompt
from slack_knowledge.llm.rules import classify_by_rules
from slack_knowledge.llm.schemas import LLMClassification
from slack_knowledge.models.knowledge import ProcessedKnowledge, knowledge_id
from slack_knowledge.models.slack import ExtractedMessage
from slack_knowledge.timestamps import utc_now_iso

logger = logging.getLogger(__name__)

_MAX_OUTPUT_TOKENS = 1000

# Acknowledgements and single-emoji reactions, matched against stripped text
LOW_VALUE_PATTERNS = [
    re.compile(r"^thanks", re.IGNORECASE),
    re.compile(r"^thank you", re.IGNORECASE),
    re.compile(r"^\+1$"),
    re.compile(r"^lgtm$", re.IGNORECASE),
    re.compile(r"^ok$", re.IGNORECASE),
    re.compile(r"^yes$", re.IGNORECASE),
    re.compile(r"^no$", re.IGNORECASE),
    *(re.compile(f"^{emoji}$") for emoji in "👍👎🙏🙌🎉🎊🎯✅❌"),
]


def is_low_value(text: str) -> bool:
    """Return True if the message is a bare acknowledgement or reaction."""
    stripped = text.strip()
    return any(pattern.search(stripped) for pattern in LOW_VALUE_PATTERNS)


class ClassificationError(Exception):
    """The remote classifier produced no usable result."""


class KnowledgeClassifier:
    """Classifies messages into knowledge items, remote first, rules as fallback."""

    def __init__(self, settings: Settings, client: genai.Client | None = None) -> None:
        self._settings = settings
        self._client = client if client is not None else build_gemini_client(settings)

    @property
    def remote_enabled(self) -> bool:
        return self._client is not None

    async def classify(self, message: ExtractedMessage) -> ProcessedKnowledge | None:
        """Classify one message.

        Returns:
            None for short or low-value messages; otherwise a knowledge item
            from Gemini, or from the rule-based classifier if Gemini failed.
        """
        if len(message.text) < self._settings.min_message_length or is_low_value(message.text):
            return None

        if not self.remote_enabled:
            return classify_by_rules(message)

        try:
            result = await self._classify_remote(message)
        except (APIError, ValidationError, ClassificationError):
            logger.warning(
                "Remote classification failed for message %s, using rules",
                message.id,
                exc_info=True,
            )
            return classify_by_rules(message)
        except Exception:
            logger.error(
                "Unexpected error classifying message %s, using rules",
                message.id,
                exc_info=True,
            )
            return classify_by_rules(message)

        return ProcessedKnowledge(
            id=knowledge_id(message.id),
            original_message=message,
            category=result.category,
            summary=result.summary,
            key_points=result.key_points,
            action_items=result.action_items,
            relevant_context=result.relevant_context,
            confidence=result.confidence,
            extracted_at=utc_now_iso(),
        )

    async def _classify_remote(self, message: ExtractedMessage) -> LLMClassification:
        """Single Gemini call with structured output, validated field by field.

        Raises:
            APIError: On any Gemini API error.
            ClassificationError: If the reply has no text.
            ValidationError: If the reply is not valid JSON of the expected shape.
        """
        response = await self._client.aio.models.generate_content(
            model=self._settings.gemini_model,
            contents=build_prompt(message),
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=LLMClassification,
                max_output_tokens=_MAX_OUTPUT_TOKENS,
                temperature=0.2,
            ),
        )
        if not response.text:
            raise ClassificationError("Empty response from Gemini")
        return LLMClassification.model_validate_json(response.text)

    def filter_high_confidence(
        self, items: list[ProcessedKnowledge], min_confidence: float | None = None
    ) -> list[ProcessedKnowledge]:
        """Keep items whose confidence meets the threshold (default from settings)."""
        threshold = self._settings.min_confidence if min_confidence is None else min_confidence
        return [item for item in items if item.confidence >= threshold]
