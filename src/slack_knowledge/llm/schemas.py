"""LLM response schema for Gemini structured output.

Contains only fields the LLM generates. The knowledge item ID, original
message, and extraction timestamp come from the classifier.
"""

from pydantic import BaseModel, ConfigDict, Field

from slack_knowledge.models.knowledge import Category


class LLMClassification(BaseModel):
    """Schema for Gemini structured output. Used as response_schema and to validate the reply.

    Strict: a boolean or numeric string is not accepted where a number is expected.
    """

    model_config = ConfigDict(strict=True)

    category: Category = Field(description="Exactly one of the five knowledge categories")
    summary: str = Field(description="Brief summary of the main point, max 100 characters")
    key_points: list[str] = Field(description="2-4 key points extracted from the message")
    action_items: list[str] = Field(description="Action items or tasks mentioned, empty if none")
    relevant_context: str = Field(description="Why this might be important organizationally")
    confidence: float = Field(
        ge=0.0,
        le=1.0,
        description="0-1 confidence that the message contains valuable knowledge",
    )
