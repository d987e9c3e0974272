"""Request and response bodies for the HTTP API."""

from typing import Annotated

from pydantic import Field, StringConstraints

from slack_knowledge.models.base import CamelModel

ChannelId = Annotated[str, StringConstraints(pattern=r"^[CG][A-Z0-9]+$")]


class ExtractRequest(CamelModel):
    """Body of POST /api/extract."""

    channel_ids: list[ChannelId] = Field(min_length=1)
    days_back: Annotated[int, Field(ge=1, le=90)] | None = None


class ExtractResponse(CamelModel):
    """Outcome of one extraction run."""

    success: bool
    total_messages: int  # Classified items before the confidence filter
    knowledge_items: int  # Items kept after the confidence filter
    channels: list[str]


class HealthResponse(CamelModel):
    status: str
    message: str
