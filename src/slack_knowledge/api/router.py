"""Knowledge API routes: channels, extraction, search, stats, raw list."""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from slack_knowledge.api.dependencies import (
    get_app_settings,
    get_classifier,
    get_extractor,
    get_store,
)
from slack_knowledge.config import Settings
from slack_knowledge.llm.classifier import KnowledgeClassifier
from slack_knowledge.models.api import ExtractRequest, ExtractResponse
from slack_knowledge.models.knowledge import Category, KnowledgeStats, ProcessedKnowledge
from slack_knowledge.models.slack import ChannelInfo
from slack_knowledge.pipeline import run_extraction
from slack_knowledge.slack.extractor import SlackExtractor
from slack_knowledge.store import KnowledgeStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["knowledge"])


def _server_error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message})


@router.get("/channels", response_model=list[ChannelInfo])
async def list_channels(
    refresh: str | None = None,
    extractor: SlackExtractor = Depends(get_extractor),
):
    """List workspace channels with enough members, largest first.

    Only ``refresh=true`` counts as a refresh request; any other value is false.
    """
    try:
        return await extractor.get_channels(refresh=refresh == "true")
    except Exception:
        logger.error("Error fetching channels", exc_info=True)
        return _server_error("Failed to fetch channels")


@router.post("/extract", response_model=ExtractResponse)
async def extract(
    body: ExtractRequest,
    settings: Settings = Depends(get_app_settings),
    extractor: SlackExtractor = Depends(get_extractor),
    classifier: KnowledgeClassifier = Depends(get_classifier),
    store: KnowledgeStore = Depends(get_store),
):
    """Extract and classify knowledge from the given channels and persist it."""
    days_back = body.days_back or settings.default_days_back
    try:
        return await run_extraction(extractor, classifier, store, body.channel_ids, days_back)
    except Exception:
        logger.error("Extraction error", exc_info=True)
        return _server_error("Extraction failed")


@router.get("/search", response_model=list[ProcessedKnowledge])
async def search(
    q: str = Query(min_length=2, max_length=100),
    category: Category | None = None,
    store: KnowledgeStore = Depends(get_store),
):
    """Search stored knowledge by substring, optionally within one category."""
    try:
        return await store.search(q, category)
    except Exception:
        logger.error("Search error", exc_info=True)
        return _server_error("Search failed")


@router.get("/stats", response_model=KnowledgeStats)
async def stats(store: KnowledgeStore = Depends(get_store)):
    """Aggregate counts by category, contributor, and channel."""
    try:
        return await store.stats()
    except Exception:
        logger.error("Stats error", exc_info=True)
        return _server_error("Failed to get stats")


@router.get("/knowledge", response_model=list[ProcessedKnowledge])
async def knowledge(store: KnowledgeStore = Depends(get_store)):
    """Return the full stored knowledge list."""
    try:
        return await store.load()
    except Exception:
        logger.error("Knowledge load error", exc_info=True)
        return _server_error("Failed to load knowledge")
