"""Extraction run: channels -> messages -> classification -> confidence filter -> store."""

import logging

from slack_knowledge.llm.classifier import KnowledgeClassifier
from slack_knowledge.models.api import ExtractResponse
from slack_knowledge.models.knowledge import ProcessedKnowledge
from slack_knowledge.slack.extractor import SlackExtractor
from slack_knowledge.store import KnowledgeStore

logger = logging.getLogger(__name__)


async def run_extraction(
    extractor: SlackExtractor,
    classifier: KnowledgeClassifier,
    store: KnowledgeStore,
    channel_ids: list[str],
    days_back: int,
) -> ExtractResponse:
    """Extract, classify, and persist knowledge from the requested channels.

    Channels are processed one at a time and messages one at a time. Requested
    IDs that are not in the workspace channel list (or fall below the member
    threshold) are ignored.

    Returns:
        ExtractResponse where total_messages counts classified items before
        the confidence filter and knowledge_items counts those kept.
    """
    logger.info("Starting extraction for %d channel(s), %d days back", len(channel_ids), days_back)

    wanted = set(channel_ids)
    channels = [c for c in await extractor.get_channels() if c.id in wanted]
    user_map = await extractor.get_users()

    classified: list[ProcessedKnowledge] = []
    for channel in channels:
        logger.info("Processing #%s", channel.name)
        messages = await extractor.extract_messages(channel.id, channel.name, days_back, user_map)

        for message in messages:
            item = await classifier.classify(message)
            if item is not None:
                classified.append(item)

        logger.info("Classified messages from #%s (%d items so far)", channel.name, len(classified))

    kept = classifier.filter_high_confidence(classified)
    await store.save(kept)

    logger.info(
        "Extraction complete: %d classified, %d kept across %d channel(s)",
        len(classified),
        len(kept),
        len(channels),
    )

    return ExtractResponse(
        success=True,
        total_messages=len(classified),
        knowledge_items=len(kept),
        channels=[c.name for c in channels],
    )
