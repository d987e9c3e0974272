"""JSON-file knowledge store with id-deduplicated saves, search, and stats.

The whole knowledge list lives in ``<data_dir>/knowledge.json``. Saves are
read-merge-write under an asyncio.Lock and replace the file atomically, so
concurrent extractions in one process cannot lose each other's items.
"""

import asyncio
import logging
import os
import tempfile
from collections import Counter
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from slack_knowledge.config import Settings
from slack_knowledge.models.knowledge import (
    Category,
    ContributorCount,
    KnowledgeStats,
    ProcessedKnowledge,
)

logger = logging.getLogger(__name__)

KNOWLEDGE_FILE = "knowledge.json"
TOP_CONTRIBUTORS = 10

_items_adapter = TypeAdapter(list[ProcessedKnowledge])


class StoreCorruptedError(Exception):
    """The knowledge file exists but does not hold a valid knowledge list."""


class KnowledgeStore:
    """Flat-file persistence for processed knowledge items."""

    def __init__(self, settings: Settings) -> None:
        self._data_dir = Path(settings.data_dir)
        self._path = self._data_dir / KNOWLEDGE_FILE
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    # -- file I/O (blocking; run in a worker thread) --

    def _read_items(self) -> list[ProcessedKnowledge]:
        """Read the stored list. Missing file -> []; unreadable file -> StoreCorruptedError."""
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise StoreCorruptedError(f"Cannot read {self._path}: {exc}") from exc

        try:
            return _items_adapter.validate_json(raw)
        except ValidationError as exc:
            raise StoreCorruptedError(f"Invalid knowledge file {self._path}") from exc

    def _write_items(self, items: list[ProcessedKnowledge]) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)
        payload = _items_adapter.dump_json(items, by_alias=True, indent=2)
        fd, tmp_path = tempfile.mkstemp(dir=self._data_dir, prefix=".knowledge-", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(payload)
            os.replace(tmp_path, self._path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def _merge_and_write(self, new_items: list[ProcessedKnowledge]) -> int:
        existing = self._read_items()
        seen = {item.id for item in existing}
        merged = list(existing)
        for item in new_items:
            # Stored copy wins on id conflict
            if item.id not in seen:
                merged.append(item)
                seen.add(item.id)
        self._write_items(merged)
        return len(merged)

    # -- public API --

    async def load(self) -> list[ProcessedKnowledge]:
        """Return every stored item, or [] if the file is missing or unreadable."""
        try:
            return await asyncio.to_thread(self._read_items)
        except StoreCorruptedError:
            logger.error("Error loading knowledge", exc_info=True)
            return []

    async def save(self, items: list[ProcessedKnowledge]) -> int:
        """Merge ``items`` into the store by id and write the result.

        Items whose id is already stored are dropped. Failures are logged,
        never raised; a corrupt existing file is left untouched.

        Returns:
            Number of items stored after the save, or -1 if the save failed.
        """
        async with self._lock:
            try:
                total = await asyncio.to_thread(self._merge_and_write, items)
            except StoreCorruptedError:
                logger.error("Refusing to overwrite unreadable knowledge file", exc_info=True)
                return -1
            except OSError:
                logger.error("Error saving knowledge", exc_info=True)
                return -1

        logger.info("Saved %d knowledge items (%d offered)", total, len(items))
        return total

    async def search(self, query: str, category: Category | str | None = None) -> list[ProcessedKnowledge]:
        """Case-insensitive substring search over summary, key points, and message text.

        A category, when given, must match exactly in addition to the query.
        """
        term = query.lower()
        wanted = Category(category) if category else None

        results = []
        for item in await self.load():
            if wanted is not None and item.category != wanted:
                continue
            if (
                term in item.summary.lower()
                or any(term in point.lower() for point in item.key_points)
                or term in item.original_message.text.lower()
            ):
                results.append(item)
        return results

    async def stats(self) -> KnowledgeStats:
        """Aggregate counts over the stored list, recomputed on every call."""
        items = await self.load()

        categories: Counter[str] = Counter()
        contributors: Counter[str] = Counter()
        channels: Counter[str] = Counter()

        for item in items:
            message = item.original_message
            categories[item.category.value] += 1
            contributors[message.username or message.user] += 1
            channels[message.channel_name or message.channel] += 1

        return KnowledgeStats(
            total_messages=len(items),
            total_knowledge_items=len(items),
            category_counts=dict(categories),
            top_contributors=[
                ContributorCount(user=user, count=count)
                for user, count in contributors.most_common(TOP_CONTRIBUTORS)
            ],
            channel_stats=dict(channels),
        )
