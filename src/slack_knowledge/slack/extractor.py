"""Paginated extraction of channels, users, and messages from Slack.

All calls are serial: every page request waits a fixed delay first, and a
rate-limited request is retried (tenacity) after the server-supplied
Retry-After interval. Failures never propagate out of the public methods;
they are logged and the caller gets an empty or partial result.
"""

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from datetime import datetime, timedelta, timezone

from pydantic import ValidationError
from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient
from slack_sdk.web.async_slack_response import AsyncSlackResponse
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
)

from slack_knowledge.config import Settings
from slack_knowledge.models.slack import ChannelInfo, ExtractedMessage
from slack_knowledge.slack.client import build_slack_client
from slack_knowledge.timestamps import slack_ts_to_iso

logger = logging.getLogger(__name__)

SlackMethod = Callable[..., Awaitable[AsyncSlackResponse]]

_PAGE_LIMIT = 100
_USERS_PAGE_LIMIT = 1000


def is_rate_limited(error: BaseException) -> bool:
    """Return True if a Slack API error is a rate-limit rejection (HTTP 429 / ratelimited)."""
    if not isinstance(error, SlackApiError):
        return False
    response = error.response
    if getattr(response, "status_code", None) == 429:
        return True
    try:
        return response.get("error") == "ratelimited"
    except AttributeError:
        return False


def retry_after_seconds(error: BaseException | None, default: float) -> float:
    """Read the Retry-After header from a rate-limited response, falling back to ``default``."""
    headers = getattr(getattr(error, "response", None), "headers", None) or {}
    value = headers.get("Retry-After") or headers.get("retry-after")
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


class SlackExtractor:
    """Reads channels, users, and recent message history from a workspace."""

    def __init__(
        self,
        settings: Settings,
        client: AsyncWebClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._settings = settings
        self._client = client or build_slack_client(settings)
        self._sleep = sleep

    # -- request plumbing --

    def _wait_retry_after(self, retry_state: RetryCallState) -> float:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        return retry_after_seconds(error, self._settings.default_retry_after_seconds)

    async def _delayed(self, method: SlackMethod, **kwargs) -> AsyncSlackResponse:
        await self._sleep(self._settings.request_delay_seconds)
        return await method(**kwargs)

    async def _call(self, method: SlackMethod, **kwargs) -> AsyncSlackResponse:
        """Call a Slack method after the fixed delay, retrying on rate limits.

        Raises:
            SlackApiError: Non-rate-limit errors immediately, or the last
                rate-limit error once retries are exhausted.
        """
        retrying = AsyncRetrying(
            retry=retry_if_exception(is_rate_limited),
            wait=self._wait_retry_after,
            stop=stop_after_attempt(self._settings.max_rate_limit_retries + 1),
            sleep=self._sleep,
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return await retrying(self._delayed, method, **kwargs)

    async def _paginate(
        self, method: SlackMethod, what: str, **kwargs
    ) -> AsyncIterator[AsyncSlackResponse]:
        """Yield successive pages of a cursor-paginated Slack method.

        Stops quietly (keeping the pages already yielded) when a page is
        still rate limited after all retries. Any other error propagates.
        """
        cursor: str | None = None
        while True:
            try:
                result = await self._call(method, cursor=cursor, **kwargs)
            except SlackApiError as exc:
                if not is_rate_limited(exc):
                    raise
                logger.warning(
                    "Stopped paginating %s: still rate limited after %d retries",
                    what,
                    self._settings.max_rate_limit_retries,
                )
                return

            yield result

            cursor = (result.get("response_metadata") or {}).get("next_cursor")
            if not cursor:
                return

    # -- public API --

    async def get_channels(self, refresh: bool = False) -> list[ChannelInfo]:
        """List public and private channels with enough members, largest first.

        ``refresh`` is accepted for API compatibility; channels are always
        fetched live, so it has no effect beyond being logged.

        Returns:
            Channels sorted by member count (descending), or the pages
            fetched so far if rate limiting never cleared, or [] on error.
        """
        if refresh:
            logger.info("Channel refresh requested; channels are always fetched live")

        min_members = self._settings.min_channel_members
        channels: list[ChannelInfo] = []
        page_count = 0
        started = time.monotonic()

        try:
            async for page in self._paginate(
                self._client.conversations_list,
                "channels",
                types="public_channel,private_channel",
                exclude_archived=True,
                limit=_PAGE_LIMIT,
            ):
                page_count += 1
                raw = page.get("channels") or []
                active = [c for c in raw if (c.get("num_members") or 0) >= min_members]
                channels.extend(
                    channel for channel in map(self._to_channel, active) if channel is not None
                )
                logger.info(
                    "Channel page %d: %d active, %d skipped below %d members",
                    page_count,
                    len(active),
                    len(raw) - len(active),
                    min_members,
                )
        except Exception:
            logger.error("Error fetching channels", exc_info=True)
            return []

        logger.info(
            "Channel fetch complete: %d channels across %d pages in %.1fs",
            len(channels),
            page_count,
            time.monotonic() - started,
        )

        channels.sort(key=lambda c: c.member_count or 0, reverse=True)
        return channels

    @staticmethod
    def _to_channel(raw: dict) -> ChannelInfo | None:
        """Map a conversations.list record, skipping records without a usable ID."""
        try:
            return ChannelInfo(
                id=raw["id"],
                name=raw.get("name") or raw["id"],
                member_count=raw.get("num_members"),
            )
        except (KeyError, ValidationError):
            logger.warning("Skipping malformed channel record: %s", raw.get("id"))
            return None

    async def get_users(self) -> dict[str, str]:
        """Map user IDs to real names. Returns whatever was collected before any error."""
        user_map: dict[str, str] = {}
        try:
            async for page in self._paginate(
                self._client.users_list, "users", limit=_USERS_PAGE_LIMIT
            ):
                for member in page.get("members") or []:
                    if member.get("id") and member.get("real_name"):
                        user_map[member["id"]] = member["real_name"]
        except Exception:
            logger.error("Error fetching users", exc_info=True)
        return user_map

    async def extract_messages(
        self,
        channel_id: str,
        channel_name: str,
        days_back: int,
        user_map: dict[str, str],
    ) -> list[ExtractedMessage]:
        """Collect human-authored messages from the last ``days_back`` days of a channel.

        Skips bot messages, anything with a subtype (joins, edits, etc.),
        messages without text or author, and texts shorter than the
        configured minimum length.

        Returns:
            Extracted messages in API order, or [] if the channel failed.
        """
        oldest = datetime.now(timezone.utc) - timedelta(days=days_back)
        min_length = self._settings.min_message_length
        messages: list[ExtractedMessage] = []

        try:
            async for page in self._paginate(
                self._client.conversations_history,
                f"history of #{channel_name}",
                channel=channel_id,
                oldest=str(int(oldest.timestamp())),
                limit=_PAGE_LIMIT,
            ):
                for message in page.get("messages") or []:
                    extracted = self._to_extracted(
                        message, channel_id, channel_name, user_map, min_length
                    )
                    if extracted is not None:
                        messages.append(extracted)
        except Exception:
            logger.error("Error extracting messages from #%s", channel_name, exc_info=True)
            return []

        logger.info("Extracted %d messages from #%s", len(messages), channel_name)
        return messages

    @staticmethod
    def _to_extracted(
        message: dict,
        channel_id: str,
        channel_name: str,
        user_map: dict[str, str],
        min_length: int,
    ) -> ExtractedMessage | None:
        if message.get("bot_id") or message.get("subtype"):
            return None

        text = message.get("text") or ""
        user = message.get("user")
        if not text or not user or len(text) < min_length:
            return None

        reactions = [r["name"] for r in message.get("reactions") or [] if r.get("name")]

        return ExtractedMessage(
            id=message["ts"],
            text=text,
            user=user,
            username=user_map.get(user, user),
            channel=channel_id,
            channel_name=channel_name,
            timestamp=slack_ts_to_iso(message["ts"]),
            thread_ts=message.get("thread_ts"),
            reactions=reactions or None,
        )
