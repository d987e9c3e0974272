"""Async Slack client factory.

Builds an AsyncWebClient from explicit settings. The app lifespan creates one
instance and hands it to the extractor; nothing here reads the environment.
"""

from slack_sdk.web.async_client import AsyncWebClient

from slack_knowledge.config import Settings


def build_slack_client(settings: Settings) -> AsyncWebClient:
    """Return an AsyncWebClient authenticated with the configured bot token.

    The SDK's own rate-limit retry handler is not installed: the extractor
    retries rate-limited calls itself so it can bound the attempts and stop
    paginating gracefully.
    """
    return AsyncWebClient(token=settings.slack_bot_token)
