"""Gemini client factory.

Builds a genai.Client from explicit settings with a 30-second HTTP timeout.
Does NOT configure HttpRetryOptions: a failed classification falls back to
the rule-based classifier instead of being retried.
"""

from google import genai
from google.genai import types

from slack_knowledge.config import Settings


def build_gemini_client(settings: Settings) -> genai.Client | None:
    """Return a Gemini client, or None when no API key is configured.

    A None client means the remote classifier is unavailable and every
    message goes straight to the rule-based fallback.
    """
    if not settings.gemini_api_key:
        return None
    return genai.Client(
        api_key=settings.gemini_api_key,
        http_options=types.HttpOptions(timeout=30_000),
    )
