"""Slack ingress: client construction and paginated message extraction."""

from slack_knowledge.slack.client import build_slack_client
from slack_knowledge.slack.extractor import SlackExtractor, is_rate_limited

__all__ = [
    "build_slack_client",
    "SlackExtractor",
    "is_rate_limited",
]
