"""Classification prompt template and builder."""

from slack_knowledge.models.slack import ExtractedMessage

_CLASSIFY_PROMPT = """\
Analyze this Slack message for organizational knowledge. Extract key information and categorize it.

Message: "{text}"
Channel: #{channel}
Author: {author}
Date: {date}

Please analyze and respond with a JSON object containing:
- category: one of "decisions", "discussions", "resources", "processes", "announcements"
- summary: brief summary of the main point (max 100 chars)
- key_points: array of 2-4 key points extracted from the message
- action_items: array of any action items or tasks mentioned
- relevant_context: why this might be important organizationally
- confidence: number 0-1 indicating how confident you are this contains valuable knowledge

Guidelines for categorization:
- "decisions": Final decisions, approvals, or policy changes
- "discussions": Ongoing debates, considerations, or brainstorming
- "resources": Links, documents, tools, or helpful information
- "processes": How-to information, workflows, or procedures
- "announcements": Important updates, news, or notifications

Only respond with the JSON object, no other text.
"""


def build_prompt(message: ExtractedMessage) -> str:
    """Fill the classification template with the message text and metadata."""
    return _CLASSIFY_PROMPT.format(
        text=message.text,
        channel=message.channel_name or message.channel,
        author=message.username or message.user,
        date=message.timestamp,
    )
