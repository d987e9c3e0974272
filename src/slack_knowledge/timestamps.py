"""ISO-8601 helpers shared by the extractor and classifiers."""

from datetime import datetime, timezone


def to_iso(moment: datetime) -> str:
    """Format an aware datetime as ISO-8601 UTC with millisecond precision and a Z suffix."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    return to_iso(datetime.now(timezone.utc))


def slack_ts_to_iso(ts: str) -> str:
    """Convert a Slack message ts ("1700000000.000100") to ISO-8601 UTC."""
    return to_iso(datetime.fromtimestamp(float(ts), tz=timezone.utc))
