"""Parse and extract data from conversation transcript entries.

This module provides utility functions for parsing transcript data:
- extract_text_content: Extract text from message content
- parse_timestamp: Parse ISO timestamps
- timestamp_to_millis: ISO timestamp to epoch milliseconds

For transcript entry creation, see factories/transcript_factory.py.
"""

from datetime import datetime, timezone
from typing import Optional, Union

from .models import ContentBlock, TextBlock


def extract_text_content(content: Union[str, list[ContentBlock], None]) -> str:
    """Extract text from message content (plain string or block list)."""
    if not content:
        return ""
    if isinstance(content, str):
        return content
    return "\n".join(item.text for item in content if isinstance(item, TextBlock))


def parse_timestamp(timestamp_str: Optional[str]) -> Optional[datetime]:
    """Parse ISO timestamp to datetime object."""
    try:
        return datetime.fromisoformat(timestamp_str.replace("Z", "+00:00"))  # type: ignore[union-attr]
    except (ValueError, AttributeError):
        return None


def timestamp_to_millis(timestamp_str: Optional[str]) -> int:
    """Convert an ISO timestamp to epoch milliseconds, 0 when unparseable.

    Naive timestamps are taken as UTC.
    """
    dt = parse_timestamp(timestamp_str)
    if dt is None:
        return 0
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)
