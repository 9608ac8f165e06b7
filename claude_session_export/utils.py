"""Utility functions for timestamps, project names and export filenames."""

import re
from datetime import datetime, timezone
from typing import Optional

from .models import Session

FILENAME_MAX_LENGTH = 60
DEFAULT_FILENAME_STEM = "conversation"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9\-_ ]")
_WHITESPACE_RUN = re.compile(r"\s+")


def format_timestamp(timestamp_str: Optional[str]) -> str:
    """Format ISO timestamp for display, converting to UTC.

    Unparseable values are returned unchanged.
    """
    if timestamp_str is None:
        return ""
    try:
        dt = datetime.fromisoformat(timestamp_str.replace("Z", "+00:00"))
        if dt.tzinfo is not None:
            dt = dt.astimezone(timezone.utc)
        return dt.strftime("%Y-%m-%d %H:%M:%S")
    except (ValueError, AttributeError):
        return timestamp_str


def format_epoch_millis(millis: int) -> str:
    """Format an epoch-milliseconds timestamp like format_timestamp (UTC).

    Values outside the datetime range are returned as the raw number.
    """
    try:
        dt = datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return str(millis)
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def get_project_name(project_path: str) -> str:
    """Return the last segment of a project path ("" for an empty path)."""
    segments = [part for part in re.split(r"[\\/]", project_path) if part]
    return segments[-1] if segments else ""


def safe_filename_stem(display: str) -> str:
    """Derive a filesystem-safe stem from a session display name.

    Keeps ASCII letters, digits, "-", "_" and spaces, turns whitespace runs
    into "-" and cuts the result to 60 characters.

    Examples:
        >>> safe_filename_stem("Fix bug #42: crash!!")
        'Fix-bug-42-crash'
    """
    cleaned = _UNSAFE_FILENAME_CHARS.sub("", display)
    stem = _WHITESPACE_RUN.sub("-", cleaned)[:FILENAME_MAX_LENGTH]
    return stem or DEFAULT_FILENAME_STEM


def export_filename(session: Session, extension: str) -> str:
    """Return the download filename for a session export."""
    return f"claude-{safe_filename_stem(session.display)}.{extension}"
