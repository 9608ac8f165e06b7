"""Load conversation transcript JSONL files and convert them to export formats."""

import json
import logging
import re
import time
from pathlib import Path
from typing import Any, Optional, Sequence

from pydantic import ValidationError

from .factories import create_conversation_message, is_conversation_entry
from .models import (
    ConversationMessage,
    ExportContext,
    MessageType,
    Session,
    Theme,
)
from .parser import extract_text_content, timestamp_to_millis
from .renderer import get_renderer
from .renderer_timings import log_timing
from .sanitize import sanitize_text
from .utils import export_filename, get_project_name

logger = logging.getLogger(__name__)

DISPLAY_MAX_LENGTH = 100


# =============================================================================
# Transcript Loading
# =============================================================================


def _describe_validation_error(error: ValidationError) -> str:
    """Validation error text without the pydantic documentation links."""
    return re.sub(
        r"\s*For further information visit https://errors\.pydantic\S*", "", str(error)
    )


def deduplicate_messages(
    messages: Sequence[ConversationMessage],
) -> list[ConversationMessage]:
    """Drop messages whose uuid was already seen (first occurrence wins).

    Messages without a uuid are always kept.
    """
    seen: set[str] = set()
    result: list[ConversationMessage] = []
    for message in messages:
        if message.uuid:
            if message.uuid in seen:
                continue
            seen.add(message.uuid)
        result.append(message)
    return result


def load_transcript(jsonl_path: Path) -> list[ConversationMessage]:
    """Load and parse a JSONL transcript file.

    Keeps user, assistant and summary entries; summaries are moved to the
    front. Malformed lines and entries failing validation are logged and
    skipped.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    if not jsonl_path.is_file():
        raise FileNotFoundError(f"Transcript not found: {jsonl_path}")

    summaries: list[ConversationMessage] = []
    messages: list[ConversationMessage] = []

    with open(jsonl_path, "r", encoding="utf-8", errors="replace") as f:
        for line_no, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                entry_dict: Any = json.loads(line)
            except json.JSONDecodeError as e:
                logger.warning(
                    "Line %d of %s | JSON decode error: %s", line_no, jsonl_path, e
                )
                continue

            if not isinstance(entry_dict, dict):
                logger.warning(
                    "Line %d of %s is not a JSON object", line_no, jsonl_path
                )
                continue
            if not is_conversation_entry(entry_dict):
                logger.debug(
                    "Line %d of %s | skipping entry type %r",
                    line_no,
                    jsonl_path,
                    entry_dict.get("type"),
                )
                continue

            try:
                message = create_conversation_message(entry_dict)
            except ValidationError as e:
                logger.warning(
                    "Line %d of %s | %s",
                    line_no,
                    jsonl_path,
                    _describe_validation_error(e),
                )
                continue

            if message.type == MessageType.SUMMARY.value:
                summaries.append(message)
            else:
                messages.append(message)

    return deduplicate_messages(summaries + messages)


# =============================================================================
# Session Metadata
# =============================================================================


def _first_user_text(messages: Sequence[ConversationMessage]) -> str:
    for message in messages:
        if message.type != MessageType.USER.value:
            continue
        text = sanitize_text(extract_text_content(message.content))
        if text:
            return text.split("\n", 1)[0].strip()[:DISPLAY_MAX_LENGTH]
    return ""


def build_session(
    jsonl_path: Path,
    messages: Sequence[ConversationMessage],
    title: Optional[str] = None,
) -> Session:
    """Derive session metadata from the transcript file and its messages.

    Args:
        jsonl_path: Source file; its stem is the fallback session id
        messages: Loaded messages
        title: Explicit display name, overriding the first user text
    """
    session_id = next((m.sessionId for m in messages if m.sessionId), None)
    session_id = session_id or jsonl_path.stem
    project = next((m.cwd for m in messages if m.cwd), None) or ""
    first_timestamp = next((m.timestamp for m in messages if m.timestamp), None)

    return Session(
        id=session_id,
        display=title or _first_user_text(messages) or session_id,
        project=project,
        projectName=get_project_name(project),
        timestamp=timestamp_to_millis(first_timestamp),
    )


# =============================================================================
# Conversion
# =============================================================================


def render_transcript(
    messages: list[ConversationMessage],
    session: Session,
    format: str = "html",
    theme: Optional[Theme] = None,
    strip_tools: bool = False,
) -> tuple[str, str]:
    """Render messages with the exporter for a format.

    Returns:
        (document, file_extension)

    Raises:
        ValueError: If the format is not supported.
    """
    renderer = get_renderer(format)
    ctx = ExportContext(
        messages=messages, session=session, theme=theme, strip_tools=strip_tools
    )
    return renderer.generate(ctx), renderer.file_extension


def convert_transcript(
    input_path: Path,
    format: str = "html",
    output_path: Optional[Path] = None,
    theme: Optional[Theme] = None,
    strip_tools: bool = False,
    title: Optional[str] = None,
) -> Path:
    """Convert a JSONL transcript file and write the export.

    The default output is claude-<display>.<ext> beside the input file.

    Returns:
        The path written.
    """
    t_start = time.time()
    with log_timing("Load transcript", t_start):
        messages = load_transcript(input_path)
    session = build_session(input_path, messages, title)

    with log_timing(lambda: f"Render {format} ({len(messages)} messages)", t_start):
        document, extension = render_transcript(
            messages, session, format, theme, strip_tools
        )

    if output_path is None:
        output_path = input_path.parent / export_filename(session, extension)
    output_path.write_text(document, encoding="utf-8")
    logger.info("Wrote %s", output_path)
    return output_path
