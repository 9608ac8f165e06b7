"""Text sanitization, escaping and truncation shared by every output format."""

import html
import re

# Truncation thresholds (characters)
THINKING_MAX_LENGTH = 5000
TOOL_RESULT_MAX_LENGTH = 2000
ELLIPSIS = "..."

# Applied in order, every occurrence
SANITIZE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"<command-name>[^<]*</command-name>"),
    re.compile(r"<command-message>[^<]*</command-message>"),
    re.compile(r"<command-args>[^<]*</command-args>"),
    re.compile(r"<local-command-stdout>[^<]*</local-command-stdout>"),
    re.compile(r"<system-reminder>.*?</system-reminder>", re.DOTALL),
    re.compile(r"\A\s*Caveat:.*?unless the user explicitly asks you to\.", re.DOTALL),
]


def _strip_markers(text: str) -> str:
    for pattern in SANITIZE_PATTERNS:
        text = pattern.sub("", text)
    return text.strip()


def sanitize_text(text: str) -> str:
    """Remove injected control markers from free text and trim it.

    Removing one marker can expose another (nested or split tags), so the
    removal pass is repeated until the text stops changing. The result is a
    fixed point, which makes the function idempotent.
    """
    if not text:
        return ""
    result = _strip_markers(text)
    while True:
        again = _strip_markers(result)
        if again == result:
            return result
        result = again


def escape_html(text: str) -> str:
    """Escape HTML special characters in text.

    Also normalizes line endings (CRLF -> LF) to prevent double spacing in <pre> blocks.
    """
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    return html.escape(normalized)


def truncate_text(text: str, max_length: int) -> tuple[str, bool]:
    """Cut text to max_length characters plus an ellipsis.

    Returns the (possibly truncated) text and whether it was truncated.
    Text at or under the limit comes back unchanged.
    """
    if len(text) <= max_length:
        return text, False
    return text[:max_length] + ELLIPSIS, True
