"""Factory for tool inputs and tool outputs.

This module turns the open-ended tool data of a transcript into typed models:
- get_tool_category(): Icon category for a tool name
- create_tool_input(): Typed tool input from a raw input dict
- create_tool_output(): Typed tool output from sanitized result text

Tool names are matched case-insensitively and exactly. Input dispatch is an
ordered list of (predicate, factory) rules ending in a mandatory fallback, so
every renderer sees the same decision for the same tool call.
"""

from typing import Any, Callable, Optional

from ..models import (
    BashInput,
    BashOutput,
    EditInput,
    FileInput,
    GlobOutput,
    GrepOutput,
    RawToolInput,
    ReadOutput,
    SearchInput,
    ToolInput,
    ToolOutput,
    ToolResultText,
)


# =============================================================================
# Tool Categories
# =============================================================================

TOOL_CATEGORIES: dict[str, str] = {
    "bash": "terminal",
    "grep": "search",
    "glob": "search",
    "edit": "edit",
    "read": "file",
    "write": "file",
    "task": "folder",
}

DEFAULT_TOOL_CATEGORY = "wrench"


def get_tool_category(tool_name: str) -> str:
    """Return the icon category for a tool name."""
    return TOOL_CATEGORIES.get(tool_name.lower(), DEFAULT_TOOL_CATEGORY)


# =============================================================================
# Tool Input Rules
# =============================================================================

ToolInputPredicate = Callable[[str, dict[str, Any]], bool]
ToolInputFactory = Callable[[dict[str, Any]], ToolInput]


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _matches(
    *names: str, filled: tuple[str, ...] = (), present: tuple[str, ...] = ()
) -> ToolInputPredicate:
    """Build a predicate on tool name and input fields.

    ``filled`` fields must hold a non-empty value, ``present`` fields must
    merely exist with a non-null value (an empty old_string is a valid edit).
    """
    accepted = frozenset(names)

    def predicate(tool_name: str, data: dict[str, Any]) -> bool:
        if tool_name.lower() not in accepted:
            return False
        if not all(data.get(key) for key in filled):
            return False
        return all(data.get(key) is not None for key in present)

    return predicate


def _create_bash_input(data: dict[str, Any]) -> BashInput:
    description = data.get("description")
    return BashInput(
        command=_text(data.get("command")),
        description=_text(description) if description else None,
    )


def _create_edit_input(data: dict[str, Any]) -> EditInput:
    replace_all = data.get("replace_all")
    return EditInput(
        file_path=_text(data.get("file_path")),
        old_string=_text(data.get("old_string")),
        new_string=_text(data.get("new_string")),
        replace_all=bool(replace_all) if replace_all is not None else None,
    )


def _create_file_input(data: dict[str, Any]) -> FileInput:
    return FileInput(file_path=_text(data.get("file_path")))


def _create_search_input(data: dict[str, Any]) -> SearchInput:
    path = data.get("path")
    return SearchInput(
        pattern=_text(data.get("pattern")),
        path=_text(path) if path else None,
    )


TOOL_INPUT_RULES: list[tuple[ToolInputPredicate, ToolInputFactory]] = [
    (_matches("bash", filled=("command",)), _create_bash_input),
    (
        _matches("edit", filled=("file_path",), present=("old_string",)),
        _create_edit_input,
    ),
    (_matches("read", "write", filled=("file_path",)), _create_file_input),
    (_matches("grep", "glob", filled=("pattern",)), _create_search_input),
]


def create_tool_input(tool_name: str, data: dict[str, Any]) -> ToolInput:
    """Create a typed tool input, falling back to RawToolInput.

    The fallback covers unknown tools as well as known tools whose required
    field is missing.
    """
    for predicate, factory in TOOL_INPUT_RULES:
        if predicate(tool_name, data):
            return factory(data)
    return RawToolInput(params=dict(data))


# =============================================================================
# Tool Outputs
# =============================================================================


def _non_blank_lines(text: str) -> list[str]:
    return [line for line in text.split("\n") if line.strip()]


def create_tool_output(
    tool_name: str,
    content: str,
    full_content: Optional[str] = None,
    tool_input: Optional[dict[str, Any]] = None,
) -> ToolOutput:
    """Create a typed tool output from sanitized result text.

    Args:
        tool_name: Name of the originating tool ("" when unresolved)
        content: Text to display (already sanitized and truncated)
        full_content: Untruncated sanitized text, used for counts
        tool_input: Input of the originating tool_use, if resolved

    Returns:
        A ToolResultText subclass matching the tool, or ToolResultText itself.
    """
    if full_content is None:
        full_content = content
    name = tool_name.lower()

    if name == "bash":
        line_count = len(full_content.split("\n")) if full_content else 0
        return BashOutput(content=content, line_count=line_count)

    if name == "glob":
        return GlobOutput(
            content=content,
            files=_non_blank_lines(content),
            total=len(_non_blank_lines(full_content)),
        )

    if name == "grep":
        return GrepOutput(
            content=content,
            matches=_non_blank_lines(content),
            total=len(_non_blank_lines(full_content)),
        )

    if name == "read":
        file_path = (tool_input or {}).get("file_path")
        line_count = len(full_content.split("\n")) if full_content else 0
        return ReadOutput(
            content=content,
            file_path=str(file_path) if file_path else None,
            line_count=line_count,
        )

    return ToolResultText(content=content)
