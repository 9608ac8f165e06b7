"""Pydantic models for conversation transcripts and format-neutral render content.

Transcript models mirror the stored JSONL structure and keep unknown fields so
that the JSON export can re-serialize them without loss. Render content models
are produced by the block factory and consumed by the format renderers.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


Theme = Literal["dark", "light", "minimal"]
THEMES: tuple[str, ...] = ("dark", "light", "minimal")
DEFAULT_THEME = "dark"


class MessageType(str, Enum):
    """Transcript entry types.

    Using str as base class keeps plain string comparisons working.
    """

    USER = "user"
    ASSISTANT = "assistant"
    SUMMARY = "summary"
    FILE_HISTORY_SNAPSHOT = "file-history-snapshot"


# =============================================================================
# Content Blocks
# =============================================================================


def _text_or_empty(value: Any) -> str:
    """Ids and names as strings; null becomes an empty string."""
    return "" if value is None else str(value)


class TextBlock(BaseModel):
    type: Literal["text"]
    text: str = ""

    model_config = {"extra": "allow"}


class ThinkingBlock(BaseModel):
    type: Literal["thinking"]
    thinking: str = ""
    signature: Optional[str] = None

    model_config = {"extra": "allow"}


class ToolUseBlock(BaseModel):
    """A tool invocation.

    ``input`` is an open key/value bag whose shape depends on the tool; it is
    never validated against a schema.
    """

    type: Literal["tool_use"]
    id: str = ""
    name: str = ""
    input: Any = None

    model_config = {"extra": "allow"}

    @field_validator("id", "name", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _text_or_empty(value)


class ToolResultBlock(BaseModel):
    type: Literal["tool_result"]
    tool_use_id: str = ""
    content: Any = ""  # Usually a string or a list of content blocks
    is_error: Optional[bool] = None

    model_config = {"extra": "allow"}

    @field_validator("tool_use_id", mode="before")
    @classmethod
    def _coerce_tool_use_id(cls, value: Any) -> str:
        return _text_or_empty(value)

    @field_validator("is_error", mode="before")
    @classmethod
    def _coerce_is_error(cls, value: Any) -> Optional[bool]:
        return None if value is None else bool(value)


class UnknownBlock(BaseModel):
    """Any other block type (images, server tool blocks, ...).

    Kept for the JSON export, ignored by the other renderers.
    """

    type: str

    model_config = {"extra": "allow"}


# Known block types first; anything else lands in UnknownBlock
ContentBlock = Annotated[
    Union[TextBlock, ThinkingBlock, ToolUseBlock, ToolResultBlock, UnknownBlock],
    Field(union_mode="left_to_right"),
]


# =============================================================================
# Transcript Entries
# =============================================================================


class MessageBody(BaseModel):
    role: str = ""
    content: Union[str, list[ContentBlock]] = ""
    model: Optional[str] = None
    usage: Optional[dict[str, Any]] = None

    model_config = {"extra": "allow"}


class ConversationMessage(BaseModel):
    """One transcript entry: a user/assistant turn, a summary or a snapshot marker."""

    type: str
    uuid: Optional[str] = None
    parentUuid: Optional[str] = None
    timestamp: Optional[str] = None
    sessionId: Optional[str] = None
    cwd: Optional[str] = None
    message: Optional[MessageBody] = None
    summary: Optional[str] = None

    model_config = {"extra": "allow"}

    @property
    def content(self) -> Union[str, list[ContentBlock], None]:
        return self.message.content if self.message is not None else None

    @property
    def model(self) -> Optional[str]:
        return self.message.model if self.message is not None else None


class Session(BaseModel):
    """Metadata describing a transcript as a whole."""

    id: str
    display: str = ""
    project: str = ""
    projectName: str = ""
    timestamp: int = 0  # Epoch milliseconds


@dataclass
class ExportContext:
    """Everything a renderer needs for one export call."""

    messages: list[ConversationMessage]
    session: Session
    theme: Optional[Theme] = None
    strip_tools: bool = False


# =============================================================================
# Tool Input Models
# =============================================================================
# Typed views over a tool_use input, created by factories/tool_factory.py.
# Renderers format them through format_{ClassName} methods.


class BashInput(BaseModel):
    """Input parameters for the Bash tool."""

    command: str
    description: Optional[str] = None


class EditInput(BaseModel):
    """Input parameters for the Edit tool."""

    file_path: str
    old_string: str
    new_string: str = ""
    replace_all: Optional[bool] = None


class FileInput(BaseModel):
    """Input parameters for Read and Write: only the path is rendered."""

    file_path: str


class SearchInput(BaseModel):
    """Input parameters for Grep and Glob."""

    pattern: str
    path: Optional[str] = None


class RawToolInput(BaseModel):
    """Fallback for unknown tools or inputs missing a required field."""

    params: dict[str, Any]


ToolInput = Union[BashInput, EditInput, FileInput, SearchInput, RawToolInput]


# =============================================================================
# Tool Output Models
# =============================================================================
# Format-neutral tool results, symmetric with the tool input models.
# Subclasses extend ToolResultText so that a renderer without a specific
# formatter falls back to the plain text one.


@dataclass
class ToolResultText:
    """Sanitized (and possibly truncated) tool result text."""

    content: str


@dataclass
class BashOutput(ToolResultText):
    line_count: int = 0


@dataclass
class GlobOutput(ToolResultText):
    files: list[str] = field(default_factory=list)
    total: int = 0  # Files in the untruncated result


@dataclass
class GrepOutput(ToolResultText):
    matches: list[str] = field(default_factory=list)
    total: int = 0


@dataclass
class ReadOutput(ToolResultText):
    file_path: Optional[str] = None
    line_count: int = 0


ToolOutput = Union[ToolResultText, BashOutput, GlobOutput, GrepOutput, ReadOutput]


# =============================================================================
# Render Segments
# =============================================================================
# One segment per visible content block, in block order.


class Segment:
    """Base class for format-neutral rendered blocks."""

    pass


@dataclass
class TextSegment(Segment):
    """Sanitized, non-empty message text."""

    text: str
    role: str


@dataclass
class ThinkingSegment(Segment):
    thinking: str
    is_truncated: bool = False


@dataclass
class ToolUseSegment(Segment):
    tool_use_id: str
    tool_name: str
    category: str  # terminal, search, edit, file, folder or wrench
    input: Optional[ToolInput] = None


@dataclass
class ToolResultSegment(Segment):
    tool_use_id: str
    tool_name: str  # Empty when the originating tool_use is not in the message
    output: ToolOutput
    is_error: bool = False
    is_truncated: bool = False

    @property
    def label(self) -> str:
        return "Error" if self.is_error else "Result"
