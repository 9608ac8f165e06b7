"""Format-independent rendering: the Renderer base class and exporter registry."""

from typing import Any, Sequence

from .factories.block_factory import create_segments
from .models import (
    ContentBlock,
    ConversationMessage,
    ExportContext,
    MessageType,
    Segment,
    TextSegment,
    ToolResultSegment,
    ToolUseSegment,
)
from .sanitize import sanitize_text


RENDERABLE_TYPES = (MessageType.USER.value, MessageType.ASSISTANT.value)

# Canonical format ids; get_renderer also accepts "markdown" and "text"
SUPPORTED_FORMATS: tuple[str, ...] = ("html", "md", "json", "txt")


def role_title(message: ConversationMessage) -> str:
    return "User" if message.type == MessageType.USER.value else "Assistant"


def iter_renderable_messages(
    messages: Sequence[ConversationMessage], include_summaries: bool = False
) -> list[ConversationMessage]:
    """Filter messages down to the ones that enter an export body.

    Snapshot markers and other entry types never render.
    """
    accepted = RENDERABLE_TYPES + (
        (MessageType.SUMMARY.value,) if include_summaries else ()
    )
    return [message for message in messages if message.type in accepted]


class Renderer:
    """Base class for transcript renderers.

    Subclasses implement format-specific rendering (HTML, Markdown, ...).

    The method-based dispatcher pattern:
    - create_segments() turns content blocks into format-neutral segments
    - _dispatch_format() walks the MRO of a segment, tool input or tool
      output and calls the most specific format_{ClassName} method
    - Subclasses override format methods to implement their output
    """

    content_type: str = ""
    file_extension: str = ""

    def _dispatch_format(self, obj: Any) -> str:
        """Dispatch to format_{ClassName} method based on object type."""
        for cls in type(obj).__mro__:
            if cls is object:
                break
            if method := getattr(self, f"format_{cls.__name__}", None):
                return method(obj)
        return ""

    # -------------------------------------------------------------------------
    # Block Rendering
    # -------------------------------------------------------------------------

    def message_segments(
        self, message: ConversationMessage, strip_tools: bool = False
    ) -> list[Segment]:
        """Segments for a user/assistant message.

        Plain string content becomes a single sanitized text segment.
        """
        content = message.content
        role = message.type
        if isinstance(content, str):
            text = sanitize_text(content)
            return [TextSegment(text=text, role=role)] if text else []
        if not content:
            return []
        return create_segments(content, role, strip_tools)

    def render_blocks(
        self,
        blocks: Sequence[ContentBlock],
        role: str,
        strip_tools: bool = False,
    ) -> list[tuple[Segment, str]]:
        """Render content blocks to (segment, fragment) pairs, in block order.

        Segments whose fragment comes out empty are dropped.
        """
        return self._render_segments(create_segments(blocks, role, strip_tools))

    def render_message(
        self, message: ConversationMessage, strip_tools: bool = False
    ) -> list[tuple[Segment, str]]:
        return self._render_segments(self.message_segments(message, strip_tools))

    def _render_segments(self, segments: list[Segment]) -> list[tuple[Segment, str]]:
        rendered: list[tuple[Segment, str]] = []
        for segment in segments:
            fragment = self._dispatch_format(segment)
            if fragment:
                rendered.append((segment, fragment))
        return rendered

    # -------------------------------------------------------------------------
    # Tool Dispatch
    # -------------------------------------------------------------------------

    def format_tool_input(self, segment: ToolUseSegment) -> str:
        """Dispatch to format_{InputClass}; empty when the tool had no input."""
        if segment.input is None:
            return ""
        return self._dispatch_format(segment.input)

    def format_tool_output(self, segment: ToolResultSegment) -> str:
        """Dispatch to format_{OutputClass} based on segment.output type."""
        return self._dispatch_format(segment.output)

    # Segment formatters
    # def format_TextSegment(self, segment: TextSegment) -> str: ...
    # def format_ThinkingSegment(self, segment: ThinkingSegment) -> str: ...
    # def format_ToolUseSegment(self, segment: ToolUseSegment) -> str: ...
    # def format_ToolResultSegment(self, segment: ToolResultSegment) -> str: ...

    # Tool input formatters
    # def format_BashInput(self, input: BashInput) -> str: ...
    # def format_EditInput(self, input: EditInput) -> str: ...
    # def format_FileInput(self, input: FileInput) -> str: ...
    # def format_SearchInput(self, input: SearchInput) -> str: ...
    # def format_RawToolInput(self, input: RawToolInput) -> str: ...  # fallback

    # Tool output formatters
    # def format_BashOutput(self, output: BashOutput) -> str: ...
    # def format_GlobOutput(self, output: GlobOutput) -> str: ...
    # def format_GrepOutput(self, output: GrepOutput) -> str: ...
    # def format_ReadOutput(self, output: ReadOutput) -> str: ...
    # def format_ToolResultText(self, output: ToolResultText) -> str: ...  # fallback

    # -------------------------------------------------------------------------
    # Rendering Entry Point
    # -------------------------------------------------------------------------

    def generate(self, ctx: ExportContext) -> str:
        """Generate the full export document.

        Subclasses override to return formatted output.
        """
        raise NotImplementedError


def get_renderer(format: str) -> Renderer:
    """Get a renderer instance for the specified format.

    Args:
        format: One of "html", "md" (or "markdown"), "json", "txt" (or "text").

    Returns:
        A Renderer instance for the specified format.

    Raises:
        ValueError: If the format is not supported.
    """
    if format == "html":
        from .html.renderer import HtmlRenderer

        return HtmlRenderer()
    if format in ("md", "markdown"):
        from .markdown.renderer import MarkdownRenderer

        return MarkdownRenderer()
    if format in ("txt", "text"):
        from .text.renderer import TextRenderer

        return TextRenderer()
    if format == "json":
        from .json_format.renderer import JsonRenderer

        return JsonRenderer()
    raise ValueError(f"Unsupported format: {format}")