"""Plain text renderer for conversation transcripts."""

import json

from ..diff import generate_unified_diff
from ..models import (
    BashInput,
    BashOutput,
    ConversationMessage,
    EditInput,
    ExportContext,
    FileInput,
    GlobOutput,
    GrepOutput,
    RawToolInput,
    ReadOutput,
    SearchInput,
    Session,
    TextSegment,
    ThinkingSegment,
    ToolResultSegment,
    ToolResultText,
    ToolUseSegment,
)
from ..renderer import Renderer, iter_renderable_messages, role_title
from ..utils import format_epoch_millis, format_timestamp

SEPARATOR_WIDTH = 60


class TextRenderer(Renderer):
    """Plain text renderer.

    Blocks of a message are separated by a blank line, messages by a blank
    line after their content.
    """

    content_type = "text/plain"
    file_extension = "txt"

    # -------------------------------------------------------------------------
    # Segment Formatters
    # -------------------------------------------------------------------------

    def format_TextSegment(self, segment: TextSegment) -> str:
        return segment.text

    def format_ThinkingSegment(self, segment: ThinkingSegment) -> str:
        return f"[Thinking]\n{segment.thinking}\n[/Thinking]"

    def format_ToolUseSegment(self, segment: ToolUseSegment) -> str:
        header = f"[Tool: {segment.tool_name}]"
        if body := self.format_tool_input(segment):
            return f"{header}\n{body}"
        return header

    def format_ToolResultSegment(self, segment: ToolResultSegment) -> str:
        header = f"[{segment.label}]"
        if body := self.format_tool_output(segment):
            return f"{header}\n{body}"
        return header

    # -------------------------------------------------------------------------
    # Tool Input Formatters
    # -------------------------------------------------------------------------

    def format_BashInput(self, input: BashInput) -> str:
        return input.command

    def format_EditInput(self, input: EditInput) -> str:
        diff = generate_unified_diff(input.old_string, input.new_string, input.file_path)
        return f"{input.file_path}\n{diff}" if diff else input.file_path

    def format_FileInput(self, input: FileInput) -> str:
        return input.file_path

    def format_SearchInput(self, input: SearchInput) -> str:
        line = f"pattern: {input.pattern}"
        if input.path:
            line += f" in {input.path}"
        return line

    def format_RawToolInput(self, input: RawToolInput) -> str:
        return json.dumps(input.params, indent=2, ensure_ascii=False)

    # -------------------------------------------------------------------------
    # Tool Output Formatters
    # -------------------------------------------------------------------------

    def format_ToolResultText(self, output: ToolResultText) -> str:
        return output.content

    def format_BashOutput(self, output: BashOutput) -> str:
        if not output.content:
            return "(no output)"
        return f"({output.line_count} lines)\n{output.content}"

    def format_GlobOutput(self, output: GlobOutput) -> str:
        if not output.files:
            return "(no files found)"
        return f"({output.total} files)\n" + "\n".join(output.files)

    def format_GrepOutput(self, output: GrepOutput) -> str:
        if not output.content:
            return "(no matches)"
        return f"({output.total} matches)\n{output.content}"

    def format_ReadOutput(self, output: ReadOutput) -> str:
        if not output.content:
            return ""
        return f"({output.line_count} lines)\n{output.content}"

    # -------------------------------------------------------------------------
    # Document
    # -------------------------------------------------------------------------

    def _header_lines(self, session: Session) -> list[str]:
        return [
            f"Session: {session.display}",
            f"Project: {session.projectName} ({session.project})",
            f"Date: {format_epoch_millis(session.timestamp)}",
            f"ID: {session.id}",
            "",
            "=" * SEPARATOR_WIDTH,
            "",
        ]

    def _message_title(self, message: ConversationMessage) -> str:
        title = role_title(message)
        if message.model:
            title += f" ({message.model})"
        if message.timestamp:
            title += f" {format_timestamp(message.timestamp)}"
        return f"=== {title} ==="

    def generate(self, ctx: ExportContext) -> str:
        lines = self._header_lines(ctx.session)

        for message in iter_renderable_messages(ctx.messages, include_summaries=True):
            if message.type == "summary":
                lines.append("=== Summary ===")
                lines.append(message.summary or "")
                lines.append("")
                continue

            rendered = self.render_message(message, ctx.strip_tools)
            if not rendered:
                continue
            lines.append(self._message_title(message))
            lines.append("\n\n".join(fragment for _, fragment in rendered))
            lines.append("")

        return "\n".join(lines)
