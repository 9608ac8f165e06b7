"""Markdown renderer implementation for conversation transcripts."""

import json
import re
from pathlib import Path

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
from ..utils import format_epoch_millis

# Extension to fence language hint
LANGUAGE_HINTS: dict[str, str] = {
    ".py": "python",
    ".js": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".json": "json",
    ".html": "html",
    ".css": "css",
    ".sh": "bash",
    ".bash": "bash",
    ".zsh": "bash",
    ".md": "markdown",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".toml": "toml",
    ".rs": "rust",
    ".go": "go",
    ".java": "java",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".rb": "ruby",
    ".sql": "sql",
    ".xml": "xml",
    ".swift": "swift",
    ".kt": "kotlin",
}


class MarkdownRenderer(Renderer):
    """Markdown renderer for conversation transcripts."""

    content_type = "text/markdown"
    file_extension = "md"

    # -------------------------------------------------------------------------
    # Private Utility Methods
    # -------------------------------------------------------------------------

    def _code_fence(self, text: str, lang: str = "") -> str:
        """Wrap text in a fenced code block with adaptive delimiter.

        The fence is one backtick longer than the longest backtick run in the
        text, and at least three.
        """
        max_ticks = 2
        for match in re.finditer(r"`+", text):
            max_ticks = max(max_ticks, len(match.group()))
        fence = "`" * max(3, max_ticks + 1)
        return f"{fence}{lang}\n{text}\n{fence}"

    def _escape_html_tag(self, text: str, tag: str) -> str:
        """Replace </tag> with &lt;/tag> so content cannot close the wrapper."""
        return text.replace(f"</{tag}>", f"&lt;/{tag}>")

    def _collapsible(self, summary: str, content: str) -> str:
        """Wrap content in a collapsible <details> block."""
        safe_summary = self._escape_html_tag(summary, "summary")
        safe_summary = self._escape_html_tag(safe_summary, "details")
        safe_content = self._escape_html_tag(content, "details")
        if not safe_content:
            return f"<details>\n<summary>{safe_summary}</summary>\n\n</details>"
        return (
            f"<details>\n<summary>{safe_summary}</summary>\n\n"
            f"{safe_content}\n\n</details>"
        )

    def _lang_from_path(self, path: str) -> str:
        """Get language hint from file extension."""
        ext = Path(path).suffix.lower() if path else ""
        return LANGUAGE_HINTS.get(ext, "")

    # -------------------------------------------------------------------------
    # Segment Formatters
    # -------------------------------------------------------------------------

    def format_TextSegment(self, segment: TextSegment) -> str:
        return segment.text

    def format_ThinkingSegment(self, segment: ThinkingSegment) -> str:
        return self._collapsible("Thinking", segment.thinking)

    def format_ToolUseSegment(self, segment: ToolUseSegment) -> str:
        return self._collapsible(
            f"Tool: {segment.tool_name}", self.format_tool_input(segment)
        )

    def format_ToolResultSegment(self, segment: ToolResultSegment) -> str:
        summary = segment.label
        if segment.tool_name:
            summary += f": {segment.tool_name}"
        return self._collapsible(summary, self.format_tool_output(segment))

    # -------------------------------------------------------------------------
    # Tool Input Formatters
    # -------------------------------------------------------------------------

    def format_BashInput(self, input: BashInput) -> str:
        return self._code_fence(input.command, "bash")

    def format_EditInput(self, input: EditInput) -> str:
        parts = [f"**{input.file_path}**"]
        diff_text = generate_unified_diff(
            input.old_string, input.new_string, input.file_path
        )
        if diff_text:
            parts.append(self._code_fence(diff_text, "diff"))
        return "\n\n".join(parts)

    def format_FileInput(self, input: FileInput) -> str:
        return f"**{input.file_path}**"

    def format_SearchInput(self, input: SearchInput) -> str:
        line = f"Pattern: `{input.pattern}`"
        if input.path:
            line += f" in `{input.path}`"
        return line

    def format_RawToolInput(self, input: RawToolInput) -> str:
        """Fallback for unknown tools: pretty-printed JSON."""
        return self._code_fence(
            json.dumps(input.params, indent=2, ensure_ascii=False), "json"
        )

    # -------------------------------------------------------------------------
    # Tool Output Formatters
    # -------------------------------------------------------------------------

    def format_ToolResultText(self, output: ToolResultText) -> str:
        return self._code_fence(output.content) if output.content else ""

    def format_BashOutput(self, output: BashOutput) -> str:
        if not output.content:
            return "*No output*"
        return f"*{output.line_count} lines*\n\n{self._code_fence(output.content)}"

    def format_GlobOutput(self, output: GlobOutput) -> str:
        if not output.files:
            return "*No files found*"
        listing = "\n".join(f"- `{f}`" for f in output.files)
        return f"*{output.total} files*\n\n{listing}"

    def format_GrepOutput(self, output: GrepOutput) -> str:
        if not output.content:
            return "*No matches*"
        return f"*{output.total} matches*\n\n{self._code_fence(output.content)}"

    def format_ReadOutput(self, output: ReadOutput) -> str:
        if not output.content:
            return ""
        lang = self._lang_from_path(output.file_path or "")
        return self._code_fence(output.content, lang)

    # -------------------------------------------------------------------------
    # Document
    # -------------------------------------------------------------------------

    def _header_lines(self, session: Session) -> list[str]:
        return [
            f"# {session.display}",
            "",
            f"**Project:** {session.projectName} (`{session.project}`)",
            f"**Date:** {format_epoch_millis(session.timestamp)}",
            f"**Session ID:** `{session.id}`",
            "",
            "---",
            "",
        ]

    def _message_title(self, message: ConversationMessage) -> str:
        title = f"## {role_title(message)}"
        if message.model:
            title += f" *({message.model})*"
        return title

    def generate(self, ctx: ExportContext) -> str:
        lines = self._header_lines(ctx.session)

        for message in iter_renderable_messages(ctx.messages, include_summaries=True):
            if message.type == "summary":
                lines.append(f"> **Summary:** {message.summary or ''}")
                lines.append("")
                continue

            rendered = self.render_message(message, ctx.strip_tools)
            if not rendered:
                continue
            lines.append(self._message_title(message))
            lines.append("")
            lines.append("\n\n".join(fragment for _, fragment in rendered))
            lines.append("")

        return "\n".join(lines)
