"""HTML renderer implementation for conversation transcripts."""

import time
from typing import Optional

from ..models import (
    DEFAULT_THEME,
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
    Segment,
    TextSegment,
    ThinkingSegment,
    ToolResultSegment,
    ToolResultText,
    ToolUseSegment,
)
from ..renderer import Renderer, iter_renderable_messages
from ..renderer_timings import (
    get_timing_var,
    log_timing,
    report_timing_statistics,
    reset_timing_data,
    set_timing_var,
)
from ..sanitize import THINKING_MAX_LENGTH, TOOL_RESULT_MAX_LENGTH
from ..utils import format_epoch_millis
from .tool_formatters import (
    format_bash_input,
    format_bash_output,
    format_edit_input,
    format_file_input,
    format_glob_output,
    format_grep_output,
    format_raw_tool_input,
    format_read_output,
    format_search_input,
    format_tool_result_text,
    format_truncation_note,
)
from .utils import (
    collapsible,
    escape_html,
    get_icon,
    get_pygments_css,
    get_template_environment,
    render_markdown,
)


class HtmlRenderer(Renderer):
    """Self-contained HTML document with inline CSS, icons and script."""

    content_type = "text/html"
    file_extension = "html"

    # -------------------------------------------------------------------------
    # Segment Formatters
    # -------------------------------------------------------------------------

    def format_TextSegment(self, segment: TextSegment) -> str:
        # User text is literal; assistant text is markdown
        if segment.role == "user":
            return f'<div style="white-space:pre-wrap">{escape_html(segment.text)}</div>'
        return f'<div class="msg-text">{render_markdown(segment.text)}</div>'

    def format_ThinkingSegment(self, segment: ThinkingSegment) -> str:
        body = f"<pre>{escape_html(segment.thinking)}</pre>"
        if segment.is_truncated:
            body += format_truncation_note(THINKING_MAX_LENGTH)
        return collapsible("thinking-block", f"{get_icon('bulb')} Thinking", body)

    def format_ToolUseSegment(self, segment: ToolUseSegment) -> str:
        name = escape_html(segment.tool_name or "tool")
        return collapsible(
            "tool-block",
            f'{get_icon(segment.category)} <span class="tool-name">{name}</span>',
            f'<div class="tool-content">{self.format_tool_input(segment)}</div>',
        )

    def format_ToolResultSegment(self, segment: ToolResultSegment) -> str:
        status = "error" if segment.is_error else "success"
        summary = f"{get_icon('x' if segment.is_error else 'check')} {segment.label}"
        if segment.tool_name:
            summary += f' <span class="tool-name">{escape_html(segment.tool_name)}</span>'
        body = self.format_tool_output(segment)
        if segment.is_truncated:
            body += format_truncation_note(TOOL_RESULT_MAX_LENGTH)
        return collapsible(
            f"result-block result-{status}",
            summary,
            f'<div class="result-content">{body}</div>' if body else "",
        )

    # -------------------------------------------------------------------------
    # Tool Input Formatters
    # -------------------------------------------------------------------------

    def format_BashInput(self, input: BashInput) -> str:
        return format_bash_input(input)

    def format_EditInput(self, input: EditInput) -> str:
        return format_edit_input(input)

    def format_FileInput(self, input: FileInput) -> str:
        return format_file_input(input)

    def format_SearchInput(self, input: SearchInput) -> str:
        return format_search_input(input)

    def format_RawToolInput(self, input: RawToolInput) -> str:
        return format_raw_tool_input(input)

    # -------------------------------------------------------------------------
    # Tool Output Formatters
    # -------------------------------------------------------------------------

    def format_ToolResultText(self, output: ToolResultText) -> str:
        return format_tool_result_text(output)

    def format_BashOutput(self, output: BashOutput) -> str:
        return format_bash_output(output)

    def format_GlobOutput(self, output: GlobOutput) -> str:
        return format_glob_output(output)

    def format_GrepOutput(self, output: GrepOutput) -> str:
        return format_grep_output(output)

    def format_ReadOutput(self, output: ReadOutput) -> str:
        return format_read_output(output)

    # -------------------------------------------------------------------------
    # Message Assembly
    # -------------------------------------------------------------------------

    def _wrap_group(self, role: str, is_text: bool, fragments: list[str]) -> str:
        inner = "\n".join(fragments)
        if is_text:
            return f'<div class="msg-{role}"><div class="bubble">{inner}</div></div>'
        return f'<div class="tool-only-msg" data-tool="1">{inner}</div>'

    def render_message_html(
        self, message: ConversationMessage, strip_tools: bool = False
    ) -> str:
        """Render one message as bubbles and tool containers, in block order.

        Consecutive text blocks share a bubble; consecutive thinking, tool
        and result blocks share a container marked data-tool. Returns ""
        when nothing in the message renders.
        """
        role = "user" if message.type == "user" else "assistant"
        groups: list[str] = []
        current: list[str] = []
        current_is_text: Optional[bool] = None

        rendered: list[tuple[Segment, str]] = self.render_message(message, strip_tools)
        for segment, fragment in rendered:
            is_text = isinstance(segment, TextSegment)
            if current and is_text != current_is_text:
                groups.append(self._wrap_group(role, bool(current_is_text), current))
                current = []
            current.append(fragment)
            current_is_text = is_text

        if current:
            groups.append(self._wrap_group(role, bool(current_is_text), current))
        return "\n".join(groups)

    # -------------------------------------------------------------------------
    # Document
    # -------------------------------------------------------------------------

    def generate(self, ctx: ExportContext) -> str:
        t_start = time.time()
        theme = ctx.theme or DEFAULT_THEME
        reset_timing_data()
        set_timing_var("_markdown_timings", [])
        set_timing_var("_pygments_timings", [])

        messages = iter_renderable_messages(ctx.messages)
        with log_timing(lambda: f"Render messages ({len(messages)})", t_start):
            message_html: list[str] = []
            for message in messages:
                set_timing_var("_current_msg_id", message.uuid or "")
                if html := self.render_message_html(message, ctx.strip_tools):
                    message_html.append(html)

        session = ctx.session
        with log_timing("Template rendering", t_start):
            template = get_template_environment().get_template("transcript.html")
            document = template.render(
                title=f"{session.display} - Claude Conversation",
                session=session,
                date=format_epoch_millis(session.timestamp),
                theme=theme,
                show_controls=not ctx.strip_tools,
                messages_html="\n".join(message_html),
                pygments_css=get_pygments_css(theme),
            )

        report_timing_statistics(
            [
                ("Markdown", get_timing_var("_markdown_timings", [])),
                ("Pygments", get_timing_var("_pygments_timings", [])),
            ]
        )
        return str(document)
