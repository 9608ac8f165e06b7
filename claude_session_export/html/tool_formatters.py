"""HTML rendering functions for tool use and tool result content.

These formatters take typed tool inputs and outputs and generate the HTML
shown inside the tool and result sections of a transcript:
- Bash (command and output)
- Edit (file path, change counts and unified diff)
- Read/Write (file path, highlighted file content)
- Grep/Glob (pattern line, match list, file list)
- Generic JSON fallback for unknown tools
"""

import json

from ..diff import count_diff_changes, generate_unified_diff
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
    ToolResultText,
)
from .renderer_code import highlight_code_with_pygments, render_unified_diff
from .utils import escape_html

# Bash output beyond this many lines is cut in the rendered view
BASH_MAX_VISIBLE_LINES = 30


def _meta(text: str) -> str:
    return f'<div class="result-meta">{escape_html(text)}</div>'


def _plural(count: int, noun: str, plural: str = "") -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {plural or noun + 's'}"


def format_truncation_note(limit: int) -> str:
    """Meta line for content cut at export time."""
    return _meta(f"Truncated to {limit:,} characters")


# -- Tool Inputs --------------------------------------------------------------


def format_bash_input(bash_input: BashInput) -> str:
    """Format the Bash command as a code block."""
    html_parts: list[str] = []
    if bash_input.description:
        html_parts.append(
            f'<div class="tool-meta">{escape_html(bash_input.description)}</div>'
        )
    html_parts.append(
        f'<pre class="code-block"><code>{escape_html(bash_input.command)}</code></pre>'
    )
    return "".join(html_parts)


def format_edit_input(edit_input: EditInput) -> str:
    """Format an Edit as its file path, change counts and diff.

    Args:
        edit_input: Typed EditInput; a missing new_string counts as empty.
    """
    escaped_path = escape_html(edit_input.file_path)
    html_parts = [f'<div class="file-path">{escaped_path}</div>']
    if edit_input.replace_all:
        html_parts.append(_meta("Replace all occurrences"))

    diff_text = generate_unified_diff(
        edit_input.old_string, edit_input.new_string, edit_input.file_path
    )
    if not diff_text:
        html_parts.append(_meta("No changes"))
        return "".join(html_parts)

    added, removed = count_diff_changes(diff_text)
    html_parts.append(
        '<div class="diff-stat">'
        f'<span class="diff-add">+{added}</span> '
        f'<span class="diff-del">-{removed}</span>'
        "</div>"
    )
    html_parts.append(
        f'<pre class="diff-block"><code>{render_unified_diff(diff_text)}</code></pre>'
    )
    return "".join(html_parts)


def format_file_input(file_input: FileInput) -> str:
    return f'<div class="file-path">{escape_html(file_input.file_path)}</div>'


def format_search_input(search_input: SearchInput) -> str:
    """Format Grep/Glob as 'Pattern: <pattern>' with an optional path."""
    html = (
        '<span class="tool-meta">Pattern: '
        f"<code>{escape_html(search_input.pattern)}</code></span>"
    )
    if search_input.path:
        html += (
            ' <span class="tool-meta">in '
            f"<code>{escape_html(search_input.path)}</code></span>"
        )
    return html


def format_raw_tool_input(raw_input: RawToolInput) -> str:
    """Fallback for unknown tools: pretty-printed JSON."""
    formatted = json.dumps(raw_input.params, indent=2, ensure_ascii=False)
    return f'<pre class="code-block"><code>{escape_html(formatted)}</code></pre>'


# -- Tool Outputs -------------------------------------------------------------


def format_tool_result_text(output: ToolResultText) -> str:
    """Fallback for results without a tool-specific formatter."""
    if not output.content:
        return ""
    return f"<pre>{escape_html(output.content)}</pre>"


def format_bash_output(output: BashOutput) -> str:
    """Format Bash output with a line count, showing at most 30 lines."""
    if not output.content:
        return _meta("No output")

    lines = output.content.split("\n")
    visible = "\n".join(lines[:BASH_MAX_VISIBLE_LINES])
    html_parts = [_meta(_plural(output.line_count, "line"))]
    html_parts.append(f'<pre class="bash-output">{escape_html(visible)}</pre>')
    if len(lines) > BASH_MAX_VISIBLE_LINES:
        hidden = len(lines) - BASH_MAX_VISIBLE_LINES
        html_parts.append(_meta(f"... {_plural(hidden, 'more line')}"))
    return "".join(html_parts)


def format_glob_output(output: GlobOutput) -> str:
    """Format Glob results as a file list with a file count."""
    if not output.files:
        return _meta("No files found")

    items = "".join(f"<li>{escape_html(path)}</li>" for path in output.files)
    return (
        _meta(_plural(output.total, "file"))
        + f'<ul class="file-list">{items}</ul>'
    )


def format_grep_output(output: GrepOutput) -> str:
    """Format Grep results with a match count."""
    if not output.matches:
        return _meta("No matches")

    return _meta(_plural(output.total, "match", "matches")) + (
        f"<pre>{escape_html(output.content)}</pre>"
    )


def format_read_output(output: ReadOutput) -> str:
    """Format Read results as syntax-highlighted file content."""
    if not output.content:
        return ""

    highlighted = highlight_code_with_pygments(
        output.content, output.file_path or "", show_linenos=False
    )
    return (
        _meta(_plural(output.line_count, "line"))
        + f'<div class="read-tool-result">{highlighted}</div>'
    )
