"""HTML-specific rendering utilities package.

Re-exports the renderer and the shared helpers used by the HTML formatters.
"""

from .utils import (
    ICONS,
    collapsible,
    escape_html,
    get_icon,
    get_pygments_css,
    get_template_environment,
    render_markdown,
)
from .renderer_code import highlight_code_with_pygments, render_unified_diff
from .tool_formatters import (
    # Tool input formatters (called by HtmlRenderer.format_{InputClass})
    format_bash_input,
    format_edit_input,
    format_file_input,
    format_raw_tool_input,
    format_search_input,
    # Tool output formatters (called by HtmlRenderer.format_{OutputClass})
    format_bash_output,
    format_glob_output,
    format_grep_output,
    format_read_output,
    format_tool_result_text,
)
from .renderer import HtmlRenderer

__all__ = [
    "ICONS",
    "collapsible",
    "escape_html",
    "get_icon",
    "get_pygments_css",
    "get_template_environment",
    "render_markdown",
    "highlight_code_with_pygments",
    "render_unified_diff",
    "format_bash_input",
    "format_edit_input",
    "format_file_input",
    "format_raw_tool_input",
    "format_search_input",
    "format_bash_output",
    "format_glob_output",
    "format_grep_output",
    "format_read_output",
    "format_tool_result_text",
    "HtmlRenderer",
]
