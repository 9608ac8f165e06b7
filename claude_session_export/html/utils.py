"""HTML-specific rendering utilities.

This module contains the shared HTML building blocks:
- Inline SVG icons per tool category
- HTML escaping and markdown rendering (mistune + Pygments)
- Collapsible <details> sections
- Pygments stylesheet per theme
- Template environment management
"""

import functools
from pathlib import Path
from typing import Any, Optional

import mistune
from jinja2 import Environment, FileSystemLoader, select_autoescape
from pygments.formatters import HtmlFormatter  # type: ignore[reportUnknownVariableType]

from ..models import DEFAULT_THEME
from ..renderer_timings import timing_stat
from ..sanitize import escape_html

__all__ = [
    "ICONS",
    "collapsible",
    "escape_html",
    "get_icon",
    "get_pygments_css",
    "get_template_environment",
    "render_markdown",
]


# -- Icons --------------------------------------------------------------------

_SVG_OPEN = (
    '<svg width="14" height="14" viewBox="0 0 24 24" fill="none" '
    'stroke="currentColor" stroke-width="2" stroke-linecap="round" '
    'stroke-linejoin="round">'
)

ICONS: dict[str, str] = {
    "terminal": _SVG_OPEN
    + '<polyline points="4 17 10 11 4 5"/><line x1="12" y1="19" x2="20" y2="19"/></svg>',
    "search": _SVG_OPEN
    + '<circle cx="11" cy="11" r="8"/><line x1="21" y1="21" x2="16.65" y2="16.65"/></svg>',
    "edit": _SVG_OPEN
    + '<path d="M17 3a2.85 2.83 0 1 1 4 4L7.5 20.5 2 22l1.5-5.5Z"/></svg>',
    "file": _SVG_OPEN
    + '<path d="M15 2H6a2 2 0 0 0-2 2v16a2 2 0 0 0 2 2h12a2 2 0 0 0 2-2V7Z"/>'
    + '<path d="M14 2v4a2 2 0 0 0 2 2h4"/></svg>',
    "folder": _SVG_OPEN
    + '<path d="M20 20a2 2 0 0 0 2-2V8a2 2 0 0 0-2-2h-7.9a2 2 0 0 1-1.69-.9L9.6 3.9'
    + 'A2 2 0 0 0 7.93 3H4a2 2 0 0 0-2 2v13a2 2 0 0 0 2 2Z"/></svg>',
    "wrench": _SVG_OPEN
    + '<path d="M14.7 6.3a1 1 0 0 0 0 1.4l1.6 1.6a1 1 0 0 0 1.4 0l3.77-3.77a6 6 0 0 1'
    + "-7.94 7.94l-6.91 6.91a2.12 2.12 0 0 1-3-3l6.91-6.91a6 6 0 0 1 7.94-7.94"
    + 'l-3.76 3.76z"/></svg>',
    "bulb": _SVG_OPEN
    + '<path d="M15 14c.2-1 .7-1.7 1.5-2.5 1-.9 1.5-2.2 1.5-3.5A6 6 0 0 0 6 8'
    + 'c0 1 .2 2.2 1.5 3.5.7.7 1.3 1.5 1.5 2.5"/><path d="M9 18h6"/>'
    + '<path d="M10 22h4"/></svg>',
    "check": _SVG_OPEN + '<path d="M20 6 9 17l-5-5"/></svg>',
    "x": _SVG_OPEN + '<path d="M18 6 6 18"/><path d="m6 6 12 12"/></svg>',
}


def get_icon(name: str) -> str:
    """Return the inline SVG for an icon or tool category (wrench if unknown)."""
    return ICONS.get(name, ICONS["wrench"])


# -- Markdown -----------------------------------------------------------------


def _create_pygments_plugin() -> Any:
    """Create a mistune plugin that uses Pygments for code block syntax highlighting."""
    from pygments import highlight  # type: ignore[reportUnknownVariableType]
    from pygments.lexers import get_lexer_by_name, TextLexer  # type: ignore[reportUnknownVariableType]
    from pygments.util import ClassNotFound  # type: ignore[reportUnknownVariableType]

    def plugin_pygments(md: Any) -> None:
        original_render = md.renderer.block_code

        def block_code(code: str, info: Optional[str] = None) -> str:
            """Highlight fenced code that carries a language hint."""
            if not info:
                return original_render(code, info)
            lang = info.split()[0]
            try:
                lexer = get_lexer_by_name(lang, stripall=False)  # type: ignore[reportUnknownVariableType]
            except ClassNotFound:
                lexer = TextLexer()  # type: ignore[reportUnknownVariableType]
            formatter = HtmlFormatter(  # type: ignore[reportUnknownVariableType]
                linenos=False,
                cssclass="highlight",
                wrapcode=True,
            )
            with timing_stat("_pygments_timings"):
                return str(highlight(code, lexer, formatter))  # type: ignore[reportUnknownArgumentType]

        md.renderer.block_code = block_code

    return plugin_pygments


@functools.lru_cache(maxsize=1)
def _get_markdown_renderer() -> mistune.Markdown:
    """Get cached Mistune markdown renderer with Pygments syntax highlighting."""
    return mistune.create_markdown(
        plugins=[
            "strikethrough",
            "table",
            "url",
            "task_lists",
            _create_pygments_plugin(),
        ],
        escape=True,  # Raw HTML in transcript text is shown, never interpreted
        hard_wrap=True,
    )


def render_markdown(text: str) -> str:
    """Convert markdown text to HTML using mistune with Pygments syntax highlighting."""
    with timing_stat("_markdown_timings"):
        renderer = _get_markdown_renderer()
        return str(renderer(text))


# -- Collapsible Sections -----------------------------------------------------


def collapsible(css_class: str, summary_html: str, body_html: str) -> str:
    """Render a <details> section, collapsed by default."""
    return (
        f'<details class="{css_class}">'
        f"<summary>{summary_html}</summary>"
        f"{body_html}"
        f"</details>"
    )


# -- Pygments Styles ----------------------------------------------------------

PYGMENTS_STYLES: dict[str, str] = {
    "dark": "monokai",
    "light": "default",
    "minimal": "default",
}


@functools.lru_cache(maxsize=None)
def get_pygments_css(theme: str = DEFAULT_THEME) -> str:
    """Pygments style definitions scoped to .highlight for a theme."""
    style = PYGMENTS_STYLES.get(theme, PYGMENTS_STYLES[DEFAULT_THEME])
    formatter = HtmlFormatter(style=style)  # type: ignore[reportUnknownVariableType]
    return str(formatter.get_style_defs(".highlight"))  # type: ignore[reportUnknownArgumentType]


# -- Template Environment -----------------------------------------------------


@functools.lru_cache(maxsize=1)
def get_template_environment() -> Environment:
    """Get cached Jinja2 template environment for HTML rendering.

    Templates load from the package's templates directory with HTML
    auto-escaping; the .css/.js components are included verbatim.
    """
    templates_dir = Path(__file__).parent / "templates"
    return Environment(
        loader=FileSystemLoader(templates_dir),
        autoescape=select_autoescape(["html", "xml"]),
    )
