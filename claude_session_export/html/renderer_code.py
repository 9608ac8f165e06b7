"""Code rendering utilities for syntax highlighting and diffs.

Source code is highlighted with Pygments (lexer chosen from the file name);
unified diffs are rendered line by line with one span class per line kind.
"""

import fnmatch
import os
from typing import Optional

from pygments import highlight  # type: ignore[reportUnknownVariableType]
from pygments.formatters import HtmlFormatter  # type: ignore[reportUnknownVariableType]
from pygments.lexers import TextLexer, get_all_lexers, get_lexer_by_name  # type: ignore[reportUnknownVariableType]
from pygments.util import ClassNotFound  # type: ignore[reportUnknownVariableType]

from ..diff import DiffLineKind, iter_diff_body
from ..renderer_timings import timing_stat
from ..sanitize import escape_html

# Lazily built: filename pattern -> lexer alias, simple extension -> lexer alias
_pattern_cache: Optional[dict[str, str]] = None
_extension_cache: Optional[dict[str, str]] = None

DIFF_LINE_CLASSES: dict[DiffLineKind, str] = {
    DiffLineKind.ADD: "diff-add",
    DiffLineKind.REMOVE: "diff-del",
    DiffLineKind.HUNK: "diff-hunk",
}


def _init_lexer_caches() -> tuple[dict[str, str], dict[str, str]]:
    """Build the lexer pattern and extension caches on first use."""
    global _pattern_cache, _extension_cache

    if _pattern_cache is not None and _extension_cache is not None:
        return _pattern_cache, _extension_cache

    pattern_cache: dict[str, str] = {}
    extension_cache: dict[str, str] = {}

    # get_all_lexers() yields (name, aliases, patterns, mimetypes)
    for _name, aliases, patterns, _mimetypes in get_all_lexers():  # type: ignore[reportUnknownVariableType]
        if not (aliases and patterns):
            continue
        lexer_alias = aliases[0]
        for pattern in patterns:
            pattern_lower = pattern.lower()
            pattern_cache.setdefault(pattern_lower, lexer_alias)
            suffix = pattern_lower[2:]
            if pattern_lower.startswith("*.") and "*" not in suffix and "?" not in suffix:
                extension_cache.setdefault(suffix, lexer_alias)

    _pattern_cache = pattern_cache
    _extension_cache = extension_cache
    return pattern_cache, extension_cache


def lexer_alias_for_path(file_path: str) -> Optional[str]:
    """Return the Pygments lexer alias for a file path, if any matches."""
    pattern_cache, extension_cache = _init_lexer_caches()
    basename = os.path.basename(file_path).lower()

    if "." in basename:
        alias = extension_cache.get(basename.rsplit(".", 1)[-1])
        if alias:
            return alias

    for pattern, alias in pattern_cache.items():
        if fnmatch.fnmatch(basename, pattern):
            return alias
    return None


def highlight_code_with_pygments(
    code: str, file_path: str, show_linenos: bool = True, linenostart: int = 1
) -> str:
    """Highlight code using Pygments with a lexer picked from the file path.

    Args:
        code: The source code to highlight
        file_path: Path used to pick the lexer (plain text when unknown)
        show_linenos: Whether to show line numbers (default: True)
        linenostart: Starting line number for display (default: 1)

    Returns:
        HTML string with syntax-highlighted code
    """
    lexer_alias = lexer_alias_for_path(file_path) if file_path else None
    try:
        # stripall=False keeps leading indentation
        lexer = (
            get_lexer_by_name(lexer_alias, stripall=False)  # type: ignore[reportUnknownVariableType]
            if lexer_alias
            else TextLexer()  # type: ignore[reportUnknownVariableType]
        )
    except ClassNotFound:
        lexer = TextLexer()  # type: ignore[reportUnknownVariableType]

    formatter = HtmlFormatter(  # type: ignore[reportUnknownVariableType]
        linenos="table" if show_linenos else False,
        cssclass="highlight",
        wrapcode=True,
        linenostart=linenostart,
    )

    with timing_stat("_pygments_timings"):
        return str(highlight(code, lexer, formatter))  # type: ignore[reportUnknownArgumentType]


def render_unified_diff(diff_text: str) -> str:
    """Render a unified diff body as HTML lines (file header dropped).

    Added, removed and hunk-header lines get a span with diff-add, diff-del
    or diff-hunk; context lines are only escaped.
    """
    rendered: list[str] = []
    for kind, line in iter_diff_body(diff_text):
        escaped = escape_html(line)
        css_class = DIFF_LINE_CLASSES.get(kind)
        rendered.append(
            f'<span class="{css_class}">{escaped}</span>' if css_class else escaped
        )
    return "\n".join(rendered)
