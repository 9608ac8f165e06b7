"""Unified diff generation for file-edit tool calls."""

import difflib
from enum import Enum


class DiffLineKind(str, Enum):
    """Classification of a single unified diff line."""

    HEADER = "header"
    HUNK = "hunk"
    ADD = "add"
    REMOVE = "remove"
    CONTEXT = "context"


def generate_unified_diff(old_string: str, new_string: str, file_path: str = "") -> str:
    """Generate a unified diff (3 lines of context, no timestamps).

    The same path is used for both sides. Returns an empty string when the
    two texts have the same lines.
    """
    old_lines = old_string.splitlines()
    new_lines = new_string.splitlines()
    diff = difflib.unified_diff(
        old_lines,
        new_lines,
        fromfile=file_path,
        tofile=file_path,
        n=3,
        lineterm="",
    )
    return "\n".join(diff)


def classify_diff_line(line: str) -> DiffLineKind:
    if line.startswith("@@"):
        return DiffLineKind.HUNK
    if line.startswith("+++") or line.startswith("---"):
        return DiffLineKind.HEADER
    if line.startswith("+"):
        return DiffLineKind.ADD
    if line.startswith("-"):
        return DiffLineKind.REMOVE
    return DiffLineKind.CONTEXT


def iter_diff_body(diff_text: str) -> list[tuple[DiffLineKind, str]]:
    """Classify every diff line, dropping the ---/+++ file header.

    Inside a hunk the first character decides, so a removed line that itself
    starts with "--" is still a removal.
    """
    lines: list[tuple[DiffLineKind, str]] = []
    in_hunk = False
    for line in diff_text.splitlines():
        if line.startswith("@@"):
            in_hunk = True
            lines.append((DiffLineKind.HUNK, line))
        elif not in_hunk:
            continue
        elif line.startswith("+"):
            lines.append((DiffLineKind.ADD, line))
        elif line.startswith("-"):
            lines.append((DiffLineKind.REMOVE, line))
        else:
            lines.append((DiffLineKind.CONTEXT, line))
    return lines


def count_diff_changes(diff_text: str) -> tuple[int, int]:
    """Count (added, removed) lines of a unified diff."""
    added = removed = 0
    for kind, _ in iter_diff_body(diff_text):
        if kind is DiffLineKind.ADD:
            added += 1
        elif kind is DiffLineKind.REMOVE:
            removed += 1
    return added, removed
