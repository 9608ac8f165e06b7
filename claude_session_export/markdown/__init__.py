"""Markdown rendering for conversation transcripts."""

from .renderer import MarkdownRenderer

__all__ = ["MarkdownRenderer"]
