"""Plain text rendering for conversation transcripts."""

from .renderer import TextRenderer

__all__ = ["TextRenderer"]
