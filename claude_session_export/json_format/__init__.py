"""JSON export for conversation transcripts."""

from .renderer import JsonRenderer

__all__ = ["JsonRenderer"]
