"""Export conversation transcripts as HTML, Markdown, plain text or JSON."""

__version__ = "0.4.0"
