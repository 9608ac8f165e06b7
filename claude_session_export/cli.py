#!/usr/bin/env python3
"""CLI interface for claude-session-export."""

import logging
import sys
from pathlib import Path
from typing import Optional, cast

import click

from .converter import build_session, convert_transcript, load_transcript, render_transcript
from .models import DEFAULT_THEME, THEMES, Theme
from .renderer import SUPPORTED_FORMATS
from .renderer_timings import DEBUG_TIMING


def _configure_logging(debug: bool) -> None:
    if debug:
        level = logging.DEBUG
    elif DEBUG_TIMING:
        level = logging.INFO  # Timing reports are logged at INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


@click.command()
@click.argument("input_path", type=click.Path(path_type=Path))
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(list(SUPPORTED_FORMATS) + ["markdown", "text"]),
    default="html",
    help="Output format (default: html).",
)
@click.option(
    "-o",
    "--output",
    type=str,
    default=None,
    help="Output file path, or - for stdout (default: claude-<title>.<ext> beside the input file)",
)
@click.option(
    "--theme",
    type=click.Choice(list(THEMES)),
    default=DEFAULT_THEME,
    help="HTML color theme (default: dark).",
)
@click.option(
    "--strip-tools",
    is_flag=True,
    help="Only export message text: drop thinking, tool calls and tool results",
)
@click.option(
    "--title",
    type=str,
    default=None,
    help="Session title (default: first line of the first user message)",
)
@click.option(
    "--open-browser",
    is_flag=True,
    help="Open the generated file in the default application",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug logging and show full traceback on errors.",
)
def main(
    input_path: Path,
    output_format: str,
    output: Optional[str],
    theme: str,
    strip_tools: bool,
    title: Optional[str],
    open_browser: bool,
    debug: bool,
) -> None:
    """Export a conversation transcript JSONL file as HTML, Markdown, text or JSON.

    INPUT_PATH: Path to a transcript JSONL file.
    """
    _configure_logging(debug)

    try:
        if output == "-":
            messages = load_transcript(input_path)
            session = build_session(input_path, messages, title)
            document, _ = render_transcript(
                messages, session, output_format, cast(Theme, theme), strip_tools
            )
            click.echo(document, nl=False)
            return

        output_path = convert_transcript(
            input_path,
            output_format,
            Path(output) if output else None,
            theme=cast(Theme, theme),
            strip_tools=strip_tools,
            title=title,
        )
        click.echo(f"Successfully converted {input_path} to {output_path}")

        if open_browser:
            click.launch(str(output_path))

    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        if debug:
            import traceback

            traceback.print_exc()
        sys.exit(1)
    except Exception as e:
        click.echo(f"Error converting file: {e}", err=True)
        if debug:
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
