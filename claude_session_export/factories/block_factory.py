"""Factory turning message content blocks into format-neutral segments.

This is the single block walk shared by every text-producing format. It
applies the filtering, sanitization and truncation rules once; renderers
only decide how each resulting segment looks.
"""

import json
from typing import Any, Optional, Sequence

from ..models import (
    ContentBlock,
    Segment,
    TextBlock,
    TextSegment,
    ThinkingBlock,
    ThinkingSegment,
    ToolResultBlock,
    ToolResultSegment,
    ToolUseBlock,
    ToolUseSegment,
)
from ..sanitize import (
    THINKING_MAX_LENGTH,
    TOOL_RESULT_MAX_LENGTH,
    sanitize_text,
    truncate_text,
)
from .tool_factory import create_tool_input, create_tool_output, get_tool_category


def build_tool_use_map(
    blocks: Sequence[ContentBlock],
) -> dict[str, tuple[int, ToolUseBlock]]:
    """Map tool_use id to (block index, block) for one message.

    The first occurrence of an id wins.
    """
    tool_uses: dict[str, tuple[int, ToolUseBlock]] = {}
    for index, block in enumerate(blocks):
        if isinstance(block, ToolUseBlock) and block.id not in tool_uses:
            tool_uses[block.id] = (index, block)
    return tool_uses


def stringify_tool_result(content: Any) -> str:
    """Tool result content as text: strings as-is, anything else as JSON."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    return json.dumps(content, indent=2, ensure_ascii=False)


def _resolve_tool_use(
    tool_uses: dict[str, tuple[int, ToolUseBlock]], tool_use_id: str, index: int
) -> Optional[ToolUseBlock]:
    entry = tool_uses.get(tool_use_id)
    if entry is None or entry[0] >= index:
        return None
    return entry[1]


def create_tool_result_segment(
    block: ToolResultBlock, tool_use: Optional[ToolUseBlock]
) -> ToolResultSegment:
    full_content = sanitize_text(stringify_tool_result(block.content))
    content, is_truncated = truncate_text(full_content, TOOL_RESULT_MAX_LENGTH)
    tool_name = tool_use.name if tool_use is not None else ""
    tool_input = (
        tool_use.input
        if tool_use is not None and isinstance(tool_use.input, dict)
        else None
    )
    return ToolResultSegment(
        tool_use_id=block.tool_use_id,
        tool_name=tool_name,
        output=create_tool_output(tool_name, content, full_content, tool_input),
        is_error=bool(block.is_error),
        is_truncated=is_truncated,
    )


def create_segments(
    blocks: Sequence[ContentBlock], role: str, strip_tools: bool = False
) -> list[Segment]:
    """Walk content blocks in order and build one segment per visible block.

    Args:
        blocks: Message content blocks
        role: Message role ("user" or "assistant")
        strip_tools: Keep only text blocks

    Returns:
        Segments in block order. Empty text blocks, empty thinking blocks and
        unknown block types produce nothing.
    """
    tool_uses = build_tool_use_map(blocks)
    segments: list[Segment] = []

    for index, block in enumerate(blocks):
        if strip_tools and not isinstance(block, TextBlock):
            continue

        if isinstance(block, TextBlock):
            text = sanitize_text(block.text)
            if text:
                segments.append(TextSegment(text=text, role=role))

        elif isinstance(block, ThinkingBlock):
            if not block.thinking:
                continue
            thinking, is_truncated = truncate_text(block.thinking, THINKING_MAX_LENGTH)
            segments.append(
                ThinkingSegment(thinking=thinking, is_truncated=is_truncated)
            )

        elif isinstance(block, ToolUseBlock):
            tool_input = None
            if isinstance(block.input, dict) and block.input:
                tool_input = create_tool_input(block.name, block.input)
            segments.append(
                ToolUseSegment(
                    tool_use_id=block.id,
                    tool_name=block.name,
                    category=get_tool_category(block.name),
                    input=tool_input,
                )
            )

        elif isinstance(block, ToolResultBlock):
            tool_use = _resolve_tool_use(tool_uses, block.tool_use_id, index)
            segments.append(create_tool_result_segment(block, tool_use))

    return segments
