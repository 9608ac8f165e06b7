"""Factory modules for creating typed objects from raw data."""

from .transcript_factory import (
    # Content block creation
    CONTENT_BLOCK_CREATORS,
    create_content_block,
    create_message_content,
    # Conversation message creation
    CONVERSATION_ENTRY_TYPES,
    create_conversation_message,
    is_conversation_entry,
)
from .tool_factory import (
    # Tool categories
    TOOL_CATEGORIES,
    get_tool_category,
    # Tool input and output creation
    TOOL_INPUT_RULES,
    create_tool_input,
    create_tool_output,
)
from .block_factory import (
    # Block walk
    build_tool_use_map,
    create_segments,
    create_tool_result_segment,
    stringify_tool_result,
)

__all__ = [
    "CONTENT_BLOCK_CREATORS",
    "create_content_block",
    "create_message_content",
    "CONVERSATION_ENTRY_TYPES",
    "create_conversation_message",
    "is_conversation_entry",
    "TOOL_CATEGORIES",
    "get_tool_category",
    "TOOL_INPUT_RULES",
    "create_tool_input",
    "create_tool_output",
    "build_tool_use_map",
    "create_segments",
    "create_tool_result_segment",
    "stringify_tool_result",
]
