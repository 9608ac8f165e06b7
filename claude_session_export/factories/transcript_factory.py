"""Factory for creating ConversationMessage and ContentBlock instances from raw data.

This module creates typed model instances from JSONL transcript data:
- ContentBlock models (Text, Thinking, ToolUse, ToolResult, Unknown)
- ConversationMessage for user, assistant and summary entries
"""

from typing import Any, Sequence, cast

from pydantic import BaseModel, ValidationError

from ..models import (
    ContentBlock,
    ConversationMessage,
    MessageType,
    TextBlock,
    ThinkingBlock,
    ToolResultBlock,
    ToolUseBlock,
    UnknownBlock,
)


# =============================================================================
# Content Block Registry
# =============================================================================

# Maps content type strings to their model classes
CONTENT_BLOCK_CREATORS: dict[str, type[BaseModel]] = {
    "text": TextBlock,
    "thinking": ThinkingBlock,
    "tool_use": ToolUseBlock,
    "tool_result": ToolResultBlock,
}

# Entry types that carry conversation content
CONVERSATION_ENTRY_TYPES: Sequence[str] = (
    MessageType.USER.value,
    MessageType.ASSISTANT.value,
    MessageType.SUMMARY.value,
)


# =============================================================================
# Content Block Creation
# =============================================================================


def create_content_block(item_data: dict[str, Any]) -> ContentBlock:
    """Create a ContentBlock from raw data using the registry.

    Unknown types, and known types whose fields do not validate, are kept
    as UnknownBlock so that nothing is lost for the JSON export.
    """
    model_class = CONTENT_BLOCK_CREATORS.get(str(item_data.get("type", "")))
    if model_class is not None:
        try:
            return cast(ContentBlock, model_class.model_validate(item_data))
        except ValidationError:
            pass
    data = dict(item_data)
    data["type"] = str(data.get("type", ""))
    return UnknownBlock.model_validate(data)


def create_message_content(content_data: Any) -> Any:
    """Create message content: strings stay strings, lists become blocks.

    Non-dict list items (e.g. raw strings) become TextBlock items.
    """
    if content_data is None or isinstance(content_data, str):
        return content_data or ""
    if isinstance(content_data, list):
        result: list[ContentBlock] = []
        for item in cast(list[Any], content_data):
            if isinstance(item, dict):
                result.append(create_content_block(cast(dict[str, Any], item)))
            else:
                result.append(TextBlock(type="text", text=str(item)))
        return result
    return str(content_data)


# =============================================================================
# Conversation Message Creation
# =============================================================================


def is_conversation_entry(data: dict[str, Any]) -> bool:
    return data.get("type") in CONVERSATION_ENTRY_TYPES


def create_conversation_message(data: dict[str, Any]) -> ConversationMessage:
    """Create a ConversationMessage from a JSON dictionary.

    Args:
        data: Dictionary parsed from one JSONL line

    Returns:
        The validated message; unknown fields are preserved

    Raises:
        ValueError: If the entry is not a user, assistant or summary entry
        pydantic.ValidationError: If known fields have the wrong shape
    """
    entry_type = data.get("type")
    if not is_conversation_entry(data):
        raise ValueError(f"Unknown transcript entry type: {entry_type}")

    data_copy = data.copy()
    message = data_copy.get("message")
    if isinstance(message, dict) and "content" in message:
        message_copy = cast(dict[str, Any], message).copy()
        message_copy["content"] = create_message_content(message_copy["content"])
        data_copy["message"] = message_copy
    return ConversationMessage.model_validate(data_copy)
