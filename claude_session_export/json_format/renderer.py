"""JSON renderer: re-serializes the transcript with session metadata."""

import json
from datetime import datetime, timezone
from typing import Any

from ..models import ConversationMessage, ExportContext
from ..renderer import Renderer


def _exported_at() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class JsonRenderer(Renderer):
    """JSON export.

    Messages are written as loaded, without sanitization or truncation.
    With strip_tools, block-list content keeps only text blocks; string
    content and summary entries are untouched.
    """

    content_type = "application/json"
    file_extension = "json"

    def _serialize_message(
        self, message: ConversationMessage, strip_tools: bool
    ) -> dict[str, Any]:
        data = message.model_dump(mode="json", exclude_unset=True)
        body = data.get("message")
        if strip_tools and isinstance(body, dict) and isinstance(body.get("content"), list):
            body["content"] = [
                block
                for block in body["content"]
                if isinstance(block, dict) and block.get("type") == "text"
            ]
        return data

    def generate(self, ctx: ExportContext) -> str:
        session = ctx.session
        document = {
            "exportedAt": _exported_at(),
            "session": {
                "id": session.id,
                "display": session.display,
                "project": session.project,
                "projectName": session.projectName,
                "timestamp": session.timestamp,
            },
            "messages": [
                self._serialize_message(message, ctx.strip_tools)
                for message in ctx.messages
            ],
        }
        return json.dumps(document, indent=2, ensure_ascii=False)
