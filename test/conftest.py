"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from claude_session_export.factories import create_conversation_message
from claude_session_export.models import ConversationMessage, ExportContext, Session


def make_message(
    type: str,
    content: Any,
    uuid: str = "",
    model: str | None = None,
    timestamp: str | None = None,
) -> ConversationMessage:
    """Build a user/assistant message the way the loader does."""
    body: dict[str, Any] = {"role": type, "content": content}
    if model:
        body["model"] = model
    data: dict[str, Any] = {"type": type, "message": body}
    if uuid:
        data["uuid"] = uuid
    if timestamp:
        data["timestamp"] = timestamp
    return create_conversation_message(data)


def make_summary(text: str) -> ConversationMessage:
    return create_conversation_message({"type": "summary", "summary": text})


@pytest.fixture
def session() -> Session:
    return Session(
        id="session-1",
        display="List files",
        project="/home/dev/acme",
        projectName="acme",
        timestamp=1700000000000,
    )


@pytest.fixture
def glob_messages() -> list[ConversationMessage]:
    """A user request followed by an assistant Glob call and its result."""
    return [
        make_message("user", [{"type": "text", "text": "List files"}], uuid="u1"),
        make_message(
            "assistant",
            [
                {
                    "type": "tool_use",
                    "id": "toolu_1",
                    "name": "Glob",
                    "input": {"pattern": "*.ts"},
                },
                {
                    "type": "tool_result",
                    "tool_use_id": "toolu_1",
                    "content": "a.ts\nb.ts",
                },
            ],
            uuid="a1",
        ),
    ]


@pytest.fixture
def mixed_messages() -> list[ConversationMessage]:
    """Messages touching every block kind, plus a summary."""
    return [
        make_summary("Refactored the parser"),
        make_message("user", "Please fix the parser", uuid="u1"),
        make_message(
            "assistant",
            [
                {"type": "thinking", "thinking": "Look at parse() first."},
                {"type": "text", "text": "Running the tests."},
                {
                    "type": "tool_use",
                    "id": "toolu_bash",
                    "name": "Bash",
                    "input": {"command": "pytest -q"},
                },
                {
                    "type": "tool_result",
                    "tool_use_id": "toolu_bash",
                    "content": "line one\nline two\nline three",
                },
                {
                    "type": "tool_use",
                    "id": "toolu_edit",
                    "name": "Edit",
                    "input": {
                        "file_path": "src/parser.py",
                        "old_string": "x = 1",
                        "new_string": "x = 2",
                    },
                },
                {"type": "text", "text": "Done."},
            ],
            uuid="a1",
            model="claude-sonnet",
            timestamp="2024-05-01T12:30:00Z",
        ),
    ]


@pytest.fixture
def make_context(
    session: Session,
) -> Callable[..., ExportContext]:
    def _make(
        messages: list[ConversationMessage], **kwargs: Any
    ) -> ExportContext:
        return ExportContext(messages=messages, session=session, **kwargs)

    return _make


@pytest.fixture
def write_jsonl(tmp_path: Path) -> Callable[..., Path]:
    """Write entries (dicts or raw strings) as a JSONL file."""

    def _write(entries: list[Any], name: str = "transcript.jsonl") -> Path:
        path = tmp_path / name
        lines = [e if isinstance(e, str) else json.dumps(e) for e in entries]
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_entries() -> list[dict[str, Any]]:
    """Raw JSONL entries for a short session."""
    return [
        {"type": "file-history-snapshot", "messageId": "m0"},
        {
            "type": "user",
            "uuid": "user-1",
            "parentUuid": None,
            "timestamp": "2024-01-01T10:00:00Z",
            "sessionId": "abc-123",
            "cwd": "/home/dev/widgets",
            "message": {
                "role": "user",
                "content": "<command-name>/clear</command-name>Fix bug #42: crash!!\nDetails follow",
            },
        },
        {
            "type": "assistant",
            "uuid": "assistant-1",
            "parentUuid": "user-1",
            "timestamp": "2024-01-01T10:00:05Z",
            "sessionId": "abc-123",
            "cwd": "/home/dev/widgets",
            "message": {
                "role": "assistant",
                "model": "claude-sonnet",
                "content": [{"type": "text", "text": "On it."}],
            },
        },
        {"type": "summary", "summary": "Crash fix", "leafUuid": "assistant-1"},
    ]


@pytest.fixture
def message() -> Callable[..., ConversationMessage]:
    """Factory fixture wrapping make_message."""
    return make_message


@pytest.fixture
def summary() -> Callable[[str], ConversationMessage]:
    return make_summary
