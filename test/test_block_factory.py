"""Tests for the shared content block walk."""

from claude_session_export.factories import (
    create_message_content,
    create_segments,
    stringify_tool_result,
)
from claude_session_export.models import (
    BashInput,
    BashOutput,
    GlobOutput,
    RawToolInput,
    SearchInput,
    TextSegment,
    ThinkingSegment,
    ToolResultSegment,
    ToolResultText,
    ToolUseSegment,
)
from claude_session_export.text import TextRenderer


def blocks(*items):
    return create_message_content(list(items))


def tool_use(tool_id, name, tool_input):
    return {"type": "tool_use", "id": tool_id, "name": name, "input": tool_input}


def tool_result(tool_id, content, is_error=None):
    data = {"type": "tool_result", "tool_use_id": tool_id, "content": content}
    if is_error is not None:
        data["is_error"] = is_error
    return data


class TestCreateSegments:
    def test_segments_follow_block_order(self):
        segments = create_segments(
            blocks(
                {"type": "thinking", "thinking": "hmm"},
                {"type": "text", "text": "Hello"},
                tool_use("t1", "Glob", {"pattern": "*.ts"}),
                tool_result("t1", "a.ts\nb.ts"),
            ),
            "assistant",
        )
        assert [type(s) for s in segments] == [
            ThinkingSegment,
            TextSegment,
            ToolUseSegment,
            ToolResultSegment,
        ]

    def test_text_is_sanitized_and_empty_text_skipped(self):
        segments = create_segments(
            blocks(
                {"type": "text", "text": "<command-name>/clear</command-name>"},
                {"type": "text", "text": "  "},
                {"type": "text", "text": "<command-args>x</command-args>Keep me"},
            ),
            "user",
        )
        assert segments == [TextSegment(text="Keep me", role="user")]

    def test_empty_thinking_skipped(self):
        assert create_segments(blocks({"type": "thinking", "thinking": ""}), "assistant") == []

    def test_long_thinking_truncated(self):
        (segment,) = create_segments(
            blocks({"type": "thinking", "thinking": "t" * 6000}), "assistant"
        )
        assert isinstance(segment, ThinkingSegment)
        assert segment.is_truncated is True
        assert segment.thinking == "t" * 5000 + "..."

    def test_unknown_blocks_ignored(self):
        segments = create_segments(
            blocks({"type": "image", "source": {"data": "..."}}), "user"
        )
        assert segments == []

    def test_strip_tools_keeps_only_text(self):
        segments = create_segments(
            blocks(
                {"type": "thinking", "thinking": "hmm"},
                {"type": "text", "text": "Visible"},
                tool_use("t1", "Bash", {"command": "ls"}),
                tool_result("t1", "out"),
            ),
            "assistant",
            strip_tools=True,
        )
        assert segments == [TextSegment(text="Visible", role="assistant")]

    def test_tool_use_typed_input(self):
        (segment,) = create_segments(
            blocks(tool_use("t1", "Bash", {"command": "ls"})), "assistant"
        )
        assert isinstance(segment, ToolUseSegment)
        assert segment.category == "terminal"
        assert segment.input == BashInput(command="ls")

    def test_tool_use_without_input(self):
        """Empty or missing input produces no input section."""
        segments = create_segments(
            blocks(tool_use("t1", "Bash", {}), tool_use("t2", "Task", None)),
            "assistant",
        )
        assert [s.input for s in segments] == [None, None]

    def test_tool_use_unknown_tool_raw_input(self):
        (segment,) = create_segments(
            blocks(tool_use("t1", "WebSearch", {"query": "python"})), "assistant"
        )
        assert segment.input == RawToolInput(params={"query": "python"})
        assert segment.category == "wrench"

    def test_tool_result_resolves_earlier_tool_use(self):
        segments = create_segments(
            blocks(
                tool_use("t1", "Glob", {"pattern": "*.ts"}),
                tool_result("t1", "a.ts\nb.ts"),
            ),
            "assistant",
        )
        result = segments[1]
        assert isinstance(result, ToolResultSegment)
        assert result.tool_name == "Glob"
        assert isinstance(result.output, GlobOutput)
        assert result.output.files == ["a.ts", "b.ts"]
        assert segments[0].input == SearchInput(pattern="*.ts")

    def test_tool_result_before_tool_use_unresolved(self):
        """Only tool_use blocks earlier in the message give the result a name."""
        segments = create_segments(
            blocks(
                tool_result("t1", "a.ts"),
                tool_use("t1", "Glob", {"pattern": "*.ts"}),
            ),
            "assistant",
        )
        result = segments[0]
        assert isinstance(result, ToolResultSegment)
        assert result.tool_name == ""
        assert type(result.output) is ToolResultText

    def test_tool_result_without_matching_use(self):
        (result,) = create_segments(blocks(tool_result("missing", "ok")), "user")
        assert result.tool_name == ""
        assert result.label == "Result"

    def test_error_result(self):
        (result,) = create_segments(
            blocks(tool_result("t1", "boom", is_error=True)), "user"
        )
        assert result.is_error is True
        assert result.label == "Error"

    def test_bash_line_count_from_untruncated_result(self):
        output = "\n".join("x" * 99 for _ in range(50))
        segments = create_segments(
            blocks(tool_use("t1", "Bash", {"command": "seq"}), tool_result("t1", output)),
            "assistant",
        )
        result = segments[1]
        assert result.is_truncated is True
        assert isinstance(result.output, BashOutput)
        assert result.output.line_count == 50
        assert len(result.output.content) == 2003

    def test_result_text_sanitized(self):
        (result,) = create_segments(
            blocks(
                tool_result("t1", "ok<system-reminder>hidden</system-reminder>")
            ),
            "user",
        )
        assert result.output.content == "ok"

    def test_structured_result_stringified(self):
        content = [{"type": "text", "text": "hi"}]
        (result,) = create_segments(blocks(tool_result("t1", content)), "user")
        assert result.output.content == stringify_tool_result(content)


class TestStringifyToolResult:
    def test_none(self):
        assert stringify_tool_result(None) == ""

    def test_string(self):
        assert stringify_tool_result("plain") == "plain"

    def test_structured_json(self):
        assert stringify_tool_result({"k": "ü"}) == '{\n  "k": "ü"\n}'


class TestLenientToolFields:
    """Tool blocks with loosely typed ids and names still render."""

    def test_integer_id_and_null_name(self):
        segments = create_segments(
            blocks(
                {"type": "tool_use", "id": 7, "name": None, "input": {"command": "ls"}},
                tool_result(7, "out"),
            ),
            "assistant",
        )
        tool, result = segments
        assert isinstance(tool, ToolUseSegment)
        assert (tool.tool_use_id, tool.tool_name) == ("7", "")
        assert isinstance(result, ToolResultSegment)
        assert result.tool_use_id == "7"

    def test_integer_id_resolves_tool_name(self):
        segments = create_segments(
            blocks(
                {"type": "tool_use", "id": 7, "name": "Bash", "input": {"command": "ls"}},
                tool_result(7, "a\nb"),
            ),
            "assistant",
        )
        assert segments[1].tool_name == "Bash"
        assert isinstance(segments[1].output, BashOutput)

    def test_null_tool_use_id_error_result(self):
        (result,) = create_segments(
            blocks({"type": "tool_result", "tool_use_id": None, "content": "boom", "is_error": 1}),
            "user",
        )
        assert isinstance(result, ToolResultSegment)
        assert result.tool_use_id == ""
        assert result.is_error is True
        assert result.output.content == "boom"

    def test_text_export_keeps_loosely_typed_tool_call(self, message, make_context):
        messages = [
            message(
                "assistant",
                [{"type": "tool_use", "id": 7, "name": "Bash", "input": {"command": "ls"}}],
            ),
            message(
                "user",
                [
                    {
                        "type": "tool_result",
                        "tool_use_id": None,
                        "content": "boom",
                        "is_error": True,
                    }
                ],
            ),
        ]
        output = TextRenderer().generate(make_context(messages))

        assert "=== Assistant ===\n[Tool: Bash]\nls" in output
        assert "=== User ===\n[Error]\nboom" in output
