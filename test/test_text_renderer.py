"""Tests for the plain text exporter."""

from claude_session_export.models import (
    BashOutput,
    EditInput,
    GlobOutput,
    GrepOutput,
    RawToolInput,
    ReadOutput,
    SearchInput,
)
from claude_session_export.text import TextRenderer


class TestTextDocument:
    def test_glob_conversation(self, glob_messages, make_context):
        """A Glob call renders as tool header, pattern and file list."""
        output = TextRenderer().generate(make_context(glob_messages))

        assert output == "\n".join(
            [
                "Session: List files",
                "Project: acme (/home/dev/acme)",
                "Date: 2023-11-14 22:13:20",
                "ID: session-1",
                "",
                "=" * 60,
                "",
                "=== User ===",
                "List files",
                "",
                "=== Assistant ===",
                "[Tool: Glob]",
                "pattern: *.ts",
                "",
                "[Result]",
                "(2 files)",
                "a.ts",
                "b.ts",
                "",
            ]
        )

    def test_mixed_conversation(self, mixed_messages, make_context):
        output = TextRenderer().generate(make_context(mixed_messages))

        assert "=== Summary ===\nRefactored the parser\n" in output
        assert "=== User ===\nPlease fix the parser\n" in output
        assert "=== Assistant (claude-sonnet) 2024-05-01 12:30:00 ===" in output
        assert "[Thinking]\nLook at parse() first.\n[/Thinking]" in output
        assert "[Tool: Bash]\npytest -q" in output
        assert "[Result]\n(3 lines)\nline one\nline two\nline three" in output
        assert "[Tool: Edit]\nsrc/parser.py\n--- src/parser.py" in output
        assert "-x = 1\n+x = 2" in output

    def test_summary_comes_before_messages(self, mixed_messages, make_context):
        output = TextRenderer().generate(make_context(mixed_messages))
        assert output.index("=== Summary ===") < output.index("=== User ===")

    def test_blocks_separated_by_blank_line(self, mixed_messages, make_context):
        output = TextRenderer().generate(make_context(mixed_messages))
        assert "[/Thinking]\n\nRunning the tests.\n\n[Tool: Bash]" in output

    def test_strip_tools(self, mixed_messages, make_context):
        output = TextRenderer().generate(make_context(mixed_messages, strip_tools=True))

        assert "[Tool:" not in output
        assert "[Result]" not in output
        assert "[Thinking]" not in output
        assert "Running the tests.\n\nDone." in output
        assert "=== Summary ===" in output

    def test_message_with_only_tools_skipped_when_stripped(
        self, glob_messages, make_context
    ):
        output = TextRenderer().generate(make_context(glob_messages, strip_tools=True))
        assert "=== Assistant" not in output
        assert "=== User ===" in output

    def test_snapshot_entries_never_render(self, message, make_context):
        output = TextRenderer().generate(make_context([message("user", "")]))
        assert "=== User ===" not in output

    def test_error_result(self, message, make_context):
        messages = [
            message(
                "user",
                [
                    {
                        "type": "tool_result",
                        "tool_use_id": "t9",
                        "content": "permission denied",
                        "is_error": True,
                    }
                ],
            )
        ]
        output = TextRenderer().generate(make_context(messages))
        assert "[Error]\npermission denied" in output

    def test_out_of_range_session_timestamp(self, glob_messages, make_context, session):
        """A session date outside the datetime range is shown as the raw number."""
        session.timestamp = 8_640_000_000_000_000
        output = TextRenderer().generate(make_context(glob_messages))
        assert "Date: 8640000000000000\n" in output


class TestTextToolFormatters:
    def test_search_with_path(self):
        assert (
            TextRenderer().format_SearchInput(SearchInput(pattern="TODO", path="src"))
            == "pattern: TODO in src"
        )

    def test_edit_without_changes(self):
        edit = EditInput(file_path="a.py", old_string="same", new_string="same")
        assert TextRenderer().format_EditInput(edit) == "a.py"

    def test_raw_input_json(self):
        assert (
            TextRenderer().format_RawToolInput(RawToolInput(params={"url": "x"}))
            == '{\n  "url": "x"\n}'
        )

    def test_empty_outputs(self):
        renderer = TextRenderer()
        assert renderer.format_BashOutput(BashOutput(content="")) == "(no output)"
        assert renderer.format_GlobOutput(GlobOutput(content="")) == "(no files found)"
        assert renderer.format_GrepOutput(GrepOutput(content="")) == "(no matches)"

    def test_read_output(self):
        output = ReadOutput(content="a\nb", file_path="f.py", line_count=2)
        assert TextRenderer().format_ReadOutput(output) == "(2 lines)\na\nb"

