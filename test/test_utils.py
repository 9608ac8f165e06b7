#!/usr/bin/env python3
"""Tests for timestamp, project name and filename helpers."""

import pytest

from claude_session_export.models import Session
from claude_session_export.parser import (
    extract_text_content,
    parse_timestamp,
    timestamp_to_millis,
)
from claude_session_export.factories import create_message_content
from claude_session_export.utils import (
    export_filename,
    format_epoch_millis,
    format_timestamp,
    get_project_name,
    safe_filename_stem,
)


class TestSafeFilenameStem:
    """Tests for filesystem-safe export names."""

    def test_punctuation_removed(self):
        assert safe_filename_stem("Fix bug #42: crash!!") == "Fix-bug-42-crash"

    def test_whitespace_runs_collapse(self):
        assert safe_filename_stem("a   b  c") == "a-b-c"

    def test_tabs_removed_before_collapsing(self):
        assert safe_filename_stem("a   b\t\tc") == "a-bc"

    def test_keeps_dash_and_underscore(self):
        assert safe_filename_stem("my_file-name") == "my_file-name"

    def test_non_ascii_removed(self):
        assert safe_filename_stem("café ünïcode") == "caf-ncode"

    @pytest.mark.parametrize("display", ["", "!!!", "日本語"])
    def test_empty_falls_back(self, display):
        assert safe_filename_stem(display) == "conversation"

    def test_cut_to_sixty_characters(self):
        stem = safe_filename_stem("word " * 30)
        assert len(stem) == 60
        assert stem.startswith("word-word-")


class TestExportFilename:
    def test_filename(self):
        session = Session(id="s", display="Fix bug #42: crash!!")
        assert export_filename(session, "html") == "claude-Fix-bug-42-crash.html"

    def test_empty_display(self):
        assert export_filename(Session(id="s"), "md") == "claude-conversation.md"


class TestTimestamps:
    def test_format_timestamp_utc(self):
        assert format_timestamp("2024-05-01T12:30:00Z") == "2024-05-01 12:30:00"

    def test_format_timestamp_offset_converted(self):
        assert format_timestamp("2024-05-01T14:30:00+02:00") == "2024-05-01 12:30:00"

    def test_format_timestamp_invalid_unchanged(self):
        assert format_timestamp("yesterday") == "yesterday"
        assert format_timestamp(None) == ""

    def test_format_epoch_millis(self):
        assert format_epoch_millis(1700000000000) == "2023-11-14 22:13:20"

    def test_format_epoch_millis_out_of_range(self):
        assert format_epoch_millis(8_640_000_000_000_000) == "8640000000000000"

    def test_timestamp_to_millis(self):
        assert timestamp_to_millis("2023-11-14T22:13:20Z") == 1700000000000
        assert timestamp_to_millis("2023-11-14T22:13:20") == 1700000000000
        assert timestamp_to_millis("garbage") == 0
        assert timestamp_to_millis(None) == 0

    def test_parse_timestamp(self):
        assert parse_timestamp("2024-01-01T00:00:00Z") is not None
        assert parse_timestamp("nope") is None


class TestProjectName:
    @pytest.mark.parametrize(
        "path,name",
        [
            ("/home/dev/widgets", "widgets"),
            ("/home/dev/widgets/", "widgets"),
            ("C:\\Users\\dev\\app", "app"),
            ("", ""),
        ],
    )
    def test_last_segment(self, path, name):
        assert get_project_name(path) == name


class TestExtractTextContent:
    def test_string(self):
        assert extract_text_content("hello") == "hello"

    def test_blocks_join_text_only(self):
        content = create_message_content(
            [
                {"type": "text", "text": "one"},
                {"type": "tool_use", "id": "t", "name": "Bash", "input": {}},
                {"type": "text", "text": "two"},
            ]
        )
        assert extract_text_content(content) == "one\ntwo"

    def test_empty(self):
        assert extract_text_content(None) == ""
