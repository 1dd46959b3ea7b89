"""Unit tests for the snapshot filename schema."""

import pytest

from conversation_archive.operations.filenames import (
    format_snapshot_filename,
    parse_snapshot_filename,
    sanitize_title,
    truncate_utf8,
)


class TestSanitizeTitle:
    def test_strips_illegal_characters(self):
        assert sanitize_title('a/b\\c:d*e?f"g<h>i|j\nk') == "abcdefghijk"

    def test_strips_control_characters(self):
        assert sanitize_title("tab\there\r\n") == "tabhere"

    def test_keeps_separator_like_text(self):
        """Titles may contain the separator; the id prefix still parses."""
        assert sanitize_title("Part 1 - Intro") == "Part 1 - Intro"

    @pytest.mark.parametrize(
        "title",
        [
            "日本語のタイトル" * 20,
            "Émoji 🎉 party " * 15,
            "a" * 99 + "é" * 10,
            "ß" * 51,
        ],
    )
    def test_truncation_respects_byte_limit(self, title):
        """Truncated titles fit in 100 bytes and never split a character."""
        sanitized = sanitize_title(title, max_bytes=100)

        encoded = sanitized.encode("utf-8")
        assert len(encoded) <= 100
        assert encoded.decode("utf-8") == sanitized
        assert title.startswith(sanitized)

    def test_truncation_drops_partial_character(self):
        # "é" is two bytes, the 100-byte cut lands in its middle
        assert truncate_utf8("a" * 99 + "é", 100) == "a" * 99

    def test_short_titles_untouched(self):
        assert truncate_utf8("short", 100) == "short"


class TestFilenameRoundTrip:
    @pytest.mark.parametrize(
        "document_id",
        ["abc123", "a-b_c", "ab-", "-", "X" * 40],
    )
    @pytest.mark.parametrize(
        "title",
        ["", "Plain", "With - separator - inside", "Trailing.html", "日本語 / title: x"],
    )
    def test_parse_recovers_id(self, document_id, title):
        filename = format_snapshot_filename(document_id, title)

        parsed = parse_snapshot_filename(filename)

        assert parsed is not None
        assert parsed[0] == document_id
        assert filename.endswith(".html")

    def test_format(self):
        assert format_snapshot_filename("abc123", "My: chat?") == "abc123 - My chat.html"

    def test_rejects_id_outside_charset(self):
        with pytest.raises(ValueError):
            format_snapshot_filename("abc 123", "title")

    @pytest.mark.parametrize(
        "filename",
        ["notes.txt", "abc123.html", "abc123 - title.htm", "abc 123 - title.html", ".gitkeep"],
    )
    def test_parse_ignores_other_files(self, filename):
        assert parse_snapshot_filename(filename) is None

    def test_parse_splits_on_first_separator(self):
        assert parse_snapshot_filename("abc - def - ghi.html") == ("abc", "def - ghi")
