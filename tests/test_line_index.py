"""
Unit tests for offset/position conversion.
"""
import pytest

from polski_ls.schemas.lsp import Position
from polski_ls.utils.line_index import DocumentSnapshot, LineIndex, utf16_length, utf16_width


class TestUtf16Width:
    """Tests for UTF-16 unit counting."""

    def test_basic_plane_is_one_unit(self):
        assert utf16_width("a") == 1
        assert utf16_width("ż") == 1

    def test_astral_codepoint_is_two_units(self):
        assert utf16_width("😀") == 2

    def test_string_length(self):
        assert utf16_length("żółw😀") == 6
        assert utf16_length("") == 0


class TestLineIndex:
    """Tests for LineIndex construction and conversions."""

    def test_line_starts(self):
        index = LineIndex("hello\nworld\ntest")
        assert index.line_starts == [0, 6, 12]
        assert index.line_count == 3

    def test_empty_text_has_one_line(self):
        index = LineIndex("")
        assert index.line_starts == [0]

    def test_trailing_newline_starts_empty_line(self):
        index = LineIndex("abc\n")
        assert index.line_starts == [0, 4]

    def test_single_line(self):
        text = "hello world"
        index = LineIndex(text)
        assert index.position_to_offset(text, Position(line=0, character=6)) == 6

    def test_multiple_lines(self):
        text = "hello\nworld\ntest"
        index = LineIndex(text)
        # Line 1, char 2 -> offset 8 (after "hello\nwo")
        assert index.position_to_offset(text, Position(line=1, character=2)) == 8

    def test_offset_to_position(self):
        text = "hello\nworld"
        index = LineIndex(text)
        assert index.offset_to_position(text, 8) == Position(line=1, character=2)

    def test_offset_at_line_start(self):
        text = "hello\nworld"
        index = LineIndex(text)
        assert index.offset_to_position(text, 6) == Position(line=1, character=0)

    def test_astral_codepoint_counts_two_columns(self):
        text = "a😀b\nc"
        index = LineIndex(text)
        assert index.offset_to_position(text, 2) == Position(line=0, character=3)
        assert index.position_to_offset(text, Position(line=0, character=3)) == 2

    def test_column_inside_surrogate_pair_rounds_up(self):
        text = "😀x"
        index = LineIndex(text)
        assert index.position_to_offset(text, Position(line=0, character=1)) == 1

    def test_unknown_line_clamps_to_last_offset(self):
        text = "hello\nworld"
        index = LineIndex(text)
        assert index.position_to_offset(text, Position(line=7, character=0)) == len(text) - 1

    def test_unknown_line_in_empty_text(self):
        index = LineIndex("")
        assert index.position_to_offset("", Position(line=3, character=3)) == 0

    def test_column_past_line_clamps_to_line_end(self):
        text = "hello\nworld"
        index = LineIndex(text)
        # Line end includes the terminator
        assert index.position_to_offset(text, Position(line=0, character=99)) == 6
        assert index.position_to_offset(text, Position(line=1, character=99)) == len(text)

    def test_offset_past_end_measures_to_end(self):
        text = "ab"
        index = LineIndex(text)
        assert index.offset_to_position(text, 10) == Position(line=0, character=2)

    @pytest.mark.parametrize("text", [
        "hello\nworld\ntest",
        "Żółty żółw\n😀 emoji 😀\n\nkoniec\n",
        "",
        "\n\n",
    ])
    def test_round_trip_every_offset(self, text):
        """Every offset lies within its line's content, so it round-trips."""
        index = LineIndex(text)
        for offset in range(len(text) + 1):
            position = index.offset_to_position(text, offset)
            assert index.position_to_offset(text, position) == offset


class TestIsOutOfBounds:
    """Tests for stale-position detection."""

    def test_inside_line(self):
        text = "hello\nworld"
        index = LineIndex(text)
        assert index.is_out_of_bounds(text, Position(line=0, character=5)) is False
        assert index.is_out_of_bounds(text, Position(line=1, character=5)) is False

    def test_column_past_content(self):
        text = "hello\nworld"
        index = LineIndex(text)
        # The terminator does not count as content
        assert index.is_out_of_bounds(text, Position(line=0, character=6)) is True

    def test_unknown_line(self):
        text = "hello\nworld"
        index = LineIndex(text)
        assert index.is_out_of_bounds(text, Position(line=2, character=0)) is True

    def test_astral_content_length(self):
        text = "😀"
        index = LineIndex(text)
        assert index.is_out_of_bounds(text, Position(line=0, character=2)) is False
        assert index.is_out_of_bounds(text, Position(line=0, character=3)) is True


class TestDocumentSnapshot:
    """Tests for DocumentSnapshot helpers."""

    def test_from_text_builds_index(self):
        snapshot = DocumentSnapshot.from_text("ab\ncd", version=3)
        assert snapshot.version == 3
        assert snapshot.line_index.line_starts == [0, 3]

    def test_range_of(self):
        snapshot = DocumentSnapshot.from_text("ab\ncd")
        word_range = snapshot.range_of(3, 5)
        assert word_range.start == Position(line=1, character=0)
        assert word_range.end == Position(line=1, character=2)

    def test_snapshot_is_immutable(self):
        snapshot = DocumentSnapshot.from_text("ab")
        with pytest.raises(AttributeError):
            snapshot.text = "cd"
