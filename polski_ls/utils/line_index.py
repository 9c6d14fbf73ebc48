"""
Conversion between codepoint offsets and protocol positions.

Documents are held as Python strings, so an offset is a codepoint index.
Protocol columns are counted in UTF-16 code units: codepoints outside the
Basic Multilingual Plane take two units, everything else one.
"""
from bisect import bisect_right
from dataclasses import dataclass, field
from typing import List, Optional

from polski_ls.schemas.lsp import Position, Range

LINE_TERMINATOR = "\n"


def utf16_width(ch: str) -> int:
    """Number of UTF-16 code units needed for one codepoint."""
    return 2 if ord(ch) > 0xFFFF else 1


def utf16_length(text: str) -> int:
    """Number of UTF-16 code units needed for a string."""
    return len(text.encode("utf-16-le")) // 2


class LineIndex:
    """
    Pre-built index of line start offsets.

    Built with a single scan of the document so that each position lookup
    costs a binary search (offset to position) or a list access (position
    to offset) instead of a rescan of the whole text.
    """

    def __init__(self, text: str):
        # line_starts[0] is always 0; every other entry follows a newline
        self.line_starts: List[int] = [0]
        for idx, ch in enumerate(text):
            if ch == LINE_TERMINATOR:
                self.line_starts.append(idx + 1)

    @property
    def line_count(self) -> int:
        return len(self.line_starts)

    def _line_end(self, text: str, line: int) -> int:
        """Offset where the line ends, including its terminator."""
        if line + 1 < len(self.line_starts):
            return self.line_starts[line + 1]
        return len(text)

    def offset_to_position(self, text: str, offset: int) -> Position:
        """
        Convert a codepoint offset to a protocol position.

        Offsets past the end of the text are measured up to the end of the text.
        """
        line = max(bisect_right(self.line_starts, offset) - 1, 0)
        line_start = self.line_starts[line]
        column = utf16_length(text[line_start:min(offset, len(text))])
        return Position(line=line, character=column)

    def position_to_offset(self, text: str, position: Position) -> int:
        """
        Convert a protocol position to a codepoint offset.

        Clamps instead of failing: an unknown line maps to the last offset of
        the document, a column past the line maps to the line end (after its
        terminator). A column inside a surrogate pair maps to the offset after
        that codepoint.
        """
        if position.line >= len(self.line_starts):
            return max(len(text) - 1, 0)

        line_start = self.line_starts[position.line]
        line_end = self._line_end(text, position.line)

        offset = line_start
        units = 0
        while offset < line_end and units < position.character:
            units += utf16_width(text[offset])
            offset += 1

        if units < position.character:
            return line_end
        return offset

    def is_out_of_bounds(self, text: str, position: Position) -> bool:
        """
        Check whether a position lies outside the current document.

        Requests can race a document replacement, so callers check this before
        trusting a position against the snapshot they hold.
        """
        if position.line >= len(self.line_starts):
            return True

        line_start = self.line_starts[position.line]
        line_end = self._line_end(text, position.line)
        if line_end > line_start and text[line_end - 1] == LINE_TERMINATOR:
            line_end -= 1

        return position.character > utf16_length(text[line_start:line_end])


@dataclass(frozen=True)
class DocumentSnapshot:
    """Immutable document text paired with its line index."""
    text: str
    line_index: LineIndex = field(repr=False, compare=False)
    version: Optional[int] = None

    @classmethod
    def from_text(cls, text: str, version: Optional[int] = None) -> "DocumentSnapshot":
        """Build the index before the snapshot exists, so it is never seen half-built."""
        return cls(text=text, line_index=LineIndex(text), version=version)

    def position_at(self, offset: int) -> Position:
        return self.line_index.offset_to_position(self.text, offset)

    def offset_at(self, position: Position) -> int:
        return self.line_index.position_to_offset(self.text, position)

    def range_of(self, start: int, end: int) -> Range:
        return Range(start=self.position_at(start), end=self.position_at(end))

    def is_out_of_bounds(self, position: Position) -> bool:
        return self.line_index.is_out_of_bounds(self.text, position)
