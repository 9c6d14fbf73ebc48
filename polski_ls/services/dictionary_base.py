"""
Abstract base class for dictionary backends.
"""
from abc import ABC, abstractmethod
from typing import Iterator, List

from polski_ls.schemas.dictionary import DictionaryWord, FuzzyMatch

COMMENT_MARKER = "#"
COMMON_MARKER = "*"

# Edit distances saturate here; dictionary words are far shorter
MAX_EDIT_DISTANCE = 255


class DictionaryError(Exception):
    """Base exception for dictionary errors."""
    pass


def fold_equal(a: str, b: str) -> bool:
    """Case-insensitive comparison of two codepoints."""
    return a == b or a.casefold() == b.casefold()


def words_equal(a: str, b: str) -> bool:
    """Same length and every codepoint pair case-folds equal."""
    return len(a) == len(b) and all(fold_equal(x, y) for x, y in zip(a, b))


def edit_distance(a: str, b: str) -> int:
    """
    Levenshtein distance between two words, ignoring case.

    Uses two rolling rows instead of the full matrix. Substituting a
    codepoint for one that case-folds equal costs nothing; insertions and
    deletions cost one. Saturates at MAX_EDIT_DISTANCE.
    """
    # Keep the shorter word along the row
    if len(a) < len(b):
        a, b = b, a

    if not b:
        return min(len(a), MAX_EDIT_DISTANCE)

    prev_row = list(range(len(b) + 1))
    curr_row = [0] * (len(b) + 1)

    for i, ca in enumerate(a, start=1):
        curr_row[0] = i
        for j, cb in enumerate(b, start=1):
            cost = 0 if fold_equal(ca, cb) else 1
            curr_row[j] = min(
                prev_row[j] + 1,         # deletion
                curr_row[j - 1] + 1,     # insertion
                prev_row[j - 1] + cost,  # substitution
            )
        prev_row, curr_row = curr_row, prev_row

    return min(prev_row[len(b)], MAX_EDIT_DISTANCE)


def sort_matches(matches: List[FuzzyMatch], max_results: int) -> List[FuzzyMatch]:
    """Order by distance, then common words first; stable for ties."""
    matches.sort(key=lambda m: (m.edit_distance, not m.is_common))
    return matches[:max_results]


class Dictionary(ABC):
    """
    Abstract base class for dictionary backends.

    Readers only need contains() and fuzzy_match(). Writers go through
    add_word() and load_word_list(), which callers must serialize against
    concurrent reads.
    """

    @abstractmethod
    def contains(self, word: str) -> bool:
        """Check if a word exists in the dictionary (case-insensitive)."""
        pass

    @abstractmethod
    def fuzzy_match(self, query: str, max_distance: int, max_results: int) -> List[FuzzyMatch]:
        """
        Find words within max_distance edits of query.

        Args:
            query: Word or prefix to match
            max_distance: Largest edit distance to keep
            max_results: Maximum number of matches returned

        Returns:
            Matches ordered by edit distance, then common words first,
            then insertion order
        """
        pass

    @abstractmethod
    def _append(self, entry: DictionaryWord) -> None:
        """Store an entry unconditionally."""
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[DictionaryWord]:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass

    def add_word(self, word: str, is_common: bool = False) -> bool:
        """
        Add a word unless it is already present (case-insensitive).

        Returns:
            True if the dictionary changed
        """
        if self.contains(word):
            return False
        self._append(DictionaryWord(word=word, is_common=is_common))
        return True

    def load_word_list(self, content: str) -> int:
        """
        Parse a word list: one word per line, '*' prefix marks a common word.

        Blank lines and lines starting with '#' are skipped. Entries are not
        de-duplicated.

        Returns:
            Number of entries loaded
        """
        count = 0
        for line in content.splitlines():
            trimmed = line.strip()
            if not trimmed or trimmed.startswith(COMMENT_MARKER):
                continue
            is_common = trimmed.startswith(COMMON_MARKER)
            word = trimmed[len(COMMON_MARKER):] if is_common else trimmed
            if not word:
                continue
            self._append(DictionaryWord(word=word, is_common=is_common))
            count += 1
        return count
