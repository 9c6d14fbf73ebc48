"""
In-memory dictionary backed by a plain list, searched by linear scan.
"""
from typing import Iterator, List

from polski_ls.schemas.dictionary import DictionaryWord, FuzzyMatch
from polski_ls.services.dictionary_base import (
    Dictionary,
    edit_distance,
    sort_matches,
    words_equal,
)


class SimpleDictionary(Dictionary):
    """
    Word list kept in insertion order.

    fuzzy_match() computes the edit distance to every entry, which is
    adequate for tens of thousands of words. SymSpellDictionary trades
    memory for speed when the list grows past that.
    """

    def __init__(self):
        self._words: List[DictionaryWord] = []

    def _append(self, entry: DictionaryWord) -> None:
        self._words.append(entry)

    def __iter__(self) -> Iterator[DictionaryWord]:
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def contains(self, word: str) -> bool:
        return any(words_equal(entry.word, word) for entry in self._words)

    def fuzzy_match(self, query: str, max_distance: int, max_results: int) -> List[FuzzyMatch]:
        results = []
        for entry in self._words:
            # Length gap alone already exceeds the budget
            if abs(len(entry.word) - len(query)) > max_distance:
                continue
            distance = edit_distance(query, entry.word)
            if distance <= max_distance:
                results.append(
                    FuzzyMatch(
                        word=entry.word,
                        edit_distance=distance,
                        is_common=entry.is_common,
                    )
                )

        return sort_matches(results, max_results)
