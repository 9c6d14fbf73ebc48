"""
Dictionary backed by a SymSpell delete index.

SymSpell only generates candidates. Every candidate is re-scored with the
same case-insensitive Levenshtein distance SimpleDictionary uses, so both
backends return identical matches in identical order.
"""
import time
from collections import defaultdict
from typing import Dict, Iterator, List, Optional, Tuple

from symspellpy import SymSpell, Verbosity

from polski_ls.config import settings
from polski_ls.schemas.dictionary import DictionaryWord, FuzzyMatch
from polski_ls.services.dictionary_base import (
    Dictionary,
    edit_distance,
    words_equal,
)
from polski_ls.utils.logger import get_logger


logger = get_logger("services.dictionary_symspell")


def fold_key(word: str) -> str:
    """Index key shared by every spelling that differs only in case."""
    return "".join(ch.casefold() for ch in word)


class SymSpellDictionary(Dictionary):
    """
    Word list indexed with SymSpellPy.

    Queries with a budget above max_index_distance fall back to a linear scan.
    """

    def __init__(
        self,
        max_index_distance: int = 2,
        prefix_length: Optional[int] = None,
    ):
        """
        Initialize an empty SymSpell-backed dictionary.

        Args:
            max_index_distance: Largest edit distance the delete index serves
            prefix_length: SymSpell optimization parameter (default from config)
        """
        self._max_index_distance = max_index_distance
        self._symspell = SymSpell(
            max_dictionary_edit_distance=max_index_distance,
            prefix_length=prefix_length or settings.SYMSPELL_PREFIX_LENGTH,
        )
        self._words: List[DictionaryWord] = []
        # Folded key -> insertion indices of every entry with that key
        self._by_key: Dict[str, List[int]] = defaultdict(list)

    def _append(self, entry: DictionaryWord) -> None:
        key = fold_key(entry.word)
        self._by_key[key].append(len(self._words))
        self._words.append(entry)
        self._symspell.create_dictionary_entry(key, 1)

    def __iter__(self) -> Iterator[DictionaryWord]:
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def contains(self, word: str) -> bool:
        indices = self._by_key.get(fold_key(word), ())
        return any(words_equal(self._words[idx].word, word) for idx in indices)

    def _candidate_indices(self, query: str, max_distance: int) -> List[int]:
        """Entry indices SymSpell considers close enough to query."""
        if max_distance > self._max_index_distance:
            logger.debug(
                "Edit distance above index limit, scanning",
                max_distance=max_distance,
                index_limit=self._max_index_distance,
            )
            return list(range(len(self._words)))

        start_time = time.perf_counter()
        suggestions = self._symspell.lookup(
            fold_key(query),
            Verbosity.ALL,
            max_edit_distance=max_distance,
        )

        indices = []
        for suggestion in suggestions:
            indices.extend(self._by_key.get(suggestion.term, ()))

        logger.debug(
            "SymSpell lookup",
            query=query,
            candidates=len(indices),
            lookup_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return indices

    def fuzzy_match(self, query: str, max_distance: int, max_results: int) -> List[FuzzyMatch]:
        scored: List[Tuple[int, bool, int]] = []
        for idx in self._candidate_indices(query, max_distance):
            entry = self._words[idx]
            distance = edit_distance(query, entry.word)
            if distance <= max_distance:
                scored.append((distance, not entry.is_common, idx))

        scored.sort()

        return [
            FuzzyMatch(
                word=self._words[idx].word,
                edit_distance=distance,
                is_common=self._words[idx].is_common,
            )
            for distance, _, idx in scored[:max_results]
        ]
