"""
Completion scoring and ordering.
"""
from typing import Iterable, List

from polski_ls.schemas.dictionary import CompletionCandidate, FuzzyMatch
from polski_ls.services.dictionary_base import fold_equal

BASE_SCORE = 100.0
DISTANCE_PENALTIES = {0: 0.0, 1: 20.0, 2: 50.0}
FALLBACK_DISTANCE_PENALTY = 100.0
FIRST_LETTER_BONUS = 50.0
FIRST_LETTER_PENALTY = 30.0
PREFIX_CHAR_BONUS = 8.0
COMMON_WORD_BONUS = 35.0

# Words up to this length tolerate a single edit
SHORT_WORD_LENGTH = 3


def max_edit_distance_for(word: str) -> int:
    """Edit distance budget for a query or word."""
    return 1 if len(word) <= SHORT_WORD_LENGTH else 2


def common_prefix_length(a: str, b: str) -> int:
    """Number of leading codepoint pairs that match ignoring case."""
    length = 0
    for x, y in zip(a, b):
        if not fold_equal(x, y):
            break
        length += 1
    return length


def score_completion(query: str, candidate: str, edit_distance: int, is_common: bool) -> float:
    """
    Calculate the completion score used for ranking.

    Example:
        >>> score_completion("test", "test", 0, False)
        182.0
    """
    score = BASE_SCORE
    score -= DISTANCE_PENALTIES.get(edit_distance, FALLBACK_DISTANCE_PENALTY)

    # First letter match; skipped entirely when either side is empty
    if query and candidate:
        if fold_equal(query[0], candidate[0]):
            score += FIRST_LETTER_BONUS
        else:
            score -= FIRST_LETTER_PENALTY

    score += common_prefix_length(query, candidate) * PREFIX_CHAR_BONUS

    if is_common:
        score += COMMON_WORD_BONUS

    return score


def transfer_capitalization(original: str, suggestion: str) -> str:
    """If original starts with an uppercase letter, capitalize the suggestion's first letter."""
    if original and original[0].isupper() and suggestion:
        return suggestion[0].upper()[0] + suggestion[1:]
    return suggestion


def rank_candidates(query: str, matches: Iterable[FuzzyMatch]) -> List[CompletionCandidate]:
    """
    Score matches and order them best first.

    The sort is stable: exact score ties keep the order of matches.
    """
    candidates = [
        CompletionCandidate(
            text=transfer_capitalization(query, match.word),
            score=score_completion(query, match.word, match.edit_distance, match.is_common),
        )
        for match in matches
    ]
    candidates.sort(key=lambda c: c.score, reverse=True)
    return candidates
