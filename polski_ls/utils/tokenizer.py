"""
Word tokenization for Polish text.

Words are maximal runs of word characters. Spans are codepoint offsets
into the scanned string, end-exclusive.
"""
from typing import Iterator, NamedTuple, Tuple

# Polish diacritics, both cases
POLISH_LETTERS = frozenset("ąćęłńóśźżĄĆĘŁŃÓŚŹŻ")


class WordToken(NamedTuple):
    word: str
    start: int
    end: int


def is_word_char(ch: str) -> bool:
    """Check if a character is part of a word (including Polish diacritics)."""
    return ch.isalnum() or ch in POLISH_LETTERS


def extract_words(text: str) -> Iterator[WordToken]:
    """
    Yield every word in text with its span, left to right.

    Non-word characters are skipped; no empty words are produced.

    Example:
        >>> list(extract_words("Dzień, dobry!"))
        [WordToken(word='Dzień', start=0, end=5), WordToken(word='dobry', start=7, end=12)]
    """
    i = 0
    length = len(text)

    while i < length:
        if not is_word_char(text[i]):
            i += 1
            continue

        start = i
        while i < length and is_word_char(text[i]):
            i += 1

        yield WordToken(text[start:i], start, i)


def prefix_start(text: str, offset: int) -> int:
    """Scan backward from offset to the start of the word being typed."""
    start = min(offset, len(text))
    while start > 0 and is_word_char(text[start - 1]):
        start -= 1
    return start


def word_bounds(text: str, offset: int) -> Tuple[int, int]:
    """
    Span of the word touching offset.

    Returns an empty span (start == end) when offset sits between two
    non-word characters.
    """
    start = prefix_start(text, offset)
    end = min(offset, len(text))
    while end < len(text) and is_word_char(text[end]):
        end += 1
    return start, end
