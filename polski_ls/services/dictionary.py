"""
Dictionary factory and startup loading.
"""
import time
from pathlib import Path
from typing import Optional

from polski_ls.config import settings
from polski_ls.services.dictionary_base import Dictionary
from polski_ls.services.dictionary_simple import SimpleDictionary
from polski_ls.services.user_dictionary import UserDictionaryStorage
from polski_ls.utils.logger import get_logger


logger = get_logger("services.dictionary")

DICTIONARY_BACKENDS = {
    "simple": "Linear scan over an in-memory list",
    "symspell": "SymSpell delete index (symspellpy)",
}


def create_dictionary(backend: Optional[str] = None) -> Dictionary:
    """
    Factory function to create an empty dictionary for the given backend.

    Args:
        backend: Backend name ("simple", "symspell"). If None, uses settings.DICTIONARY_BACKEND

    Returns:
        Empty Dictionary instance

    Raises:
        ValueError: If backend is not supported
    """
    if backend is None:
        backend = settings.DICTIONARY_BACKEND

    backend = backend.lower()

    if backend == "simple":
        return SimpleDictionary()
    elif backend == "symspell":
        from polski_ls.services.dictionary_symspell import SymSpellDictionary
        return SymSpellDictionary()
    else:
        available = ", ".join(DICTIONARY_BACKENDS.keys())
        raise ValueError(
            f"Unknown dictionary backend: '{backend}'. "
            f"Available backends: {available}"
        )


def load_baseline(dictionary: Dictionary, wordlist_path: Optional[Path] = None) -> int:
    """
    Load the baseline word list into a dictionary.

    A missing or unreadable word list is logged and leaves the dictionary as is.

    Returns:
        Number of entries loaded
    """
    path = Path(wordlist_path) if wordlist_path else settings.baseline_wordlist_path

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Failed to read baseline word list", path=str(path), error=str(e))
        return 0

    count = dictionary.load_word_list(content)
    logger.info("Baseline dictionary loaded", path=str(path), word_count=count)
    return count


def load_user_extensions(dictionary: Dictionary, storage: UserDictionaryStorage) -> int:
    """
    Load every user extension word list into a dictionary.

    Returns:
        Number of entries loaded
    """
    storage.ensure_directory()

    total = 0
    for path, content in storage.read_extensions():
        count = dictionary.load_word_list(content)
        logger.info("Loaded user dictionary", path=str(path), word_count=count)
        total += count
    return total


def build_dictionary(
    backend: Optional[str] = None,
    wordlist_path: Optional[Path] = None,
    storage: Optional[UserDictionaryStorage] = None,
) -> Dictionary:
    """
    Build the process-wide dictionary: baseline first, then user extensions.

    Args:
        backend: Backend name (default from config)
        wordlist_path: Baseline word list (default from config)
        storage: User dictionary storage; extensions are skipped when None

    Returns:
        Loaded Dictionary instance
    """
    start_time = time.time()
    dictionary = create_dictionary(backend)

    load_baseline(dictionary, wordlist_path)
    if storage is not None:
        load_user_extensions(dictionary, storage)

    logger.info(
        "Dictionary ready",
        backend=type(dictionary).__name__,
        word_count=len(dictionary),
        load_time_seconds=round(time.time() - start_time, 2),
    )
    return dictionary
