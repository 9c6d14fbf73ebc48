"""
Pytest configuration and fixtures for polski-ls tests.
"""
import os
from typing import List, Optional, Tuple

import pytest

# Keep tests away from the developer's real configuration
os.environ.setdefault("DICTIONARY_BACKEND", "simple")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from polski_ls.schemas.lsp import Diagnostic
from polski_ls.services.dictionary_simple import SimpleDictionary
from polski_ls.services.language_client import LanguageClient
from polski_ls.services.spellcheck import SpellCheckSession
from polski_ls.services.user_dictionary import UserDictionaryStorage


SAMPLE_WORDS = """\
# sample word list
*dzień
*dobry
dziecko
dzisiaj
*kot
kos
kat
żółw
*żółty
słodki
"""


class RecordingClient(LanguageClient):
    """LanguageClient that records every notification."""

    def __init__(self):
        self.published: List[Tuple[str, List[Diagnostic], Optional[int]]] = []
        self.messages: List[Tuple[int, str]] = []

    async def publish_diagnostics(self, uri, diagnostics, version=None):
        self.published.append((uri, list(diagnostics), version))

    async def show_message(self, message_type, message):
        self.messages.append((message_type, message))

    def last_diagnostics(self, uri: str) -> List[Diagnostic]:
        for published_uri, diagnostics, _ in reversed(self.published):
            if published_uri == uri:
                return diagnostics
        raise AssertionError(f"No diagnostics published for {uri}")


@pytest.fixture
def sample_dictionary() -> SimpleDictionary:
    """Small dictionary loaded from SAMPLE_WORDS."""
    dictionary = SimpleDictionary()
    dictionary.load_word_list(SAMPLE_WORDS)
    return dictionary


@pytest.fixture
def client() -> RecordingClient:
    return RecordingClient()


@pytest.fixture
def storage(tmp_path) -> UserDictionaryStorage:
    """User dictionary storage rooted in a temporary directory."""
    return UserDictionaryStorage(directory=tmp_path / "polski-ls", filename="slownik.txt")


@pytest.fixture
def session(client, sample_dictionary, storage) -> SpellCheckSession:
    return SpellCheckSession(client, sample_dictionary, storage)
