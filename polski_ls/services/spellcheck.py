"""
Spell-check session: open documents, diagnostics, completions and code actions.
"""
import asyncio
from typing import Any, Dict, List, Optional, Sequence

from polski_ls.config import settings
from polski_ls.schemas.lsp import (
    CodeAction,
    Command,
    CompletionItem,
    CompletionList,
    Diagnostic,
    MessageType,
    Position,
    Range,
    TextEdit,
    WorkspaceEdit,
)
from polski_ls.services.dictionary import build_dictionary
from polski_ls.services.dictionary_base import Dictionary
from polski_ls.services.language_client import LanguageClient
from polski_ls.services.ranking import (
    max_edit_distance_for,
    rank_candidates,
    transfer_capitalization,
)
from polski_ls.services.user_dictionary import PersistenceError, UserDictionaryStorage
from polski_ls.utils.line_index import DocumentSnapshot
from polski_ls.utils.logger import get_logger
from polski_ls.utils.tokenizer import extract_words, prefix_start, word_bounds

logger = get_logger("services.spellcheck")

CMD_ADD_TO_DICTIONARY = "polski-ls.addToDictionary"
COMPLETION_DETAIL = "Polish"


class SpellCheckSession:
    """
    State shared by all requests of one editor connection.

    Documents are immutable snapshots replaced whole on every change. The
    dictionary is read without locking; add_to_dictionary() is its only
    writer and is serialized by its own lock.
    """

    def __init__(
        self,
        client: LanguageClient,
        dictionary: Dictionary,
        storage: Optional[UserDictionaryStorage] = None,
    ):
        self._client = client
        self._dictionary = dictionary
        self._storage = storage or UserDictionaryStorage()
        self._documents: Dict[str, DocumentSnapshot] = {}
        self._documents_lock = asyncio.Lock()
        self._dictionary_lock = asyncio.Lock()

    @property
    def dictionary(self) -> Dictionary:
        return self._dictionary

    def get_document(self, uri: str) -> Optional[DocumentSnapshot]:
        return self._documents.get(uri)

    async def _replace_document(self, uri: str, snapshot: DocumentSnapshot) -> None:
        async with self._documents_lock:
            self._documents[uri] = snapshot

    # Diagnostics

    def check_document(self, snapshot: DocumentSnapshot) -> List[Diagnostic]:
        """Diagnostics for every unknown word in a document."""
        diagnostics = []
        for token in extract_words(snapshot.text):
            # Short words produce too many false positives
            if len(token.word) < settings.DIAGNOSTIC_MIN_WORD_LENGTH:
                continue
            if token.word.isascii() and token.word.isdigit():
                continue
            if self._dictionary.contains(token.word):
                continue

            diagnostics.append(
                Diagnostic(
                    range=snapshot.range_of(token.start, token.end),
                    message=f"Unknown word: '{token.word}'",
                )
            )
        return diagnostics

    async def publish_diagnostics(self, uri: str, snapshot: DocumentSnapshot) -> None:
        diagnostics = self.check_document(snapshot)
        logger.info("Publishing diagnostics", uri=uri, count=len(diagnostics))
        await self._client.publish_diagnostics(uri, diagnostics, snapshot.version)

    # Document lifecycle

    async def did_open(self, uri: str, text: str, version: Optional[int] = None) -> None:
        logger.debug("Document opened", uri=uri, version=version)
        snapshot = DocumentSnapshot.from_text(text, version)
        await self._replace_document(uri, snapshot)
        await self.publish_diagnostics(uri, snapshot)

    async def did_change(
        self,
        uri: str,
        content_changes: Sequence[Dict[str, Any]],
        version: Optional[int] = None,
    ) -> None:
        """Handle a full-text change; only the last change matters."""
        logger.debug("Document changed", uri=uri, version=version)
        if not content_changes:
            return

        snapshot = DocumentSnapshot.from_text(content_changes[-1]["text"], version)
        await self._replace_document(uri, snapshot)
        await self.publish_diagnostics(uri, snapshot)

    async def did_close(self, uri: str) -> None:
        async with self._documents_lock:
            self._documents.pop(uri, None)
        await self._client.publish_diagnostics(uri, [])

    # Completion

    def generate_completions(self, snapshot: DocumentSnapshot, position: Position) -> List[CompletionItem]:
        """Ranked completions for the word ending at position."""
        # Request may predate the change that produced this snapshot
        if snapshot.is_out_of_bounds(position):
            logger.debug("Completion position out of bounds", line=position.line, character=position.character)
            return []

        cursor = snapshot.offset_at(position)
        start = prefix_start(snapshot.text, cursor)
        prefix = snapshot.text[start:cursor]

        if len(prefix) < settings.COMPLETION_MIN_PREFIX_LENGTH:
            logger.debug("Prefix too short", length=len(prefix))
            return []

        matches = self._dictionary.fuzzy_match(
            prefix,
            max_edit_distance_for(prefix),
            settings.COMPLETION_CANDIDATE_POOL,
        )
        ranked = rank_candidates(prefix, matches)[:settings.COMPLETION_MAX_ITEMS]

        edit_range = Range(start=snapshot.position_at(start), end=position)
        return [
            CompletionItem(
                label=candidate.text,
                detail=COMPLETION_DETAIL,
                text_edit=TextEdit(range=edit_range, new_text=candidate.text),
                filter_text=prefix,
                sort_text=f"{rank:05d}",
            )
            for rank, candidate in enumerate(ranked, start=1)
        ]

    async def completion(self, uri: str, position: Position) -> Optional[CompletionList]:
        snapshot = self.get_document(uri)
        if snapshot is None:
            return None

        items = self.generate_completions(snapshot, position)
        logger.info(
            "Returning completions",
            uri=uri,
            count=len(items),
            top=[item.label for item in items[:5]],
        )

        if not items:
            return None
        return CompletionList(is_incomplete=True, items=items)

    # Code actions

    def suggest_actions(self, uri: str, snapshot: DocumentSnapshot, position: Position) -> List[CodeAction]:
        """Quick fixes for the unknown word at position."""
        if snapshot.is_out_of_bounds(position):
            return []

        start, end = word_bounds(snapshot.text, snapshot.offset_at(position))
        if start == end:
            return []

        word = snapshot.text[start:end]
        if self._dictionary.contains(word):
            return []

        matches = self._dictionary.fuzzy_match(
            word,
            max_edit_distance_for(word),
            settings.CODE_ACTION_MAX_SUGGESTIONS,
        )
        if not matches:
            return []

        title = f"Add '{word}' to dictionary"
        actions = [
            CodeAction(
                title=title,
                command=Command(
                    title=title,
                    command=CMD_ADD_TO_DICTIONARY,
                    arguments=[{"word": word, "uri": uri}],
                ),
            )
        ]

        word_range = snapshot.range_of(start, end)
        for match in matches:
            suggestion = transfer_capitalization(word, match.word)
            actions.append(
                CodeAction(
                    title=f"Change to '{suggestion}'",
                    edit=WorkspaceEdit(
                        changes={uri: [TextEdit(range=word_range, new_text=suggestion)]}
                    ),
                )
            )

        return actions

    async def code_action(self, uri: str, selection: Range) -> Optional[List[CodeAction]]:
        snapshot = self.get_document(uri)
        if snapshot is None:
            return None

        actions = self.suggest_actions(uri, snapshot, selection.start)
        logger.info("Returning code actions", uri=uri, count=len(actions))
        return actions or None

    # Commands

    async def add_to_dictionary(self, word: str) -> bool:
        """
        Add a user word in memory and persist it.

        The in-memory dictionary is updated first and stays updated even if
        saving fails.

        Returns:
            True if the word was new

        Raises:
            PersistenceError: If the word could not be saved
        """
        async with self._dictionary_lock:
            if not self._dictionary.add_word(word):
                logger.info("Word already in dictionary", word=word)
                return False
            await self._storage.append_word(word)
            return True

    async def execute_command(self, command: str, arguments: Sequence[Any]) -> None:
        logger.info("Executing command", command=command)
        if command != CMD_ADD_TO_DICTIONARY:
            logger.warning("Unknown command", command=command)
            return

        if not arguments or not isinstance(arguments[0], dict):
            logger.warning("Missing command arguments", command=command)
            return

        word = arguments[0].get("word")
        uri = arguments[0].get("uri")
        if not isinstance(word, str) or not isinstance(uri, str):
            logger.warning("Invalid command arguments", command=command)
            return

        try:
            await self.add_to_dictionary(word)
        except PersistenceError as e:
            logger.error("Error adding word to dictionary", word=word, error=str(e))
            await self._client.show_message(
                MessageType.ERROR, f"Failed to add word to dictionary: {e}"
            )
            return

        await self._client.show_message(MessageType.INFO, f"Added '{word}' to dictionary")

        snapshot = self.get_document(uri)
        if snapshot is not None:
            await self.publish_diagnostics(uri, snapshot)


# Singleton instance for the running server
_session: Optional[SpellCheckSession] = None


def get_spellcheck_session() -> Optional[SpellCheckSession]:
    """
    Get the singleton spell-check session.

    Returns:
        SpellCheckSession instance if initialized, None otherwise
    """
    return _session


def initialize_spellcheck_session(client: LanguageClient) -> SpellCheckSession:
    """
    Initialize the spell-check session singleton.

    Called once at server startup to load the dictionary.

    Args:
        client: Editor connection used for notifications

    Returns:
        The new session
    """
    global _session

    logger.info("Initializing spell-check session...", backend=settings.DICTIONARY_BACKEND)
    storage = UserDictionaryStorage()
    dictionary = build_dictionary(storage=storage)
    _session = SpellCheckSession(client, dictionary, storage)
    logger.info("Spell-check session initialized", word_count=len(dictionary))
    return _session
