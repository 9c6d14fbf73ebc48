"""
Storage for user dictionary extensions.

Every *.txt file in the user dictionary directory is an extension word list.
Words added from the editor are appended to one of them (slownik.txt by default).
"""
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

import aiofiles

from polski_ls.config import settings
from polski_ls.services.dictionary_base import DictionaryError
from polski_ls.utils.logger import get_logger

logger = get_logger("services.user_dictionary")

EXTENSION_SUFFIX = ".txt"


class PersistenceError(DictionaryError):
    """Raised when a user word cannot be saved to disk."""
    pass


class UserDictionaryStorage:
    """Service for reading and appending user dictionary files."""

    def __init__(
        self,
        directory: Optional[Path] = None,
        filename: Optional[str] = None,
    ):
        """
        Args:
            directory: User dictionary directory (default from config, may be None)
            filename: File that new words are appended to (default from config)
        """
        self.directory = Path(directory) if directory else settings.user_dict_dir
        self.filename = filename or settings.USER_DICT_FILENAME

    @property
    def user_file(self) -> Optional[Path]:
        if self.directory is None:
            return None
        return self.directory / self.filename

    def ensure_directory(self) -> bool:
        """
        Create the user dictionary directory if it doesn't exist.

        Returns:
            True if the directory exists afterwards
        """
        if self.directory is None:
            logger.error("Could not determine user dictionary directory")
            return False

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            logger.debug("Directory ensured", path=str(self.directory))
            return True
        except OSError as e:
            logger.error("Failed to create directory", path=str(self.directory), error=str(e))
            return False

    def extension_files(self) -> List[Path]:
        """Extension word lists, sorted by name for a stable load order."""
        if self.directory is None or not self.directory.is_dir():
            return []
        return sorted(
            path for path in self.directory.iterdir()
            if path.is_file() and path.suffix == EXTENSION_SUFFIX
        )

    def read_extensions(self) -> Iterator[Tuple[Path, str]]:
        """
        Yield (path, content) for every readable extension file.

        Unreadable files are logged and skipped.
        """
        for path in self.extension_files():
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Skipping unreadable user dictionary", path=str(path), error=str(e))
                continue
            yield path, content

    async def append_word(self, word: str) -> Path:
        """
        Append a word to the user dictionary file.

        Args:
            word: Word to persist

        Returns:
            Path of the file written

        Raises:
            PersistenceError: If no directory is configured or the write fails
        """
        target = self.user_file
        if target is None:
            raise PersistenceError(
                "User dictionary path not configured. "
                "Config directory could not be determined."
            )

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(target, "a", encoding="utf-8") as out_file:
                await out_file.write(f"{word}\n")
        except OSError as e:
            logger.error("Failed to save word", word=word, path=str(target), error=str(e))
            raise PersistenceError(f"Failed to write {target}: {e}") from e

        logger.info("Added word to user dictionary", word=word, path=str(target))
        return target
