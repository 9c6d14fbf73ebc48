"""
Configuration management using Pydantic Settings.
Loads configuration from environment variables and .env file.
"""
import os
from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_WORDLIST_PATH = PACKAGE_DIR / "data" / "slowa.txt"


class Settings(BaseSettings):
    """Language server settings loaded from environment variables."""

    # Application Configuration
    LOG_LEVEL: str = "INFO"

    # Dictionary Configuration
    DICTIONARY_BACKEND: str = "simple"  # Options: simple (linear scan), symspell (delete index)
    BASELINE_WORDLIST_PATH: Optional[str] = None  # Falls back to the word list shipped with the package
    USER_DICT_DIR: Optional[str] = None  # Falls back to $XDG_CONFIG_HOME/polski-ls or ~/.config/polski-ls
    USER_DICT_FILENAME: str = "slownik.txt"  # File that "add to dictionary" appends to
    SYMSPELL_PREFIX_LENGTH: int = 7  # SymSpell optimization parameter

    # Spell-check Configuration
    DIAGNOSTIC_MIN_WORD_LENGTH: int = 3  # Shorter words produce too many false positives

    # Completion Configuration
    COMPLETION_MIN_PREFIX_LENGTH: int = 2
    COMPLETION_MAX_ITEMS: int = 50
    COMPLETION_CANDIDATE_POOL: int = 200  # Fuzzy matches fetched before ranking
    CODE_ACTION_MAX_SUGGESTIONS: int = 10

    # Logging Configuration (Optional - per-module log levels)
    APP_LOG_LEVEL: Optional[str] = None
    SYMSPELL_LOG_LEVEL: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def baseline_wordlist_path(self) -> Path:
        """Baseline word list, defaulting to the packaged one."""
        if self.BASELINE_WORDLIST_PATH:
            return Path(self.BASELINE_WORDLIST_PATH)
        return DEFAULT_WORDLIST_PATH

    @property
    def user_dict_dir(self) -> Optional[Path]:
        """
        Directory holding user dictionary extensions.

        Resolution order: USER_DICT_DIR, $XDG_CONFIG_HOME/polski-ls,
        $HOME/.config/polski-ls. None if no home directory is known.
        """
        if self.USER_DICT_DIR:
            return Path(self.USER_DICT_DIR)

        config_home = os.environ.get("XDG_CONFIG_HOME")
        if config_home:
            return Path(config_home) / "polski-ls"

        home = os.environ.get("HOME")
        if home:
            return Path(home) / ".config" / "polski-ls"

        return None


# Global settings instance
settings = Settings()
