"""
Pydantic schemas for dictionary lookups and completion ranking.
"""
from pydantic import BaseModel, ConfigDict, Field


class DictionaryWord(BaseModel):
    """A stored dictionary entry."""

    model_config = ConfigDict(frozen=True)

    word: str
    is_common: bool = Field(default=False, description="Marked with '*' in the word list")


class FuzzyMatch(BaseModel):
    """A dictionary entry within the requested edit distance of a query."""

    word: str
    edit_distance: int = Field(ge=0, le=255, description="Saturates at 255")
    is_common: bool = False


class CompletionCandidate(BaseModel):
    """A capitalization-adjusted suggestion with its ranking score."""

    text: str
    score: float
