"""
Pydantic schemas for protocol records and dictionary results.
"""
from polski_ls.schemas.dictionary import (
    CompletionCandidate,
    DictionaryWord,
    FuzzyMatch,
)
from polski_ls.schemas.lsp import (
    CodeAction,
    Command,
    CompletionItem,
    CompletionList,
    Diagnostic,
    Position,
    Range,
    TextEdit,
    WorkspaceEdit,
)

__all__ = [
    "CompletionCandidate",
    "DictionaryWord",
    "FuzzyMatch",
    "CodeAction",
    "Command",
    "CompletionItem",
    "CompletionList",
    "Diagnostic",
    "Position",
    "Range",
    "TextEdit",
    "WorkspaceEdit",
]
