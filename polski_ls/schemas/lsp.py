"""
Pydantic schemas for the language server protocol records this server produces.

Field names are snake_case in Python and serialize to the protocol's camelCase
with ``model_dump(by_alias=True)``.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DiagnosticSeverity:
    """Protocol diagnostic severities."""
    ERROR = 1
    WARNING = 2
    INFORMATION = 3
    HINT = 4


class MessageType:
    """Protocol window/showMessage types."""
    ERROR = 1
    WARNING = 2
    INFO = 3
    LOG = 4


class CompletionItemKind:
    """Subset of protocol completion item kinds."""
    TEXT = 1


class LspModel(BaseModel):
    """Base model serializing to protocol camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Position(LspModel):
    """Zero-based line and UTF-16 column."""
    line: int = Field(ge=0)
    character: int = Field(ge=0, description="Column in UTF-16 code units")


class Range(LspModel):
    start: Position
    end: Position


class TextEdit(LspModel):
    range: Range
    new_text: str


class Diagnostic(LspModel):
    """A spelling diagnostic for one unknown word."""
    range: Range
    severity: int = DiagnosticSeverity.HINT
    source: str = "polski-ls"
    message: str


class CompletionItem(LspModel):
    label: str
    kind: int = CompletionItemKind.TEXT
    detail: Optional[str] = None
    text_edit: Optional[TextEdit] = None
    filter_text: Optional[str] = None
    sort_text: Optional[str] = None


class CompletionList(LspModel):
    is_incomplete: bool = True
    items: List[CompletionItem] = Field(default_factory=list)


class Command(LspModel):
    title: str
    command: str
    arguments: Optional[List[Dict[str, Any]]] = None


class WorkspaceEdit(LspModel):
    changes: Dict[str, List[TextEdit]] = Field(
        description="Edits keyed by document URI"
    )


class CodeAction(LspModel):
    title: str
    kind: str = "quickfix"
    edit: Optional[WorkspaceEdit] = None
    command: Optional[Command] = None
