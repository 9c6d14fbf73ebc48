"""
Abstract base class for the editor side of the protocol.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from polski_ls.schemas.lsp import Diagnostic


class LanguageClient(ABC):
    """
    Notifications the session sends to the editor.

    The transport layer implements this on top of its JSON-RPC connection.
    """

    @abstractmethod
    async def publish_diagnostics(
        self,
        uri: str,
        diagnostics: List[Diagnostic],
        version: Optional[int] = None,
    ) -> None:
        """Replace the diagnostics shown for a document."""
        pass

    @abstractmethod
    async def show_message(self, message_type: int, message: str) -> None:
        """Show a message to the user (see schemas.lsp.MessageType)."""
        pass
