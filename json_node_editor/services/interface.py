"""Abstract interfaces for the collaborators of an edit session."""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..models.core import JsonPath

TextListener = Callable[[str], None]
SelectionListener = Callable[[Optional[JsonPath]], None]
Unsubscribe = Callable[[], None]


class DocumentStore(ABC):
    """Canonical source of truth for the whole document text."""

    @abstractmethod
    def get_text(self) -> str:
        """Return the current document text."""
        pass

    @abstractmethod
    def set_text(self, text: str) -> None:
        """Replace the whole document text."""
        pass

    @abstractmethod
    def subscribe(self, listener: TextListener) -> Unsubscribe:
        """Call ``listener`` with the new text after every write.

        Returns:
            Function that removes the listener
        """
        pass


class MirrorStore(ABC):
    """Secondary text view that receives committed documents."""

    @abstractmethod
    def set_text(self, text: str, *, has_changes: bool = False,
                 suppress_downstream_sync: bool = False) -> None:
        """Replace the mirrored text.

        Args:
            text: New text
            has_changes: Whether the mirror should flag the text as unsaved
            suppress_downstream_sync: Do not propagate this write back into
                the document store
        """
        pass


class SelectionProvider(ABC):
    """Source of the currently selected path."""

    @property
    @abstractmethod
    def current(self) -> Optional[JsonPath]:
        """The selected path, or None."""
        pass

    @abstractmethod
    def subscribe(self, listener: SelectionListener) -> Unsubscribe:
        """Call ``listener`` whenever the selection changes.

        Returns:
            Function that removes the listener
        """
        pass
