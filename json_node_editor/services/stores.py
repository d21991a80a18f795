"""Document, mirror and selection store implementations."""

import os
import tempfile
import threading
from pathlib import Path
from typing import Callable, Generic, List, Optional, TypeVar, Union

from ..models.core import JsonPath
from ..utils.logging_config import get_logger
from .interface import (
    DocumentStore, MirrorStore, SelectionProvider,
    SelectionListener, TextListener, Unsubscribe
)
from .path_resolver import PathLike

logger = get_logger(__name__)

T = TypeVar('T')


class _Listeners(Generic[T]):
    """Ordered listener registry."""

    def __init__(self):
        self._listeners: List[Callable[[T], None]] = []
        self._lock = threading.RLock()

    def add(self, listener: Callable[[T], None]) -> Unsubscribe:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def notify(self, payload: T) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(payload)


class InMemoryDocumentStore(DocumentStore):
    """Document store holding its text in memory."""

    def __init__(self, text: str = "{}"):
        self._text = text
        self._lock = threading.RLock()
        self._listeners: _Listeners[str] = _Listeners()

    def get_text(self) -> str:
        with self._lock:
            return self._text

    def set_text(self, text: str) -> None:
        with self._lock:
            self._text = text
        self._listeners.notify(text)

    def subscribe(self, listener: TextListener) -> Unsubscribe:
        return self._listeners.add(listener)


class FileDocumentStore(DocumentStore):
    """Document store backed by a file, replaced whole on every write."""

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8"):
        self.path = Path(path)
        self.encoding = encoding
        self._lock = threading.RLock()
        self._listeners: _Listeners[str] = _Listeners()

    def get_text(self) -> str:
        with self._lock:
            return self.path.read_text(encoding=self.encoding)

    def set_text(self, text: str) -> None:
        with self._lock:
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding=self.encoding) as f:
                    f.write(text)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        logger.info("document_written", path=str(self.path), size=len(text))
        self._listeners.notify(text)

    def subscribe(self, listener: TextListener) -> Unsubscribe:
        return self._listeners.add(listener)


class InMemoryMirrorStore(MirrorStore):
    """Mirror holding its text in memory.

    Writes are forwarded to ``downstream`` unless the writer asks to
    suppress the sync.
    """

    def __init__(self, text: str = "", downstream: Optional[DocumentStore] = None):
        self._text = text
        self._has_changes = False
        self._lock = threading.RLock()
        self.downstream = downstream

    @property
    def text(self) -> str:
        with self._lock:
            return self._text

    @property
    def has_changes(self) -> bool:
        with self._lock:
            return self._has_changes

    def set_text(self, text: str, *, has_changes: bool = False,
                 suppress_downstream_sync: bool = False) -> None:
        with self._lock:
            self._text = text
            self._has_changes = has_changes
        if self.downstream is not None and not suppress_downstream_sync:
            self.downstream.set_text(text)


class InMemorySelectionProvider(SelectionProvider):
    """Selection holder that notifies subscribers when the path changes."""

    def __init__(self, path: PathLike = None):
        self._current = None if path is None else JsonPath.coerce(path)
        self._listeners: _Listeners[Optional[JsonPath]] = _Listeners()

    @property
    def current(self) -> Optional[JsonPath]:
        return self._current

    def select(self, path: PathLike) -> None:
        """Change the selection; None clears it."""
        self._current = None if path is None else JsonPath.coerce(path)
        self._listeners.notify(self._current)

    def subscribe(self, listener: SelectionListener) -> Unsubscribe:
        return self._listeners.add(listener)
