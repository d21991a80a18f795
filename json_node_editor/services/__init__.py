"""Services for JSON Node Editor."""

from .json_processor import JSONProcessor
from .path_resolver import PathResolver, NULL_TEXT
from .path_mutator import PathMutator
from .path_formatter import PathFormatter
from .interface import DocumentStore, MirrorStore, SelectionProvider
from .stores import (
    InMemoryDocumentStore,
    InMemoryMirrorStore,
    InMemorySelectionProvider,
    FileDocumentStore,
)
from .edit_session import EditSession

__all__ = [
    "JSONProcessor",
    "PathResolver",
    "NULL_TEXT",
    "PathMutator",
    "PathFormatter",
    "DocumentStore",
    "MirrorStore",
    "SelectionProvider",
    "InMemoryDocumentStore",
    "InMemoryMirrorStore",
    "InMemorySelectionProvider",
    "FileDocumentStore",
    "EditSession",
]
