"""Path-addressed viewing and editing of values inside JSON documents."""

from typing import Union

from .models import Document, JsonPath, JSONValue, ParseException, PathException, SessionException
from .models.session import EditMode
from .services import EditSession, PathFormatter, PathMutator, PathResolver
from .services.path_resolver import PathLike

__version__ = "0.1.0"

_resolver = PathResolver()
_mutator = PathMutator()
_formatter = PathFormatter()


def resolve(document: Union[Document, str], path: PathLike = None) -> str:
    """Pretty-printed value at ``path``, or ``"null"`` when it cannot be reached."""
    return _resolver.resolve(document, path)


def assign(document: JSONValue, path: PathLike, value_text: str) -> JSONValue:
    """New document with the parsed ``value_text`` written at ``path``."""
    return _mutator.assign(document, path, value_text)


def format_path(path: PathLike = None) -> str:
    """Display string such as ``$["customer"][0]["name"]``."""
    return _formatter.format(path)


__all__ = [
    "Document",
    "JsonPath",
    "JSONValue",
    "EditMode",
    "EditSession",
    "PathResolver",
    "PathMutator",
    "PathFormatter",
    "ParseException",
    "PathException",
    "SessionException",
    "resolve",
    "assign",
    "format_path",
]
