"""Data models for JSON Node Editor."""

from .core import (
    JSONScalar,
    JSONValue,
    Segment,
    JsonPath,
    Document,
)

from .session import (
    EditMode,
    SessionState,
)

from .errors import (
    ErrorResponse,
    ParseError,
    PathError,
    SessionError,
    JSONEditorException,
    ParseException,
    PathException,
    SessionException,
)

__all__ = [
    # Core models
    "JSONScalar",
    "JSONValue",
    "Segment",
    "JsonPath",
    "Document",

    # Session models
    "EditMode",
    "SessionState",

    # Error models
    "ErrorResponse",
    "ParseError",
    "PathError",
    "SessionError",

    # Exception classes
    "JSONEditorException",
    "ParseException",
    "PathException",
    "SessionException",
]
