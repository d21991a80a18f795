"""Core data models for JSON Node Editor."""

import json
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError, field_validator

from .errors import ParseException, PathException


# Values produced by json.loads: None, bool, int, float, str, list and str-keyed dict.
JSONScalar = Union[None, bool, int, float, str]
JSONValue = Union[JSONScalar, List[Any], Dict[str, Any]]

Segment = Union[StrictInt, StrictStr]


class JsonPath(BaseModel):
    """Immutable sequence of segments locating a value inside a JSON document."""

    model_config = ConfigDict(frozen=True)

    segments: Tuple[Segment, ...] = Field(default=(), description="Keys and indexes from the root")

    @field_validator('segments', mode='before')
    @classmethod
    def validate_segments(cls, v):
        """Ensure every segment is a string key or a non-negative integer index."""
        if isinstance(v, (str, bytes)):
            raise ValueError("Path must be a sequence of segments, not a string")
        segments = tuple(v)
        for position, segment in enumerate(segments):
            if isinstance(segment, bool) or not isinstance(segment, (int, str)):
                raise ValueError(
                    f"Segment {position} must be a string key or integer index, got {type(segment).__name__}"
                )
            if isinstance(segment, int) and segment < 0:
                raise ValueError(f"Segment {position} is a negative index: {segment}")
        return segments

    @classmethod
    def of(cls, *segments: Segment) -> "JsonPath":
        return cls.coerce(segments)

    @classmethod
    def coerce(cls, path: Union["JsonPath", Iterable[Segment], None]) -> "JsonPath":
        """
        Build a path from a JsonPath, an iterable of segments, or None (the root).

        Raises:
            PathException: If any segment is not a key or a non-negative index
        """
        if path is None:
            return cls()
        if isinstance(path, JsonPath):
            return path
        try:
            return cls(segments=path)
        except ValidationError as e:
            raise PathException(
                error_code="INVALID_PATH",
                message=f"Invalid path: {e.errors()[0]['msg']}",
                details={"path": repr(path)}
            )

    @classmethod
    def from_json(cls, text: str) -> "JsonPath":
        """
        Parse a path written as a JSON array, e.g. '["customer", 0, "name"]'.

        Raises:
            ParseException: If the text is not valid JSON
            PathException: If the JSON is not an array of valid segments
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseException(
                error_code="INVALID_PATH_JSON",
                message=f"Path is not valid JSON: {e.msg}",
                details={"line": e.lineno, "column": e.colno, "position": e.pos}
            )
        if not isinstance(data, list):
            raise PathException(
                error_code="INVALID_PATH",
                message="Path must be a JSON array of keys and indexes",
                details={"received_type": type(data).__name__}
            )
        return cls.coerce(data)

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def parent(self) -> Optional["JsonPath"]:
        if self.is_root:
            return None
        return JsonPath(segments=self.segments[:-1])

    def child(self, segment: Segment) -> "JsonPath":
        return JsonPath(segments=self.segments + (segment,))

    def __len__(self) -> int:
        return len(self.segments)

    def __getitem__(self, index: int) -> Segment:
        return self.segments[index]


class Document(BaseModel):
    """A JSON document in its canonical serialized text form."""

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Canonical serialized JSON text")

    @property
    def size(self) -> int:
        """Size of the text in UTF-8 bytes."""
        return len(self.text.encode('utf-8'))
