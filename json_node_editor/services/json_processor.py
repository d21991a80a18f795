"""JSON processing service: parsing, pretty-printing and structural copies."""

import json
import math
from typing import Any

from ..models.core import Document, JSONValue
from ..models.errors import ParseException


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _finite_float(literal: str) -> float:
    number = float(literal)
    if not math.isfinite(number):
        raise ValueError(f"Number {literal} is out of range")
    return number


class JSONProcessor:
    """Converts between JSON text and JSON values."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        """
        Initialize the processor.

        Args:
            indent: Indentation for pretty-printed output
            ensure_ascii: Escape non-ASCII characters in output
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def parse(self, text: str, error_code: str = "INVALID_JSON") -> JSONValue:
        """
        Parse JSON text into a value.

        NaN, Infinity and number literals that overflow a float are rejected
        so that every parsed value serializes back to standard JSON.

        Args:
            text: JSON text to parse
            error_code: Error code reported on failure

        Returns:
            Parsed JSON value

        Raises:
            ParseException: If the text is not well-formed JSON
        """
        if not isinstance(text, str):
            raise ParseException(
                error_code=error_code,
                message=f"Invalid JSON: expected text, got {type(text).__name__}",
                details={"received_type": type(text).__name__}
            )

        try:
            return json.loads(text, parse_constant=_reject_constant, parse_float=_finite_float)
        except json.JSONDecodeError as e:
            raise ParseException(
                error_code=error_code,
                message=f"Invalid JSON: {e.msg}",
                details={
                    "line": e.lineno,
                    "column": e.colno,
                    "position": e.pos
                }
            )
        except ValueError as e:
            raise ParseException(
                error_code=error_code,
                message=f"Invalid JSON: {str(e)}",
                details={"error": str(e)}
            )
        except RecursionError:
            raise ParseException(
                error_code=error_code,
                message="Invalid JSON: document is nested too deeply",
                details={"length": len(text)}
            )

    def serialize(self, value: JSONValue) -> str:
        """
        Pretty-print a JSON value.

        The output is standard JSON that encodes as UTF-8.

        Raises:
            ParseException: If the value has no such representation
        """
        try:
            text = json.dumps(value, indent=self.indent, ensure_ascii=self.ensure_ascii, allow_nan=False)
            text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ParseException(
                error_code="UNENCODABLE_TEXT",
                message="Invalid JSON: string contains a lone surrogate that cannot be stored as UTF-8",
                details={"reason": e.reason, "position": e.start}
            )
        except (TypeError, ValueError) as e:
            raise ParseException(
                error_code="INVALID_JSON_TYPE",
                message=f"Invalid JSON: {str(e)}",
                details={"error": str(e)}
            )
        except RecursionError:
            raise ParseException(
                error_code="DOCUMENT_TOO_DEEP",
                message="Invalid JSON: value is nested too deeply to serialize",
                details={}
            )
        return text

    def to_document(self, value: JSONValue) -> Document:
        """Render a value as a document in canonical text form."""
        return Document(text=self.serialize(value))

    def deep_copy(self, value: JSONValue) -> JSONValue:
        """
        Copy a JSON value structurally.

        Containers are rebuilt; scalars are immutable and shared. The walk keeps
        its own stack, so nesting depth is bounded by memory only.

        Raises:
            ParseException: If the value contains something JSON cannot represent
        """
        root = self._empty_like(value)
        pending = [(value, root)]
        while pending:
            source, target = pending.pop()
            if isinstance(source, list):
                for item in source:
                    copied = self._empty_like(item)
                    target.append(copied)
                    if isinstance(item, (list, dict)):
                        pending.append((item, copied))
            elif isinstance(source, dict):
                for key, item in source.items():
                    if not isinstance(key, str):
                        raise ParseException(
                            error_code="INVALID_JSON_TYPE",
                            message=f"Object keys must be strings, got {type(key).__name__}",
                            details={"key": repr(key)}
                        )
                    copied = self._empty_like(item)
                    target[key] = copied
                    if isinstance(item, (list, dict)):
                        pending.append((item, copied))
        return root

    def _empty_like(self, value: JSONValue) -> JSONValue:
        """Return a fresh empty container for containers, the value itself for scalars."""
        if isinstance(value, list):
            return []
        if isinstance(value, dict):
            return {}
        if value is None or isinstance(value, (bool, int, float, str)):
            return value
        raise ParseException(
            error_code="INVALID_JSON_TYPE",
            message=f"Value of type {type(value).__name__} is not representable as JSON",
            details={"received_type": type(value).__name__}
        )
