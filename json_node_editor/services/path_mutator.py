"""Copy-on-write assignment of values addressed by a path."""

from typing import Optional

from ..models.core import JsonPath, JSONValue, Segment
from ..models.errors import PathException
from ..utils.logging_config import get_logger
from .json_processor import JSONProcessor
from .path_resolver import PathLike

logger = get_logger(__name__)


class PathMutator:
    """Builds new documents with one value replaced, leaving the input untouched."""

    def __init__(self, processor: Optional[JSONProcessor] = None):
        self.processor = processor or JSONProcessor()

    def assign(self, document: JSONValue, path: PathLike, value_text: str) -> JSONValue:
        """
        Parse ``value_text`` and write it at ``path`` in a copy of ``document``.

        Args:
            document: Parsed JSON document
            path: Where to write, empty for the whole document
            value_text: JSON text of the new value

        Returns:
            The new document

        Raises:
            ParseException: If value_text is not well-formed JSON
            PathException: If the path runs through a scalar
        """
        value = self.processor.parse(value_text, error_code="INVALID_JSON_VALUE")
        return self.assign_value(document, path, value)

    def assign_value(self, document: JSONValue, path: PathLike, value: JSONValue) -> JSONValue:
        """
        Write ``value`` at ``path`` in a structural copy of ``document``.

        Missing or null intermediates are created as the next segment asks:
        an integer index gets an array, a key gets an object. Arrays written
        past their end are padded with null.

        Raises:
            PathException: If the path cannot be written
        """
        json_path = JsonPath.coerce(path)
        new_value = self.processor.deep_copy(value)

        if json_path.is_root:
            return new_value

        segments = json_path.segments
        root = self.processor.deep_copy(document)
        if root is None:
            root = self._container_for(segments[0])

        current = root
        for position, segment in enumerate(segments[:-1]):
            existing = self._get_slot(current, segment, json_path, position)
            if existing is None:
                existing = self._container_for(segments[position + 1])
                self._set_slot(current, segment, existing, json_path, position)
            elif not isinstance(existing, (dict, list)):
                raise PathException(
                    error_code="PATH_NOT_CONTAINER",
                    message=(
                        f"Cannot descend into {type(existing).__name__} value "
                        f"at segment {position} ({segment!r})"
                    ),
                    details={"path": list(segments), "position": position}
                )
            current = existing

        self._set_slot(current, segments[-1], new_value, json_path, len(segments) - 1)
        logger.debug("value_assigned", path=list(segments))
        return root

    def _container_for(self, next_segment: Segment) -> JSONValue:
        return [] if isinstance(next_segment, int) else {}

    def _get_slot(self, container: JSONValue, segment: Segment, path: JsonPath, position: int) -> JSONValue:
        if isinstance(container, dict):
            return container.get(self._key(segment))
        index = self._index(container, segment, path, position)
        return container[index] if index < len(container) else None

    def _set_slot(self, container: JSONValue, segment: Segment, value: JSONValue,
                  path: JsonPath, position: int) -> None:
        if isinstance(container, dict):
            container[self._key(segment)] = value
            return
        index = self._index(container, segment, path, position)
        if index >= len(container):
            container.extend([None] * (index + 1 - len(container)))
        container[index] = value

    def _key(self, segment: Segment) -> str:
        # JSON object keys are strings
        return str(segment) if isinstance(segment, int) else segment

    def _index(self, container: JSONValue, segment: Segment, path: JsonPath, position: int) -> int:
        if not isinstance(container, list):
            raise PathException(
                error_code="PATH_NOT_CONTAINER",
                message=f"Cannot descend into {type(container).__name__} value at segment {position}",
                details={"path": list(path.segments), "position": position}
            )
        if isinstance(segment, int):
            return segment
        if segment.isascii() and segment.isdigit():
            return int(segment)
        raise PathException(
            error_code="INVALID_SEGMENT",
            message=f"Key {segment!r} cannot address an array at segment {position}",
            details={"path": list(path.segments), "position": position}
        )
