"""Read access to values addressed by a path inside a JSON document."""

from typing import Iterable, Optional, Tuple, Union

from ..models.core import Document, JsonPath, JSONValue, Segment
from ..models.errors import ParseException, PathException
from ..utils.logging_config import get_logger
from .json_processor import JSONProcessor

logger = get_logger(__name__)

NULL_TEXT = "null"

PathLike = Union[JsonPath, Iterable[Segment], None]


def step_into(container: JSONValue, segment: Segment) -> Tuple[bool, JSONValue]:
    """
    Descend one segment into a container.

    Objects are looked up by key, an integer segment standing for its decimal
    key. Arrays are looked up by index, a digit-only string standing for its
    integer. Anything else is a miss.

    Returns:
        (found, value), value is None on a miss
    """
    if isinstance(container, dict):
        key = str(segment) if isinstance(segment, int) else segment
        if key in container:
            return True, container[key]
        return False, None

    if isinstance(container, list):
        if isinstance(segment, str):
            if not (segment.isascii() and segment.isdigit()):
                return False, None
            segment = int(segment)
        if 0 <= segment < len(container):
            return True, container[segment]
        return False, None

    return False, None


class PathResolver:
    """Resolves paths against documents, degrading to the null literal on failure."""

    def __init__(self, processor: Optional[JSONProcessor] = None):
        self.processor = processor or JSONProcessor()

    def resolve(self, document: Union[Document, str], path: PathLike = None) -> str:
        """
        Return the pretty-printed value at ``path``.

        Never raises: an unparseable document, an invalid path, or a path that
        runs into a missing value or null, and a value too deep to print all
        yield ``"null"``.

        Args:
            document: Document or its serialized text
            path: Path to resolve, None for the root

        Returns:
            Pretty-printed JSON text of the reached value
        """
        text = document.text if isinstance(document, Document) else document

        try:
            value = self.processor.parse(text)
            json_path = JsonPath.coerce(path)
        except (ParseException, PathException) as e:
            logger.debug("resolve_degraded", error_code=e.error_code, reason=e.message)
            return NULL_TEXT

        found, reached = self.lookup(value, json_path)
        if not found:
            logger.debug("resolve_missing", path=list(json_path.segments))
            return NULL_TEXT

        try:
            return self.processor.serialize(reached)
        except ParseException as e:
            logger.debug("resolve_degraded", error_code=e.error_code, reason=e.message)
            return NULL_TEXT

    def lookup(self, value: JSONValue, path: PathLike = None) -> Tuple[bool, JSONValue]:
        """
        Walk ``path`` through an already parsed value.

        Returns:
            (found, copy of the reached value); (False, None) when the walk hits
            a missing value or null before the path is exhausted
        """
        current = value
        for segment in JsonPath.coerce(path).segments:
            if current is None:
                return False, None
            found, current = step_into(current, segment)
            if not found:
                return False, None
        return True, self.processor.deep_copy(current)
