"""Display formatting for JSON paths."""

from .path_resolver import PathLike
from ..models.core import JsonPath


class PathFormatter:
    """Renders paths as ``$["key"][0]`` strings."""

    def __init__(self, escape_keys: bool = False):
        """
        Args:
            escape_keys: Escape backslashes and double quotes inside keys.
                Off by default, keys are emitted verbatim.
        """
        self.escape_keys = escape_keys

    def format(self, path: PathLike = None) -> str:
        segments = JsonPath.coerce(path).segments
        if not segments:
            return "$"
        return "$" + "".join(self._bracket(segment) for segment in segments)

    def _bracket(self, segment) -> str:
        if isinstance(segment, int):
            return f"[{segment}]"
        key = segment
        if self.escape_keys:
            key = key.replace("\\", "\\\\").replace('"', '\\"')
        return f'["{key}"]'
