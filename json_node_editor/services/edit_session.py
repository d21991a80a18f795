"""Edit session state machine: view, edit, validate, commit or cancel a sub-value."""

from typing import Optional

from ..config.models import EditorConfig
from ..models.core import JsonPath
from ..models.errors import ParseException, PathException, SessionException
from ..models.session import EditMode, SessionState
from ..utils.error_handler import format_error_message
from ..utils.logging_config import get_logger
from .interface import DocumentStore, MirrorStore, SelectionProvider, Unsubscribe
from .json_processor import JSONProcessor
from .path_formatter import PathFormatter
from .path_mutator import PathMutator
from .path_resolver import PathLike, PathResolver

logger = get_logger(__name__)


class EditSession:
    """Coordinates editing of the value at the selected path.

    The session starts in ``VIEWING``. ``begin_edit`` moves to ``EDITING``;
    ``save`` commits a valid draft to the document store and the mirror and
    returns to ``VIEWING``; ``cancel`` drops the draft. Changing the selection
    always returns to ``VIEWING`` and discards any draft.
    """

    def __init__(
        self,
        document_store: DocumentStore,
        mirror_store: MirrorStore,
        config: Optional[EditorConfig] = None,
        resolver: Optional[PathResolver] = None,
        mutator: Optional[PathMutator] = None,
        formatter: Optional[PathFormatter] = None,
    ):
        """
        Initialize the session with no selection.

        Args:
            document_store: Canonical document store
            mirror_store: Secondary view updated on every commit
            config: Editor settings, defaults when omitted
            resolver: Path resolver, built from config when omitted
            mutator: Path mutator, built from config when omitted
            formatter: Path formatter, built from config when omitted
        """
        self.config = config or EditorConfig()
        self.document_store = document_store
        self.mirror_store = mirror_store
        self.processor = JSONProcessor(indent=self.config.indent, ensure_ascii=self.config.ensure_ascii)
        self.resolver = resolver or PathResolver(self.processor)
        self.mutator = mutator or PathMutator(self.processor)
        self.formatter = formatter or PathFormatter(escape_keys=self.config.escape_path_keys)

        self._mode = EditMode.VIEWING
        self._path: Optional[JsonPath] = None
        self._draft_text = ""
        self._error: Optional[str] = None
        self._unsubscribe: Optional[Unsubscribe] = None

    @property
    def mode(self) -> EditMode:
        return self._mode

    @property
    def draft_text(self) -> str:
        return self._draft_text

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def path(self) -> Optional[JsonPath]:
        return self._path

    @property
    def active(self) -> bool:
        return self._path is not None

    @property
    def path_text(self) -> Optional[str]:
        """Display form of the selected path."""
        if self._path is None:
            return None
        return self.formatter.format(self._path)

    @property
    def view_text(self) -> str:
        """Value at the selection as currently stored, for the read-only pane."""
        if self._path is None:
            return ""
        return self._resolve_current()

    def snapshot(self) -> SessionState:
        return SessionState(
            mode=self._mode,
            draft_text=self._draft_text,
            error=self._error,
            path=self._path,
            path_text=self.path_text,
        )

    def select(self, path: PathLike) -> None:
        """
        React to a selection change.

        Any draft is discarded without confirmation. Passing None deactivates
        the session.
        """
        self._path = None if path is None else JsonPath.coerce(path)
        self._mode = EditMode.VIEWING
        self._error = None
        self._draft_text = "" if self._path is None else self._resolve_current()
        logger.info("selection_changed", path=self.path_text)

    def begin_edit(self) -> None:
        """Switch to editing, seeding the draft with the current value."""
        self._require(EditMode.VIEWING, "begin_edit")
        self._draft_text = self._resolve_current()
        self._error = None
        self._mode = EditMode.EDITING
        logger.info("edit_started", path=self.path_text)

    def update_draft(self, text: str) -> None:
        """Replace the draft with user-typed text."""
        self._require(EditMode.EDITING, "update_draft")
        self._draft_text = text

    def save(self) -> bool:
        """
        Validate the draft and commit it at the selected path.

        On failure the session stays in ``EDITING`` with the draft untouched,
        ``error`` describes the problem, and neither store is written.

        Returns:
            True if the document was committed

        Raises:
            SessionException: If the session is not editing a selection
        """
        self._require(EditMode.EDITING, "save")

        try:
            value = self.processor.parse(self._draft_text, error_code="INVALID_JSON_VALUE")
            document = self.processor.parse(self.document_store.get_text(), error_code="INVALID_DOCUMENT")
            updated = self.processor.to_document(self.mutator.assign_value(document, self._path, value))
        except (ParseException, PathException) as e:
            self._error = format_error_message(e)
            logger.warning("save_rejected", path=self.path_text, error_code=e.error_code, reason=e.message)
            return False

        self.document_store.set_text(updated.text)
        self.mirror_store.set_text(updated.text, has_changes=False, suppress_downstream_sync=True)

        self._mode = EditMode.VIEWING
        self._error = None
        self._draft_text = self.resolver.resolve(updated, self._path)
        logger.info("edit_saved", path=self.path_text, size=updated.size)
        return True

    def cancel(self) -> None:
        """Discard the draft and show the stored value again."""
        self._require(EditMode.EDITING, "cancel")
        self._draft_text = self._resolve_current()
        self._error = None
        self._mode = EditMode.VIEWING
        logger.info("edit_cancelled", path=self.path_text)

    def bind(self, provider: SelectionProvider) -> None:
        """Follow a selection provider, starting from its current selection."""
        self.close()
        self._unsubscribe = provider.subscribe(self.select)
        self.select(provider.current)

    def close(self) -> None:
        """Stop following the bound selection provider."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _resolve_current(self) -> str:
        return self.resolver.resolve(self.document_store.get_text(), self._path)

    def _require(self, mode: EditMode, action: str) -> None:
        if self._path is None:
            raise SessionException(
                error_code="NO_SELECTION",
                message=f"Cannot {action}: nothing is selected",
                details={"mode": self._mode.value, "action": action}
            )
        if self._mode != mode:
            raise SessionException(
                error_code="INVALID_TRANSITION",
                message=f"Cannot {action} while {self._mode.value}",
                details={"mode": self._mode.value, "action": action}
            )
