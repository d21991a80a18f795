"""Tests for the edit session state machine."""

import json

import pytest
from structlog.testing import capture_logs

from json_node_editor import resolve
from json_node_editor.config import EditorConfig
from json_node_editor.models import EditMode, JsonPath, SessionException
from json_node_editor.services import (
    EditSession,
    FileDocumentStore,
    InMemoryDocumentStore,
    InMemoryMirrorStore,
    InMemorySelectionProvider,
)


class TestSelection:
    """Selecting paths and viewing values."""

    def test_initial_state(self, session):
        assert session.mode == EditMode.VIEWING
        assert not session.active
        assert session.draft_text == ""
        assert session.error is None
        assert session.path_text is None
        assert session.view_text == ""

    def test_select_resolves_value(self, session, sample_text):
        session.select(["customer", "name"])
        assert session.active
        assert session.path == JsonPath.of("customer", "name")
        assert session.draft_text == '"Ada"'
        assert session.path_text == '$["customer"]["name"]'

    def test_select_missing_path_shows_null(self, session):
        session.select(["nothing", 0])
        assert session.draft_text == "null"

    def test_select_root(self, session, sample_text):
        session.select([])
        assert session.draft_text == resolve(sample_text, [])
        assert session.path_text == "$"

    def test_select_none_deactivates(self, session):
        session.select(["customer"])
        session.select(None)
        assert not session.active
        assert session.draft_text == ""

    def test_view_text_follows_store(self, session, document_store):
        session.select(["active"])
        document_store.set_text('{"active": false}')
        assert session.view_text == "false"

    def test_selection_change_discards_draft(self, session):
        session.select(["customer", "name"])
        session.begin_edit()
        session.update_draft('"typed"')
        session.select(["active"])
        assert session.mode == EditMode.VIEWING
        assert session.draft_text == "true"
        assert session.error is None

    def test_selection_change_clears_error(self, session):
        session.select(["customer", "name"])
        session.begin_edit()
        session.update_draft("{")
        assert session.save() is False
        session.select(["customer", "name"])
        assert session.error is None
        assert session.mode == EditMode.VIEWING


class TestEditing:
    """Begin, save and cancel."""

    def test_begin_edit_seeds_draft(self, session):
        session.select(["customer", "orders", 0])
        session.begin_edit()
        assert session.mode == EditMode.EDITING
        assert json.loads(session.draft_text) == {"id": 1, "items": ["pen", "ink"]}

    def test_save_commits_to_both_stores(self, session, document_store, mirror_store, sample):
        session.select(["customer", "name"])
        session.begin_edit()
        session.update_draft('"Grace"')

        assert session.save() is True

        sample["customer"]["name"] = "Grace"
        expected_text = json.dumps(sample, indent=2)
        assert document_store.get_text() == expected_text
        assert mirror_store.text == expected_text
        assert mirror_store.has_changes is False
        assert session.mode == EditMode.VIEWING
        assert session.error is None
        assert session.draft_text == '"Grace"'

    def test_save_creates_missing_intermediates(self, mirror_store):
        store = InMemoryDocumentStore("{}")
        session = EditSession(store, mirror_store)
        session.select(["a", 0, "b"])
        session.begin_edit()
        session.update_draft("1")
        assert session.save() is True
        assert json.loads(store.get_text()) == {"a": [{"b": 1}]}

    def test_save_root_replaces_document(self, session, document_store):
        session.select([])
        session.begin_edit()
        session.update_draft('["replaced"]')
        assert session.save() is True
        assert json.loads(document_store.get_text()) == ["replaced"]

    def test_save_uses_configured_indent(self, mirror_store):
        store = InMemoryDocumentStore('{"a": 1}')
        session = EditSession(store, mirror_store, config=EditorConfig(indent=4))
        session.select(["a"])
        session.begin_edit()
        session.update_draft("[2]")
        assert session.save() is True
        assert store.get_text() == '{\n    "a": [\n        2\n    ]\n}'

    def test_mirror_write_does_not_reenter_document_store(self):
        store = InMemoryDocumentStore('{"a": 1}')
        writes = []
        store.subscribe(writes.append)
        mirror = InMemoryMirrorStore(downstream=store)
        session = EditSession(store, mirror)
        session.select(["a"])
        session.begin_edit()
        session.update_draft("2")
        assert session.save() is True
        assert len(writes) == 1

    def test_cancel_restores_resolved_value(self, session, document_store):
        session.select(["customer", "orders"])
        session.begin_edit()
        session.update_draft("whatever I typed")
        session.cancel()
        assert session.mode == EditMode.VIEWING
        assert session.error is None
        assert session.draft_text == resolve(document_store.get_text(), ["customer", "orders"])

    def test_cancel_picks_up_external_changes(self, session, document_store):
        session.select(["active"])
        session.begin_edit()
        document_store.set_text('{"active": "changed"}')
        session.cancel()
        assert session.draft_text == '"changed"'

    def test_snapshot(self, session):
        session.select(["customer", 0])
        session.begin_edit()
        state = session.snapshot()
        assert state.mode == EditMode.EDITING
        assert state.path == JsonPath.of("customer", 0)
        assert state.path_text == '$["customer"][0]'
        assert state.draft_text == "null"


class TestSaveFailures:
    """Rejected saves keep the draft and leave the stores untouched."""

    @pytest.mark.parametrize("draft", ["{", "", "'x'", "[1,,2]", "NaN"])
    def test_invalid_draft(self, session, document_store, mirror_store, draft):
        before = document_store.get_text()
        session.select(["customer", "name"])
        session.begin_edit()
        session.update_draft(draft)

        assert session.save() is False

        assert document_store.get_text() == before
        assert mirror_store.text == ""
        assert session.mode == EditMode.EDITING
        assert session.error
        assert session.draft_text == draft

    def test_error_names_location(self, session):
        session.select(["customer"])
        session.begin_edit()
        session.update_draft('{"a": }')
        session.save()
        assert session.error.startswith("Invalid JSON:")
        assert "(line 1, column 7)" in session.error

    def test_retry_after_fix(self, session, document_store):
        session.select(["active"])
        session.begin_edit()
        session.update_draft("fals")
        assert session.save() is False
        session.update_draft("false")
        assert session.save() is True
        assert session.error is None
        assert json.loads(document_store.get_text())["active"] is False

    def test_malformed_document(self, mirror_store):
        store = InMemoryDocumentStore('{"a": ')
        session = EditSession(store, mirror_store)
        session.select(["a"])
        assert session.draft_text == "null"
        session.begin_edit()
        session.update_draft("1")
        assert session.save() is False
        assert session.error
        assert store.get_text() == '{"a": '

    def test_unwritable_path(self, mirror_store):
        store = InMemoryDocumentStore('{"a": 5}')
        session = EditSession(store, mirror_store)
        session.select(["a", "b"])
        session.begin_edit()
        session.update_draft("1")
        assert session.save() is False
        assert "Cannot descend" in session.error
        assert store.get_text() == '{"a": 5}'

    @pytest.mark.parametrize("draft", ["1e400", "[1, -1e400]"])
    def test_overflowing_number_draft(self, mirror_store, draft):
        store = InMemoryDocumentStore('{"a": 1, "b": 2}')
        session = EditSession(store, mirror_store)
        session.select(["a"])
        session.begin_edit()
        session.update_draft(draft)

        assert session.save() is False

        assert "out of range" in session.error
        assert store.get_text() == '{"a": 1, "b": 2}'
        assert mirror_store.text == ""
        assert resolve(store.get_text(), ["b"]) == "2"

    def test_lone_surrogate_draft(self, tmp_path, mirror_store):
        doc = tmp_path / "doc.json"
        doc.write_text('{"a": 1}', encoding="utf-8")
        session = EditSession(FileDocumentStore(doc), mirror_store)
        session.select(["a"])
        session.begin_edit()
        session.update_draft('"\\ud800"')

        assert session.save() is False

        assert session.mode == EditMode.EDITING
        assert "surrogate" in session.error
        assert doc.read_text(encoding="utf-8") == '{"a": 1}'
        assert mirror_store.text == ""

    def test_lone_surrogate_saved_escaped_when_ascii(self, mirror_store):
        store = InMemoryDocumentStore('{"a": 1}')
        session = EditSession(store, mirror_store, config=EditorConfig(ensure_ascii=True))
        session.select(["a"])
        session.begin_edit()
        session.update_draft('"\\ud800"')
        assert session.save() is True
        assert store.get_text() == '{\n  "a": "\\ud800"\n}'

    def test_deep_document_never_raises(self, mirror_store):
        store = InMemoryDocumentStore("[" * 990 + "]" * 990)
        session = EditSession(store, mirror_store)
        session.select([0, 0])
        session.begin_edit()
        session.update_draft("1")
        if session.save():
            assert session.draft_text == "1"
        else:
            assert session.error
            assert store.get_text() == "[" * 990 + "]" * 990

    def test_rejection_is_logged(self, session):
        session.select(["active"])
        session.begin_edit()
        session.update_draft("{")
        with capture_logs() as logs:
            session.save()
        assert any(
            entry["event"] == "save_rejected" and entry["log_level"] == "warning"
            for entry in logs
        )


class TestGuards:
    """Transitions from the wrong state raise."""

    def test_begin_edit_without_selection(self, session):
        with pytest.raises(SessionException) as exc_info:
            session.begin_edit()
        assert exc_info.value.error_code == "NO_SELECTION"

    def test_begin_edit_twice(self, session):
        session.select(["active"])
        session.begin_edit()
        with pytest.raises(SessionException) as exc_info:
            session.begin_edit()
        assert exc_info.value.error_code == "INVALID_TRANSITION"
        assert exc_info.value.details["mode"] == "editing"

    @pytest.mark.parametrize("action", ["save", "cancel"])
    def test_requires_editing(self, session, action):
        session.select(["active"])
        with pytest.raises(SessionException) as exc_info:
            getattr(session, action)()
        assert exc_info.value.error_code == "INVALID_TRANSITION"

    def test_update_draft_requires_editing(self, session):
        session.select(["active"])
        with pytest.raises(SessionException):
            session.update_draft("1")


class TestSelectionProviderBinding:
    """Sessions following an external selection."""

    def test_bind_uses_current_selection(self, session):
        provider = InMemorySelectionProvider(["customer", "name"])
        session.bind(provider)
        assert session.draft_text == '"Ada"'

    def test_follows_changes(self, session):
        provider = InMemorySelectionProvider()
        session.bind(provider)
        assert not session.active
        provider.select(["active"])
        assert session.draft_text == "true"
        session.begin_edit()
        provider.select(["note"])
        assert session.mode == EditMode.VIEWING
        assert session.draft_text == "null"

    def test_close_stops_following(self, session):
        provider = InMemorySelectionProvider(["active"])
        session.bind(provider)
        session.close()
        provider.select(["note"])
        assert session.path == JsonPath.of("active")

    def test_rebind_drops_previous_provider(self, session):
        first = InMemorySelectionProvider(["active"])
        second = InMemorySelectionProvider(["note"])
        session.bind(first)
        session.bind(second)
        first.select(["customer"])
        assert session.path == JsonPath.of("note")


class TestSaveLogging:
    def test_saved_size_counts_utf8_bytes(self, mirror_store):
        store = InMemoryDocumentStore('{"a": 1}')
        session = EditSession(store, mirror_store)
        session.select(["a"])
        session.begin_edit()
        session.update_draft('"é"')
        with capture_logs() as logs:
            assert session.save() is True
        saved = [entry for entry in logs if entry["event"] == "edit_saved"]
        assert saved[0]["size"] == len(store.get_text().encode("utf-8"))
