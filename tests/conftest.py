"""Pytest configuration and shared fixtures."""

import json
import os

import pytest
import structlog

from json_node_editor.services import (
    EditSession,
    InMemoryDocumentStore,
    InMemoryMirrorStore,
)


SAMPLE = {
    "customer": {
        "name": "Ada",
        "orders": [
            {"id": 1, "items": ["pen", "ink"]},
            {"id": 2, "items": []},
        ],
    },
    "active": True,
    "note": None,
}


@pytest.fixture(scope="session", autouse=True)
def quiet_structlog():
    """Keep structured log events out of captured stdout."""
    structlog.configure(logger_factory=structlog.ReturnLoggerFactory())
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def clean_editor_env():
    """Remove JSON_EDITOR_* variables, including ones a .env file loaded."""

    def _clear():
        for key in [k for k in os.environ if k.startswith("JSON_EDITOR_")]:
            del os.environ[key]

    _clear()
    yield
    _clear()


@pytest.fixture
def sample():
    return json.loads(json.dumps(SAMPLE))


@pytest.fixture
def sample_text():
    return json.dumps(SAMPLE, indent=2)


@pytest.fixture
def document_store(sample_text):
    return InMemoryDocumentStore(sample_text)


@pytest.fixture
def mirror_store():
    return InMemoryMirrorStore()


@pytest.fixture
def session(document_store, mirror_store):
    return EditSession(document_store, mirror_store)
