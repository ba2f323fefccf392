"""
Shared fixtures for storage-demo tests.
"""

import sqlite3

import pytest

from storage_platform.context import build_context
from storage_platform.persistence import init_db
from storage_platform.services import StorageController


class ScriptedPresenter:
    """Dialog presenter that answers from a fixed script.

    Every presented dialog is recorded in ``shown``. Running out of answers
    fails the test, so unexpected dialogs are caught.
    """

    def __init__(self, answers=()):
        self.answers = list(answers)
        self.shown = []

    def present(self, dialog, respond):
        self.shown.append(dialog)
        if not self.answers:
            raise AssertionError(f"Unexpected dialog: {dialog.kind.value}")
        respond(self.answers.pop(0))

    @property
    def kinds(self):
        return [d.kind.value for d in self.shown]


class FakePlatform:
    """In-memory permission platform with directly settable status."""

    def __init__(self, api_level=30, granted=False, rationale=False):
        self.api_level = api_level
        self.granted = granted
        self.rationale = rationale
        self.results = []

    def is_granted(self, permission):
        return self.granted

    def should_show_rationale(self, permission):
        return self.rationale

    def record_result(self, permission, granted):
        self.results.append((permission, granted))
        self.granted = granted
        if not granted:
            self.rationale = True


@pytest.fixture
def scripted_presenter():
    """Factory for presenters answering dialogs from a fixed script."""
    return ScriptedPresenter


@pytest.fixture
def fake_platform():
    """Factory for in-memory permission platforms."""
    return FakePlatform


@pytest.fixture
def db_conn():
    """Create an in-memory SQLite connection with the Info schema."""
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    init_db(conn)
    yield conn
    conn.close()


@pytest.fixture
def storage_ctx(tmp_path):
    """A storage context rooted in a temporary home at API level 30."""
    return build_context(home=tmp_path / "home", api_level=30)


@pytest.fixture
def make_controller(storage_ctx):
    """Build a started controller answering dialogs from *answers*."""
    def _make(answers=(), ctx=None):
        presenter = ScriptedPresenter(answers)
        controller = StorageController(ctx or storage_ctx, presenter)
        controller.start().result(timeout=5)
        controller.dispatcher.drain()
        return controller, presenter
    return _make
