"""Interaction controller behind the single storage screen.

Every surface (console, web) drives the same :class:`StorageController`; it
owns the displayed text and routes each control to its storage adapter.
Preferences and file operations run on the caller's thread. Table operations
run as :class:`BackgroundTask` and post their display updates to the
controller's :class:`UiDispatcher`.
"""

import logging
from contextlib import closing
from typing import Optional

from storage_platform.config import (
    DB_EMPTY_TEXT,
    EXTERNAL_FILE,
    INTERNAL_FILE,
    LOAD_PREFIX,
    PREFS_EMPTY_TEXT,
    TEXT_TO_SAVE_KEY,
)
from storage_platform.context import StorageContext
from storage_platform.models import PermissionRequest, StorageError, StoragePermission
from storage_platform.permission_gate import DialogPresenter, PermissionGate
from storage_platform.persistence import InfoStore, get_connection
from storage_platform.tasks import BackgroundTask, UiDispatcher

logger = logging.getLogger(__name__)


def loaded_text(text: str) -> str:
    """Format text read back from a store for display."""
    return f"{LOAD_PREFIX}{text}"


class StorageController:
    """Binds the screen's controls to the storage adapters."""

    def __init__(
        self,
        ctx: StorageContext,
        presenter: DialogPresenter,
        dispatcher: Optional[UiDispatcher] = None,
    ):
        self.ctx = ctx
        self.gate = PermissionGate(ctx.platform, presenter)
        self.dispatcher = dispatcher or UiDispatcher()
        self.text = ""

    # --- Lifecycle ---

    def start(self) -> BackgroundTask:
        """Reset demo state: clear preferences and empty the table."""
        self.ctx.prefs.clear()
        return self._spawn("db-reset", self._db_delete_all)

    # --- Text field ---

    def set_text(self, text: str) -> None:
        self.text = text

    def clear_text(self) -> None:
        self.text = ""

    def _show(self, text: str) -> None:
        self.text = text

    # --- Preferences ---

    def save_prefs(self) -> None:
        self.ctx.prefs.set(TEXT_TO_SAVE_KEY, self.text)

    def load_prefs(self) -> None:
        self._show(loaded_text(self.ctx.prefs.get(TEXT_TO_SAVE_KEY, PREFS_EMPTY_TEXT)))

    # --- Private file ---

    def save_internal(self) -> bool:
        try:
            self.ctx.internal_files.save(INTERNAL_FILE, self.text)
        except StorageError as exc:
            logger.warning("Internal save failed: %s", exc)
            return False
        return True

    def load_internal(self) -> bool:
        try:
            text = self.ctx.internal_files.load(INTERNAL_FILE)
        except StorageError as exc:
            logger.warning("Internal load failed: %s", exc)
            return False
        self._show(loaded_text(text))
        return True

    # --- Shared file (permission gated) ---

    def save_external(self) -> PermissionRequest:
        return self.gate.run(StoragePermission.WRITE, self._external_save)

    def load_external(self) -> PermissionRequest:
        return self.gate.run(StoragePermission.READ, self._external_load)

    def _external_save(self) -> None:
        try:
            self.ctx.external_files.save(EXTERNAL_FILE, self.text)
        except StorageError as exc:
            logger.warning("External save failed: %s", exc)

    def _external_load(self) -> None:
        try:
            text = self.ctx.external_files.load_and_delete(EXTERNAL_FILE)
        except StorageError as exc:
            logger.warning("External load failed: %s", exc)
            return
        self._show(loaded_text(text))

    # --- Table ---

    def save_db(self) -> BackgroundTask:
        text = self.text
        return self._spawn("db-save", lambda: self._db_insert(text))

    def load_db(self) -> BackgroundTask:
        return self._spawn("db-load", self._db_take_first, on_success=self._show)

    def _spawn(self, name, fn, on_success=None) -> BackgroundTask:
        return BackgroundTask.spawn(
            fn, name=name, dispatcher=self.dispatcher, on_success=on_success,
        )

    def _db_insert(self, text: str) -> int:
        with closing(get_connection(self.ctx.files_dir)) as conn:
            return InfoStore.insert(conn, text)

    def _db_delete_all(self) -> int:
        with closing(get_connection(self.ctx.files_dir)) as conn:
            return InfoStore.delete_all(conn)

    def _db_take_first(self) -> str:
        """Read and consume the current record, or report the empty table."""
        with closing(get_connection(self.ctx.files_dir)) as conn:
            if InfoStore.count(conn) == 0:
                return DB_EMPTY_TEXT
            text = InfoStore.read_first_text(conn)
            InfoStore.delete_all(conn)
        return loaded_text(text)

    # --- Screen state ---

    def permission_states(self) -> dict[str, str]:
        return {p.value: self.gate.check(p).value for p in StoragePermission}

    def snapshot(self) -> dict:
        return {"text": self.text, "permissions": self.permission_states()}
