"""
Server-side screen manager for the Web UI.

Bridges the web layer to the storage controller. Permission dialogs cannot
block an HTTP request, so they are parked on :class:`WebDialogPresenter`
until the browser answers them through ``POST /api/dialog/respond``.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from storage_platform.context import StorageContext, build_context
from storage_platform.models import PermissionDialog
from storage_platform.services import StorageController
from storage_platform.tasks import BackgroundTask

logger = logging.getLogger(__name__)


class NoPendingDialogError(Exception):
    pass


class DialogPendingError(Exception):
    pass


class WebDialogPresenter:
    """Keeps at most one unanswered permission dialog."""

    def __init__(self):
        self.pending: Optional[tuple[PermissionDialog, Callable[[bool], None]]] = None

    @property
    def dialog(self) -> Optional[PermissionDialog]:
        return self.pending[0] if self.pending else None

    def present(self, dialog: PermissionDialog, respond: Callable[[bool], None]) -> None:
        self.pending = (dialog, respond)

    def answer(self, accepted: bool) -> None:
        if self.pending is None:
            raise NoPendingDialogError("No dialog pending")
        _, respond = self.pending
        # Cleared first: the answer may present the next dialog.
        self.pending = None
        respond(accepted)


class WebScreenManager:
    """Manages the single storage screen for the web UI."""

    def __init__(self):
        self.controller: Optional[StorageController] = None
        self.presenter = WebDialogPresenter()
        self.last_error: Optional[str] = None

    def configure(self, ctx: Optional[StorageContext] = None, home: Optional[Path] = None) -> BackgroundTask:
        """(Re)build the controller and reset demo state."""
        ctx = ctx or build_context(home=home)
        self.presenter = WebDialogPresenter()
        self.controller = StorageController(ctx, self.presenter)
        self.last_error = None
        return self.controller.start()

    async def ensure_started(self) -> StorageController:
        if self.controller is None:
            await self._settle(self.configure())
        return self.controller

    async def _settle(self, task: BackgroundTask) -> None:
        try:
            await task
        except Exception as e:
            logger.warning("Background %s failed: %s", task.name, e)
            self.last_error = str(e)
        self.controller.dispatcher.drain()

    def snapshot(self) -> dict:
        state = self.controller.snapshot()
        dialog = self.presenter.dialog
        state["dialog"] = dialog.to_dict() if dialog else None
        state["error"] = self.last_error
        return state

    async def run_action(self, action: str) -> dict:
        """Run a storage action by controller method name."""
        controller = await self.ensure_started()
        if self.presenter.dialog is not None:
            raise DialogPendingError("A permission dialog is awaiting an answer")

        self.last_error = None
        result = getattr(controller, action)()
        if isinstance(result, BackgroundTask):
            await self._settle(result)
        elif result is False:
            self.last_error = f"{action} failed"
        return self.snapshot()

    async def answer_dialog(self, accepted: bool) -> dict:
        await self.ensure_started()
        self.presenter.answer(accepted)
        return self.snapshot()
