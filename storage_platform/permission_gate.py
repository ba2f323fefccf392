"""Runtime-permission state machine gating shared-storage access.

The gate is stateless between requests: every request starts from
:func:`check_permission`, then walks :func:`next_state` as the user answers
dialogs. Dialog answers arrive through a callback, so the UI can present a
dialog and resume the flow whenever the user responds.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from storage_platform.config import (
    CONSENT_MESSAGE,
    CONSENT_NEGATIVE,
    CONSENT_POSITIVE,
    DENIED_MESSAGE,
    DENIED_NEGATIVE,
    DENIED_POSITIVE,
    PERMISSION_DIALOG_TITLE,
    PERMISSION_SYSTEM_API_LEVEL,
    RATIONALE_MESSAGE,
    RATIONALE_POSITIVE,
)
from storage_platform.models import (
    DialogKind,
    PermissionDialog,
    PermissionRequest,
    PermissionState,
    StoragePermission,
)
from storage_platform.platform import PermissionPlatform

logger = logging.getLogger(__name__)


class DialogPresenter(Protocol):
    def present(self, dialog: PermissionDialog, respond: Callable[[bool], None]) -> None:
        """Show *dialog*; call ``respond(True)`` for the positive button."""


def check_permission(
    api_level: int,
    os_reports_granted: bool,
    should_show_rationale: bool,
) -> PermissionState:
    """Derive the starting state of a request from platform status."""
    if api_level < PERMISSION_SYSTEM_API_LEVEL:
        return PermissionState.GRANTED
    if os_reports_granted:
        return PermissionState.GRANTED
    if should_show_rationale:
        return PermissionState.NEEDS_EXPLANATION
    return PermissionState.NEEDS_REQUEST


def next_state(state: PermissionState, accepted: bool) -> Optional[PermissionState]:
    """Return the state reached when the user answers *state*'s dialog.

    ``None`` means the user dismissed the flow and the operation does not run.
    """
    if state is PermissionState.GRANTED:
        return PermissionState.GRANTED
    if state is PermissionState.NEEDS_REQUEST:
        return PermissionState.GRANTED if accepted else PermissionState.DENIED
    # Rationale and denied dialogs both lead back to the OS prompt.
    return PermissionState.NEEDS_REQUEST if accepted else None


def dialog_for(state: PermissionState, permission: StoragePermission) -> PermissionDialog:
    if state is PermissionState.NEEDS_REQUEST:
        return PermissionDialog(
            kind=DialogKind.CONSENT,
            permission=permission,
            title=PERMISSION_DIALOG_TITLE,
            message=CONSENT_MESSAGE,
            positive_label=CONSENT_POSITIVE,
            negative_label=CONSENT_NEGATIVE,
        )
    if state is PermissionState.NEEDS_EXPLANATION:
        return PermissionDialog(
            kind=DialogKind.RATIONALE,
            permission=permission,
            title=PERMISSION_DIALOG_TITLE,
            message=RATIONALE_MESSAGE,
            positive_label=RATIONALE_POSITIVE,
        )
    if state is PermissionState.DENIED:
        return PermissionDialog(
            kind=DialogKind.DENIED,
            permission=permission,
            title=PERMISSION_DIALOG_TITLE,
            message=DENIED_MESSAGE,
            positive_label=DENIED_POSITIVE,
            negative_label=DENIED_NEGATIVE,
        )
    raise ValueError(f"No dialog for state {state.value}")


class PermissionGate:
    """Runs an operation once its permission is granted."""

    def __init__(self, platform: PermissionPlatform, presenter: DialogPresenter):
        self.platform = platform
        self.presenter = presenter

    def check(self, permission: StoragePermission) -> PermissionState:
        return check_permission(
            self.platform.api_level,
            self.platform.is_granted(permission),
            self.platform.should_show_rationale(permission),
        )

    def run(
        self,
        permission: StoragePermission,
        operation: Callable[[], None],
        on_dismiss: Optional[Callable[[], None]] = None,
    ) -> PermissionRequest:
        """Start a request cycle for *permission*.

        *operation* runs as soon as the permission is granted, which may be
        immediately or from inside a later dialog answer. The returned request
        stays ``pending`` while a dialog is awaiting an answer.
        """
        request = PermissionRequest(permission=permission)
        self._advance(request, self.check(permission), operation, on_dismiss)
        return request

    def _advance(self, request, state, operation, on_dismiss) -> None:
        request.states.append(state)

        if state is PermissionState.GRANTED:
            request.outcome = "granted"
            operation()
            return

        answered = False

        def respond(accepted: bool) -> None:
            nonlocal answered
            if answered or not request.is_pending:
                logger.debug("Ignoring repeated answer for %s", request.permission.value)
                return
            answered = True
            if state is PermissionState.NEEDS_REQUEST:
                self.platform.record_result(request.permission, accepted)
            following = next_state(state, accepted)
            if following is None:
                request.outcome = "dismissed"
                logger.info("%s request dismissed", request.permission.value)
                if on_dismiss is not None:
                    on_dismiss()
                return
            self._advance(request, following, operation, on_dismiss)

        self.presenter.present(dialog_for(state, request.permission), respond)
