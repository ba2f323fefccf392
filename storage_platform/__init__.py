"""Platform layer: storage adapters, permission gate and screen controller."""

__version__ = "1.0.0"

from .context import StorageContext, build_context
from .models import (
    EmptyStoreError,
    PermissionDialog,
    PermissionRequest,
    PermissionState,
    StorageError,
    StorageIOError,
    StorageNotFoundError,
    StoragePermission,
    TableRecord,
)
from .permission_gate import PermissionGate, check_permission, next_state
from .preferences import KeyValueStore
from .tasks import BackgroundTask, UiDispatcher

__all__ = [
    "__version__",
    "StorageContext",
    "build_context",
    "KeyValueStore",
    "PermissionGate",
    "check_permission",
    "next_state",
    "BackgroundTask",
    "UiDispatcher",
    "PermissionDialog",
    "PermissionRequest",
    "PermissionState",
    "StoragePermission",
    "TableRecord",
    "StorageError",
    "StorageIOError",
    "StorageNotFoundError",
    "EmptyStoreError",
]
