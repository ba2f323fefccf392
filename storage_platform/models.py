"""
Data models and error types for the storage-demo system.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class StoragePermission(str, Enum):
    """Storage permissions requested before touching shared storage."""
    WRITE = "WRITE_EXTERNAL_STORAGE"
    READ = "READ_EXTERNAL_STORAGE"


class PermissionState(str, Enum):
    """Result of a permission check, recomputed on every request."""
    GRANTED = "granted"
    DENIED = "denied"
    NEEDS_EXPLANATION = "needs_explanation"
    NEEDS_REQUEST = "needs_request"


class DialogKind(str, Enum):
    CONSENT = "consent"
    RATIONALE = "rationale"
    DENIED = "denied"


@dataclass(frozen=True)
class PermissionDialog:
    """A dialog the permission gate asks the UI to present.

    ``negative_label`` is None for dialogs that only offer one button; closing
    such a dialog counts as a negative answer.
    """
    kind: DialogKind
    permission: StoragePermission
    title: str
    message: str
    positive_label: str
    negative_label: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "permission": self.permission.value,
            "title": self.title,
            "message": self.message,
            "positive_label": self.positive_label,
            "negative_label": self.negative_label,
        }


@dataclass
class PermissionRequest:
    """One request cycle through the permission gate."""
    permission: StoragePermission
    states: list[PermissionState] = field(default_factory=list)
    outcome: str = "pending"  # pending | granted | dismissed

    @property
    def is_pending(self) -> bool:
        return self.outcome == "pending"

    @property
    def granted(self) -> bool:
        return self.outcome == "granted"


@dataclass(frozen=True)
class TableRecord:
    """A row of ``InfoTable``."""
    id: int
    text: str


class StorageError(Exception):
    """Base class for storage adapter failures."""


class StorageNotFoundError(StorageError):
    """The requested file does not exist."""


class StorageIOError(StorageError):
    """A file could not be read, decoded or written."""


class EmptyStoreError(StorageError):
    """A table read was attempted while the table holds no rows."""
