"""Operating-system side of runtime permissions.

Desktop Python has no runtime permission system, so ``SimulatedPlatform``
plays that role: it remembers grants and denials in a JSON file so that the
gate sees the same "OS-reported" status across runs.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from storage_platform.models import StoragePermission

logger = logging.getLogger(__name__)


class PermissionPlatform(Protocol):
    api_level: int

    def is_granted(self, permission: StoragePermission) -> bool: ...

    def should_show_rationale(self, permission: StoragePermission) -> bool: ...

    def record_result(self, permission: StoragePermission, granted: bool) -> None: ...


class SimulatedPlatform:
    """File-backed permission platform.

    Rationale is indicated once a permission has been declined at least once
    and is not currently granted.
    """

    def __init__(self, state_path: Path, api_level: int):
        self.state_path = Path(state_path)
        self.api_level = api_level
        self._granted: set[str] = set()
        self._denials: dict[str, int] = {}
        self._load()

    def _load(self) -> None:
        if not self.state_path.exists():
            return
        try:
            data = json.loads(self.state_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable permission state %s: %s", self.state_path, exc)
            return
        if not isinstance(data, dict):
            return
        self._granted = {p for p in data.get("granted", []) if isinstance(p, str)}
        denials = data.get("denials", {})
        if isinstance(denials, dict):
            self._denials = {k: int(v) for k, v in denials.items() if isinstance(v, int)}

    def _save(self) -> None:
        self.state_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"granted": sorted(self._granted), "denials": self._denials}
        self.state_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def is_granted(self, permission: StoragePermission) -> bool:
        return permission.value in self._granted

    def should_show_rationale(self, permission: StoragePermission) -> bool:
        return not self.is_granted(permission) and self._denials.get(permission.value, 0) > 0

    def denial_count(self, permission: StoragePermission) -> int:
        return self._denials.get(permission.value, 0)

    def record_result(self, permission: StoragePermission, granted: bool) -> None:
        """Record the user's answer to an OS consent prompt."""
        if granted:
            self._granted.add(permission.value)
        else:
            self._granted.discard(permission.value)
            self._denials[permission.value] = self._denials.get(permission.value, 0) + 1
        logger.info("Permission %s %s", permission.value, "granted" if granted else "denied")
        self._save()

    def grant(self, permission: StoragePermission) -> None:
        """Grant *permission* as if toggled on in system settings."""
        self._granted.add(permission.value)
        self._save()

    def revoke(self, permission: StoragePermission) -> None:
        """Revoke *permission* as if toggled off in system settings."""
        self._granted.discard(permission.value)
        self._save()

    def reset(self) -> None:
        """Forget every grant and denial."""
        self._granted.clear()
        self._denials.clear()
        self._save()
