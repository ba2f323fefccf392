"""Explicitly owned storage context passed to every adapter call."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from storage_platform.config import (
    PERMISSIONS_FILE,
    PREFS_NAME,
    get_api_level,
    get_home_dir,
)
from storage_platform.persistence import FileStore
from storage_platform.platform import PermissionPlatform, SimulatedPlatform
from storage_platform.preferences import KeyValueStore


@dataclass
class StorageContext:
    """Locations and handles shared by the storage adapters.

    ``files_dir`` plays the app-private directory, ``external_dir`` the
    shared one. The database is opened per operation from ``files_dir``.
    """
    home: Path
    files_dir: Path
    external_dir: Path
    prefs: KeyValueStore
    platform: PermissionPlatform

    @property
    def internal_files(self) -> FileStore:
        return FileStore(self.files_dir)

    @property
    def external_files(self) -> FileStore:
        return FileStore(self.external_dir)


def build_context(
    home: Optional[Path] = None,
    api_level: Optional[int] = None,
) -> StorageContext:
    """Build a context rooted at *home* (default: :func:`get_home_dir`)."""
    home = Path(home) if home is not None else get_home_dir()
    files_dir = home / "files"
    external_dir = home / "external"
    files_dir.mkdir(parents=True, exist_ok=True)
    external_dir.mkdir(parents=True, exist_ok=True)

    return StorageContext(
        home=home,
        files_dir=files_dir,
        external_dir=external_dir,
        prefs=KeyValueStore(files_dir / "shared_prefs" / f"{PREFS_NAME}.json"),
        platform=SimulatedPlatform(
            home / PERMISSIONS_FILE,
            api_level if api_level is not None else get_api_level(),
        ),
    )
