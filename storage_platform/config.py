"""
Configuration constants for the storage-demo system.
"""

import os
from pathlib import Path

# Preferences
PREFS_NAME = "MainActivity"
TEXT_TO_SAVE_KEY = "TEXT_TO_SAVE_KEY"
PREFS_EMPTY_TEXT = "Ooops :( Prefs are empty"

# Files
INTERNAL_FILE = "InternalSave.txt"
EXTERNAL_FILE = "ExternalSave.txt"

# Database
DB_NAME = "Info"
INFO_TABLE = "InfoTable"
DB_EMPTY_TEXT = "DB is empty"

# Prefix shown in the text field after any successful load
LOAD_PREFIX = "Load - "

# Runtime permissions were introduced with API level 23; anything older is
# granted at install time.
PERMISSION_SYSTEM_API_LEVEL = 23
DEFAULT_API_LEVEL = 30

# Dialog texts
PERMISSION_DIALOG_TITLE = "Permission"
RATIONALE_MESSAGE = "Permission is needed to allow this feature work"
RATIONALE_POSITIVE = "I understand"
DENIED_MESSAGE = "Permission was not granted. We respect your decision"
DENIED_POSITIVE = "I changed my mind"
DENIED_NEGATIVE = "Ok"
CONSENT_MESSAGE = "Allow storage-demo to access files on shared storage?"
CONSENT_POSITIVE = "Allow"
CONSENT_NEGATIVE = "Deny"

HOME_ENV = "STORAGE_DEMO_HOME"
API_LEVEL_ENV = "STORAGE_DEMO_API_LEVEL"

PERMISSIONS_FILE = "permissions.json"


def _to_int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def get_home_dir() -> Path:
    """Return the application home directory.

    Uses a platform-appropriate location and supports an override via
    ``STORAGE_DEMO_HOME`` for tests.
    """
    override = os.environ.get(HOME_ENV, "").strip()
    if override:
        return Path(override)

    if os.name == "nt":
        base = Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))
        return base / "storage-demo"

    base = Path(os.environ.get("XDG_DATA_HOME", str(Path.home() / ".local" / "share")))
    return base / "storage-demo"


def get_api_level() -> int:
    """Return the simulated platform API level (``STORAGE_DEMO_API_LEVEL``)."""
    return _to_int_env(API_LEVEL_ENV, DEFAULT_API_LEVEL)
