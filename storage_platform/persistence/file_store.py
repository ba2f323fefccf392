"""Whole-file text storage rooted at a single base directory."""

import logging
from pathlib import Path

from storage_platform.models import StorageIOError, StorageNotFoundError

logger = logging.getLogger(__name__)


class FileStore:
    """Save and load one file's entire contents as UTF-8 text.

    The private and shared stores are two instances that differ only in
    ``base_dir``. File handles never outlive a single call.
    """

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)

    def path_for(self, name: str) -> Path:
        return self.base_dir / name

    def exists(self, name: str) -> bool:
        return self.path_for(name).is_file()

    def save(self, name: str, text: str) -> None:
        """Create or truncate *name* and write *text* to it.

        The text is encoded before the file is opened, so text that cannot
        be encoded leaves an existing file untouched.
        """
        path = self.path_for(name)
        try:
            data = text.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise StorageIOError(f"Text for {path} is not encodable as UTF-8") from exc
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("wb") as output:
                output.write(data)
        except OSError as exc:
            raise StorageIOError(f"Could not write {path}: {exc}") from exc
        logger.debug("Saved %d chars to %s", len(text), path)

    def load(self, name: str) -> str:
        """Return the decoded contents of *name*."""
        path = self.path_for(name)
        try:
            with path.open("rb") as source:
                data = source.read()
        except FileNotFoundError as exc:
            raise StorageNotFoundError(f"File not found: {path}") from exc
        except OSError as exc:
            raise StorageIOError(f"Could not read {path}: {exc}") from exc

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise StorageIOError(f"{path} is not valid UTF-8") from exc

    def load_and_delete(self, name: str) -> str:
        """Load *name*, then remove it.

        A failed removal is logged; the loaded text is still returned.
        """
        text = self.load(name)
        path = self.path_for(name)
        try:
            path.unlink()
        except OSError as exc:
            logger.warning("Could not delete %s after loading: %s", path, exc)
        return text
