"""Platform-owned persistence layer (database, table and file stores)."""

from .database import SCHEMA_VERSION, get_connection, get_db_path, init_db
from .file_store import FileStore
from .info_store import InfoStore
