"""Platform-owned workflow services."""

from .storage_service import StorageController, loaded_text
