"""Web surface for storage-demo."""

__version__ = "1.0.0"
