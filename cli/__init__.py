"""Console surface for storage-demo."""
