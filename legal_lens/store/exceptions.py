class DocumentStoreError(Exception):
    """Raised when a storage backend fails. A missing document is not an error."""
