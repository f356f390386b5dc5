class BlobStoreError(Exception):
    """Raised when a blob store read, write or listing fails."""


class InvalidBlobUriError(BlobStoreError):
    """Raised when a URI or path does not belong to the configured store."""
