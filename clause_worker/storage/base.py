from abc import ABC, abstractmethod

from clause_worker.storage.models import BlobHandle


class BaseBlobStore(ABC):
    """Contract for blob storage adapters.

    Paths are relative to the store (bucket or root directory); URIs are the
    absolute form handed to external services such as the OCR engine.
    """

    @abstractmethod
    def write(self, path: str, data: bytes, content_type: str) -> None:
        """Store bytes at path, replacing any existing object.

        Raises:
            BlobStoreError: on any storage failure.
        """

    @abstractmethod
    def list(self, prefix: str) -> list[BlobHandle]:
        """List objects whose path starts with prefix.

        No ordering is guaranteed.
        """

    @abstractmethod
    def download(self, handle: BlobHandle) -> bytes:
        """Read an object's bytes back."""

    @abstractmethod
    def uri(self, path: str) -> str:
        """Absolute URI for a store-relative path."""

    @abstractmethod
    def path_from_uri(self, uri: str) -> str:
        """Store-relative path for an absolute URI.

        Raises:
            InvalidBlobUriError: if the URI does not point into this store.
        """
