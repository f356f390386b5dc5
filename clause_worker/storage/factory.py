from pathlib import Path

from clause_worker.config.settings import Settings
from clause_worker.storage.base import BaseBlobStore
from clause_worker.storage.gcs_adapter import GcsBlobStore
from clause_worker.storage.local_adapter import LocalBlobStore


class BlobStoreFactory:
    """Creates the configured blob store adapter."""

    SUPPORTED = ("gcs", "local")

    @classmethod
    def create(cls, settings: Settings) -> BaseBlobStore:
        kind = settings.blob_store.lower()
        if kind == "gcs":
            return GcsBlobStore(settings.gcs_bucket_name)
        if kind == "local":
            return LocalBlobStore(Path(settings.local_storage_root))
        raise ValueError(
            f"Unknown blob store '{kind}'. Choose from: {list(cls.SUPPORTED)}"
        )
