from google.api_core import exceptions as gexc
from google.cloud import storage

from clause_worker.storage.base import BaseBlobStore
from clause_worker.storage.exceptions import BlobStoreError, InvalidBlobUriError
from clause_worker.storage.models import BlobHandle


def parse_gs_uri(uri: str) -> tuple[str, str]:
    """Split gs://bucket/path into (bucket, path)."""
    if not uri.startswith("gs://"):
        raise InvalidBlobUriError(f"Invalid Google Storage URI '{uri}'. Must start with gs://")
    bucket, _, path = uri[len("gs://"):].partition("/")
    if not bucket:
        raise InvalidBlobUriError(f"Google Storage URI '{uri}' has no bucket")
    return bucket, path


class GcsBlobStore(BaseBlobStore):
    """Blob store backed by a single Google Cloud Storage bucket."""

    def __init__(self, bucket_name: str, client: storage.Client | None = None) -> None:
        self._bucket_name = bucket_name
        self._client = client if client is not None else storage.Client()
        self._bucket = self._client.bucket(bucket_name)

    def write(self, path: str, data: bytes, content_type: str) -> None:
        try:
            self._bucket.blob(path).upload_from_string(data, content_type=content_type)
        except gexc.GoogleAPIError as exc:
            raise BlobStoreError(f"Failed to write gs://{self._bucket_name}/{path}: {exc}") from exc

    def list(self, prefix: str) -> list[BlobHandle]:
        try:
            blobs = self._client.list_blobs(self._bucket_name, prefix=prefix)
            return [BlobHandle(name=blob.name, size=blob.size) for blob in blobs]
        except gexc.GoogleAPIError as exc:
            raise BlobStoreError(
                f"Failed to list gs://{self._bucket_name}/{prefix}: {exc}"
            ) from exc

    def download(self, handle: BlobHandle) -> bytes:
        try:
            return self._bucket.blob(handle.name).download_as_bytes()
        except gexc.GoogleAPIError as exc:
            raise BlobStoreError(
                f"Failed to download gs://{self._bucket_name}/{handle.name}: {exc}"
            ) from exc

    def uri(self, path: str) -> str:
        return f"gs://{self._bucket_name}/{path}"

    def path_from_uri(self, uri: str) -> str:
        bucket, path = parse_gs_uri(uri)
        if bucket != self._bucket_name:
            raise InvalidBlobUriError(
                f"URI '{uri}' is outside bucket '{self._bucket_name}'"
            )
        return path
