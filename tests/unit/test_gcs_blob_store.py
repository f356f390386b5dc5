from unittest.mock import MagicMock

import pytest
from google.api_core import exceptions as gexc

from clause_worker.storage.exceptions import BlobStoreError, InvalidBlobUriError
from clause_worker.storage.gcs_adapter import GcsBlobStore, parse_gs_uri
from clause_worker.storage.models import BlobHandle


def _make_store() -> tuple[GcsBlobStore, MagicMock, MagicMock]:
    client = MagicMock()
    bucket = client.bucket.return_value
    return GcsBlobStore("contracts-bucket", client=client), client, bucket


class TestParseGsUri:
    def test_splits_bucket_and_path(self) -> None:
        assert parse_gs_uri("gs://b/input/x.pdf") == ("b", "input/x.pdf")

    def test_rejects_other_schemes(self) -> None:
        with pytest.raises(InvalidBlobUriError):
            parse_gs_uri("s3://b/x.pdf")

    def test_rejects_missing_bucket(self) -> None:
        with pytest.raises(InvalidBlobUriError):
            parse_gs_uri("gs:///x.pdf")


class TestGcsBlobStore:
    def test_write_uploads_with_content_type(self) -> None:
        store, _client, bucket = _make_store()

        store.write("text/c1.txt", b"hi", "text/plain")

        bucket.blob.assert_called_once_with("text/c1.txt")
        bucket.blob.return_value.upload_from_string.assert_called_once_with(
            b"hi", content_type="text/plain"
        )

    def test_list_returns_handles(self) -> None:
        store, client, _bucket = _make_store()
        blob = MagicMock(size=12)
        blob.name = "output/c1/output-1-to-1.json"
        client.list_blobs.return_value = [blob]

        handles = store.list("output/c1/")

        client.list_blobs.assert_called_once_with("contracts-bucket", prefix="output/c1/")
        assert handles == [BlobHandle(name="output/c1/output-1-to-1.json", size=12)]

    def test_download(self) -> None:
        store, _client, bucket = _make_store()
        bucket.blob.return_value.download_as_bytes.return_value = b"{}"

        assert store.download(BlobHandle(name="x.json")) == b"{}"

    def test_api_errors_wrapped(self) -> None:
        store, _client, bucket = _make_store()
        bucket.blob.return_value.download_as_bytes.side_effect = gexc.NotFound("missing")

        with pytest.raises(BlobStoreError, match="gs://contracts-bucket/x.json"):
            store.download(BlobHandle(name="x.json"))

    def test_uri_and_path_from_uri(self) -> None:
        store, _client, _bucket = _make_store()
        assert store.uri("output/c1/") == "gs://contracts-bucket/output/c1/"
        assert store.path_from_uri("gs://contracts-bucket/input/a.pdf") == "input/a.pdf"

    def test_path_from_uri_rejects_other_bucket(self) -> None:
        store, _client, _bucket = _make_store()
        with pytest.raises(InvalidBlobUriError, match="outside bucket"):
            store.path_from_uri("gs://other/input/a.pdf")
