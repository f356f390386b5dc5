import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import PurePosixPath

from clause_worker.logging.logger import Log
from clause_worker.ocr.models import OcrShard
from clause_worker.storage.base import BaseBlobStore
from clause_worker.storage.models import BlobHandle

_SHARD_NAME_RE = re.compile(r"output-(\d+)-to-(\d+)\.json$")


def order_shards(handles: list[BlobHandle]) -> list[BlobHandle]:
    """Sort shards named output-<first>-to-<last>.json by first page.

    Names without a page range keep their listing order, after the numbered ones.
    """

    def key(item: tuple[int, BlobHandle]) -> tuple[int, int, int]:
        index, handle = item
        match = _SHARD_NAME_RE.search(PurePosixPath(handle.name).name)
        if match is None:
            return (1, 0, index)
        return (0, int(match.group(1)), index)

    return [handle for _, handle in sorted(enumerate(handles), key=key)]


class ShardLoader:
    """Discovers and downloads the JSON shards under an OCR output prefix."""

    def __init__(self, blob_store: BaseBlobStore, max_workers: int = 4) -> None:
        self._blob_store = blob_store
        self._max_workers = max(1, max_workers)

    def load(self, prefix: str) -> list[OcrShard]:
        """Download every .json object under prefix, in page order.

        Raises:
            BlobStoreError: if listing or any download fails.
        """
        handles: list[BlobHandle] = []
        for handle in self._blob_store.list(prefix):
            if handle.name.endswith(".json"):
                handles.append(handle)
            else:
                Log.debug(f"Skipping non-JSON file: {handle.name}")

        ordered = order_shards(handles)
        if not ordered:
            return []
        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(ordered))) as pool:
            contents = list(pool.map(self._blob_store.download, ordered))
        Log.info(f"Downloaded {len(ordered)} OCR shards from {prefix}")
        return [
            OcrShard(name=handle.name, content=content)
            for handle, content in zip(ordered, contents, strict=True)
        ]
