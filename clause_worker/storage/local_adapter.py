from pathlib import Path
from urllib.parse import unquote, urlparse

from clause_worker.storage.base import BaseBlobStore
from clause_worker.storage.exceptions import BlobStoreError, InvalidBlobUriError
from clause_worker.storage.models import BlobHandle


class LocalBlobStore(BaseBlobStore):
    """Blob store on the local filesystem, rooted at a directory.

    Used for development and tests together with the text-layer OCR engines.
    """

    def __init__(self, root: Path) -> None:
        self._root = root.resolve()

    def write(self, path: str, data: bytes, content_type: str) -> None:
        _ = content_type  # not recorded on disk
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise BlobStoreError(f"Failed to write {target}: {exc}") from exc

    def list(self, prefix: str) -> list[BlobHandle]:
        if not self._root.exists():
            return []
        handles = []
        for file in sorted(self._root.rglob("*")):
            if not file.is_file():
                continue
            name = file.relative_to(self._root).as_posix()
            if name.startswith(prefix):
                handles.append(BlobHandle(name=name, size=file.stat().st_size))
        return handles

    def download(self, handle: BlobHandle) -> bytes:
        target = self._resolve(handle.name)
        try:
            return target.read_bytes()
        except OSError as exc:
            raise BlobStoreError(f"Failed to read {target}: {exc}") from exc

    def uri(self, path: str) -> str:
        return self._resolve(path).as_uri()

    def path_from_uri(self, uri: str) -> str:
        if not uri.startswith("file://"):
            raise InvalidBlobUriError(f"Invalid local URI '{uri}'. Must start with file://")
        target = Path(unquote(urlparse(uri).path)).resolve()
        if not target.is_relative_to(self._root):
            raise InvalidBlobUriError(f"URI '{uri}' is outside {self._root}")
        return target.relative_to(self._root).as_posix()

    def _resolve(self, path: str) -> Path:
        target = (self._root / path).resolve()
        if not target.is_relative_to(self._root):
            raise InvalidBlobUriError(f"Path '{path}' escapes {self._root}")
        return target
