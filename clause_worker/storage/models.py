from dataclasses import dataclass


@dataclass(frozen=True)
class BlobHandle:
    """An object found by listing a prefix."""

    name: str  # store-relative path, e.g. "output/<id>/output-1-to-50.json"
    size: int | None = None
