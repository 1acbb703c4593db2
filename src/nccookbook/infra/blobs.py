from __future__ import annotations

import uuid
from dataclasses import dataclass

URL_PREFIX = "blob:nccookbook/"


@dataclass(frozen=True)
class Blob:
    data: bytes
    content_type: str


class BlobStore:
    """In-memory object URLs. A URL stays valid until it is revoked."""

    def __init__(self) -> None:
        self._blobs: dict[str, Blob] = {}

    def create_url(self, data: bytes, content_type: str) -> str:
        url = f"{URL_PREFIX}{uuid.uuid4()}"
        self._blobs[url] = Blob(data=data, content_type=content_type)
        return url

    def revoke(self, url: str) -> bool:
        return self._blobs.pop(url, None) is not None

    def lookup(self, url: str) -> Blob | None:
        return self._blobs.get(url)

    def __contains__(self, url: object) -> bool:
        return url in self._blobs

    def __len__(self) -> int:
        return len(self._blobs)
