from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from ..domain.models import ImageHandle
from ..domain.signals import Signal
from ..errors import ApiError, ConfigurationMissing, ImageUnavailable
from ..infra.blobs import BlobStore
from ..infra.http import CookbookApi, image_path

logger = logging.getLogger(__name__)


async def fetch_image(api: CookbookApi, recipe_id: str) -> tuple[bytes, str]:
    """Download the image for one recipe, raising ImageUnavailable on any failure."""
    try:
        data, content_type = await api.get_bytes(image_path(recipe_id))
    except (ApiError, ConfigurationMissing) as exc:
        raise ImageUnavailable(f"No image for recipe {recipe_id}: {exc}") from exc
    if not data:
        raise ImageUnavailable(f"Empty image for recipe {recipe_id}")
    return data, content_type


def register_image(blobs: BlobStore, recipe_id: str, data: bytes, content_type: str) -> ImageHandle:
    url = blobs.create_url(data, content_type)
    return ImageHandle(recipe_id=recipe_id, url=url, content_type=content_type, size=len(data))


class ImageCache:
    """Lazily fetched recipe images, one handle per recipe id.

    Handles stay valid until ``release``/``release_all`` or until the owning
    scope exits (``async with ImageCache(...)`` or ``close()``). A missing
    image is never an error: ``resolve`` just returns ``None``.
    """

    def __init__(self, api: CookbookApi, blobs: BlobStore | None = None) -> None:
        self.api = api
        self.blobs = blobs if blobs is not None else BlobStore()
        self._entries: dict[str, ImageHandle] = {}
        self._pending: dict[str, asyncio.Task[ImageHandle | None]] = {}
        self._closed = False
        self.image_ready = Signal("images.ready")

    async def __aenter__(self) -> ImageCache:
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def get(self, recipe_id: str) -> ImageHandle | None:
        return self._entries.get(recipe_id)

    def __contains__(self, recipe_id: object) -> bool:
        return recipe_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    async def resolve(self, recipe_id: str) -> ImageHandle | None:
        entry = self._entries.get(recipe_id)
        if entry is not None:
            return entry
        if self._closed:
            logger.debug("Image cache closed; not resolving %s", recipe_id)
            return None

        task = self._pending.get(recipe_id)
        if task is None:
            task = asyncio.ensure_future(self._load(recipe_id))
            self._pending[recipe_id] = task
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            # released while the download was in flight
            if task.cancelled():
                return None
            raise

    async def resolve_all(self, recipe_ids: Iterable[str]) -> dict[str, ImageHandle | None]:
        ids = list(dict.fromkeys(recipe_ids))
        handles = await asyncio.gather(*(self.resolve(recipe_id) for recipe_id in ids))
        return dict(zip(ids, handles))

    def release(self, recipe_id: str) -> None:
        task = self._pending.pop(recipe_id, None)
        if task is not None and not task.done():
            task.cancel()
        entry = self._entries.pop(recipe_id, None)
        if entry is not None:
            self.blobs.revoke(entry.url)

    def release_all(self) -> None:
        for recipe_id in list(self._entries) + list(self._pending):
            self.release(recipe_id)

    def close(self) -> None:
        self._closed = True
        self.release_all()

    async def _load(self, recipe_id: str) -> ImageHandle | None:
        try:
            data, content_type = await fetch_image(self.api, recipe_id)
        except ImageUnavailable as exc:
            logger.debug("%s", exc)
            return None
        finally:
            if self._pending.get(recipe_id) is asyncio.current_task():
                del self._pending[recipe_id]

        if self._closed:
            return None
        handle = register_image(self.blobs, recipe_id, data, content_type)
        self._entries[recipe_id] = handle
        self.image_ready.emit(recipe_id, handle)
        return handle
