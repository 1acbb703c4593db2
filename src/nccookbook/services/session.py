"""Wiring between the synchronization components.

credentials saved -> connection probed -> on the connected edge the recipe
index is fetched -> images are resolved for the page currently in view.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

import httpx

from ..config import EffectiveConfig
from ..domain.models import ConnectionStatus, Credential, RecipeSummary
from ..domain.result import Result
from ..infra.blobs import BlobStore
from ..infra.http import CookbookApi
from .connection import ConnectionMonitor
from .credentials import CredentialStore
from .detail import RecipeDetailFetcher
from .directory import RecipeDirectory
from .images import ImageCache
from .search import SearchFetcher

logger = logging.getLogger(__name__)


class BrowserSession:
    def __init__(
        self,
        store: CredentialStore,
        *,
        page_size: int = 20,
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
        auto_refresh: bool = True,
    ) -> None:
        self.store = store
        self.auto_refresh = auto_refresh
        self.api = CookbookApi(store.get, timeout_seconds=timeout_seconds, transport=transport)
        self.blobs = BlobStore()
        self.monitor = ConnectionMonitor(self.api, store.get)
        self.directory = RecipeDirectory(self.api, page_size=page_size)
        self.images = ImageCache(self.api, self.blobs)
        self.searcher = SearchFetcher(self.api)
        self._tasks: set[asyncio.Task[Any]] = set()
        self._disconnects = [store.changed.connect(self._on_credentials_changed)]
        if auto_refresh:
            self._disconnects.append(self.monitor.connected.connect(self._on_connected))

    @classmethod
    def from_config(
        cls,
        cfg: EffectiveConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        auto_refresh: bool = True,
    ) -> BrowserSession:
        return cls(
            CredentialStore(cfg.credentials_path),
            page_size=cfg.page_size,
            timeout_seconds=cfg.timeout_seconds,
            transport=transport,
            auto_refresh=auto_refresh,
        )

    async def __aenter__(self) -> BrowserSession:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @property
    def status(self) -> ConnectionStatus:
        return self.monitor.status

    async def start(self) -> ConnectionStatus:
        self.store.load()
        status = await self.monitor.probe()
        await self.wait_idle()
        return status

    async def save_credentials(self, base_url: str, token: str) -> ConnectionStatus:
        self.store.save(base_url, token)
        await self.wait_idle()
        return self.monitor.status

    async def refresh(self) -> Result[list[RecipeSummary]]:
        result = await self.directory.fetch_all()
        if result.ok:
            await self.load_visible_images()
        return result

    async def load_visible_images(self) -> None:
        await self.images.resolve_all(recipe.id for recipe in self.directory.visible())

    async def next_page(self) -> list[RecipeSummary]:
        visible = self.directory.next_page()
        await self.load_visible_images()
        return visible

    async def previous_page(self) -> list[RecipeSummary]:
        visible = self.directory.previous_page()
        await self.load_visible_images()
        return visible

    def open_detail(self) -> RecipeDetailFetcher:
        return RecipeDetailFetcher(self.api, self.blobs)

    async def search(self, query: str) -> Result[list[RecipeSummary]]:
        return await self.searcher.search(query)

    async def wait_idle(self) -> None:
        while self._tasks:
            await asyncio.gather(*tuple(self._tasks), return_exceptions=True)

    async def close(self) -> None:
        for disconnect in self._disconnects:
            disconnect()
        self._disconnects = []
        for task in tuple(self._tasks):
            task.cancel()
        await asyncio.gather(*tuple(self._tasks), return_exceptions=True)
        self.images.close()
        await self.api.aclose()

    def _on_credentials_changed(self, credential: Credential) -> None:
        self._spawn(self._reprobe())

    async def _reprobe(self) -> None:
        was_connected = self.monitor.is_connected
        status = await self.monitor.probe()
        # no connected edge fires when the new credential also works
        if self.auto_refresh and was_connected and status is ConnectionStatus.CONNECTED:
            await self.refresh()

    def _on_connected(self) -> None:
        self._spawn(self.refresh())

    def _spawn(self, coro: Coroutine[Any, Any, Any]) -> None:
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background task failed: %s", exc, exc_info=exc)
