from __future__ import annotations

import logging

from ..domain.models import DetailState, ImageHandle, RecipeDetail
from ..domain.parsing import parse_detail
from ..domain.result import Result
from ..errors import ApiError, ConfigurationMissing, FetchError, ImageUnavailable
from ..infra.blobs import BlobStore
from ..infra.http import CookbookApi, recipe_path
from .images import fetch_image, register_image

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load recipe"


class RecipeDetailFetcher:
    """One recipe record and its image, owned by a single detail view.

    ``NOT_FOUND`` (the server answered but sent nothing) and ``FAILED`` (the
    request itself failed) are kept apart so a view can word them differently.
    """

    def __init__(self, api: CookbookApi, blobs: BlobStore | None = None) -> None:
        self.api = api
        self.blobs = blobs if blobs is not None else BlobStore()
        self.state = DetailState.IDLE
        self.recipe_id: str | None = None
        self.recipe: RecipeDetail | None = None
        self.image: ImageHandle | None = None
        self.error: str = ""
        self._generation = 0
        self._closed = False

    async def __aenter__(self) -> RecipeDetailFetcher:
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()

    @property
    def is_loading(self) -> bool:
        return self.state is DetailState.LOADING

    async def fetch(self, recipe_id: str) -> Result[RecipeDetail | None]:
        self._generation += 1
        generation = self._generation
        self.recipe_id = recipe_id
        self.state = DetailState.LOADING
        self.error = ""
        self.recipe = None
        self._release_image()

        try:
            data = await self.api.get_json(recipe_path(recipe_id))
        except (ApiError, ConfigurationMissing) as exc:
            logger.warning("%s %s: %s", LOAD_FAILED_MESSAGE, recipe_id, exc)
            error = FetchError(LOAD_FAILED_MESSAGE)
            if self._is_current(generation):
                self.state = DetailState.FAILED
                self.error = str(error)
            return Result.failure(error)

        if not self._is_current(generation):
            return Result.success(None)

        if not isinstance(data, dict) or not data:
            self.state = DetailState.NOT_FOUND
            return Result.success(None)

        recipe = parse_detail(data, fallback_id=recipe_id)
        self.recipe = recipe
        self.state = DetailState.LOADED
        await self._load_image(recipe_id, generation)
        return Result.success(recipe)

    def close(self) -> None:
        self._closed = True
        self._generation += 1
        self._release_image()

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    async def _load_image(self, recipe_id: str, generation: int) -> None:
        try:
            data, content_type = await fetch_image(self.api, recipe_id)
        except ImageUnavailable as exc:
            logger.debug("%s", exc)
            return
        if not self._is_current(generation):
            return
        self.image = register_image(self.blobs, recipe_id, data, content_type)

    def _release_image(self) -> None:
        if self.image is not None:
            self.blobs.revoke(self.image.url)
            self.image = None
