from __future__ import annotations

import logging

from ..domain.models import RecipeSummary
from ..domain.parsing import parse_summaries
from ..domain.result import Result
from ..domain.signals import Signal
from ..errors import ApiError, ConfigurationMissing, FetchError
from ..infra.http import RECIPES_PATH, CookbookApi

logger = logging.getLogger(__name__)

FETCH_FAILED_MESSAGE = "Failed to fetch recipes"


def page_slice(recipes: list[RecipeSummary], page: int, size: int) -> list[RecipeSummary]:
    if page < 1 or size < 1:
        return []
    start = (page - 1) * size
    return recipes[start : start + size]


class RecipeDirectory:
    """The recipe index plus a page cursor over it.

    Each ``fetch_all`` call takes a generation number; only the most recently
    issued call may replace ``recipes``. On failure the old list is kept.
    """

    def __init__(self, api: CookbookApi, page_size: int = 20) -> None:
        self.api = api
        self.page_size = page_size
        self.recipes: list[RecipeSummary] = []
        self.current_page = 1
        self._generation = 0
        self._in_flight = 0
        self.loaded = Signal("directory.loaded")
        self.fetch_failed = Signal("directory.fetch_failed")

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    async def fetch_all(self) -> Result[list[RecipeSummary]]:
        self._generation += 1
        generation = self._generation
        self._in_flight += 1
        try:
            data = await self.api.get_json(RECIPES_PATH)
        except (ApiError, ConfigurationMissing) as exc:
            logger.warning("%s: %s", FETCH_FAILED_MESSAGE, exc)
            error = FetchError(FETCH_FAILED_MESSAGE)
            if generation == self._generation:
                self.fetch_failed.emit(str(error))
            return Result.failure(error)
        finally:
            self._in_flight -= 1

        recipes = parse_summaries(data)
        if generation != self._generation:
            logger.debug("Discarding superseded recipe index (generation %d)", generation)
            return Result.success(recipes)

        self.recipes = recipes
        if (self.current_page - 1) * self.page_size >= len(recipes):
            self.current_page = 1
        logger.info("Loaded %d recipes", len(recipes))
        self.loaded.emit(recipes)
        return Result.success(recipes)

    def page(self, number: int, size: int | None = None) -> list[RecipeSummary]:
        return page_slice(self.recipes, number, self.page_size if size is None else size)

    def visible(self) -> list[RecipeSummary]:
        return self.page(self.current_page)

    @property
    def has_next(self) -> bool:
        return self.current_page * self.page_size < len(self.recipes)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def page_count(self) -> int:
        return max(1, -(-len(self.recipes) // self.page_size))

    def next_page(self) -> list[RecipeSummary]:
        if self.has_next:
            self.current_page += 1
        return self.visible()

    def previous_page(self) -> list[RecipeSummary]:
        if self.has_previous:
            self.current_page -= 1
        return self.visible()
