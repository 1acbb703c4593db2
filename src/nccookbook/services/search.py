from __future__ import annotations

import logging
from urllib.parse import quote

from ..domain.models import RecipeSummary
from ..domain.parsing import parse_summaries
from ..domain.result import Result
from ..errors import ApiError, ConfigurationMissing, FetchError
from ..infra.http import SEARCH_PATH, CookbookApi

logger = logging.getLogger(__name__)

SEARCH_FAILED_MESSAGE = "Failed to search recipes"


def search_path(query: str) -> str:
    return f"{SEARCH_PATH}/{quote(query, safe='')}"


class SearchFetcher:
    """Query-scoped recipe lookup. Results carry metadata only, never images."""

    def __init__(self, api: CookbookApi) -> None:
        self.api = api
        self.query = ""
        self.results: list[RecipeSummary] = []
        self.error = ""
        self.is_loading = False

    async def search(self, query: str) -> Result[list[RecipeSummary]]:
        self.query = query
        self.error = ""
        if not query.strip():
            self.results = []
            return Result.success([])

        self.is_loading = True
        try:
            data = await self.api.get_json(search_path(query))
        except (ApiError, ConfigurationMissing) as exc:
            logger.warning("%s for %r: %s", SEARCH_FAILED_MESSAGE, query, exc)
            self.error = SEARCH_FAILED_MESSAGE
            return Result.failure(FetchError(SEARCH_FAILED_MESSAGE))
        finally:
            self.is_loading = False

        self.results = parse_summaries(data)
        logger.info("Search %r matched %d recipes", query, len(self.results))
        return Result.success(self.results)
