from __future__ import annotations

import asyncio

import pytest

from nccookbook.domain.models import RecipeSummary
from nccookbook.errors import FetchError
from nccookbook.infra.http import CookbookApi
from nccookbook.services.directory import FETCH_FAILED_MESSAGE, RecipeDirectory, page_slice
from tests.utils import FakeCookbook, recipes


def _summaries(count: int) -> list[RecipeSummary]:
    return [RecipeSummary(id=str(i), name=f"Recipe {i}") for i in range(count)]


def test_page_slice_bounds() -> None:
    items = _summaries(45)
    assert page_slice(items, 1, 20) == items[:20]
    assert page_slice(items, 3, 20) == items[40:45]
    assert page_slice(items, 4, 20) == []
    assert page_slice(items, 0, 20) == []
    assert page_slice(items, 1, 0) == []


@pytest.mark.asyncio
async def test_fetch_all_replaces_list_and_emits(api: CookbookApi, server: FakeCookbook) -> None:
    server.json("/api/v1/recipes", recipes(45))
    directory = RecipeDirectory(api, page_size=20)
    loaded: list[list[RecipeSummary]] = []
    directory.loaded.connect(loaded.append)

    result = await directory.fetch_all()

    assert result.ok
    assert len(directory.recipes) == 45
    assert loaded == [directory.recipes]
    assert directory.page_count == 3
    assert [r.id for r in directory.page(3)] == ["40", "41", "42", "43", "44"]


@pytest.mark.asyncio
async def test_paging_cursor_is_clamped(api: CookbookApi, server: FakeCookbook) -> None:
    server.json("/api/v1/recipes", recipes(45))
    directory = RecipeDirectory(api, page_size=20)
    await directory.fetch_all()

    assert directory.previous_page() == directory.page(1)
    assert directory.current_page == 1
    directory.next_page()
    directory.next_page()
    assert directory.current_page == 3
    assert directory.has_next is False
    assert len(directory.next_page()) == 5
    assert directory.current_page == 3


@pytest.mark.asyncio
async def test_failed_fetch_keeps_previous_list(api: CookbookApi, server: FakeCookbook) -> None:
    server.json("/api/v1/recipes", recipes(3))
    directory = RecipeDirectory(api)
    await directory.fetch_all()
    failures: list[str] = []
    directory.fetch_failed.connect(failures.append)

    server.json("/api/v1/recipes", {}, status=500)
    result = await directory.fetch_all()

    assert not result.ok
    assert isinstance(result.error, FetchError)
    assert failures == [FETCH_FAILED_MESSAGE]
    assert [r.id for r in directory.recipes] == ["0", "1", "2"]


@pytest.mark.asyncio
async def test_shrunk_index_resets_cursor(api: CookbookApi, server: FakeCookbook) -> None:
    server.json("/api/v1/recipes", recipes(45))
    directory = RecipeDirectory(api, page_size=20)
    await directory.fetch_all()
    directory.next_page()
    directory.next_page()

    server.json("/api/v1/recipes", recipes(10))
    await directory.fetch_all()
    assert directory.current_page == 1


@pytest.mark.asyncio
async def test_non_list_payload_is_empty(api: CookbookApi, server: FakeCookbook) -> None:
    server.json("/api/v1/recipes", {"unexpected": True})
    directory = RecipeDirectory(api)
    result = await directory.fetch_all()
    assert result.ok
    assert directory.recipes == []


# Purpose: an older fetch finishing last must not overwrite the newer index.
@pytest.mark.asyncio
async def test_superseded_fetch_does_not_commit(api: CookbookApi, server: FakeCookbook) -> None:
    server.json("/api/v1/recipes", recipes(2))
    gate = server.gate("/api/v1/recipes")
    directory = RecipeDirectory(api)

    first = asyncio.ensure_future(directory.fetch_all())
    await server.wait_for("/api/v1/recipes")
    assert directory.is_loading

    server.gates.clear()
    server.json("/api/v1/recipes", recipes(5))
    assert (await directory.fetch_all()).ok
    assert len(directory.recipes) == 5

    gate.set()
    stale = await first
    assert stale.ok
    assert len(directory.recipes) == 5
    assert not directory.is_loading


@pytest.mark.asyncio
async def test_explicit_zero_page_size_is_empty(api: CookbookApi, server: FakeCookbook) -> None:
    server.json("/api/v1/recipes", recipes(5))
    directory = RecipeDirectory(api, page_size=2)
    await directory.fetch_all()
    assert directory.page(1, 0) == []
    assert len(directory.page(1)) == 2
