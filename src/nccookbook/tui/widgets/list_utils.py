from __future__ import annotations

from ...domain.models import RecipeSummary
from ..textual import ListItem, ListView


def highlighted_item(list_view: ListView) -> ListItem | None:
    item = list_view.highlighted_child
    if item is None and list_view.index is not None:
        children = list(list_view.children)
        if 0 <= list_view.index < len(children):
            item = children[list_view.index]
    return item


def current_recipe(list_view: ListView) -> RecipeSummary | None:
    item = highlighted_item(list_view)
    if item is None:
        return None
    return getattr(item, "recipe", None)


def find_recipe_item(list_view: ListView, recipe_id: str) -> ListItem | None:
    for item in list_view.children:
        recipe = getattr(item, "recipe", None)
        if recipe is not None and recipe.id == recipe_id:
            return item
    return None
