from __future__ import annotations

from ...domain.models import RecipeSummary
from ..common import apply_centered_card_width, header_icon, sync_screen_layout
from ..textual import ComposeResult, Footer, Header, Label, ListItem, ListView, Screen, Static, Vertical
from .detail import DetailScreen


class SearchScreen(Screen):
    BINDINGS = [("escape", "back", "Back")]

    def __init__(self, query: str) -> None:
        super().__init__()
        self.query_text = query

    def compose(self) -> ComposeResult:
        yield Header(icon=header_icon(self))
        with Vertical(id="search-shell", classes="screen-shell"):
            with Vertical(id="search-card", classes="screen-card"):
                yield Static("", id="connection")
                yield Static(f'Search Results for "{self.query_text}"', id="title")
                yield ListView(id="search-results")
                yield Static("Searching...", id="status")
        yield Footer()

    def on_mount(self) -> None:
        sync_screen_layout(self)
        self.app.sync_screen_status(self)
        apply_centered_card_width(self, "#search-card")
        self.run_worker(self._search(), exclusive=True)

    def on_resize(self, event) -> None:
        sync_screen_layout(self)
        apply_centered_card_width(self, "#search-card")

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        recipe = getattr(event.item, "recipe", None)
        if recipe is not None:
            self.app.push_screen(DetailScreen(recipe.id))

    def action_back(self) -> None:
        self.app.pop_screen()

    async def _search(self) -> None:
        result = await self.app.session.search(self.query_text)
        status = self.query_one("#status", Static)
        if not result.ok:
            status.update(str(result.error))
            return
        recipes = result.value or []
        if not recipes:
            status.update("No recipes found")
            return
        status.update(f"{len(recipes)} recipes")
        await self.query_one("#search-results", ListView).extend([_result_item(r) for r in recipes])


def _result_item(recipe: RecipeSummary) -> ListItem:
    text = recipe.name
    if recipe.description:
        text += f"\n  {recipe.description}"
    item = ListItem(Label(text))
    item.recipe = recipe
    return item
