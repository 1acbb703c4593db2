from __future__ import annotations

from ...domain.models import ImageHandle, RecipeSummary
from ..common import apply_centered_card_width, header_icon, sync_screen_layout
from ..state import page_text, recipe_row
from ..textual import Button, ComposeResult, Footer, Header, Horizontal, Input, Label, ListItem, ListView, Screen, Static, Vertical
from ..widgets.list_utils import current_recipe, find_recipe_item
from .detail import DetailScreen
from .search import SearchScreen
from .settings import SettingsScreen


class HomeScreen(Screen):
    BINDINGS = [
        ("n", "next_page", "Next"),
        ("p", "previous_page", "Previous"),
        ("r", "refresh", "Refresh"),
        ("s", "settings", "Settings"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._disconnects = []

    def compose(self) -> ComposeResult:
        yield Header(icon=header_icon(self))
        with Vertical(id="home-shell", classes="screen-shell"):
            with Vertical(id="home-card", classes="screen-card"):
                yield Static("", id="connection")
                yield Input(placeholder="Search recipes, Enter to run", id="search-input")
                yield ListView(id="recipe-list")
                with Horizontal(id="pager"):
                    yield Button("Previous", id="previous")
                    yield Static("", id="page-label")
                    yield Button("Next", id="next")
                yield Static("", id="status")
        yield Footer()

    async def on_mount(self) -> None:
        sync_screen_layout(self)
        self.app.sync_screen_status(self)
        apply_centered_card_width(self, "#home-card")
        session = self.app.session
        self._disconnects = [
            session.directory.loaded.connect(self._on_loaded),
            session.directory.fetch_failed.connect(self._on_fetch_failed),
            session.images.image_ready.connect(self._on_image_ready),
        ]
        await self._render_page()
        if not session.store.get().configured:
            self._set_status("Please configure API settings first (press s).")

    def on_unmount(self, event=None) -> None:
        for disconnect in self._disconnects:
            disconnect()
        self._disconnects = []

    def on_resize(self, event) -> None:
        sync_screen_layout(self)
        apply_centered_card_width(self, "#home-card")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "next":
            self.action_next_page()
        elif event.button.id == "previous":
            self.action_previous_page()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        query = event.value.strip()
        if event.input.id == "search-input" and query:
            self.app.push_screen(SearchScreen(query))

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        recipe = getattr(event.item, "recipe", None)
        if recipe is not None:
            self.app.push_screen(DetailScreen(recipe.id))

    def action_next_page(self) -> None:
        self.run_worker(self._turn_page(1), group="page", exclusive=True)

    def action_previous_page(self) -> None:
        self.run_worker(self._turn_page(-1), group="page", exclusive=True)

    def action_refresh(self) -> None:
        self._set_status("Loading recipes...")
        self.run_worker(self.app.session.refresh(), group="refresh", exclusive=True)

    def action_settings(self) -> None:
        self.app.push_screen(SettingsScreen())

    async def _turn_page(self, direction: int) -> None:
        directory = self.app.session.directory
        if direction > 0:
            directory.next_page()
        else:
            directory.previous_page()
        await self._render_page()
        await self.app.session.load_visible_images()

    async def _render_page(self) -> None:
        session = self.app.session
        directory = session.directory
        list_view = self.query_one("#recipe-list", ListView)
        highlighted = current_recipe(list_view)
        await list_view.clear()

        items: list[ListItem] = []
        for recipe in directory.visible():
            items.append(_recipe_item(recipe, session.images.get(recipe.id)))
        if items:
            await list_view.extend(items)
        if highlighted is not None:
            for idx, item in enumerate(items):
                if item.recipe.id == highlighted.id:
                    list_view.index = idx

        self.query_one("#page-label", Static).update(
            page_text(directory.current_page, directory.page_count, len(directory.recipes))
        )
        self.query_one("#previous", Button).disabled = not directory.has_previous
        self.query_one("#next", Button).disabled = not directory.has_next

    def _on_loaded(self, recipes: list[RecipeSummary]) -> None:
        self._set_status("")
        self.run_worker(self._render_page(), group="render", exclusive=True)

    def _on_fetch_failed(self, message: str) -> None:
        self._set_status(message)
        self.notify(message, severity="error", timeout=3)

    def _on_image_ready(self, recipe_id: str, handle: ImageHandle) -> None:
        item = find_recipe_item(self.query_one("#recipe-list", ListView), recipe_id)
        if item is not None:
            item.label_widget.update(recipe_row(item.recipe, handle))

    def _set_status(self, message: str) -> None:
        self.query_one("#status", Static).update(message)


def _recipe_item(recipe: RecipeSummary, image: ImageHandle | None) -> ListItem:
    label = Label(recipe_row(recipe, image))
    item = ListItem(label)
    item.recipe = recipe
    item.label_widget = label
    return item
