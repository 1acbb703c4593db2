from __future__ import annotations

from ...domain.models import DetailState, RecipeDetail
from ...domain.parsing import format_duration
from ...services.detail import RecipeDetailFetcher
from ..common import apply_centered_card_width, header_icon, sync_screen_layout
from ..state import image_text
from ..textual import ComposeResult, Footer, Header, Screen, Static, Vertical, VerticalScroll


class DetailScreen(Screen):
    BINDINGS = [("escape", "back", "Back"), ("b", "back", "Back")]

    def __init__(self, recipe_id: str) -> None:
        super().__init__()
        self.recipe_id = recipe_id
        self.detail: RecipeDetailFetcher | None = None

    def compose(self) -> ComposeResult:
        yield Header(icon=header_icon(self))
        with Vertical(id="detail-shell", classes="screen-shell"):
            with Vertical(id="detail-card", classes="screen-card"):
                yield Static("", id="connection")
                with VerticalScroll(id="detail-body"):
                    yield Static("Loading...", id="title")
                    yield Static("", id="detail-image", classes="detail-image")
                    yield Static("", id="detail-description")
                    yield Static("", id="detail-meta", classes="detail-meta")
                    yield Static("", id="ingredients")
                    yield Static("", id="instructions")
        yield Footer()

    def on_mount(self) -> None:
        sync_screen_layout(self)
        self.app.sync_screen_status(self)
        apply_centered_card_width(self, "#detail-card")
        self.detail = self.app.session.open_detail()
        self.run_worker(self._load(), exclusive=True)

    def on_unmount(self, event=None) -> None:
        if self.detail is not None:
            self.detail.close()

    def on_resize(self, event) -> None:
        sync_screen_layout(self)
        apply_centered_card_width(self, "#detail-card")

    def action_back(self) -> None:
        self.app.pop_screen()

    async def _load(self) -> None:
        if not self.app.session.store.get().configured:
            self._set_title("Please configure API settings first")
            return
        await self.detail.fetch(self.recipe_id)
        if self.detail.state is DetailState.FAILED:
            self._set_title(self.detail.error)
        elif self.detail.state is DetailState.NOT_FOUND:
            self._set_title("Recipe not found")
        elif self.detail.recipe is not None:
            self._render_recipe(self.detail.recipe)

    def _render_recipe(self, recipe: RecipeDetail) -> None:
        self._set_title(recipe.name)
        self.query_one("#detail-image", Static).update(image_text(self.detail.image))
        self.query_one("#detail-description", Static).update(recipe.description or "")

        meta = []
        if recipe.prep_time:
            meta.append(f"Prep: {format_duration(recipe.prep_time)}")
        if recipe.total_time:
            meta.append(f"Total: {format_duration(recipe.total_time)}")
        if recipe.yield_:
            meta.append(f"Serves: {recipe.yield_}")
        self.query_one("#detail-meta", Static).update("   ".join(meta))

        ingredients = "\n".join(f"• {item}" for item in recipe.ingredients)
        steps = "\n".join(f"{idx}. {step}" for idx, step in enumerate(recipe.instructions, start=1))
        self.query_one("#ingredients", Static).update(f"[b]Ingredients[/b]\n{ingredients}")
        self.query_one("#instructions", Static).update(f"\n[b]Instructions[/b]\n{steps}")

    def _set_title(self, text: str) -> None:
        self.query_one("#title", Static).update(text)
