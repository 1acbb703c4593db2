from __future__ import annotations

import logging

from ...domain.models import ConnectionStatus
from ..common import apply_centered_card_width, header_icon, sync_screen_layout
from ..textual import Button, ComposeResult, Footer, Header, Horizontal, Input, Label, Screen, Static, Vertical

logger = logging.getLogger(__name__)


class SettingsScreen(Screen):
    BINDINGS = [("escape", "back", "Back")]

    def compose(self) -> ComposeResult:
        credential = self.app.session.store.get()
        yield Header(icon=header_icon(self))
        with Vertical(id="settings-shell", classes="screen-shell"):
            with Vertical(id="settings-card", classes="screen-card"):
                yield Static("Nextcloud Cookbook Settings", id="title")
                yield Label("Nextcloud Cookbook API URL")
                yield Input(
                    value=credential.base_url,
                    placeholder="https://your-nextcloud.com/apps/cookbook",
                    id="url-input",
                )
                yield Label("API Auth Token")
                yield Input(value=credential.token, placeholder="Enter your API token", password=True, id="token-input")
                with Horizontal(id="settings-actions"):
                    yield Button("Save", id="save", variant="primary")
                    yield Button("Cancel", id="cancel")
                yield Static("", id="status")
        yield Footer()

    def on_mount(self) -> None:
        sync_screen_layout(self)
        apply_centered_card_width(self, "#settings-card")
        self.query_one("#url-input", Input).focus()

    def on_resize(self, event) -> None:
        sync_screen_layout(self)
        apply_centered_card_width(self, "#settings-card")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "save":
            self.run_worker(self._save(), exclusive=True)
        elif event.button.id == "cancel":
            self.app.pop_screen()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.run_worker(self._save(), exclusive=True)

    def action_back(self) -> None:
        self.app.pop_screen()

    async def _save(self) -> None:
        url = self.query_one("#url-input", Input).value.strip()
        token = self.query_one("#token-input", Input).value.strip()
        self.query_one("#status", Static).update("Checking connection...")
        try:
            status = await self.app.session.save_credentials(url, token)
        except OSError as exc:
            logger.warning("Failed to save settings: %s", exc)
            self.query_one("#status", Static).update("Failed to save settings")
            self.app.notify("Failed to save settings", severity="error", timeout=3)
            return
        if status is ConnectionStatus.ERROR:
            self.app.notify("Settings saved, but the connection failed", severity="warning", timeout=3)
        else:
            self.app.notify("Settings saved successfully", timeout=3)
        self.app.pop_screen()
