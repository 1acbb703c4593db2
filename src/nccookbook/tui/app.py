from __future__ import annotations

from ..config import EffectiveConfig
from ..domain.models import ConnectionStatus
from ..services.session import BrowserSession
from .common import apply_theme, set_status_bar, sync_layout_classes
from .layout import normalize_density, resolve_layout_mode
from .screens.home import HomeScreen
from .state import status_text
from .textual import App
from .theme import APP_CSS

STATUS_CLASSES = {
    ConnectionStatus.CONNECTED: "status-connected",
    ConnectionStatus.ERROR: "status-error",
    ConnectionStatus.DISCONNECTED: "status-disconnected",
}


class CookbookApp(App):
    TITLE = "Nextcloud Cookbook"
    CSS = APP_CSS
    BINDINGS = [("q", "quit", "Quit")]

    def __init__(self, cfg: EffectiveConfig, session: BrowserSession | None = None) -> None:
        super().__init__(ansi_color=True)
        self.cfg = cfg
        self.session = session if session is not None else BrowserSession.from_config(cfg)
        self.tui_layout_mode = "normal"
        self.tui_density = normalize_density(cfg.tui.density)
        self.connection_text = status_text(ConnectionStatus.DISCONNECTED, "")
        self._status_class = STATUS_CLASSES[ConnectionStatus.DISCONNECTED]

    def on_mount(self) -> None:
        apply_theme(self)
        self._refresh_layout_mode()
        self.session.monitor.status_changed.connect(self._on_status_changed)
        self.push_screen(HomeScreen())
        self.run_worker(self.session.start(), group="session", exclusive=True)

    def on_resize(self, event) -> None:
        self._refresh_layout_mode()

    async def action_quit(self) -> None:
        await self.session.close()
        self.exit()

    def sync_screen_status(self, screen) -> None:
        set_status_bar(screen)
        for class_name in STATUS_CLASSES.values():
            screen.set_class(class_name == self._status_class, class_name)

    def _on_status_changed(self, status: ConnectionStatus) -> None:
        self.connection_text = status_text(status, self.session.monitor.version)
        self._status_class = STATUS_CLASSES[status]
        for screen in tuple(self.screen_stack):
            self.sync_screen_status(screen)

    def _refresh_layout_mode(self) -> None:
        self.tui_layout_mode = resolve_layout_mode(self.size.width, self.size.height, self.cfg.tui.layout)
        for screen in tuple(self.screen_stack):
            sync_layout_classes(screen, self.tui_layout_mode, self.tui_density)
