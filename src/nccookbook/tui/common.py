from __future__ import annotations

from .layout import centered_card_width
from .textual import Screen
from .theme import TUI_THEME_NAME, TUI_THEMES

DEFAULT_HEADER_ICON = "🍲"
LAYOUT_CLASSES = ("layout-compact", "layout-normal", "layout-wide")
DENSITY_CLASSES = ("density-cozy", "density-compact")


def header_icon(screen: Screen) -> str:
    app = getattr(screen, "app", None)
    cfg = getattr(app, "cfg", None) if app else None
    icon = getattr(getattr(cfg, "tui", None), "header_icon", None)
    if icon is None:
        return DEFAULT_HEADER_ICON
    text = str(icon).strip()
    return text or DEFAULT_HEADER_ICON


def apply_theme(app) -> None:
    theme = TUI_THEMES[TUI_THEME_NAME]
    app.register_theme(theme)
    app.theme = TUI_THEME_NAME


def sync_layout_classes(node, layout_mode: str, density: str) -> None:
    for class_name in LAYOUT_CLASSES:
        node.set_class(class_name == f"layout-{layout_mode}", class_name)
    for class_name in DENSITY_CLASSES:
        node.set_class(class_name == f"density-{density}", class_name)


def sync_screen_layout(screen: Screen) -> None:
    app = screen.app
    sync_layout_classes(screen, str(getattr(app, "tui_layout_mode", "normal")), str(getattr(app, "tui_density", "cozy")))


def apply_centered_card_width(screen: Screen, selector: str) -> None:
    card = screen.query_one(selector)
    width = screen.size.width
    if width > 0:
        card.styles.width = centered_card_width(width, str(getattr(screen.app, "tui_layout_mode", "normal")))


def set_status_bar(screen: Screen) -> None:
    """Copy the app's connection status into the screen's #connection label."""
    app = screen.app
    text = getattr(app, "connection_text", "")
    for widget in screen.query("#connection"):
        widget.update(text)
