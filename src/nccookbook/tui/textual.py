from __future__ import annotations

from ..errors import ConfigError

try:  # the list/show/search commands run without Textual
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal, Vertical, VerticalScroll
    from textual.screen import Screen
    from textual.theme import Theme
    from textual.widgets import Button, Footer, Header, Input, Label, ListItem, ListView, Static
except ImportError as exc:  # pragma: no cover
    raise ConfigError(
        "The recipe browser needs Textual. Install it or use `nccookbook list`."
    ) from exc

__all__ = [
    "App",
    "Button",
    "ComposeResult",
    "Footer",
    "Header",
    "Horizontal",
    "Input",
    "Label",
    "ListItem",
    "ListView",
    "Screen",
    "Static",
    "Theme",
    "Vertical",
    "VerticalScroll",
]
