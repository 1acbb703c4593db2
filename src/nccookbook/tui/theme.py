from __future__ import annotations

from .textual import Theme

TUI_THEME_NAME = "nccookbook-ansi"

APP_CSS = """
Screen {
    background: $background;
    color: $text;
}

Header {
    background: $secondary;
    color: $button-color-foreground;
}

Footer {
    background: $panel;
}

.screen-shell {
    width: 1fr;
    height: 1fr;
    align: center top;
    padding: 1 2;
}

.layout-wide .screen-shell {
    padding: 2 4;
}

.layout-compact .screen-shell {
    padding: 0;
}

.screen-card {
    width: 1fr;
    height: 1fr;
    border: tall $secondary;
    background: $surface;
    padding: 1 2;
}

.density-compact .screen-card {
    border: none;
    padding: 0 1;
}

#connection {
    dock: top;
    height: 1;
    content-align: right middle;
    color: $text-muted;
}

.status-connected #connection {
    color: $success;
    text-style: bold;
}

.status-error #connection {
    color: $error;
    text-style: bold;
}

#title {
    height: auto;
    text-style: bold underline;
    color: $accent;
    margin: 0 0 1 0;
}

#search-input {
    margin: 0 0 1 0;
}

#recipe-list, #search-results {
    height: 1fr;
    border: tall $panel;
}

#recipe-list:focus, #search-results:focus {
    border: tall $primary;
}

ListView:focus > ListItem.--highlight {
    background: $primary;
    color: $button-color-foreground;
}

#pager, #settings-actions {
    height: 3;
    align: center middle;
}

#pager Button, #settings-actions Button {
    min-width: 12;
    margin: 0 2;
}

#page-label {
    width: auto;
    content-align: center middle;
    color: $text-muted;
}

#status {
    height: auto;
    color: $warning;
}

#detail-body {
    height: 1fr;
    scrollbar-size-vertical: 1;
}

.detail-meta, .detail-image, #detail-description {
    color: $text-muted;
    margin: 0 0 1 0;
}

#ingredients, #instructions {
    height: auto;
}

Input {
    border: tall $panel;
}

Input:focus {
    border: tall $primary;
}

Button.-primary {
    background: $primary;
    color: $button-color-foreground;
}

.layout-compact #pager Button {
    min-width: 8;
    margin: 0;
}
"""

TUI_THEMES = {
    TUI_THEME_NAME: Theme(
        name=TUI_THEME_NAME,
        primary="ansi_green",
        secondary="ansi_yellow",
        accent="ansi_bright_yellow",
        warning="ansi_yellow",
        error="ansi_red",
        success="ansi_green",
        foreground="ansi_default",
        background="ansi_default",
        surface="ansi_default",
        panel="ansi_bright_black",
        dark=False,
        variables={
            "text": "ansi_default",
            "text-muted": "ansi_bright_black",
            "button-color-foreground": "ansi_black",
        },
    )
}
