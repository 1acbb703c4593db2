from __future__ import annotations

from nccookbook.domain.models import ConnectionStatus, ImageHandle, RecipeSummary
from nccookbook.tui.layout import (
    centered_card_width,
    normalize_density,
    normalize_layout_mode,
    resolve_layout_mode,
)
from nccookbook.tui.state import image_text, page_text, recipe_row, status_text


# Purpose: verify normalize layout mode.
def test_normalize_layout_mode() -> None:
    assert normalize_layout_mode("WIDE") == "wide"
    assert normalize_layout_mode(" bad ") == "auto"


# Purpose: verify normalize density.
def test_normalize_density() -> None:
    assert normalize_density("COMPACT") == "compact"
    assert normalize_density("dense") == "cozy"


# Purpose: verify resolve layout mode auto thresholds.
def test_resolve_layout_mode_auto_thresholds() -> None:
    assert resolve_layout_mode(160, 40, "auto") == "wide"
    assert resolve_layout_mode(120, 30, "auto") == "normal"
    assert resolve_layout_mode(90, 24, "auto") == "compact"


# Purpose: verify resolve layout mode explicit override.
def test_resolve_layout_mode_explicit_override() -> None:
    assert resolve_layout_mode(80, 20, "wide") == "wide"
    assert resolve_layout_mode(160, 40, "compact") == "compact"


# Purpose: verify centered card width bounds.
def test_centered_card_width() -> None:
    assert centered_card_width(200, "wide") == 120
    assert centered_card_width(110, "normal") == 98
    assert centered_card_width(10, "compact") == 36


# Purpose: verify header status text per connection state.
def test_status_text() -> None:
    assert status_text(ConnectionStatus.CONNECTED, "0.10.2") == "● v0.10.2"
    assert status_text(ConnectionStatus.ERROR, "") == "✖ Connection Error"
    assert status_text(ConnectionStatus.DISCONNECTED, "") == "○ Not Connected"


# Purpose: verify list rows mark whether an image is loaded.
def test_recipe_row() -> None:
    recipe = RecipeSummary(id="1", name="Soup", total_time="PT1H30M")
    handle = ImageHandle(recipe_id="1", url="blob:nccookbook/x", content_type="image/png", size=2048)
    assert recipe_row(recipe, None) == "□ Soup (1h 30m)"
    assert recipe_row(recipe, handle) == "▣ Soup (1h 30m)"
    assert recipe_row(RecipeSummary(id="2", name=""), None) == "□ 2"


# Purpose: verify pager and image captions.
def test_page_and_image_text() -> None:
    assert page_text(2, 3, 45) == "Page 2 of 3 · 45 recipes"
    handle = ImageHandle(recipe_id="1", url="blob:nccookbook/x", content_type="image/png", size=2048)
    assert image_text(handle) == "[image image/png, 2.0 KiB]"
    assert image_text(None) == ""
