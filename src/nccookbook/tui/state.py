from __future__ import annotations

from ..domain.models import ConnectionStatus, ImageHandle, RecipeSummary
from ..domain.parsing import format_duration


def status_text(status: ConnectionStatus, version: str) -> str:
    if status is ConnectionStatus.CONNECTED:
        return f"● v{version}"
    if status is ConnectionStatus.ERROR:
        return "✖ Connection Error"
    return "○ Not Connected"


def recipe_row(recipe: RecipeSummary, image: ImageHandle | None) -> str:
    marker = "▣" if image is not None else "□"
    parts = [f"{marker} {recipe.name or recipe.id}"]
    if recipe.total_time:
        total = format_duration(recipe.total_time)
        if total:
            parts.append(f"({total})")
    return " ".join(parts)


def page_text(page: int, page_count: int, total: int) -> str:
    return f"Page {page} of {page_count} · {total} recipes"


def image_text(image: ImageHandle | None) -> str:
    if image is None:
        return ""
    kib = image.size / 1024
    return f"[image {image.content_type}, {kib:.1f} KiB]"
