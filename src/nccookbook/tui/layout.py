from __future__ import annotations

# (layout, min width, min height), widest first
AUTO_LAYOUT_STEPS = (
    ("wide", 140, 36),
    ("normal", 100, 28),
)
LAYOUT_MODES = ("auto", "compact", "normal", "wide")
DENSITIES = ("cozy", "compact")
CARD_MAX_WIDTH = {"wide": 120, "normal": 104}
CARD_GUTTER = {"wide": 20, "normal": 12}
MIN_CARD_WIDTH = 36


def _pick(value: object, allowed: tuple[str, ...], default: str) -> str:
    text = str(value or "").strip().lower()
    return text if text in allowed else default


def normalize_layout_mode(mode: object) -> str:
    return _pick(mode, LAYOUT_MODES, "auto")


def normalize_density(density: object) -> str:
    return _pick(density, DENSITIES, "cozy")


def resolve_layout_mode(width: int, height: int, requested_mode: object) -> str:
    """Map terminal size to a layout unless one was requested explicitly."""
    mode = normalize_layout_mode(requested_mode)
    if mode != "auto":
        return mode
    for layout, min_width, min_height in AUTO_LAYOUT_STEPS:
        if width >= min_width and height >= min_height:
            return layout
    return "compact"


def centered_card_width(viewport_width: int, layout_mode: str) -> int:
    width = max(40, viewport_width)
    if layout_mode in CARD_MAX_WIDTH:
        target = min(CARD_MAX_WIDTH[layout_mode], width - CARD_GUTTER[layout_mode])
    else:
        target = width - 4
    return max(MIN_CARD_WIDTH, min(target, width - 2))
