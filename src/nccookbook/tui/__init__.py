from __future__ import annotations

from ..config import EffectiveConfig
from .app import CookbookApp


def run_tui(cfg: EffectiveConfig) -> int:
    app = CookbookApp(cfg)
    app.run()
    return 0


__all__ = ["run_tui", "CookbookApp"]
