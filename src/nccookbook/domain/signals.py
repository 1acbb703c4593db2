from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class Signal:
    """Broadcast hook. Listeners are called synchronously in connect order."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: list[Callable[..., Any]] = []

    def connect(self, listener: Callable[..., Any]) -> Callable[[], None]:
        self._listeners.append(listener)

        def disconnect() -> None:
            self.disconnect(listener)

        return disconnect

    def disconnect(self, listener: Callable[..., Any]) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def emit(self, *args: Any) -> None:
        for listener in tuple(self._listeners):
            try:
                listener(*args)
            except Exception:  # noqa: BLE001
                logger.exception("Listener for %s failed", self.name)

    def __len__(self) -> int:
        return len(self._listeners)
