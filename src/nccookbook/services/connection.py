from __future__ import annotations

import logging
from collections.abc import Callable

from ..domain.models import ConnectionStatus, Credential
from ..domain.signals import Signal
from ..errors import ApiError, ConnectionFailed
from ..infra.http import VERSION_PATH, CookbookApi

logger = logging.getLogger(__name__)

UNKNOWN_VERSION = "Unknown"


class ConnectionMonitor:
    """Tri-state view of whether the server is reachable with the stored credential.

    ``connected`` fires on the edge into CONNECTED only; probing again while
    already connected does not fire it a second time.
    """

    def __init__(self, api: CookbookApi, get_credential: Callable[[], Credential]) -> None:
        self.api = api
        self._get_credential = get_credential
        self.status = ConnectionStatus.DISCONNECTED
        self.version = ""
        self.last_error: ConnectionFailed | None = None
        self.connected = Signal("connection.connected")
        self.status_changed = Signal("connection.status_changed")

    @property
    def is_connected(self) -> bool:
        return self.status is ConnectionStatus.CONNECTED

    async def probe(self) -> ConnectionStatus:
        if not self._get_credential().configured:
            self.version = ""
            self.last_error = None
            self._transition(ConnectionStatus.DISCONNECTED)
            return self.status

        try:
            data = await self.api.get_json(VERSION_PATH)
        except ApiError as exc:
            logger.warning("Connection check failed: %s", exc)
            self.last_error = ConnectionFailed(str(exc))
            self._transition(ConnectionStatus.ERROR)
            return self.status

        version = data.get("cookbook_version") if isinstance(data, dict) else None
        self.version = str(version) if version else UNKNOWN_VERSION
        self.last_error = None
        logger.info("Connected to cookbook version %s", self.version)
        self._transition(ConnectionStatus.CONNECTED)
        return self.status

    def _transition(self, status: ConnectionStatus) -> None:
        previous = self.status
        self.status = status
        if previous is status:
            return
        self.status_changed.emit(status)
        if status is ConnectionStatus.CONNECTED:
            self.connected.emit()
