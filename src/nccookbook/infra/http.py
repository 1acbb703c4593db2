"""Authenticated client for the Nextcloud Cookbook REST API."""
from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any
from urllib.parse import quote

import httpx

from ..domain.models import Credential
from ..errors import ApiError, ConfigurationMissing

logger = logging.getLogger(__name__)

VERSION_PATH = "/api/version"
RECIPES_PATH = "/api/v1/recipes"
SEARCH_PATH = "/api/v1/search"


def recipe_path(recipe_id: str) -> str:
    return f"{RECIPES_PATH}/{quote(recipe_id, safe='')}"


def image_path(recipe_id: str) -> str:
    return f"{recipe_path(recipe_id)}/image"


class CookbookApi:
    """Thin wrapper over one ``httpx.AsyncClient``.

    The credential is read through ``get_credential`` on every request, so a
    saved credential takes effect on the next call without rebuilding the
    client. Every failure is raised as ``ApiError``; callers decide whether it
    is fatal.
    """

    def __init__(
        self,
        get_credential: Callable[[], Credential],
        *,
        timeout_seconds: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._get_credential = get_credential
        self._timeout = httpx.Timeout(timeout_seconds, connect=min(timeout_seconds, 10.0))
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout, transport=self._transport)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_json(self, path: str) -> Any:
        """GET ``path`` and decode JSON. An empty body decodes to ``None``."""
        resp = await self._get(path, accept="application/json")
        if not resp.content.strip():
            return None
        try:
            return resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ApiError(f"Invalid JSON from {path}", status_code=resp.status_code) from exc

    async def get_bytes(self, path: str, accept: str = "image/*") -> tuple[bytes, str]:
        resp = await self._get(path, accept=accept)
        content_type = resp.headers.get("content-type", "application/octet-stream")
        return resp.content, content_type.split(";")[0].strip()

    async def _get(self, path: str, accept: str) -> httpx.Response:
        credential = self._get_credential()
        if not credential.configured:
            raise ConfigurationMissing("API URL and token must be configured")

        url = f"{credential.base_url.rstrip('/')}{path}"
        headers = {
            "Authorization": f"Basic {credential.token}",
            "Accept": accept,
        }
        try:
            resp = await self.client.get(url, headers=headers)
        except httpx.TimeoutException as exc:
            raise ApiError(f"Request to {path} timed out") from exc
        except httpx.HTTPError as exc:
            raise ApiError(f"Network error: {exc}") from exc
        except (httpx.InvalidURL, UnicodeEncodeError) as exc:
            # a malformed URL or token fails while the request is built
            raise ApiError(f"Invalid API settings: {exc}") from exc

        if not resp.is_success:
            logger.debug("GET %s returned status=%s", path, resp.status_code)
            raise ApiError(f"Server returned status {resp.status_code}", status_code=resp.status_code)
        return resp
