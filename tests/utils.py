from __future__ import annotations

import asyncio
import json
from collections import Counter
from pathlib import Path
from typing import Any

import httpx

BASE_URL = "https://cloud.example/apps/cookbook"
TOKEN = "dXNlcjpzZWNyZXQ="


def write_global_config(home: Path, content: str) -> Path:
    cfg_dir = home / ".config" / "nccookbook"
    cfg_dir.mkdir(parents=True, exist_ok=True)
    path = cfg_dir / "config.toml"
    path.write_text(content, encoding="utf-8")
    return path


def recipes(count: int) -> list[dict[str, Any]]:
    return [{"recipe_id": str(i), "name": f"Recipe {i}"} for i in range(count)]


class FakeCookbook:
    """Route table served through httpx.MockTransport, counting hits per path."""

    def __init__(self, base_url: str = BASE_URL) -> None:
        self.prefix = httpx.URL(base_url).raw_path.decode().rstrip("/")
        self.routes: dict[str, Any] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: Counter[str] = Counter()
        self.requests: list[httpx.Request] = []

    def json(self, path: str, payload: Any, status: int = 200) -> None:
        self.routes[path] = httpx.Response(status, content=json.dumps(payload).encode(), headers={"content-type": "application/json"})

    def raw(self, path: str, body: bytes, status: int = 200, content_type: str = "application/json") -> None:
        self.routes[path] = httpx.Response(status, content=body, headers={"content-type": content_type})

    def image(self, recipe_id: str, data: bytes = b"\x89PNG fake", content_type: str = "image/png") -> None:
        self.raw(f"/api/v1/recipes/{recipe_id}/image", data, content_type=content_type)

    def fail(self, path: str, exc: Exception) -> None:
        self.routes[path] = exc

    def gate(self, path: str) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[path] = event
        return event

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.raw_path.decode()
        if path.startswith(self.prefix):
            path = path[len(self.prefix) :]
        self.calls[path] += 1
        self.requests.append(request)
        route = self.routes.get(path)
        gate = self.gates.get(path)
        if gate is not None:
            await gate.wait()
        if route is None:
            return httpx.Response(404, content=b"")
        if isinstance(route, Exception):
            raise route
        return httpx.Response(route.status_code, content=route.content, headers=route.headers)

    async def wait_for(self, path: str, count: int = 1) -> None:
        while self.calls[path] < count:
            await asyncio.sleep(0)
