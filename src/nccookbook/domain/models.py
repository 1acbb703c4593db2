from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Credential:
    base_url: str = ""
    token: str = ""

    @property
    def configured(self) -> bool:
        return bool(self.base_url) and bool(self.token)


class ConnectionStatus(Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    ERROR = "error"


class DetailState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class RecipeSummary:
    id: str
    name: str
    description: str | None = None
    prep_time: str | None = None
    total_time: str | None = None
    yield_: str | None = None


@dataclass(frozen=True)
class RecipeDetail:
    id: str
    name: str
    description: str | None = None
    prep_time: str | None = None
    cook_time: str | None = None
    total_time: str | None = None
    yield_: str | None = None
    category: str | None = None
    keywords: tuple[str, ...] = ()
    ingredients: tuple[str, ...] = ()
    instructions: tuple[str, ...] = ()

    def summary(self) -> RecipeSummary:
        return RecipeSummary(
            id=self.id,
            name=self.name,
            description=self.description,
            prep_time=self.prep_time,
            total_time=self.total_time,
            yield_=self.yield_,
        )


@dataclass(frozen=True)
class ImageHandle:
    """Revocable reference to image bytes held in a BlobStore."""

    recipe_id: str
    url: str
    content_type: str
    size: int
