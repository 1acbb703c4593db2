from __future__ import annotations

import re
from typing import Any

from .models import RecipeDetail, RecipeSummary

DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?")


def parse_summary(data: dict[str, Any]) -> RecipeSummary | None:
    recipe_id = _recipe_id(data)
    if recipe_id is None:
        return None
    return RecipeSummary(
        id=recipe_id,
        name=str(data.get("name") or ""),
        description=_optional_text(data.get("description")),
        prep_time=_optional_text(data.get("prepTime")),
        total_time=_optional_text(data.get("totalTime")),
        yield_=_optional_text(data.get("recipeYield")),
    )


def parse_summaries(payload: Any) -> list[RecipeSummary]:
    if not isinstance(payload, list):
        return []
    recipes: list[RecipeSummary] = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        summary = parse_summary(item)
        if summary is not None:
            recipes.append(summary)
    return recipes


def parse_detail(data: dict[str, Any], fallback_id: str) -> RecipeDetail:
    return RecipeDetail(
        id=_recipe_id(data) or fallback_id,
        name=str(data.get("name") or ""),
        description=_optional_text(data.get("description")),
        prep_time=_optional_text(data.get("prepTime")),
        cook_time=_optional_text(data.get("cookTime")),
        total_time=_optional_text(data.get("totalTime")),
        yield_=_optional_text(data.get("recipeYield")),
        category=_optional_text(data.get("recipeCategory")),
        keywords=normalize_keywords(data.get("keywords")),
        ingredients=_text_list(data.get("recipeIngredient")),
        instructions=_instruction_list(data.get("recipeInstructions")),
    )


def normalize_keywords(keywords: Any) -> tuple[str, ...]:
    if isinstance(keywords, str):
        return tuple(k.strip() for k in keywords.split(",") if k.strip())
    if isinstance(keywords, list):
        return tuple(str(k).strip() for k in keywords if str(k).strip())
    return ()


def format_duration(duration: str) -> str:
    """Render an ISO-8601 duration such as ``PT1H30M`` as ``1h 30m``."""
    match = DURATION_RE.match(duration)
    if not match:
        return duration
    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    return " ".join(parts)


def _recipe_id(data: dict[str, Any]) -> str | None:
    for key in ("id", "recipe_id"):
        value = data.get(key)
        if value not in (None, ""):
            return str(value)
    return None


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _text_list(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,) if value.strip() else ()
    if not isinstance(value, list):
        return ()
    return tuple(str(item) for item in value if str(item).strip())


def _instruction_list(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(line.strip() for line in value.splitlines() if line.strip())
    if not isinstance(value, list):
        return ()
    steps: list[str] = []
    for item in value:
        # HowToStep objects carry their text under "text"
        text = item.get("text") if isinstance(item, dict) else item
        if text is not None and str(text).strip():
            steps.append(str(text))
    return tuple(steps)
