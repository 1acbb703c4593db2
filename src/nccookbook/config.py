from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import tomllib
from typing import Any

from .errors import ConfigError

DEFAULT_TIMEOUT_SECONDS = 15.0
DEFAULT_PAGE_SIZE = 20
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class TuiConfig:
    header_icon: str = "🍲"
    layout: str = "auto"
    density: str = "cozy"


@dataclass(frozen=True)
class EffectiveConfig:
    credentials_path: str
    timeout_seconds: float
    page_size: int
    log_level: str
    tui: TuiConfig


def _config_root() -> Path:
    return Path(os.path.expanduser("~/.config/nccookbook"))


def default_credentials_path() -> Path:
    return _config_root() / "credentials.toml"


def load_global_config() -> dict[str, Any]:
    path = _config_root() / "config.toml"
    if not path.exists():
        return {}
    return _load_toml(path)


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except OSError as exc:
        raise ConfigError(f"Failed to read config: {path}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config: {path}") from exc


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def merge_config(cli: dict[str, Any], global_cfg: dict[str, Any]) -> dict[str, Any]:
    return _deep_merge(global_cfg, cli)


def resolve_config(cli_args: dict[str, Any]) -> EffectiveConfig:
    merged = merge_config(_cli_to_dict(cli_args), load_global_config())

    credentials_path = merged.get("credentials_path") or str(default_credentials_path())
    tui_cfg = merged.get("tui", {})
    if not isinstance(tui_cfg, dict):
        raise ConfigError("[tui] must be a table")

    return EffectiveConfig(
        credentials_path=os.path.expanduser(str(credentials_path)),
        timeout_seconds=_normalize_timeout(merged.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)),
        page_size=_normalize_page_size(merged.get("page_size", DEFAULT_PAGE_SIZE)),
        log_level=normalize_log_level(merged.get("log_level", "WARNING")),
        tui=TuiConfig(
            header_icon=str(tui_cfg.get("header_icon", "🍲")),
            layout=_normalize_tui_layout(tui_cfg.get("layout", "auto")),
            density=_normalize_tui_density(tui_cfg.get("density", "cozy")),
        ),
    )


def _cli_to_dict(cli_args: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key in ("credentials_path", "timeout_seconds", "page_size", "log_level"):
        if cli_args.get(key) is not None:
            out[key] = cli_args[key]

    tui: dict[str, Any] = {}
    for key in ("header_icon", "layout", "density"):
        value = cli_args.get(f"tui_{key}")
        if value is not None:
            tui[key] = value
    if tui:
        out["tui"] = tui
    return out


def config_to_toml(cfg: EffectiveConfig) -> str:
    lines = [
        f"credentials_path = {cfg.credentials_path!r}",
        f"timeout_seconds = {cfg.timeout_seconds!r}",
        f"page_size = {cfg.page_size!r}",
        f"log_level = {cfg.log_level!r}",
        "",
        "[tui]",
        f"header_icon = {cfg.tui.header_icon!r}",
        f"layout = {cfg.tui.layout!r}",
        f"density = {cfg.tui.density!r}",
    ]
    return "\n".join(lines) + "\n"


def normalize_log_level(value: Any) -> str:
    text = str(value or "").strip().upper()
    if text in LOG_LEVELS:
        return text
    return "WARNING"


def _normalize_timeout(value: Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"timeout_seconds must be a number, got {value!r}") from exc
    if timeout <= 0:
        raise ConfigError("timeout_seconds must be positive")
    return timeout


def _normalize_page_size(value: Any) -> int:
    try:
        size = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"page_size must be an integer, got {value!r}") from exc
    if size < 1:
        raise ConfigError("page_size must be at least 1")
    return size


def _normalize_tui_layout(value: Any) -> str:
    text = str(value or "").strip().lower()
    if text in {"auto", "compact", "normal", "wide"}:
        return text
    return "auto"


def _normalize_tui_density(value: Any) -> str:
    text = str(value or "").strip().lower()
    if text in {"cozy", "compact"}:
        return text
    return "cozy"
