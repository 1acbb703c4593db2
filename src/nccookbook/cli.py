from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Awaitable, Callable
from dataclasses import asdict

from .config import EffectiveConfig, config_to_toml, resolve_config
from .domain.models import ConnectionStatus, RecipeDetail, RecipeSummary
from .domain.parsing import format_duration
from .errors import (
    ConfigError,
    ConfigurationMissing,
    ConnectionFailed,
    FetchError,
    NcCookbookError,
)
from .logs import configure_logging
from .services.session import BrowserSession

STATUS_LABELS = {
    ConnectionStatus.DISCONNECTED: "Not Connected",
    ConnectionStatus.ERROR: "Connection Error",
}


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.tui or not args.command:
        return _cmd_tui(args)

    handlers: dict[str, Callable[[argparse.Namespace], int]] = {
        "configure": _cmd_configure,
        "status": _cmd_status,
        "list": _cmd_list,
        "show": _cmd_show,
        "search": _cmd_search,
        "config": _cmd_config,
    }

    handler = handlers.get(args.command)
    if handler is None:  # pragma: no cover
        return 1  # pragma: no cover

    try:
        return handler(args)
    except NcCookbookError as exc:
        print(str(exc), file=sys.stderr)
        return _exit_code(exc)


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--credentials", dest="credentials_path")
    common.add_argument("--timeout", dest="timeout_seconds", type=float)
    common.add_argument("--page-size", dest="page_size", type=int)
    common.add_argument("--log-level", dest="log_level")
    common.add_argument("-v", "--verbose", action="store_true")
    common.add_argument("--tui-header-icon")
    common.add_argument("--tui-layout")
    common.add_argument("--tui-density")

    parser = argparse.ArgumentParser(prog="nccookbook", parents=[common])
    parser.add_argument("--tui", action="store_true", help="Launch interactive TUI")
    sub = parser.add_subparsers(dest="command")

    configure = sub.add_parser("configure", parents=[common])
    configure.add_argument("--url", required=True)
    configure.add_argument("--token", required=True)

    sub.add_parser("status", parents=[common])

    listing = sub.add_parser("list", parents=[common])
    listing.add_argument("--page", type=int, default=1)
    listing.add_argument("--json", action="store_true")

    show = sub.add_parser("show", parents=[common])
    show.add_argument("recipe_id")
    show.add_argument("--json", action="store_true")

    search = sub.add_parser("search", parents=[common])
    search.add_argument("query")
    search.add_argument("--json", action="store_true")

    sub.add_parser("config", parents=[common])

    return parser


def _cmd_configure(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)

    async def run(session: BrowserSession) -> int:
        session.store.load()
        status = await session.save_credentials(args.url, args.token)
        print(f"Saved credentials to {session.store.path}")
        print(_status_line(session))
        if status is ConnectionStatus.ERROR:
            raise _connection_error(session)
        return 0

    return _run_session(cfg, run)


def _cmd_status(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)

    async def run(session: BrowserSession) -> int:
        status = await _connect(session, load_index=False)
        print(_status_line(session))
        return 0 if status is ConnectionStatus.CONNECTED else 1

    return _run_session(cfg, run)


def _cmd_list(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)

    async def run(session: BrowserSession) -> int:
        await _connect(session, load_index=True)
        recipes = session.directory.page(args.page)
        if args.json:
            print(json.dumps([_summary_dict(rec) for rec in recipes], indent=2))
            return 0
        total = len(session.directory.recipes)
        for rec in recipes:
            print(f"{rec.id}: {rec.name}")
        print(f"Page {args.page} of {session.directory.page_count} ({total} recipes)")
        return 0

    return _run_session(cfg, run)


def _cmd_show(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)

    async def run(session: BrowserSession) -> int:
        await _connect(session, load_index=False)
        async with session.open_detail() as detail:
            result = await detail.fetch(args.recipe_id)
            recipe = result.unwrap()
            if recipe is None:
                print("Recipe not found", file=sys.stderr)
                return 1
            if args.json:
                payload = _detail_dict(recipe)
                payload["image_bytes"] = detail.image.size if detail.image else None
                print(json.dumps(payload, indent=2))
                return 0
            for line in format_recipe(recipe, detail.image.size if detail.image else None):
                print(line)
        return 0

    return _run_session(cfg, run)


def _cmd_search(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)

    async def run(session: BrowserSession) -> int:
        await _connect(session, load_index=False)
        results = (await session.search(args.query)).unwrap()
        if args.json:
            print(json.dumps([_summary_dict(rec) for rec in results], indent=2))
            return 0
        if not results:
            print("No recipes found")
            return 0
        for rec in results:
            line = f"{rec.id}: {rec.name}"
            if rec.description:
                line += f" - {rec.description}"
            print(line)
        return 0

    return _run_session(cfg, run)


def _cmd_config(args: argparse.Namespace) -> int:
    cfg = _resolve_cfg(args)
    print(config_to_toml(cfg))
    return 0


def _cmd_tui(args: argparse.Namespace) -> int:
    from .tui import run_tui

    # logging to stderr would draw over the terminal UI
    cfg = resolve_config(_cli_args_dict(args))
    return run_tui(cfg)


def format_recipe(recipe: RecipeDetail, image_bytes: int | None = None) -> list[str]:
    lines = [recipe.name]
    if recipe.description:
        lines.append(recipe.description)
    meta = []
    if recipe.prep_time:
        meta.append(f"Prep: {format_duration(recipe.prep_time)}")
    if recipe.total_time:
        meta.append(f"Total: {format_duration(recipe.total_time)}")
    if recipe.yield_:
        meta.append(f"Serves: {recipe.yield_}")
    if meta:
        lines.append("  ".join(meta))
    if image_bytes is not None:
        lines.append(f"Image: {image_bytes} bytes")
    lines.append("")
    lines.append("Ingredients")
    lines.extend(f"- {item}" for item in recipe.ingredients)
    lines.append("")
    lines.append("Instructions")
    lines.extend(f"{idx}. {step}" for idx, step in enumerate(recipe.instructions, start=1))
    return lines


async def _connect(session: BrowserSession, load_index: bool) -> ConnectionStatus:
    credential = session.store.load()
    if not credential.configured:
        raise ConfigurationMissing("Please configure API settings first (nccookbook configure --url URL --token TOKEN)")
    status = await session.monitor.probe()
    if status is ConnectionStatus.ERROR:
        raise _connection_error(session)
    if load_index:
        result = await session.directory.fetch_all()
        result.unwrap()
    return status


def _connection_error(session: BrowserSession) -> ConnectionFailed:
    if session.monitor.last_error is not None:
        return ConnectionFailed(f"Connection failed: {session.monitor.last_error}")
    return ConnectionFailed("Connection failed")


def _status_line(session: BrowserSession) -> str:
    if session.status is ConnectionStatus.CONNECTED:
        return f"Connected (cookbook v{session.monitor.version})"
    return STATUS_LABELS[session.status]


def _run_session(cfg: EffectiveConfig, run: Callable[[BrowserSession], Awaitable[int]]) -> int:
    async def runner() -> int:
        async with BrowserSession.from_config(cfg, auto_refresh=False) as session:
            return await run(session)

    return asyncio.run(runner())


def _resolve_cfg(args: argparse.Namespace) -> EffectiveConfig:
    cli_args = _cli_args_dict(args)
    if cli_args.get("verbose"):
        cli_args["log_level"] = "DEBUG"
    cfg = resolve_config(cli_args)
    configure_logging(cfg.log_level)
    return cfg


def _cli_args_dict(args: argparse.Namespace) -> dict[str, object]:
    return vars(args).copy()


def _summary_dict(recipe: RecipeSummary) -> dict[str, object]:
    data = asdict(recipe)
    data["yield"] = data.pop("yield_")
    return data


def _detail_dict(recipe: RecipeDetail) -> dict[str, object]:
    data = asdict(recipe)
    data["yield"] = data.pop("yield_")
    for key in ("keywords", "ingredients", "instructions"):
        data[key] = list(data[key])
    return data


def _exit_code(exc: NcCookbookError) -> int:
    if isinstance(exc, (ConfigError, ConfigurationMissing)):
        return 2
    if isinstance(exc, ConnectionFailed):
        return 3
    if isinstance(exc, FetchError):
        return 4
    return 1
