from __future__ import annotations

import argparse
import json
import sys
import types

import pytest

from nccookbook import cli
from nccookbook.config import default_credentials_path
from nccookbook.domain.models import RecipeDetail
from nccookbook.services.credentials import CredentialStore
from nccookbook.services.session import BrowserSession
from tests.utils import BASE_URL, TOKEN, FakeCookbook, recipes


@pytest.fixture()
def cli_server(monkeypatch: pytest.MonkeyPatch, server: FakeCookbook, temp_home) -> FakeCookbook:
    original = BrowserSession.from_config.__func__

    def from_config(cls, cfg, *, transport=None, auto_refresh=True):
        return original(cls, cfg, transport=server.transport(), auto_refresh=auto_refresh)

    monkeypatch.setattr(BrowserSession, "from_config", classmethod(from_config))
    return server


@pytest.fixture()
def configured(cli_server: FakeCookbook) -> FakeCookbook:
    CredentialStore(default_credentials_path()).save(BASE_URL, TOKEN)
    return cli_server


def test_cli_no_command(monkeypatch: pytest.MonkeyPatch) -> None:
    called = {}

    def fake_tui(*args, **kwargs):
        called["ok"] = True
        return 0

    monkeypatch.setattr(cli, "_cmd_tui", fake_tui)
    assert cli.main([]) == 0
    assert called.get("ok") is True


def test_cli_tui_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("nccookbook.cli._cmd_tui", lambda *a, **k: 0)
    assert cli.main(["--tui"]) == 0


def test_cmd_tui_invokes_run(monkeypatch: pytest.MonkeyPatch, temp_home) -> None:
    calls = {}

    def fake_run_tui(cfg) -> int:
        calls["cfg"] = cfg
        return 0

    monkeypatch.setitem(sys.modules, "nccookbook.tui", types.SimpleNamespace(run_tui=fake_run_tui))
    args = cli._build_parser().parse_args(["--tui", "--tui-layout", "wide"])
    assert cli._cmd_tui(args) == 0
    assert calls["cfg"].tui.layout == "wide"


def test_configure_saves_and_probes(cli_server: FakeCookbook, capsys) -> None:
    rc = cli.main(["configure", "--url", BASE_URL, "--token", TOKEN])
    out = capsys.readouterr().out
    assert rc == 0
    assert "Saved credentials to" in out
    assert "Connected (cookbook v0.10.2)" in out
    assert CredentialStore(default_credentials_path()).load().token == TOKEN
    assert cli_server.calls["/api/v1/recipes"] == 0


def test_configure_with_unreachable_server(cli_server: FakeCookbook, capsys) -> None:
    cli_server.json("/api/version", {}, status=401)
    rc = cli.main(["configure", "--url", BASE_URL, "--token", "bad"])
    captured = capsys.readouterr()
    assert rc == 3
    assert "Connection Error" in captured.out
    assert "Connection failed" in captured.err


def test_status_without_credentials(cli_server: FakeCookbook, capsys) -> None:
    rc = cli.main(["status"])
    assert rc == 2
    assert "Please configure API settings first" in capsys.readouterr().err
    assert cli_server.requests == []


def test_status_connected(configured: FakeCookbook, capsys) -> None:
    assert cli.main(["status"]) == 0
    assert capsys.readouterr().out.strip() == "Connected (cookbook v0.10.2)"


def test_list_pages(configured: FakeCookbook, capsys) -> None:
    configured.json("/api/v1/recipes", recipes(25))
    rc = cli.main(["list", "--page", "2"])
    out = capsys.readouterr().out.splitlines()
    assert rc == 0
    assert out[0] == "20: Recipe 20"
    assert out[-1] == "Page 2 of 2 (25 recipes)"


def test_list_json_and_page_size(configured: FakeCookbook, capsys) -> None:
    configured.json("/api/v1/recipes", recipes(5))
    rc = cli.main(["list", "--json", "--page-size", "2"])
    data = json.loads(capsys.readouterr().out)
    assert rc == 0
    assert [item["id"] for item in data] == ["0", "1"]
    assert "yield" in data[0]


def test_list_fetch_failure(configured: FakeCookbook, capsys) -> None:
    configured.json("/api/v1/recipes", {}, status=500)
    assert cli.main(["list"]) == 4
    assert "Failed to fetch recipes" in capsys.readouterr().err


def test_show_recipe(configured: FakeCookbook, capsys) -> None:
    configured.json(
        "/api/v1/recipes/4",
        {
            "id": 4,
            "name": "Soup",
            "totalTime": "PT0H45M0S",
            "recipeIngredient": ["water"],
            "recipeInstructions": ["Boil"],
        },
    )
    configured.image("4", b"12345")
    rc = cli.main(["show", "4"])
    out = capsys.readouterr().out.splitlines()
    assert rc == 0
    assert out[0] == "Soup"
    assert "Total: 45m" in out
    assert "Image: 5 bytes" in out
    assert "- water" in out
    assert "1. Boil" in out


def test_show_not_found(configured: FakeCookbook, capsys) -> None:
    configured.raw("/api/v1/recipes/99", b"")
    assert cli.main(["show", "99"]) == 1
    assert "Recipe not found" in capsys.readouterr().err


def test_search(configured: FakeCookbook, capsys) -> None:
    configured.json("/api/v1/search/soup", [{"recipe_id": "4", "name": "Soup", "description": "Warm"}])
    assert cli.main(["search", "soup"]) == 0
    assert capsys.readouterr().out.strip() == "4: Soup - Warm"


def test_search_no_results(configured: FakeCookbook, capsys) -> None:
    configured.json("/api/v1/search/zzz", [])
    assert cli.main(["search", "zzz"]) == 0
    assert capsys.readouterr().out.strip() == "No recipes found"


def test_config_prints_effective_config(temp_home, capsys) -> None:
    assert cli.main(["config", "--page-size", "9"]) == 0
    assert "page_size = 9" in capsys.readouterr().out


def test_invalid_config_exit_code(temp_home, capsys) -> None:
    assert cli.main(["config", "--timeout", "0"]) == 2
    assert "timeout_seconds" in capsys.readouterr().err


def test_format_recipe_omits_empty_meta() -> None:
    lines = cli.format_recipe(RecipeDetail(id="1", name="Toast", ingredients=("bread",)))
    assert lines == ["Toast", "", "Ingredients", "- bread", "", "Instructions"]


def test_exit_code_default() -> None:
    from nccookbook.errors import NcCookbookError

    assert cli._exit_code(NcCookbookError("x")) == 1
    assert isinstance(cli._build_parser().parse_args(["status"]), argparse.Namespace)


def test_configure_with_malformed_url(cli_server: FakeCookbook, capsys) -> None:
    rc = cli.main(["configure", "--url", "http://[::1", "--token", TOKEN])
    captured = capsys.readouterr()
    assert rc == 3
    assert "Connection Error" in captured.out
    assert cli_server.requests == []
