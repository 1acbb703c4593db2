from __future__ import annotations

from pathlib import Path
import sys

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from nccookbook.domain.models import Credential  # noqa: E402
from nccookbook.infra.http import CookbookApi  # noqa: E402
from nccookbook.services.credentials import CredentialStore  # noqa: E402
from tests.utils import BASE_URL, TOKEN, FakeCookbook  # noqa: E402


@pytest.fixture()
def temp_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


@pytest.fixture()
def server() -> FakeCookbook:
    server = FakeCookbook()
    server.json("/api/version", {"cookbook_version": "0.10.2"})
    return server


@pytest.fixture()
def credential() -> Credential:
    return Credential(base_url=BASE_URL, token=TOKEN)


@pytest.fixture()
def api(server: FakeCookbook, credential: Credential) -> CookbookApi:
    return CookbookApi(lambda: credential, timeout_seconds=5, transport=server.transport())


@pytest.fixture()
def store(tmp_path: Path) -> CredentialStore:
    return CredentialStore(tmp_path / "nccookbook" / "credentials.toml")
