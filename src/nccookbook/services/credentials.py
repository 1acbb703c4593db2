from __future__ import annotations

import json
import logging
import os
import tempfile
import tomllib
from pathlib import Path

from ..domain.models import Credential
from ..domain.signals import Signal

logger = logging.getLogger(__name__)

URL_KEY = "nextcloud-api-url"
TOKEN_KEY = "nextcloud-api-token"


class CredentialStore:
    """The (URL, token) pair, persisted in a small TOML file.

    ``get`` never touches the disk. ``save`` replaces the file in one rename,
    so a reader sees either both old values or both new ones.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._current = Credential()
        self.changed = Signal("credentials.changed")

    def get(self) -> Credential:
        return self._current

    def load(self) -> Credential:
        self._current = read_credential_file(self.path)
        return self._current

    def save(self, base_url: str, token: str) -> Credential:
        credential = Credential(base_url=base_url, token=token)
        write_credential_file(self.path, credential)
        self._current = credential
        logger.info("Saved credentials to %s", self.path)
        self.changed.emit(credential)
        return credential


def read_credential_file(path: Path) -> Credential:
    if not path.exists():
        return Credential()
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("Ignoring unreadable credentials file %s: %s", path, exc)
        return Credential()
    return Credential(
        base_url=_as_text(data.get(URL_KEY)),
        token=_as_text(data.get(TOKEN_KEY)),
    )


def write_credential_file(path: Path, credential: Credential) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    # JSON string escapes are valid TOML basic-string escapes
    text = (
        f"{URL_KEY} = {json.dumps(credential.base_url)}\n"
        f"{TOKEN_KEY} = {json.dumps(credential.token)}\n"
    )
    fd, tmp_name = tempfile.mkstemp(prefix=".credentials-", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
        os.chmod(tmp_name, 0o600)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def _as_text(value: object) -> str:
    if value is None:
        return ""
    return str(value)
