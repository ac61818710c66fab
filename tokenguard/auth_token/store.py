"""Credential stores holding the current access and refresh tokens."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

from ..errors.internal import ParsingError


class CredentialStore(Protocol):
    """Accessors for the process-wide credentials.

    Stores perform no validation; all policy lives in the refresh coordinator.
    """

    def get_access_token(self) -> str | None: ...

    def set_access_token(self, token: str | None) -> None: ...

    def get_refresh_token(self) -> str | None: ...

    def set_refresh_token(self, token: str | None) -> None: ...


class InMemoryCredentialStore:
    """Credential store keeping both tokens in memory."""

    def __init__(
        self, access_token: str | None = None, refresh_token: str | None = None
    ) -> None:
        self._access_token = access_token
        self._refresh_token = refresh_token

    def get_access_token(self) -> str | None:
        return self._access_token

    def set_access_token(self, token: str | None) -> None:
        self._access_token = token

    def get_refresh_token(self) -> str | None:
        return self._refresh_token

    def set_refresh_token(self, token: str | None) -> None:
        self._refresh_token = token


class JsonFileCredentialStore(InMemoryCredentialStore):
    """Credential store persisted to a small JSON file.

    The file holds ``{"access_token": ..., "refresh_token": ...}``. A missing
    or unreadable file yields an empty store; every setter rewrites the file
    atomically with owner-only permissions.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        if not isinstance(path, str | os.PathLike):
            raise TypeError("path must be str or os.PathLike")
        self.path = Path(path)
        super().__init__()
        try:
            data = self._load()
        except ParsingError as e:
            logging.error(f"💥 Token file unreadable, starting empty: {e}")
            data = {}
        self._access_token = data.get("access_token")
        self._refresh_token = data.get("refresh_token")

    def set_access_token(self, token: str | None) -> None:
        super().set_access_token(token)
        self._save()

    def set_refresh_token(self, token: str | None) -> None:
        super().set_refresh_token(token)
        self._save()

    def _load(self) -> dict[str, str]:
        try:
            with self.path.open(encoding="utf-8") as f:
                raw: Any = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            raise ParsingError(
                f"Cannot read token file: {type(e).__name__}", data={"path": str(self.path)}
            ) from e
        if not isinstance(raw, dict):
            raise ParsingError("Token file must hold a JSON object", data={"path": str(self.path)})
        return {
            k: v
            for k, v in raw.items()
            if k in ("access_token", "refresh_token") and isinstance(v, str)
        }

    def _save(self) -> None:
        payload = {
            "access_token": self._access_token,
            "refresh_token": self._refresh_token,
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
                encoding="utf-8",
            ) as tmp:
                json.dump(payload, tmp, indent=2)
                tmp.flush()
                os.fsync(tmp.fileno())
                temp_path = tmp.name
            os.chmod(temp_path, 0o600)
            os.replace(temp_path, self.path)
            logging.debug(f"💾 Tokens saved path={self.path}")
        except OSError as e:
            if temp_path and os.path.exists(temp_path):
                try:
                    os.unlink(temp_path)
                except OSError:
                    pass
            logging.error(f"💥 Token save failed: {type(e).__name__}")
            raise
