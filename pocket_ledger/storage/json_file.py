"""
JSON File Storage

Persists the whole user set as one JSON document:

    {"users": {"<username>": {"username": ..., "password_hash": ...,
                              "wallet": {"balance": ..., "transactions": [...],
                                         "budgets": {...}}}}}

Decimals are written as strings so no cents are lost. Loading re-validates
every wallet, so a file whose balance disagrees with its history is
rejected rather than trusted.

TRADEOFFS:
- Whole-file rewrite on every save (fine for a personal ledger)
- Writes go to a temp file first and are swapped in with os.replace,
  so a crash mid-write never leaves a half-written file
"""

import os
import tempfile
from pathlib import Path
from typing import Union

import structlog
from pydantic import BaseModel, Field, ValidationError

from pocket_ledger.models.user import User
from pocket_ledger.storage.interface import (
    CorruptStorageError,
    StorageError,
    UserStorageInterface,
)


logger = structlog.get_logger(__name__)


class UserStoreDocument(BaseModel):
    """On-disk layout of the user set."""

    users: dict[str, User] = Field(default_factory=dict)


class JsonFileUserStorage(UserStorageInterface):
    """User storage backed by a single JSON file."""

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load_users(self) -> dict[str, User]:
        if not self._path.exists():
            logger.info("user_store_missing", path=str(self._path))
            return {}

        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not read {self._path}: {e}", str(self._path)) from e

        try:
            document = UserStoreDocument.model_validate_json(raw)
        except ValidationError as e:
            raise CorruptStorageError(
                f"Invalid user data in {self._path}: {e.error_count()} errors",
                str(self._path),
            ) from e

        for key, user in document.users.items():
            if key != user.username:
                raise CorruptStorageError(
                    f"User stored under '{key}' is named '{user.username}'",
                    str(self._path),
                )

        logger.info("users_loaded", path=str(self._path), count=len(document.users))
        return dict(document.users)

    def save_users(self, users: dict[str, User]) -> None:
        document = UserStoreDocument(users=users)
        payload = document.model_dump_json(indent=2)

        directory = self._path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Could not write {self._path}: {e}", str(self._path)) from e

        logger.info("users_saved", path=str(self._path), count=len(users))
