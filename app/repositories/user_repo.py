"""Persistencia de usuarios (username + hash de contraseña)."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol

from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from app.core.exceptions import UserAlreadyExistsError

COLLECTION = "user"


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class UserRepository(Protocol):
    def find_by_username(self, username: str) -> Optional[Dict[str, Any]]: ...

    def insert(self, username: str, password_hash: str) -> Dict[str, Any]: ...


class MongoUserRepository:
    def __init__(self, db: Database) -> None:
        self._coll = db[COLLECTION]

    def find_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        """Busca usuario por username exacto."""
        return self._coll.find_one({"username": username}, {"_id": 0})

    def insert(self, username: str, password_hash: str) -> Dict[str, Any]:
        """Inserta usuario; el índice único sobre `username` detecta duplicados."""
        doc = {"username": username, "password_hash": password_hash, "created_at": _now_iso()}
        try:
            self._coll.insert_one(dict(doc))
        except DuplicateKeyError as e:
            raise UserAlreadyExistsError(username) from e
        return doc
