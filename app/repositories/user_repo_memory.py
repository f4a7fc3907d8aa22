"""Repositorio de usuarios en memoria (desarrollo local y tests)."""
from __future__ import annotations

import threading
from typing import Any, Dict, Optional

from app.core.exceptions import UserAlreadyExistsError
from app.repositories.user_repo import _now_iso


class InMemoryUserRepository:
    def __init__(self) -> None:
        self._users: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def find_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            u = self._users.get(username)
            return dict(u) if u else None

    def insert(self, username: str, password_hash: str) -> Dict[str, Any]:
        with self._lock:
            if username in self._users:
                raise UserAlreadyExistsError(username)
            doc = {"username": username, "password_hash": password_hash, "created_at": _now_iso()}
            self._users[username] = doc
            return dict(doc)
