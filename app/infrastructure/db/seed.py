"""
Seed de datos de demo (usuarios `alice`/`bob` y algunas notas).

Solo siembra notas si el repositorio está vacío; los usuarios existentes se respetan.
"""
from __future__ import annotations

import logging
from typing import List, Tuple

from app.core.exceptions import UserAlreadyExistsError
from app.repositories.note_repo import NoteRepository
from app.repositories.user_repo import UserRepository
from app.services.auth_service import hash_password

_log = logging.getLogger("notes.seed")

DEMO_USERS: List[str] = ["alice", "bob"]

DEMO_NOTES: List[Tuple[str, str]] = [
    ("alice", "buy milk"),
    ("alice", "call the dentist"),
    ("bob", "review pull request"),
]


def seed_demo_data(users: UserRepository, notes: NoteRepository, *, password: str) -> None:
    for username in DEMO_USERS:
        try:
            users.insert(username, hash_password(password))
            _log.info("Usuario demo creado: %s", username)
        except UserAlreadyExistsError:
            _log.info("Usuario demo ya existe: %s", username)

    if notes.count():
        _log.info("Notas existentes; se omite seed de notas")
        return
    for author, content in DEMO_NOTES:
        notes.insert(author=author, content=content)
    _log.info("Notas demo insertadas: %d", len(DEMO_NOTES))
