"""
Service layer for notes: reglas de autorización por operación sobre el repositorio.

- `get_note` y `move_note` exigen que el caller sea el autor de la nota.
- `list_notes` queda acotado al autor por la propia consulta.
- `update_note` y `delete_note` solo exigen que la nota exista: cualquier
  usuario autenticado puede editarla/borrarla por id (política vigente,
  ver DESIGN.md).

Los fallos se señalan con `NoteNotFoundError` / `NoteForbiddenError`; los
errores del repositorio se propagan sin clasificar.
"""
import logging
from typing import List

from app.api.schemas.note import Note
from app.core.exceptions import NoteForbiddenError, NoteNotFoundError
from app.repositories.note_repo import NoteRepository

_log = logging.getLogger("notes.service")


class NoteService:
    def __init__(self, repo: NoteRepository) -> None:
        self.repo = repo

    def _require_owned(self, caller: str, note_id: int) -> Note:
        note = self.repo.find_by_id(note_id)
        if note is None:
            _log.warning("User: %s is trying to retrieve a non existing note! note_id=%s", caller, note_id)
            raise NoteNotFoundError(note_id)
        if note.author != caller:
            _log.warning("Unauthorized access attempt by %s note_id=%s", caller, note_id)
            raise NoteForbiddenError(note_id, caller)
        return note

    def list_notes(self, caller: str, containing: str = "") -> List[Note]:
        return self.repo.find_by_author_containing(caller, containing or "")

    def create_note(self, caller: str, content: str) -> Note:
        note = self.repo.insert(author=caller, content=content)
        _log.info("Note created note_id=%s author=%s", note.id, caller)
        return note

    def get_note(self, caller: str, note_id: int) -> Note:
        return self._require_owned(caller, note_id)

    def update_note(self, note_id: int, content: str) -> Note:
        # Solo se escribe `content`: un move concurrente conserva su autor
        note = self.repo.update_content(note_id, content)
        if note is None:
            raise NoteNotFoundError(note_id)
        return note

    def delete_note(self, note_id: int) -> None:
        if not self.repo.delete(note_id):
            raise NoteNotFoundError(note_id)
        _log.info("Note deleted note_id=%s", note_id)

    def move_note(self, caller: str, note_id: int, new_author: str) -> Note:
        note = self._require_owned(caller, note_id)
        moved = self.repo.update_author(note.id, new_author, expected_author=caller)
        if moved is None:
            # Borrada o movida por otra petición entre la lectura y la escritura
            self._require_owned(caller, note_id)
            raise NoteForbiddenError(note_id, caller)
        _log.info("Note moved note_id=%s from=%s to=%s", note_id, caller, new_author)
        return moved
