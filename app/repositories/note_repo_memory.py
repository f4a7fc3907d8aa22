"""Repositorio de notas en memoria (desarrollo local y tests).

Mismo contrato que `MongoNoteRepository`. Un lock protege cada operación.
"""
from __future__ import annotations

import threading
from typing import Dict, List, Optional

from app.api.schemas.note import Note


class InMemoryNoteRepository:
    def __init__(self) -> None:
        self._notes: Dict[int, Note] = {}
        self._last_id = 0
        self._lock = threading.Lock()

    def insert(self, author: str, content: str) -> Note:
        with self._lock:
            self._last_id += 1
            note = Note(id=self._last_id, author=author, content=content)
            self._notes[note.id] = note
            return note.model_copy()

    def find_by_id(self, note_id: int) -> Optional[Note]:
        with self._lock:
            note = self._notes.get(note_id)
            return note.model_copy() if note else None

    def find_by_author_containing(self, author: str, substring: str) -> List[Note]:
        with self._lock:
            return [
                n.model_copy()
                for _, n in sorted(self._notes.items())
                if n.author == author and substring in n.content
            ]

    def _set_field(self, note_id: int, field: str, value: str, expected_author: Optional[str] = None) -> Optional[Note]:
        with self._lock:
            current = self._notes.get(note_id)
            if current is None:
                return None
            if expected_author is not None and current.author != expected_author:
                return None
            updated = current.model_copy(update={field: value})
            self._notes[note_id] = updated
            return updated.model_copy()

    def update_content(self, note_id: int, content: str) -> Optional[Note]:
        return self._set_field(note_id, "content", content)

    def update_author(self, note_id: int, author: str, *, expected_author: Optional[str] = None) -> Optional[Note]:
        return self._set_field(note_id, "author", author, expected_author)

    def delete(self, note_id: int) -> bool:
        with self._lock:
            return self._notes.pop(note_id, None) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._notes)
