"""Repositorio de la colección `note`.

Define el contrato `NoteRepository` que consume el servicio de notas y su
implementación sobre MongoDB. Los ids son enteros correlativos generados con
un contador atómico (`counter`), por lo que nunca se reutilizan tras un borrado.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Protocol

from pymongo import ASCENDING, ReturnDocument
from pymongo.database import Database

from app.api.schemas.note import Note

COLLECTION = "note"
COUNTER_COLLECTION = "counter"


class NoteRepository(Protocol):
    def insert(self, author: str, content: str) -> Note: ...

    def find_by_id(self, note_id: int) -> Optional[Note]: ...

    def find_by_author_containing(self, author: str, substring: str) -> List[Note]: ...

    def update_content(self, note_id: int, content: str) -> Optional[Note]: ...

    def update_author(self, note_id: int, author: str, *, expected_author: Optional[str] = None) -> Optional[Note]: ...

    def delete(self, note_id: int) -> bool: ...

    def count(self) -> int: ...


def _to_note(doc: Dict[str, Any]) -> Note:
    return Note(id=doc["_id"], author=doc["author"], content=doc["content"])


class MongoNoteRepository:
    """Notas en Mongo: `{_id: int, author: str, content: str}`."""

    def __init__(self, db: Database) -> None:
        self._coll = db[COLLECTION]
        self._counters = db[COUNTER_COLLECTION]

    def _next_id(self) -> int:
        doc = self._counters.find_one_and_update(
            {"_id": COLLECTION},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(doc["seq"])

    def insert(self, author: str, content: str) -> Note:
        note = Note(id=self._next_id(), author=author, content=content)
        self._coll.insert_one({"_id": note.id, "author": note.author, "content": note.content})
        return note

    def find_by_id(self, note_id: int) -> Optional[Note]:
        doc = self._coll.find_one({"_id": note_id})
        return _to_note(doc) if doc else None

    def find_by_author_containing(self, author: str, substring: str) -> List[Note]:
        """Notas del autor cuyo contenido contiene `substring` (literal, sensible a mayúsculas).

        Los valores viajan como parte del documento de filtro; el substring se
        escapa para que se compare como texto y no como expresión regular.
        """
        filtro: Dict[str, Any] = {"author": author}
        if substring:
            filtro["content"] = {"$regex": re.escape(substring)}
        cursor = self._coll.find(filtro).sort("_id", ASCENDING)
        return [_to_note(d) for d in cursor]

    def _set_field(self, filtro: Dict[str, Any], field: str, value: str) -> Optional[Note]:
        # Escritura atómica de un solo campo; devuelve la nota tal como quedó
        doc = self._coll.find_one_and_update(
            filtro,
            {"$set": {field: value}},
            return_document=ReturnDocument.AFTER,
        )
        return _to_note(doc) if doc else None

    def update_content(self, note_id: int, content: str) -> Optional[Note]:
        return self._set_field({"_id": note_id}, "content", content)

    def update_author(self, note_id: int, author: str, *, expected_author: Optional[str] = None) -> Optional[Note]:
        """Cambia el autor; con `expected_author` solo si el autor sigue siendo ese."""
        filtro: Dict[str, Any] = {"_id": note_id}
        if expected_author is not None:
            filtro["author"] = expected_author
        return self._set_field(filtro, "author", author)

    def delete(self, note_id: int) -> bool:
        res = self._coll.delete_one({"_id": note_id})
        return res.deleted_count == 1

    def count(self) -> int:
        return self._coll.count_documents({})
