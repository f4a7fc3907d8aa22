"""
Bootstrap de la base Mongo: define y aplica validadores (JSON Schema) e índices.
Se ejecuta al inicio de la app para asegurar colecciones mínimas y consistencia.
No tumba la app si algo falla; deja warnings en casos no críticos.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging
from pymongo.errors import PyMongoError
from app.infrastructure.db.mongo import get_db
from app.repositories.note_repo import COLLECTION as NOTE_COLL
from app.repositories.user_repo import COLLECTION as USER_COLL

_log = logging.getLogger("notes.mongo.bootstrap")


def _collmod_or_create(name: str, validator: Dict[str, Any] | None) -> None:
    db = get_db()
    try:
        if name not in db.list_collection_names():
            if validator:
                db.create_collection(name, validator={"$jsonSchema": validator})
            else:
                db.create_collection(name)
        elif validator:
            db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
    except PyMongoError as e:
        # No aborta el arranque; solo deja sin validator estricto.
        _log.warning("No se pudo aplicar validator en '%s': %s", name, e)


def _ensure_indexes(name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = get_db()[name]
    for ix in indexes:
        ix = dict(ix)
        keys = ix.pop("keys")
        try:
            coll.create_index(keys, **ix)
        except PyMongoError as e:
            # Ignora fallas de índice (e.g., ya existe o datos no únicos previos)
            _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)


def ensure_collections() -> None:
    """
    Garantiza colecciones, validadores e índices mínimos.
    """
    note_validator = {
        "bsonType": "object",
        "required": ["_id", "author", "content"],
        "properties": {
            "_id": {"bsonType": ["int", "long"]},
            "author": {"bsonType": "string", "minLength": 1},
            "content": {"bsonType": "string"},
        },
    }
    _collmod_or_create(NOTE_COLL, note_validator)
    _ensure_indexes(NOTE_COLL, [{"keys": [("author", 1), ("_id", 1)], "name": "ix_author_id"}])

    user_validator = {
        "bsonType": "object",
        "required": ["username", "password_hash", "created_at"],
        "properties": {
            "username": {"bsonType": "string", "minLength": 1},
            "password_hash": {"bsonType": "string"},
            "created_at": {"bsonType": "string"},
        },
    }
    _collmod_or_create(USER_COLL, user_validator)
    _ensure_indexes(USER_COLL, [{"keys": [("username", 1)], "unique": True, "name": "uniq_username"}])
