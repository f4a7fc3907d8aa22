"""Crea un usuario local en Mongo (o inserta los usuarios/notas de demo).

Uso típico:
  PYTHONPATH=. python scripts/create_user.py --username alice --password s3cret
  PYTHONPATH=. python scripts/create_user.py --demo

La contraseña también puede pasarse por la variable NOTES_PASSWORD.
"""
from __future__ import annotations

import argparse
import os
import sys

from app.core.config import settings
from app.core.exceptions import UserAlreadyExistsError
from app.core.logging import setup_logging
from app.infrastructure.db.bootstrap import ensure_collections
from app.infrastructure.db.mongo import db_ready, get_db, init_mongo
from app.infrastructure.db.seed import seed_demo_data
from app.repositories.note_repo import MongoNoteRepository
from app.repositories.user_repo import MongoUserRepository
from app.services.auth_service import register_user


def main() -> int:
    ap = argparse.ArgumentParser(description="Alta de usuarios para Sticky Notes API")
    ap.add_argument("--username", help="Username (será el author de sus notas)")
    ap.add_argument("--password", default=os.getenv("NOTES_PASSWORD"), help="Contraseña en claro")
    ap.add_argument("--demo", action="store_true", help="Inserta usuarios alice/bob y notas de ejemplo")
    args = ap.parse_args()

    setup_logging(settings.log_level)
    init_mongo()
    if not db_ready():
        print("Mongo no accesible; revisa MONGO_URI", file=sys.stderr)
        return 2
    ensure_collections()
    users = MongoUserRepository(get_db())

    if args.demo:
        seed_demo_data(users, MongoNoteRepository(get_db()), password=settings.demo_password)
        return 0

    if not args.username or not args.password:
        ap.error("--username y --password (o NOTES_PASSWORD) son obligatorios")
    try:
        user = register_user(users, username=args.username, password=args.password)
    except UserAlreadyExistsError as e:
        print(e.message, file=sys.stderr)
        return 1
    print(f"Usuario creado: {user.username}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
