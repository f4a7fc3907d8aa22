"""
Dependencias reutilizables para routers (FastAPI Depends).

- Repositorios: Mongo o memoria según `settings.storage_backend`.
- Autenticación: extrae y valida la credencial, devuelve el usuario actual.
- Mantener esta capa delgada: sin lógica de negocio pesada.
"""
from typing import Optional
from fastapi import Depends, HTTPException, Header
from starlette.status import HTTP_401_UNAUTHORIZED

from app.api.schemas.user import User
from app.core.config import settings
from app.infrastructure.db.mongo import get_db
from app.repositories.note_repo import MongoNoteRepository, NoteRepository
from app.repositories.note_repo_memory import InMemoryNoteRepository
from app.repositories.user_repo import MongoUserRepository, UserRepository
from app.repositories.user_repo_memory import InMemoryUserRepository
from app.services import auth_service
from app.services.note_service import NoteService

WWW_AUTHENTICATE = 'Basic realm="notes", Bearer'

# Backend en memoria: una instancia por proceso
_memory_notes = InMemoryNoteRepository()
_memory_users = InMemoryUserRepository()


def get_note_repository() -> NoteRepository:
    if settings.uses_mongo:
        return MongoNoteRepository(get_db())
    return _memory_notes


def get_user_repository() -> UserRepository:
    if settings.uses_mongo:
        return MongoUserRepository(get_db())
    return _memory_users


def get_note_service(repo: NoteRepository = Depends(get_note_repository)) -> NoteService:
    return NoteService(repo)


def get_current_user(
    authorization: Optional[str] = Header(default=None),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    try:
        return auth_service.resolve_user(users, authorization)
    except auth_service.AuthenticationError as e:
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": WWW_AUTHENTICATE},
        )
