import base64
import os

# Antes de importar la app: backend en memoria y sin log a archivo
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["LOG_FILE"] = ""
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_note_repository, get_user_repository
from app.main import app
from app.repositories.note_repo_memory import InMemoryNoteRepository
from app.repositories.user_repo_memory import InMemoryUserRepository
from app.services.auth_service import hash_password
from app.services.note_service import NoteService

PASSWORD = "secret"
USERS = ("alice", "bob", "carol")


def basic(username: str, password: str = PASSWORD) -> dict:
    raw = base64.b64encode(f"{username}:{password}".encode()).decode()
    return {"Authorization": f"Basic {raw}"}


@pytest.fixture(scope="session")
def password_hash() -> str:
    return hash_password(PASSWORD)


@pytest.fixture
def note_repo() -> InMemoryNoteRepository:
    return InMemoryNoteRepository()


@pytest.fixture
def user_repo(password_hash) -> InMemoryUserRepository:
    repo = InMemoryUserRepository()
    for username in USERS:
        repo.insert(username, password_hash)
    return repo


@pytest.fixture
def service(note_repo) -> NoteService:
    return NoteService(note_repo)


@pytest.fixture
def client(note_repo, user_repo):
    app.dependency_overrides[get_note_repository] = lambda: note_repo
    app.dependency_overrides[get_user_repository] = lambda: user_repo
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth():
    """Cabeceras `Authorization: Basic` para un usuario de prueba."""
    return basic
