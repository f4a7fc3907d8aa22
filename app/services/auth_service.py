"""
Lógica de autenticación: registro, verificación de contraseña y resolución
de la identidad a partir de la cabecera `Authorization`.

Esquemas soportados:
- `Basic base64(username:password)` contra el hash argon2 guardado.
- `Bearer <jwt>` emitido por `/auth/token`.
"""
import base64
import logging
from functools import lru_cache
from typing import Optional

import jwt as pyjwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.low_level import Type

from app.api.schemas.user import User
from app.core.config import settings
from app.repositories.user_repo import UserRepository
from app.services.token_service import create_access_token, verify_access_token

_log = logging.getLogger("notes.auth")

ph = PasswordHasher(time_cost=2, memory_cost=51200, parallelism=2, hash_len=32, salt_len=16, type=Type.ID)


class AuthenticationError(Exception):
    """Credencial ausente o inválida (se traduce a 401 en la capa API)."""


def hash_password(password: str) -> str:
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def register_user(repo: UserRepository, *, username: str, password: str) -> User:
    repo.insert(username, hash_password(password))
    _log.info("User registered username=%s", username)
    return User(username=username)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return ph.hash("notes-dummy-password")


def authenticate(repo: UserRepository, *, username: str, password: str) -> User:
    u = repo.find_by_username(username)
    # Usuario inexistente: se verifica igual contra un hash fijo (mismo coste)
    password_hash = u.get("password_hash", "") if u else _dummy_hash()
    if not verify_password(password, password_hash) or not u:
        _log.warning("Failed login for username=%s", username)
        raise AuthenticationError("Credenciales inválidas")
    return User(username=u["username"])


def issue_token(repo: UserRepository, *, username: str, password: str) -> str:
    user = authenticate(repo, username=username, password=password)
    return create_access_token(username=user.username)


def _parse_basic(value: str) -> tuple[str, str]:
    try:
        decoded = base64.b64decode(value, validate=True).decode("utf-8")
    except ValueError as e:  # binascii.Error, UnicodeDecodeError, texto no ASCII
        raise AuthenticationError("Credencial Basic mal formada") from e
    username, sep, password = decoded.partition(":")
    if not sep or not username:
        raise AuthenticationError("Credencial Basic mal formada")
    return username, password


def resolve_user(repo: UserRepository, authorization: Optional[str]) -> User:
    """Resuelve el usuario actual a partir de la cabecera `Authorization`."""
    if not authorization:
        raise AuthenticationError("Falta credencial")
    scheme, _, value = authorization.strip().partition(" ")
    scheme = scheme.lower()
    value = value.strip()
    if scheme == "basic":
        username, password = _parse_basic(value)
        return authenticate(repo, username=username, password=password)
    if scheme == "bearer":
        try:
            payload = verify_access_token(value)
        except pyjwt.InvalidTokenError as e:
            raise AuthenticationError("Token inválido") from e
        username = payload["sub"]
        if not repo.find_by_username(username):
            raise AuthenticationError("Usuario no encontrado")
        return User(username=username)
    raise AuthenticationError("Esquema de autenticación no soportado")


def token_ttl_seconds() -> int:
    return settings.access_token_expire_minutes * 60
