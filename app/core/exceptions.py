"""
Errores de dominio y handlers globales para respuestas de error consistentes.

- `NoteNotFoundError` -> 404, `NoteForbiddenError` -> 403.
- Payload inválido (RequestValidationError) -> 400.
- Cualquier otra excepción -> 500 y se registra con traceback.
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class NotesError(Exception):
    """Base de los errores esperados del dominio de notas."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NoteNotFoundError(NotesError):
    status_code = 404

    def __init__(self, note_id: int) -> None:
        super().__init__(f"Note with noteId {note_id} not found")
        self.note_id = note_id


class NoteForbiddenError(NotesError):
    status_code = 403

    def __init__(self, note_id: int, username: str) -> None:
        super().__init__("You can't access this note!")
        self.note_id = note_id
        self.username = username


class UserAlreadyExistsError(NotesError):
    status_code = 400

    def __init__(self, username: str) -> None:
        super().__init__(f"User {username} already exists")
        self.username = username


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def _body(request: Request, message: str, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"message": message, **extra}
    rid = _req_id(request)
    if rid:
        body["request_id"] = rid
    return body


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("notes.errors")

    @app.exception_handler(NotesError)
    async def _notes_exc_handler(request: Request, exc: NotesError):
        return JSONResponse(status_code=exc.status_code, content=_body(request, exc.message))

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_body(request, exc.detail or "HTTP error"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        errors = jsonable_encoder(exc.errors())
        return JSONResponse(status_code=400, content=_body(request, "Validation error", errors=errors))

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        log.exception("Unhandled error request_id=%s", _req_id(request))
        return JSONResponse(status_code=500, content=_body(request, "Internal server error"))
