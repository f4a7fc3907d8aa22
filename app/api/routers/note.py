"""
Endpoints para `notes`: notas adhesivas por usuario.

Todas las rutas exigen credencial (401 si falta o es inválida). `GET /{id}` y
`PATCH /{id}/move` exigen además ser el autor (403); `PATCH /{id}` y
`DELETE /{id}` no comprueban autoría.
"""
from typing import List

from fastapi import APIRouter, Depends, Query, Request, Response, status

from app.api.deps import get_current_user, get_note_service
from app.api.schemas.note import Note, NoteCreate, NoteMove, NoteUpdate
from app.api.schemas.user import User
from app.services.note_service import NoteService


router = APIRouter(prefix="/notes", tags=["Notes"])

_401 = {401: {"description": "Falta credencial o es inválida"}}
_403 = {403: {"description": "La nota pertenece a otro autor"}}
_404 = {404: {"description": "No existe nota con ese id"}}


@router.get(
    "",
    response_model=List[Note],
    summary="Listar notas",
    description="Notas del usuario actual cuyo contenido contiene `containing`, ordenadas por id.",
    responses={**_401},
)
def list_notes(
    containing: str = Query(default="", description="Subcadena a buscar (sensible a mayúsculas)"),
    user: User = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
) -> List[Note]:
    return service.list_notes(user.username, containing)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Note,
    summary="Crear nota",
    responses={**_401},
)
def create_note(
    payload: NoteCreate,
    request: Request,
    response: Response,
    user: User = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
) -> Note:
    note = service.create_note(user.username, payload.content)
    response.headers["Location"] = str(request.url_for("get_note_by_id", note_id=note.id))
    return note


@router.get(
    "/{note_id}",
    name="get_note_by_id",
    response_model=Note,
    summary="Obtener nota",
    responses={**_401, **_403, **_404},
)
def get_note(
    note_id: int,
    user: User = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
) -> Note:
    return service.get_note(user.username, note_id)


@router.patch(
    "/{note_id}",
    response_model=Note,
    summary="Actualizar contenido",
    description="Reemplaza `content`. No comprueba autoría: basta con estar autenticado.",
    responses={**_401, **_404},
)
def update_note(
    note_id: int,
    payload: NoteUpdate,
    _user: User = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
) -> Note:
    return service.update_note(note_id, payload.content)


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    summary="Borrar nota",
    description="Borrado definitivo. No comprueba autoría: basta con estar autenticado.",
    responses={**_401, **_404},
)
def delete_note(
    note_id: int,
    _user: User = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
) -> Response:
    service.delete_note(note_id)
    return Response(status_code=status.HTTP_200_OK)


@router.patch(
    "/{note_id}/move",
    response_model=Note,
    summary="Mover nota a otro usuario",
    description="Transfiere la autoría a `newAuthor`. Solo el autor actual puede moverla.",
    responses={**_401, **_403, **_404},
)
def move_note(
    note_id: int,
    payload: NoteMove,
    user: User = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
) -> Note:
    return service.move_note(user.username, note_id, payload.new_author)
