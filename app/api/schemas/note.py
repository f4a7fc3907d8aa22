"""
Esquemas Pydantic para `note`: entidad persistida y payloads de entrada.

- `Note` es lo que guardan los repositorios y lo que devuelve la API.
- `content` es texto opaco: sin formato ni longitud requeridos.
"""
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator


class Note(BaseModel):
    id: int
    author: str
    content: str


class NoteCreate(BaseModel):
    content: StrictStr


class NoteUpdate(BaseModel):
    content: StrictStr


class NoteMove(BaseModel):
    """Payload de `move`; acepta `newAuthor` (contrato HTTP) o `new_author`."""

    model_config = ConfigDict(populate_by_name=True)

    new_author: StrictStr = Field(alias="newAuthor")

    @field_validator("new_author")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("newAuthor no puede estar vacío")
        return v
