"""
Esquemas Pydantic para la colección `user`.

Reglas clave:
- `username` se guarda tal cual (sensible a mayúsculas); es el `author` de las notas.
- Solo se persiste el hash argon2 de la contraseña.
"""
from pydantic import BaseModel


class User(BaseModel):
    """Identidad resuelta a partir de la credencial de la petición."""

    username: str


class UserOut(BaseModel):
    username: str
