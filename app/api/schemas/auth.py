"""
Esquemas Pydantic para operaciones de autenticación.

- Registro y emisión de token comparten el mismo par usuario/contraseña.
"""
from typing import Literal

from pydantic import BaseModel, Field

USERNAME_PATTERN = r"^[A-Za-z0-9._-]+$"


class Credentials(BaseModel):
    username: str = Field(min_length=1, max_length=64, pattern=USERNAME_PATTERN)
    password: str = Field(min_length=4)


class RegisterPayload(Credentials):
    pass


class TokenPayload(Credentials):
    pass


# === Response models ===

class TokenOut(BaseModel):
    access_token: str
    token_type: Literal["bearer"] = "bearer"
    expires_in: int
