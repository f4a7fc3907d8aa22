"""Schemas para endpoints de health."""
from typing import Literal
from pydantic import BaseModel


class PingOut(BaseModel):
    message: str


class HealthOut(BaseModel):
    ok: bool
    storage: Literal["mongo", "memory"]
    db_ready: bool
