"""Health (sin auth), salidas tipadas y estables."""
from fastapi import APIRouter, status

from app.core.config import settings
from app.infrastructure.db.mongo import db_ready
from app.api.schemas.health import PingOut, HealthOut


router = APIRouter(tags=["Health"])  # no prefix to keep paths stable


@router.get("/ping", response_model=PingOut, summary="Ping básico")
def ping() -> PingOut:
    return PingOut(message="pong")


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthOut, summary="Salud básica")
def health() -> HealthOut:
    ready = db_ready() if settings.uses_mongo else True
    return HealthOut(ok=True, storage=settings.storage_backend, db_ready=ready)
