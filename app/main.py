"""Entrada principal de la app FastAPI (configura middlewares, excepciones y routers)."""
from fastapi import FastAPI
from pymongo.errors import PyMongoError
from app.core.config import settings
from app.infrastructure.db.mongo import init_mongo, close_mongo, db_ready
from app.infrastructure.db.bootstrap import ensure_collections
from app.infrastructure.db.seed import seed_demo_data
from app.api.deps import get_note_repository, get_user_repository
from app.api.router import api_router
from app.core.logging import setup_logging
from app.core.middleware import add_middlewares
from app.core.exceptions import register_exception_handlers
import logging

_log = logging.getLogger("notes.startup")

setup_logging(settings.log_level, settings.log_file)
app = FastAPI(title=settings.app_name)

add_middlewares(app)
register_exception_handlers(app)


# Startup
@app.on_event("startup")
def on_startup():
    _log.info("Arrancando %s (storage=%s)", settings.app_name, settings.storage_backend)
    if settings.uses_mongo:
        init_mongo()
        if not db_ready():
            _log.warning("Mongo no listo; omitiendo ensure_collections() y seed")
            return
        # Garantiza colecciones/índices/validadores mínimos
        try:
            ensure_collections()
        except PyMongoError as e:
            # No impedir el arranque si fallan validadores/índices
            _log.warning("ensure_collections() falló: %s", e)
    if settings.seed_demo_data:
        seed_demo_data(get_user_repository(), get_note_repository(), password=settings.demo_password)


@app.on_event("shutdown")
def on_shutdown():
    close_mongo()


# Monta routers bajo el prefijo configurado
app.include_router(api_router, prefix=settings.api_prefix_normalized)
