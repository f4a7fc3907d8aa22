"""
Middlewares de aplicación: contexto por petición (request id + access log) y CORS.
"""
import logging
import time
import uuid
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.config import settings

REQUEST_ID_HEADERS = ("X-Request-Id", "X-Correlation-Id")


def resolve_request_id(request: Request) -> str:
    """Reutiliza el id del cliente (X-Request-Id o X-Correlation-Id) o genera uno."""
    for header in REQUEST_ID_HEADERS:
        value = (request.headers.get(header) or "").strip()
        if value:
            return value[:128]
    return uuid.uuid4().hex


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Asigna `request.state.request_id` y registra una línea por petición."""

    # Sondas de salud y documentación: sin línea de acceso
    SKIP_PATHS = ("/ping", "/health", "/docs", "/redoc", "/openapi.json")

    def __init__(self, app: FastAPI) -> None:
        super().__init__(app)
        self.log = logging.getLogger("notes.request")

    async def dispatch(self, request: Request, call_next) -> Response:
        rid = resolve_request_id(request)
        request.state.request_id = rid
        path = request.url.path
        if path.endswith(self.SKIP_PATHS):
            response = await call_next(request)
            response.headers["X-Request-Id"] = rid
            return response

        start = time.perf_counter()
        client_ip = request.client.host if request.client else ""
        try:
            response = await call_next(request)
        except Exception as e:
            self.log.error(
                "method=%s path=%s error=%s latency_ms=%s client=%s request_id=%s",
                request.method, path, type(e).__name__, _elapsed_ms(start), client_ip, rid,
            )
            raise
        self.log.info(
            "method=%s path=%s status=%s latency_ms=%s client=%s request_id=%s",
            request.method, path, response.status_code, _elapsed_ms(start), client_ip, rid,
        )
        response.headers["X-Request-Id"] = rid
        return response


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def add_middlewares(app: FastAPI) -> None:
    cors_kwargs = dict(
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
        expose_headers=["Location", "X-Request-Id"],
    )
    if settings.cors_allow_any:
        # Orígenes dinámicos: sin credentials para cumplir CORS
        cors_kwargs.update(allow_origins=[], allow_origin_regex=".*", allow_credentials=False)
    app.add_middleware(CORSMiddleware, **cors_kwargs)
    app.add_middleware(RequestContextMiddleware)
