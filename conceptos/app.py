"""FastAPI application for the Conceptos API."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from conceptos import __version__
from conceptos.core.config import Settings, get_settings
from conceptos.core.errors import ConceptError
from conceptos.core.logging import configure_logging
from conceptos.repositories import ConceptRepository, build_repository
from conceptos.routers import conceptos as conceptos_router
from conceptos.services.concept_service import ConceptService

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

ENDPOINTS = (
    ("GET", "/api/conceptos", "Obtener todos"),
    ("GET", "/api/conceptos/:id", "Obtener por ID"),
    ("POST", "/api/conceptos", "Crear nuevo"),
    ("PUT", "/api/conceptos/:id", "Actualizar"),
    ("DELETE", "/api/conceptos/:id", "Eliminar uno"),
    ("DELETE", "/api/conceptos", "Eliminar todos"),
    ("GET", "/api/conceptos/buscar?q", "Buscar"),
    ("GET", "/api/conceptos/stats", "Estadísticas"),
)


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Answer every OPTIONS preflight, add CORS headers and turn unexpected faults into 500s."""

    async def dispatch(self, request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("Unhandled error on %s %s", request.method, request.url.path)
                response = JSONResponse({"error": "Error interno del servidor"}, status_code=500)
        for header, value in CORS_HEADERS.items():
            response.headers[header] = value
        return response


async def concept_error_handler(request: Request, exc: ConceptError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message,
                     exc_info=exc)
        return JSONResponse({"error": "Error interno del servidor"}, status_code=exc.status_code)
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # unknown paths and known paths with an unsupported method are both "route not found"
    if exc.status_code in (404, 405):
        return JSONResponse(
            {"error": "Ruta no encontrada", "ruta": request.url.path, "metodo": request.method},
            status_code=404,
        )
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code)


@asynccontextmanager
async def lifespan(app: FastAPI):
    repository: ConceptRepository = app.state.repository
    logger.info("Iniciando servidor (backend: %s)", repository.name)
    repository.init()
    for method, path, label in ENDPOINTS:
        logger.info("  %-6s %-26s - %s", method, path, label)
    try:
        yield
    finally:
        logger.info("Cerrando servidor...")
        repository.close()


def create_app(settings: Optional[Settings] = None, repository: Optional[ConceptRepository] = None) -> FastAPI:
    """Factory compatible with uvicorn/gunicorn."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    repository = repository or build_repository(settings)

    # no trailing-slash redirects: "/api/conceptos/" is an unknown route like any other
    app = FastAPI(title="Conceptos API", version=__version__, lifespan=lifespan, redirect_slashes=False)
    app.state.settings = settings
    app.state.repository = repository
    app.state.concept_service = ConceptService(repository)

    app.add_middleware(CORSHeadersMiddleware)
    app.add_exception_handler(ConceptError, concept_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.include_router(conceptos_router.router)
    return app


app = create_app()
