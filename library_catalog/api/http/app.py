"""FastAPI application setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from library_catalog.api.http.app_data import ApplicationDependencies
from library_catalog.api.http.routers import authors, books, categories, seed, users
from library_catalog.api.utils.app_startup import configure_logging
from library_catalog.core.services import (
    DbManageService,
    DbSessionService,
    JwtGeneratorService,
    JwtVerificationService,
)
from library_catalog.runtime.context import get_config

configure_logging()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security", "max-age=31536000; includeSubDomains"
            )
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    startup()
    try:
        yield
    finally:
        shutdown()


_interactive_docs = get_config().app.environment != "production"

app = FastAPI(
    title="Library Catalog",
    lifespan=lifespan,
    docs_url="/docs" if _interactive_docs else None,
    redoc_url="/redoc" if _interactive_docs else None,
)

cors = get_config().app.cors
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every catalog request and answer 500 for errors no router mapped."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.perf_counter()

    with logger.contextualize(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        client_ip=request.client.host if request.client else "unknown",
    ):
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.bind(
                status_code=500,
                duration_ms=round((time.perf_counter() - start) * 1000, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )

        logger.bind(
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 1),
        ).info("request.end")
        response.headers.setdefault("X-Request-ID", request_id)
        return response


app.include_router(categories.router)
app.include_router(authors.router)
app.include_router(users.router)
app.include_router(books.router)

# Answers 404 unless seeding is enabled for the environment
app.include_router(seed.router)


def startup() -> None:
    config = get_config()
    logger.info("Starting library catalog in {} environment", config.app.environment)

    database_service = DbSessionService(config)
    if config.database.create_tables:
        DbManageService(database_service.engine).create_all()

    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
        jwt_generation_service=JwtGeneratorService(),
        jwt_verify_service=JwtVerificationService(),
    )


def shutdown() -> None:
    logger.info("Shutting down library catalog")
    app_dependencies: ApplicationDependencies = app.state.app_dependencies
    app_dependencies.database_service.engine.dispose()


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@app.get("/ready")
def readiness():
    """Ready once the catalog database answers."""
    app_dependencies: ApplicationDependencies = app.state.app_dependencies
    if not app_dependencies.database_service.health_check():
        return JSONResponse(status_code=503, content={"status": "unavailable"})
    return {"status": "ready"}
