"""
Name: FastAPI Application Entry Point

Responsibilities:
  - Build the FastAPI app (create_app) from Settings
  - Configure middleware (CORS, request context)
  - Mount auth + portal routers at the root (frontend contract, no prefix)
  - Open / close the DB pool and run the dev admin seed on startup
  - Expose /healthz

Collaborators:
  - crosscutting.config.get_settings
  - crosscutting.middleware.RequestContextMiddleware
  - interfaces.api.http.router: users / courses / enrollments endpoints
  - auth_routes: OTP sign-up / login and caller identity
  - application.dev_seed_admin.ensure_dev_admin

Constraints:
  - Test environments (APP_ENV=test|testing|ci) run on in-memory stores and
    never open the DB pool
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ..application.dev_seed_admin import ensure_dev_admin
from ..container import get_user_repository
from ..crosscutting.config import Settings, get_settings
from ..crosscutting.logger import configure_logging, logger
from ..crosscutting.middleware import REQUEST_ID_HEADER, RequestContextMiddleware
from ..identity.passwords import hash_password
from ..infrastructure.db.pool import close_pool, get_pool, init_pool
from ..interfaces.api.http.router import router
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers

OPENAPI_TAGS = [
    {"name": "auth", "description": "OTP sign-up / login (JWT)"},
    {"name": "users", "description": "User administration (Admin)"},
    {"name": "courses", "description": "Course catalogue and rosters"},
    {"name": "enrollments", "description": "Enrollment requests and reviews"},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings)

    use_pool = not settings.uses_in_memory_store()
    if use_pool:
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            statement_timeout_ms=settings.db_statement_timeout_ms,
        )

    try:
        ensure_dev_admin(
            settings,
            user_repo=get_user_repository(),
            password_hasher=hash_password,
            env=os.environ,
        )
        logger.info(
            "EIMS API iniciada",
            extra={"app_env": settings.app_env, "in_memory_store": not use_pool},
        )
        yield
    finally:
        if use_pool:
            close_pool()
        logger.info("EIMS API detenida")


def _store_status(settings: Settings) -> str:
    if settings.uses_in_memory_store():
        return "in-memory"
    try:
        with get_pool().connection() as conn:
            conn.execute("SELECT 1")
    except Exception as exc:
        logger.warning("Health check: DB no disponible", extra={"error": str(exc)})
        return "disconnected"
    return "connected"


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    application = FastAPI(
        title="EIMS Portal API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    # R: El último middleware agregado es el más externo (CORS antes que contexto).
    application.add_middleware(RequestContextMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )

    application.include_router(auth_router)
    application.include_router(router)
    register_exception_handlers(application)

    @application.get("/healthz", tags=["health"])
    def healthz(request: Request):
        db_status = _store_status(get_settings())
        return {
            "ok": db_status != "disconnected",
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    return application


app = create_app()
