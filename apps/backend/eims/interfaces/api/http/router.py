"""
===============================================================================
TARJETA CRC — router.py (Router raíz / Composición)
===============================================================================

Responsabilidades:
  - Definir el APIRouter raíz que se incluye en FastAPI (app.include_router).
  - Centralizar responses RFC7807 para OpenAPI.
  - Componer routers por bounded context (users/courses/enrollments).

Colaboradores:
  - crosscutting.error_responses.OPENAPI_ERROR_RESPONSES
  - routers.* (sub-routers por feature)

Notas:
  - Se monta en la raíz (sin prefijo): las rutas son contrato del frontend.
===============================================================================
"""

from __future__ import annotations

from eims.crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from fastapi import APIRouter

from .routers.courses import router as courses_router
from .routers.enrollments import router as enrollments_router
from .routers.users import router as users_router


def build_router() -> APIRouter:
    """Construye el router raíz (sin side-effects al importar sub-routers)."""
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

    api_router.include_router(users_router)
    api_router.include_router(courses_router)
    api_router.include_router(enrollments_router)

    return api_router


router = build_router()

__all__ = ["router", "build_router"]
