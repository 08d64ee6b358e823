"""
===============================================================================
TARJETA CRC — eims/api/exception_handlers.py (Manejo Centralizado de Excepciones)
===============================================================================

Responsabilidades:
  - Registrar los handlers de la app (AppHTTPException, validación, errores
    tipados de infraestructura, fallback genérico).
  - Loguear cada error interno con su error_id.
  - Responder mensajes genéricos en 5xx (sin filtrar internos).

Colaboradores:
  - crosscutting.error_responses: AppHTTPException, ErrorCode, problem_response
  - crosscutting.exceptions: EIMSError y derivadas (Database/OtpDelivery)
  - crosscutting.config.get_settings (detalle del 500 fuera de producción)
===============================================================================
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    problem_response,
)
from ..crosscutting.exceptions import DatabaseError, EIMSError, OtpDeliveryError
from ..crosscutting.logger import logger

_INTERNAL_DETAIL = "Error interno."

# Orden relevante: la subclase más específica primero.
_SERVICE_ERRORS: tuple[tuple[type[EIMSError], ErrorCode, str], ...] = (
    (
        DatabaseError,
        ErrorCode.DATABASE_ERROR,
        "Servicio no disponible temporalmente. Reintentá más tarde.",
    ),
    (
        OtpDeliveryError,
        ErrorCode.SERVICE_UNAVAILABLE,
        "No se pudo enviar el código OTP. Reintentá más tarde.",
    ),
    (EIMSError, ErrorCode.INTERNAL_ERROR, _INTERNAL_DETAIL),
)


def _classify(exc: EIMSError) -> tuple[ErrorCode, str]:
    for error_type, code, detail in _SERVICE_ERRORS:
        if isinstance(exc, error_type):
            return code, detail
    return ErrorCode.INTERNAL_ERROR, _INTERNAL_DETAIL


async def service_error_handler(request: Request, exc: EIMSError) -> JSONResponse:
    code, detail = _classify(exc)
    logger.error(
        "Error de servicio",
        extra={
            "code": code.value,
            "error_id": exc.error_id,
            "error_message": exc.message,
        },
    )
    return problem_response(
        request, code=code, detail=detail, errors=[{"error_id": exc.error_id}]
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Pydantic -> 422 con la lista de campos inválidos."""
    fields = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "msg": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    return problem_response(
        request,
        code=ErrorCode.VALIDATION_ERROR,
        detail="Request inválido.",
        errors=fields,
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Excepción no controlada", extra={"error": str(exc)})
    detail = _INTERNAL_DETAIL if get_settings().is_production() else str(exc)
    return problem_response(request, code=ErrorCode.INTERNAL_ERROR, detail=detail)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    for error_type, _, _ in _SERVICE_ERRORS:
        app.add_exception_handler(error_type, service_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
