# apps/backend/eims/crosscutting/error_responses.py
"""
===============================================================================
TARJETA CRC — crosscutting/error_responses.py (Problem Details)
===============================================================================

Responsabilidades:
  - Catálogo de códigos estables (ErrorCode) y su status HTTP.
  - Cuerpo RFC 7807 con el contrato del portal: `error: true` + `message`.
  - Factories para los errores 4xx que usan routers e identity.

Colaboradores:
  - api/exception_handlers.py: registra app_exception_handler y mapea
    errores internos (DatabaseError, OtpDeliveryError).
  - interfaces/api/http/error_mapping.py: traduce Results de casos de uso.
  - crosscutting/middleware.py: deja request_id en request.state.
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from http import HTTPStatus
from typing import Any

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    DATABASE_ERROR = "DATABASE_ERROR"

    @property
    def status(self) -> HTTPStatus:
        return _STATUS_BY_CODE[self]


_STATUS_BY_CODE: dict[ErrorCode, HTTPStatus] = {
    ErrorCode.VALIDATION_ERROR: HTTPStatus.UNPROCESSABLE_ENTITY,
    ErrorCode.UNAUTHORIZED: HTTPStatus.UNAUTHORIZED,
    ErrorCode.FORBIDDEN: HTTPStatus.FORBIDDEN,
    ErrorCode.NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorCode.CONFLICT: HTTPStatus.CONFLICT,
    ErrorCode.INTERNAL_ERROR: HTTPStatus.INTERNAL_SERVER_ERROR,
    ErrorCode.SERVICE_UNAVAILABLE: HTTPStatus.SERVICE_UNAVAILABLE,
    ErrorCode.DATABASE_ERROR: HTTPStatus.SERVICE_UNAVAILABLE,
}


class ErrorDetail(BaseModel):
    """
    Problem Details (RFC 7807) más los campos que el frontend lee:
    `error` (siempre true) y `message` (copia de `detail`).
    """

    type: str = "about:blank"
    title: str
    status: int
    detail: str
    code: ErrorCode
    error: bool = True
    message: str
    instance: str | None = None
    errors: list[dict[str, Any]] | None = None


def _error_doc(status: HTTPStatus) -> dict[str, Any]:
    return {
        "description": status.phrase,
        "model": ErrorDetail,
        "content": {
            PROBLEM_JSON_MEDIA_TYPE: {
                "schema": {"$ref": "#/components/schemas/ErrorDetail"}
            }
        },
    }


OPENAPI_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    int(status): _error_doc(status)
    for status in (
        HTTPStatus.UNAUTHORIZED,
        HTTPStatus.FORBIDDEN,
        HTTPStatus.NOT_FOUND,
        HTTPStatus.CONFLICT,
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )
}


class AppHTTPException(HTTPException):
    """HTTPException con ErrorCode estable; el status sale del código."""

    def __init__(
        self,
        code: ErrorCode,
        detail: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        status_code: int | None = None,
    ):
        super().__init__(status_code=status_code or int(code.status), detail=detail)
        self.code = code
        self.errors = errors


def validation_error(
    detail: str, errors: list[dict[str, Any]] | None = None
) -> AppHTTPException:
    return AppHTTPException(ErrorCode.VALIDATION_ERROR, detail, errors=errors)


def not_found(resource: str, identifier: str) -> AppHTTPException:
    return AppHTTPException(
        ErrorCode.NOT_FOUND, f"{resource} '{identifier}' no encontrado"
    )


def conflict(detail: str) -> AppHTTPException:
    return AppHTTPException(ErrorCode.CONFLICT, detail)


def unauthorized(detail: str = "Autenticación requerida") -> AppHTTPException:
    return AppHTTPException(ErrorCode.UNAUTHORIZED, detail)


def forbidden(detail: str = "Acceso denegado") -> AppHTTPException:
    return AppHTTPException(ErrorCode.FORBIDDEN, detail)


def problem_response(
    request: Request,
    *,
    code: ErrorCode,
    detail: str,
    status_code: int | None = None,
    errors: list[dict[str, Any]] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    status = status_code or int(code.status)
    items = list(errors or [])

    # R: request_id viaja en errors[] para correlacionar con los logs.
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        items.append({"request_id": request_id})

    body = ErrorDetail(
        type=f"about:blank/{code.value.lower()}",
        title=HTTPStatus(status).phrase,
        status=status,
        detail=detail,
        code=code,
        message=detail,
        instance=request.url.path,
        errors=items or None,
    )
    return JSONResponse(
        status_code=status,
        content=body.model_dump(mode="json", exclude_none=True),
        headers=headers,
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    return problem_response(
        request,
        code=exc.code,
        detail=str(exc.detail),
        status_code=exc.status_code,
        errors=exc.errors,
        headers=exc.headers,
    )
