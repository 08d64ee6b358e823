"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCase Error -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir códigos de error de casos de uso a HTTP Exceptions RFC7807.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener el dominio libre de HTTP.

Reglas:
  - Los use cases devuelven errores tipados (code + message [+ resource_id]).
  - La API traduce a RFC7807 (crosscutting.error_responses).

Colaboradores:
  - application.usecases.* (UserErrorCode, CourseErrorCode,
    EnrollmentErrorCode, AuthErrorCode)
  - crosscutting.error_responses (validation_error, forbidden, etc.)
===============================================================================
"""

from __future__ import annotations

from eims.application.usecases.auth import AuthError, AuthErrorCode
from eims.application.usecases.courses import CourseError, CourseErrorCode
from eims.application.usecases.enrollment import EnrollmentError, EnrollmentErrorCode
from eims.application.usecases.users import UserError, UserErrorCode
from eims.crosscutting.error_responses import (
    conflict,
    forbidden,
    not_found,
    unauthorized,
    validation_error,
)


def raise_user_error(error: UserError) -> None:
    if error.code == UserErrorCode.NOT_FOUND:
        raise not_found("User", error.resource_id or "-")
    if error.code == UserErrorCode.CONFLICT:
        raise conflict(error.message)
    raise validation_error(error.message)


def raise_course_error(error: CourseError) -> None:
    if error.code == CourseErrorCode.NOT_FOUND:
        raise not_found("Course", error.resource_id or "-")
    if error.code == CourseErrorCode.FORBIDDEN:
        raise forbidden(error.message)
    if error.code == CourseErrorCode.CONFLICT:
        raise conflict(error.message)
    raise validation_error(error.message)


def raise_enrollment_error(error: EnrollmentError) -> None:
    """
    Traduce EnrollmentErrorCode -> HTTP.

    Nota:
      - NOT_FOUND usa error.resource (Course / Student / Enrollment).
    """
    if error.code == EnrollmentErrorCode.FORBIDDEN:
        raise forbidden(error.message)
    if error.code == EnrollmentErrorCode.CONFLICT:
        raise conflict(error.message)
    if error.code == EnrollmentErrorCode.NOT_FOUND:
        raise not_found(error.resource or "Enrollment", error.resource_id or "-")
    raise validation_error(error.message)


def raise_auth_error(error: AuthError) -> None:
    if error.code == AuthErrorCode.UNAUTHORIZED:
        raise unauthorized(error.message)
    if error.code == AuthErrorCode.CONFLICT:
        raise conflict(error.message)
    raise validation_error(error.message)
