"""
===============================================================================
AUTH USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Business Goal:
    Resultados tipados de los flujos OTP de sign-up y login.

Why (Context / Intención):
    - UNAUTHORIZED no distingue "email desconocido" de "password incorrecto".
    - VALIDATION_ERROR cubre códigos OTP faltantes, expirados, agotados o
      incorrectos con un único mensaje.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ....identity.users import User

INVALID_OTP_MESSAGE = "Invalid or expired OTP"


class AuthErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class AuthError:
    code: AuthErrorCode
    message: str


@dataclass
class OtpRequestResult:
    """Código emitido para `email` (el código en sí nunca sale del use case)."""

    email: str | None = None
    error: AuthError | None = None


@dataclass
class AuthUserResult:
    user: User | None = None
    error: AuthError | None = None
