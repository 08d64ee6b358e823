"""
===============================================================================
USER USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Business Goal:
    Modelos compartidos de resultado y error para los casos de uso de
    usuarios (alta, consulta, listados).

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de lanzar
      excepciones; la capa HTTP los traduce a status codes.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

from ....identity.users import User


class UserErrorCode(str, Enum):
    """
    Códigos:
      - VALIDATION_ERROR: inputs inválidos o incompletos.
      - NOT_FOUND: usuario inexistente.
      - CONFLICT: email ya registrado.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class UserError:
    code: UserErrorCode
    message: str
    resource_id: str | None = None


@dataclass
class UserResult:
    """Resultado con un único usuario (user presente solo en éxito)."""

    user: User | None = None
    error: UserError | None = None


@dataclass
class UserListResult:
    users: List[User]
    error: UserError | None = None
