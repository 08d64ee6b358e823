"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario

Responsabilidades:
    - Definir el enum tipado de categorías (Admin / Instructor / Student).
    - Definir el dataclass User utilizado por auth, casos de uso y repositorios.
    - Normalizar emails en un único lugar.

Colaboradores:
    - identity/auth_users.py: usa User y UserCategory para emitir/validar JWT.
    - identity/permissions.py: decide permisos a partir de la categoría.
    - infrastructure/repositories/*/user.py: mapea filas -> User.

Notas:
    - Los valores del enum son los strings que viajan por la API ("Admin", ...).
    - is_faculty_advisor solo tiene sentido para Instructor.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class UserCategory(str, Enum):
    """Categorías (roles) de usuario."""

    ADMIN = "Admin"
    INSTRUCTOR = "Instructor"
    STUDENT = "Student"


@dataclass(frozen=True, slots=True)
class User:
    """Cuenta de usuario del portal."""

    id: UUID
    full_name: str
    email: str
    password_hash: str
    category: UserCategory
    department: str
    is_faculty_advisor: bool = False
    created_at: datetime | None = None

    @property
    def acts_as_faculty_advisor(self) -> bool:
        return self.category == UserCategory.INSTRUCTOR and self.is_faculty_advisor


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def normalize_department(department: str | None) -> str:
    """Forma canónica para comparar departamentos (trim + casefold)."""
    return " ".join((department or "").split()).casefold()
