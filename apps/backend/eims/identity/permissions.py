"""
===============================================================================
TARJETA CRC — identity/permissions.py
===============================================================================

Módulo:
    Permisos por acción (capability checks sobre categorías tipadas)

Responsabilidades:
    - Definir el catálogo de acciones del portal (Permission).
    - Una función de decisión por acción: User -> bool.
    - Exponer require_permission() como dependencia FastAPI uniforme para
      todos los endpoints.

Colaboradores:
    - identity.users: User, UserCategory.
    - identity.auth_users: require_user (resuelve al usuario del token).
    - domain.enrollment_policy: decisiones a nivel recurso (dueño, departamento).

Notas de diseño:
    - Acá se decide "¿esta categoría puede intentar la acción?".
      Las reglas que dependen del recurso viven en domain.enrollment_policy.
===============================================================================
"""

from __future__ import annotations

from enum import Enum
from typing import Callable

from fastapi import Depends

from ..crosscutting.error_responses import forbidden
from ..crosscutting.logger import logger
from .auth_users import require_user
from .users import User, UserCategory


class Permission(str, Enum):
    """Acciones disponibles en el portal."""

    # Usuarios
    USERS_LIST = "users:list"
    USERS_CREATE = "users:create"
    USERS_VIEW = "users:view"
    INSTRUCTORS_LIST = "instructors:list"

    # Cursos
    COURSES_CREATE = "courses:create"
    COURSES_BROWSE = "courses:browse"
    COURSES_LIST_OWNED = "courses:list_owned"
    COURSE_ROSTER_VIEW = "courses:roster"

    # Inscripciones
    ENROLLMENT_CREATE = "enrollments:create"
    ENROLLMENTS_LIST_OWN = "enrollments:list_own"
    ENROLLMENTS_REVIEW_INSTRUCTOR = "enrollments:review_instructor"
    ENROLLMENTS_REVIEW_FACULTY_ADVISOR = "enrollments:review_faculty_advisor"


def _is_admin(user: User) -> bool:
    return user.category == UserCategory.ADMIN


def _is_instructor(user: User) -> bool:
    return user.category == UserCategory.INSTRUCTOR


def _is_student(user: User) -> bool:
    return user.category == UserCategory.STUDENT


def _is_faculty_advisor(user: User) -> bool:
    return user.acts_as_faculty_advisor


def _any_user(user: User) -> bool:
    return True


_DECISIONS: dict[Permission, Callable[[User], bool]] = {
    Permission.USERS_LIST: _is_admin,
    Permission.USERS_CREATE: _is_admin,
    Permission.USERS_VIEW: _any_user,
    Permission.INSTRUCTORS_LIST: _is_admin,
    Permission.COURSES_CREATE: _is_admin,
    Permission.COURSES_BROWSE: _is_student,
    Permission.COURSES_LIST_OWNED: _is_instructor,
    Permission.COURSE_ROSTER_VIEW: _is_instructor,
    Permission.ENROLLMENT_CREATE: _is_student,
    Permission.ENROLLMENTS_LIST_OWN: _is_student,
    Permission.ENROLLMENTS_REVIEW_INSTRUCTOR: _is_instructor,
    Permission.ENROLLMENTS_REVIEW_FACULTY_ADVISOR: _is_faculty_advisor,
}


def is_allowed(user: User | None, permission: Permission) -> bool:
    """Decide si el usuario puede intentar la acción."""
    if user is None:
        return False
    decision = _DECISIONS.get(permission)
    return bool(decision and decision(user))


def require_permission(permission: Permission) -> Callable:
    """Dependency FastAPI: usuario autenticado + permiso para la acción."""

    def dependency(user: User = Depends(require_user())) -> User:
        if not is_allowed(user, permission):
            logger.warning(
                "Permiso denegado",
                extra={
                    "permission": permission.value,
                    "category": user.category.value,
                },
            )
            raise forbidden("Rol insuficiente.")
        return user

    return dependency
