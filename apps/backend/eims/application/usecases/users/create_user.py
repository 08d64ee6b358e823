"""
===============================================================================
USE CASE: Create User
===============================================================================

Business Goal:
    Registrar una cuenta nueva (alta por Admin o sign-up verificado por OTP)
    garantizando:
      - email único (normalizado trim + lower)
      - campos obligatorios presentes
      - flag de Faculty Advisor solo para Instructores

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateUserUseCase

Responsibilities:
    - Normalizar y validar el input.
    - Hashear el password (puerto inyectado).
    - Persistir y traducir la colisión de email a CONFLICT.

Collaborators:
    - UserRepository.get_user_by_email / create_user
    - password_hasher: Callable[[str], str]

Error Mapping:
    - VALIDATION_ERROR: campos vacíos, email sin "@", password corto
    - CONFLICT: email ya registrado
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable
from uuid import uuid4

from ....crosscutting.logger import logger
from ....domain.repositories import UserRepository
from ....identity.users import User, UserCategory, normalize_email
from .user_results import UserError, UserErrorCode, UserResult

MIN_PASSWORD_LENGTH = 8


@dataclass(frozen=True)
class CreateUserInput:
    full_name: str
    email: str
    password: str
    category: UserCategory
    department: str
    is_faculty_advisor: bool = False


class CreateUserUseCase:
    def __init__(
        self,
        repository: UserRepository,
        password_hasher: Callable[[str], str],
    ) -> None:
        self._users = repository
        self._hash_password = password_hasher

    def execute(self, input_data: CreateUserInput) -> UserResult:
        # ---------------------------------------------------------------------
        # 1) Normalizar y validar campos.
        # ---------------------------------------------------------------------
        full_name = (input_data.full_name or "").strip()
        email = normalize_email(input_data.email)
        department = (input_data.department or "").strip()
        password = input_data.password or ""

        if not full_name:
            return self._validation_error("Full name is required.")
        if not email or "@" not in email:
            return self._validation_error("A valid email is required.")
        if not department:
            return self._validation_error("Department is required.")
        if len(password) < MIN_PASSWORD_LENGTH:
            return self._validation_error(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
            )

        try:
            category = UserCategory(input_data.category)
        except ValueError:
            return self._validation_error("Unknown user category.")

        # ---------------------------------------------------------------------
        # 2) Unicidad de email (chequeo temprano; el store es la autoridad).
        # ---------------------------------------------------------------------
        if self._users.get_user_by_email(email) is not None:
            return self._conflict("Email is already registered.")

        # ---------------------------------------------------------------------
        # 3) Construir entidad y persistirla.
        # ---------------------------------------------------------------------
        user = User(
            id=uuid4(),
            full_name=full_name,
            email=email,
            password_hash=self._hash_password(password),
            category=category,
            department=department,
            is_faculty_advisor=(
                category == UserCategory.INSTRUCTOR and input_data.is_faculty_advisor
            ),
        )

        if not self._users.create_user(user):
            return self._conflict("Email is already registered.")

        logger.info(
            "Usuario creado",
            extra={"created_user_id": str(user.id), "category": category.value},
        )
        return UserResult(user=self._users.get_user_by_id(user.id) or user)

    @staticmethod
    def _validation_error(message: str) -> UserResult:
        return UserResult(
            error=UserError(code=UserErrorCode.VALIDATION_ERROR, message=message)
        )

    @staticmethod
    def _conflict(message: str) -> UserResult:
        return UserResult(error=UserError(code=UserErrorCode.CONFLICT, message=message))
