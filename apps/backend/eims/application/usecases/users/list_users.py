"""
===============================================================================
USE CASE: List Users
===============================================================================

Business Goal:
    Listado de cuentas para el panel de Admin y para armar el pick-list de
    Instructores al crear cursos (filtro opcional por categoría).

Collaborators:
    - UserRepository.list_users(category=...)
===============================================================================
"""

from __future__ import annotations

from ....domain.repositories import UserRepository
from ....identity.users import UserCategory
from .user_results import UserListResult


class ListUsersUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, *, category: UserCategory | None = None) -> UserListResult:
        return UserListResult(users=self._users.list_users(category=category))
