"""
USE CASE: Get User

Devuelve un usuario por id o NOT_FOUND.
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import UserRepository
from .user_results import UserError, UserErrorCode, UserResult


class GetUserUseCase:
    def __init__(self, repository: UserRepository) -> None:
        self._users = repository

    def execute(self, user_id: UUID) -> UserResult:
        user = self._users.get_user_by_id(user_id)
        if user is None:
            return UserResult(
                error=UserError(
                    code=UserErrorCode.NOT_FOUND,
                    message="User not found.",
                    resource_id=str(user_id),
                )
            )
        return UserResult(user=user)
