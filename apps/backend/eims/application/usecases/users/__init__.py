"""
User use cases (package exports).
"""

from .create_user import MIN_PASSWORD_LENGTH, CreateUserInput, CreateUserUseCase
from .get_user import GetUserUseCase
from .list_users import ListUsersUseCase
from .user_results import UserError, UserErrorCode, UserListResult, UserResult

__all__ = [
    "CreateUserInput",
    "CreateUserUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
    "MIN_PASSWORD_LENGTH",
    "UserError",
    "UserErrorCode",
    "UserListResult",
    "UserResult",
]
