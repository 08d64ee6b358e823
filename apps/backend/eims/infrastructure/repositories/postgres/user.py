"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Crear usuarios y cargarlos por id / email / categoría.
  - Ejecutar SQL parametrizado contra la tabla `users` (contrato con migraciones).
  - Mapear filas crudas -> `User` validando `UserCategory`.

Collaborators:
  - PostgresRepositoryBase (pool + errores consistentes)
  - identity.users.User / UserCategory

Constraints / Notes:
  - Repositorio puro: NO define reglas de negocio.
  - Retorna None cuando no existe el recurso (no exception por “not found”).
  - Email único vía índice: INSERT ... ON CONFLICT (email) DO NOTHING.
  - Orden estable en listados: created_at ASC, email ASC.
============================================================
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from ....crosscutting.exceptions import DatabaseError
from ....identity.users import User, UserCategory, normalize_email
from .base import PostgresRepositoryBase

_USER_COLUMNS = (
    "id, full_name, email, password_hash, category, department, "
    "is_faculty_advisor, created_at"
)
_USER_ORDER_BY = "ORDER BY created_at ASC, email ASC"


def _row_to_user(row: tuple) -> User:
    try:
        category = UserCategory(row[4])
    except ValueError as exc:
        raise DatabaseError(f"Invalid user category in database: {row[4]}") from exc

    return User(
        id=row[0],
        full_name=row[1],
        email=row[2],
        password_hash=row[3],
        category=category,
        department=row[5] or "",
        is_faculty_advisor=bool(row[6]),
        created_at=row[7],
    )


class PostgresUserRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del repositorio de usuarios."""

    def create_user(self, user: User) -> bool:
        row = self._fetchone(
            query="""
                INSERT INTO users (
                    id, full_name, email, password_hash, category,
                    department, is_faculty_advisor, created_at
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, COALESCE(%s::timestamptz, NOW()))
                ON CONFLICT (email) DO NOTHING
                RETURNING id
            """,
            params=(
                user.id,
                user.full_name,
                normalize_email(user.email),
                user.password_hash,
                user.category.value,
                user.department,
                user.is_faculty_advisor,
                user.created_at,
            ),
            context_msg="PostgresUserRepository: Failed to create user",
            extra={"user_id": str(user.id)},
        )
        return row is not None

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s",
            params=(user_id,),
            context_msg="PostgresUserRepository: Failed to load user",
            extra={"user_id": str(user_id)},
        )
        return _row_to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s",
            params=(normalize_email(email),),
            context_msg="PostgresUserRepository: Failed to load user by email",
            extra={},
        )
        return _row_to_user(row) if row else None

    def list_users(self, *, category: UserCategory | None = None) -> List[User]:
        where_sql = ""
        params: list[object] = []
        if category is not None:
            where_sql = "WHERE category = %s"
            params.append(UserCategory(category).value)

        rows = self._fetchall(
            query=f"SELECT {_USER_COLUMNS} FROM users {where_sql} {_USER_ORDER_BY}",
            params=params,
            context_msg="PostgresUserRepository: Failed to list users",
            extra={"category": category.value if category else None},
        )
        return [_row_to_user(r) for r in rows]

    def get_users_by_ids(self, user_ids: List[UUID]) -> List[User]:
        if not user_ids:
            return []
        rows = self._fetchall(
            query=f"""
                SELECT {_USER_COLUMNS} FROM users
                WHERE id = ANY(%s)
                {_USER_ORDER_BY}
            """,
            params=(list(user_ids),),
            context_msg="PostgresUserRepository: Failed to load users by ids",
            extra={"count": len(user_ids)},
        )
        return [_row_to_user(r) for r in rows]

    def update_password(self, user_id: UUID, password_hash: str) -> None:
        self._execute(
            query="UPDATE users SET password_hash = %s WHERE id = %s",
            params=(password_hash, user_id),
            context_msg="PostgresUserRepository: Failed to update password",
            extra={"user_id": str(user_id)},
        )
