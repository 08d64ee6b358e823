"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar usuarios en memoria (tests / CI).
  - Replicar la unicidad de email que en Postgres impone un índice único.
  - Mantener ordering determinístico alineado con Postgres:
      ORDER BY created_at ASC, email ASC

Collaborators:
  - identity.users.User, UserCategory
  - domain.repositories.UserRepository (contrato a implementar)

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - User es frozen: se puede devolver sin copiar.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from ....domain.repositories import UserRepository
from ....identity.users import User, UserCategory, normalize_email


class InMemoryUserRepository(UserRepository):
    """Repositorio in-memory, thread-safe, para usuarios."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {}
        self._ids_by_email: Dict[str, UUID] = {}

    @staticmethod
    def _sorted(items: Iterable[User]) -> List[User]:
        floor = datetime.min.replace(tzinfo=timezone.utc)
        return sorted(items, key=lambda u: (u.created_at or floor, u.email))

    def create_user(self, user: User) -> bool:
        email = normalize_email(user.email)
        stored = replace(
            user,
            email=email,
            created_at=user.created_at or datetime.now(timezone.utc),
        )
        with self._lock:
            if email in self._ids_by_email:
                return False
            self._users[stored.id] = stored
            self._ids_by_email[email] = stored.id
        return True

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            user_id = self._ids_by_email.get(normalize_email(email))
            return self._users.get(user_id) if user_id else None

    def list_users(self, *, category: UserCategory | None = None) -> List[User]:
        with self._lock:
            values = list(self._users.values())
        if category is not None:
            values = [u for u in values if u.category == category]
        return self._sorted(values)

    def get_users_by_ids(self, user_ids: List[UUID]) -> List[User]:
        if not user_ids:
            return []
        wanted = set(user_ids)
        with self._lock:
            found = [u for uid, u in self._users.items() if uid in wanted]
        return self._sorted(found)

    def update_password(self, user_id: UUID, password_hash: str) -> None:
        with self._lock:
            user = self._users.get(user_id)
            if user is not None:
                self._users[user_id] = replace(user, password_hash=password_hash)
