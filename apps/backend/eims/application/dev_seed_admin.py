"""
===============================================================================
TARJETA CRC — application/dev_seed_admin.py (Admin de desarrollo)
===============================================================================

Responsabilidades:
  - Garantizar una cuenta Admin al arrancar cuando DEV_SEED_ADMIN=true.
  - Permitir el override E2E_SEED_ADMIN=1 para pipelines de CI.
  - Resetear la password solo si DEV_SEED_ADMIN_FORCE_RESET=true.

Colaboradores:
  - UserRepository (puerto de dominio)
  - password_hasher (identity.passwords.hash_password en runtime)
  - Settings + mapping de entorno (os.environ en runtime)

Reglas:
  - Sin override E2E solo corre con APP_ENV=local; cualquier otro env aborta
    el arranque con RuntimeError.
  - Nunca pisa una cuenta que no sea Admin.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping
from uuid import uuid4

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger
from ..domain.repositories import UserRepository
from ..identity.users import User, UserCategory, normalize_email

E2E_FLAG = "E2E_SEED_ADMIN"
E2E_EMAIL = "E2E_ADMIN_EMAIL"
E2E_PASSWORD = "E2E_ADMIN_PASSWORD"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class AdminSeed:
    email: str
    password: str
    full_name: str
    department: str
    force_reset: bool
    source: str


def resolve_admin_seed(settings: Settings, env: Mapping[str, str]) -> AdminSeed | None:
    """None si el seed está apagado; RuntimeError si el entorno no lo permite."""
    full_name = (settings.dev_seed_admin_name or "").strip() or "Admin"
    department = (settings.dev_seed_admin_department or "").strip() or "Administration"

    if (env.get(E2E_FLAG) or "").strip().lower() in _TRUTHY:
        return AdminSeed(
            email=normalize_email(env.get(E2E_EMAIL, "admin@local")),
            password=env.get(E2E_PASSWORD, "admin"),
            full_name=full_name,
            department=department,
            force_reset=False,
            source="e2e",
        )

    if not settings.dev_seed_admin:
        return None

    app_env = (settings.app_env or "").strip().lower()
    if app_env != "local":
        raise RuntimeError(
            f"DEV_SEED_ADMIN is enabled but APP_ENV is '{app_env}' (must be 'local')."
        )

    return AdminSeed(
        email=normalize_email(settings.dev_seed_admin_email),
        password=settings.dev_seed_admin_password or "",
        full_name=full_name,
        department=department,
        force_reset=bool(settings.dev_seed_admin_force_reset),
        source="settings",
    )


def ensure_dev_admin(
    settings: Settings,
    *,
    user_repo: UserRepository,
    password_hasher: Callable[[str], str],
    env: Mapping[str, str],
) -> None:
    seed = resolve_admin_seed(settings, env)
    if seed is None:
        return
    if not seed.email or not seed.password:
        raise ValueError("Dev seed admin is enabled but email/password are empty")

    log_extra = {"email": seed.email, "source": seed.source}
    existing = user_repo.get_user_by_email(seed.email)

    # 1) Cuenta nueva
    if existing is None:
        user_repo.create_user(
            User(
                id=uuid4(),
                full_name=seed.full_name,
                email=seed.email,
                password_hash=password_hasher(seed.password),
                category=UserCategory.ADMIN,
                department=seed.department,
            )
        )
        logger.info("Dev seed admin: creado", extra=log_extra)
        return

    # 2) El email pertenece a otro rol: no se toca
    if existing.category != UserCategory.ADMIN:
        logger.warning(
            "Dev seed admin: el email pertenece a una cuenta no Admin",
            extra={**log_extra, "category": existing.category.value},
        )
        return

    # 3) Admin existente (reset opcional)
    if seed.force_reset:
        user_repo.update_password(existing.id, password_hasher(seed.password))
        logger.info("Dev seed admin: password reseteada", extra=log_extra)
    else:
        logger.info("Dev seed admin: ya existe", extra=log_extra)
