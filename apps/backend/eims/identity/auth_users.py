"""
===============================================================================
TARJETA CRC — identity/auth_users.py
===============================================================================

Módulo:
    Auth Gate (JWT Bearer)

Responsabilidades:
    - Emitir y validar access tokens HS256 {sub, email, category}.
    - Resolver el usuario del token contra el UserRepository.
    - Exponer la dependencia FastAPI require_user.
    - Validar email + password (authenticate_user) para el login OTP.

Colaboradores:
    - crosscutting.config: secreto y TTL (vía AuthSettings).
    - crosscutting.error_responses: unauthorized / forbidden.
    - container.get_user_repository: lookup del usuario.
    - identity.passwords: verificación Argon2.

Reglas:
    - Sin credencial Bearer -> 401.
    - Token inválido, expirado o de un usuario inexistente -> 403.
    - Nunca loguear el token.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable
from uuid import UUID

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..container import get_user_repository
from ..context import set_user_context
from ..crosscutting.config import get_settings
from ..crosscutting.error_responses import forbidden, unauthorized
from ..crosscutting.logger import logger
from ..domain.repositories import UserRepository
from .passwords import verify_password
from .users import User, UserCategory, normalize_email

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"
REQUIRED_CLAIMS = ["sub", "email", "category", "exp"]

# R: auto_error=False para decidir nosotros el 401 (y documentar el esquema en OpenAPI).
_bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True, slots=True)
class AuthSettings:
    jwt_secret: str
    jwt_access_ttl_minutes: int


@dataclass(frozen=True, slots=True)
class TokenPayload:
    user_id: str
    email: str
    category: UserCategory


def get_auth_settings() -> AuthSettings:
    """Dependency FastAPI (overrideable en tests)."""
    settings = get_settings()
    return AuthSettings(
        jwt_secret=settings.jwt_secret,
        jwt_access_ttl_minutes=settings.jwt_access_ttl_minutes,
    )


def authenticate_user(email: str, password: str, users: UserRepository) -> User | None:
    """Devuelve el usuario si email/password son válidos.

    No distingue "no existe" de "password incorrecto".
    """
    email = normalize_email(email)
    if not email or not password:
        return None
    user = users.get_user_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


def create_access_token(user: User, settings: AuthSettings) -> tuple[str, int]:
    """Firma un access token; retorna (token, expires_in_seconds)."""
    issued_at = datetime.now(timezone.utc)
    ttl = timedelta(minutes=settings.jwt_access_ttl_minutes)
    claims = {
        "sub": str(user.id),
        "email": user.email,
        "category": user.category.value,
        "iat": issued_at,
        "exp": issued_at + ttl,
        "typ": ACCESS_TOKEN_TYPE,
    }
    token = jwt.encode(claims, settings.jwt_secret, algorithm=JWT_ALGORITHM)
    return token, int(ttl.total_seconds())


def decode_access_token(token: str, settings: AuthSettings) -> TokenPayload:
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": REQUIRED_CLAIMS},
        )
    except jwt.ExpiredSignatureError as exc:
        raise forbidden("Token expirado.") from exc
    except jwt.InvalidTokenError as exc:
        raise forbidden("Token inválido.") from exc

    if claims.get("typ", ACCESS_TOKEN_TYPE) != ACCESS_TOKEN_TYPE:
        raise forbidden("Tipo de token inválido.")

    try:
        category = UserCategory(claims["category"])
    except ValueError as exc:
        raise forbidden("Token inválido.") from exc

    return TokenPayload(
        user_id=str(claims["sub"]), email=str(claims["email"]), category=category
    )


def resolve_token_user(
    token: str, *, settings: AuthSettings, users: UserRepository
) -> User:
    payload = decode_access_token(token, settings)
    try:
        user_id = UUID(payload.user_id)
    except ValueError as exc:
        raise forbidden("Token inválido.") from exc

    user = users.get_user_by_id(user_id)
    if user is None:
        logger.warning("Token de usuario inexistente", extra={"user_id": str(user_id)})
        raise forbidden("Token inválido.")
    return user


def require_user() -> Callable[..., User]:
    """Dependency FastAPI: usuario autenticado por `Authorization: Bearer`."""

    def dependency(
        request: Request,
        credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
        settings: AuthSettings = Depends(get_auth_settings),
        users: UserRepository = Depends(get_user_repository),
    ) -> User:
        if credentials is None or not credentials.credentials.strip():
            raise unauthorized("Falta token Bearer.")

        user = resolve_token_user(
            credentials.credentials.strip(), settings=settings, users=users
        )
        request.state.user = user
        set_user_context(str(user.id))
        return user

    return dependency
