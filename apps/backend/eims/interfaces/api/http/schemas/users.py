"""
===============================================================================
TARJETA CRC — schemas/users.py
===============================================================================

Módulo:
    Schemas HTTP para Usuarios y Auth

Responsabilidades:
    - DTOs de request/response para alta, consulta y listados de usuarios.
    - DTOs de los flujos OTP (sign-up / login).
    - Nunca exponer password_hash.

Colaboradores:
    - identity.users.UserCategory
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from eims.identity.users import UserCategory
from pydantic import Field, field_validator

from .base import CamelModel, SuccessRes


def _normalize_email(v: str) -> str:
    return v.strip().lower()


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class UserRes(CamelModel):
    id: UUID
    full_name: str
    email: str
    category: UserCategory
    department: str
    fa: bool = Field(default=False, description="Instructor con rol Faculty Advisor")
    created_on: datetime | None = None


class UserEnvelopeRes(SuccessRes):
    user: UserRes


class UserDetailsRes(SuccessRes):
    user_details: UserRes


class UsersListRes(SuccessRes):
    users: list[UserRes]


class InstructorsListRes(SuccessRes):
    instructors: list[UserRes]


class AuthTokenRes(SuccessRes):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserRes


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class CreateUserReq(CamelModel):
    full_name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=512)
    category: UserCategory
    department: str = Field(..., min_length=1, max_length=200)
    fa: bool = False

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return _normalize_email(v)


class SendSignupOtpReq(CamelModel):
    email: str = Field(..., min_length=3, max_length=320)
    category: UserCategory
    department: str = Field(..., min_length=1, max_length=200)
    fa: bool = False

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return _normalize_email(v)


class VerifySignupOtpReq(CreateUserReq):
    otp: str = Field(..., min_length=1, max_length=16)


class SendLoginOtpReq(CamelModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1, max_length=512)

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return _normalize_email(v)


class VerifyLoginOtpReq(CamelModel):
    email: str = Field(..., min_length=3, max_length=320)
    otp: str = Field(..., min_length=1, max_length=16)

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return _normalize_email(v)
