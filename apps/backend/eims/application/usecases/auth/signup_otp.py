"""
===============================================================================
USE CASES: Sign-up with OTP (request + verify)
===============================================================================

Business Goal:
    Alta self-service en dos pasos:
      1) El usuario pide un código para su email (no debe estar registrado).
      2) Presenta el código junto con sus datos; si es válido se crea la cuenta.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Classes:
    RequestSignupOtpUseCase, VerifySignupOtpUseCase

Responsibilities:
    - Validar datos mínimos antes de emitir/consumir un código.
    - Emitir el código y entregarlo por el puerto OtpSender.
    - Verificar el código y delegar el alta en CreateUserUseCase.

Collaborators:
    - OtpChallengeService
    - OtpSender (puerto)
    - UserRepository.get_user_by_email
    - CreateUserUseCase

Error Mapping:
    - VALIDATION_ERROR: datos inválidos u OTP inválido/expirado
    - CONFLICT: email ya registrado
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ....crosscutting.logger import logger
from ....domain.entities import OtpPurpose
from ....domain.repositories import UserRepository
from ....domain.services import OtpSender
from ....identity.users import UserCategory, normalize_email
from ...otp_codes import OtpChallengeService
from ..users import CreateUserInput, CreateUserUseCase
from ..users.create_user import MIN_PASSWORD_LENGTH
from .auth_results import (
    INVALID_OTP_MESSAGE,
    AuthError,
    AuthErrorCode,
    AuthUserResult,
    OtpRequestResult,
)


@dataclass(frozen=True)
class RequestSignupOtpInput:
    email: str
    category: UserCategory
    department: str
    is_faculty_advisor: bool = False


@dataclass(frozen=True)
class VerifySignupOtpInput:
    email: str
    otp: str
    full_name: str
    password: str
    category: UserCategory
    department: str
    is_faculty_advisor: bool = False


class RequestSignupOtpUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        otp_service: OtpChallengeService,
        otp_sender: OtpSender,
    ) -> None:
        self._users = user_repository
        self._otp = otp_service
        self._sender = otp_sender

    def execute(self, input_data: RequestSignupOtpInput) -> OtpRequestResult:
        # ---------------------------------------------------------------------
        # 1) Validar datos mínimos.
        # ---------------------------------------------------------------------
        email = normalize_email(input_data.email)
        if not email or "@" not in email:
            return _request_error(AuthErrorCode.VALIDATION_ERROR, "A valid email is required.")
        if not (input_data.department or "").strip():
            return _request_error(AuthErrorCode.VALIDATION_ERROR, "Department is required.")
        try:
            UserCategory(input_data.category)
        except ValueError:
            return _request_error(AuthErrorCode.VALIDATION_ERROR, "Unknown user category.")

        # ---------------------------------------------------------------------
        # 2) El email no debe existir.
        # ---------------------------------------------------------------------
        if self._users.get_user_by_email(email) is not None:
            return _request_error(AuthErrorCode.CONFLICT, "Email is already registered.")

        # ---------------------------------------------------------------------
        # 3) Emitir y entregar.
        # ---------------------------------------------------------------------
        code = self._otp.issue(email, OtpPurpose.SIGNUP)
        self._sender.send_code(email=email, code=code, purpose=OtpPurpose.SIGNUP)
        return OtpRequestResult(email=email)


class VerifySignupOtpUseCase:
    def __init__(
        self, otp_service: OtpChallengeService, create_user: CreateUserUseCase
    ) -> None:
        self._otp = otp_service
        self._create_user = create_user

    def execute(self, input_data: VerifySignupOtpInput) -> AuthUserResult:
        # R: validar antes de consumir el código, así un typo no obliga a pedir otro.
        if not (input_data.full_name or "").strip():
            return _user_error(AuthErrorCode.VALIDATION_ERROR, "Full name is required.")
        if len(input_data.password or "") < MIN_PASSWORD_LENGTH:
            return _user_error(
                AuthErrorCode.VALIDATION_ERROR,
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters.",
            )

        if not self._otp.verify(input_data.email, OtpPurpose.SIGNUP, input_data.otp):
            logger.warning("OTP de sign-up rechazado")
            return _user_error(AuthErrorCode.VALIDATION_ERROR, INVALID_OTP_MESSAGE)

        result = self._create_user.execute(
            CreateUserInput(
                full_name=input_data.full_name,
                email=input_data.email,
                password=input_data.password,
                category=input_data.category,
                department=input_data.department,
                is_faculty_advisor=input_data.is_faculty_advisor,
            )
        )
        if result.error is not None:
            return _user_error(AuthErrorCode(result.error.code.value), result.error.message)
        return AuthUserResult(user=result.user)


def _request_error(code: AuthErrorCode, message: str) -> OtpRequestResult:
    return OtpRequestResult(error=AuthError(code=code, message=message))


def _user_error(code: AuthErrorCode, message: str) -> AuthUserResult:
    return AuthUserResult(error=AuthError(code=code, message=message))
