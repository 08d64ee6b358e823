"""
===============================================================================
USE CASES: Login with OTP (request + verify)
===============================================================================

Business Goal:
    Login en dos factores: email + password habilitan la emisión de un código;
    el código verificado habilita el access token.

Seguridad:
    - Credenciales inválidas -> UNAUTHORIZED sin distinguir la causa.
    - El código de login solo se emite tras validar el password.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ....crosscutting.logger import logger
from ....domain.entities import OtpPurpose
from ....domain.repositories import UserRepository
from ....domain.services import OtpSender
from ....identity.users import normalize_email
from ...otp_codes import OtpChallengeService
from .auth_results import (
    INVALID_OTP_MESSAGE,
    AuthError,
    AuthErrorCode,
    AuthUserResult,
    OtpRequestResult,
)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."


@dataclass(frozen=True)
class RequestLoginOtpInput:
    email: str
    password: str


@dataclass(frozen=True)
class VerifyLoginOtpInput:
    email: str
    otp: str


class RequestLoginOtpUseCase:
    def __init__(
        self,
        user_repository: UserRepository,
        otp_service: OtpChallengeService,
        otp_sender: OtpSender,
        password_verifier: Callable[[str, str], bool],
    ) -> None:
        self._users = user_repository
        self._otp = otp_service
        self._sender = otp_sender
        self._verify_password = password_verifier

    def execute(self, input_data: RequestLoginOtpInput) -> OtpRequestResult:
        email = normalize_email(input_data.email)
        password = input_data.password or ""

        user = self._users.get_user_by_email(email) if email and password else None
        if user is None or not self._verify_password(password, user.password_hash):
            logger.warning("Login rechazado: credenciales inválidas")
            return OtpRequestResult(
                error=AuthError(
                    code=AuthErrorCode.UNAUTHORIZED,
                    message=INVALID_CREDENTIALS_MESSAGE,
                )
            )

        code = self._otp.issue(user.email, OtpPurpose.LOGIN)
        self._sender.send_code(email=user.email, code=code, purpose=OtpPurpose.LOGIN)
        return OtpRequestResult(email=user.email)


class VerifyLoginOtpUseCase:
    def __init__(
        self, user_repository: UserRepository, otp_service: OtpChallengeService
    ) -> None:
        self._users = user_repository
        self._otp = otp_service

    def execute(self, input_data: VerifyLoginOtpInput) -> AuthUserResult:
        email = normalize_email(input_data.email)
        if not self._otp.verify(email, OtpPurpose.LOGIN, input_data.otp):
            return AuthUserResult(
                error=AuthError(
                    code=AuthErrorCode.VALIDATION_ERROR, message=INVALID_OTP_MESSAGE
                )
            )

        user = self._users.get_user_by_email(email)
        if user is None:
            return AuthUserResult(
                error=AuthError(
                    code=AuthErrorCode.UNAUTHORIZED,
                    message=INVALID_CREDENTIALS_MESSAGE,
                )
            )

        logger.info("Login completado", extra={"user_id": str(user.id)})
        return AuthUserResult(user=user)
