"""
===============================================================================
TARJETA CRC — eims/api/auth_routes.py (Autenticación OTP)
===============================================================================

Responsabilidades:
  - Exponer sign-up y login en dos pasos (pedir OTP / verificar OTP).
  - Emitir el access token JWT al completar cualquiera de los dos flujos.
  - Exponer la identidad del caller (/get-user).

Colaboradores:
  - application.usecases.auth (Request/Verify Signup/Login OTP)
  - identity.auth_users: create_access_token, get_auth_settings, require_user
  - interfaces.api.http.error_mapping.raise_auth_error

Seguridad:
  - Nunca se devuelve el código OTP en la respuesta.
  - Credenciales inválidas -> 401 sin distinguir la causa.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ..application.usecases.auth import (
    AuthUserResult,
    RequestLoginOtpInput,
    RequestLoginOtpUseCase,
    RequestSignupOtpInput,
    RequestSignupOtpUseCase,
    VerifyLoginOtpInput,
    VerifyLoginOtpUseCase,
    VerifySignupOtpInput,
    VerifySignupOtpUseCase,
)
from ..container import (
    get_request_login_otp_use_case,
    get_request_signup_otp_use_case,
    get_verify_login_otp_use_case,
    get_verify_signup_otp_use_case,
)
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..identity.auth_users import (
    AuthSettings,
    create_access_token,
    get_auth_settings,
    require_user,
)
from ..identity.users import User
from ..interfaces.api.http.dependencies import to_user_res
from ..interfaces.api.http.error_mapping import raise_auth_error
from ..interfaces.api.http.schemas.base import SuccessRes
from ..interfaces.api.http.schemas.users import (
    AuthTokenRes,
    SendLoginOtpReq,
    SendSignupOtpReq,
    UserEnvelopeRes,
    VerifyLoginOtpReq,
    VerifySignupOtpReq,
)

router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)

OTP_SENT_MESSAGE = "OTP sent to your email"


def _issue_token(
    result: AuthUserResult, settings: AuthSettings, message: str
) -> AuthTokenRes:
    if result.error is not None:
        raise_auth_error(result.error)

    token, expires_in = create_access_token(result.user, settings)
    return AuthTokenRes(
        message=message,
        access_token=token,
        expires_in=expires_in,
        user=to_user_res(result.user),
    )


# -----------------------------------------------------------------------------
# Sign-up
# -----------------------------------------------------------------------------


@router.post("/send-otp", response_model=SuccessRes, tags=["auth"])
def send_signup_otp(
    req: SendSignupOtpReq,
    use_case: RequestSignupOtpUseCase = Depends(get_request_signup_otp_use_case),
):
    result = use_case.execute(
        RequestSignupOtpInput(
            email=req.email,
            category=req.category,
            department=req.department,
            is_faculty_advisor=req.fa,
        )
    )
    if result.error is not None:
        raise_auth_error(result.error)
    return SuccessRes(message=OTP_SENT_MESSAGE)


@router.post("/verify-otp", response_model=AuthTokenRes, tags=["auth"])
def verify_signup_otp(
    req: VerifySignupOtpReq,
    use_case: VerifySignupOtpUseCase = Depends(get_verify_signup_otp_use_case),
    settings: AuthSettings = Depends(get_auth_settings),
):
    result = use_case.execute(
        VerifySignupOtpInput(
            email=req.email,
            otp=req.otp,
            full_name=req.full_name,
            password=req.password,
            category=req.category,
            department=req.department,
            is_faculty_advisor=req.fa,
        )
    )
    return _issue_token(result, settings, "Registration successful")


# -----------------------------------------------------------------------------
# Login
# -----------------------------------------------------------------------------


@router.post("/send-login-otp", response_model=SuccessRes, tags=["auth"])
def send_login_otp(
    req: SendLoginOtpReq,
    use_case: RequestLoginOtpUseCase = Depends(get_request_login_otp_use_case),
):
    result = use_case.execute(RequestLoginOtpInput(email=req.email, password=req.password))
    if result.error is not None:
        raise_auth_error(result.error)
    return SuccessRes(message=OTP_SENT_MESSAGE)


@router.post("/verify-login-otp", response_model=AuthTokenRes, tags=["auth"])
def verify_login_otp(
    req: VerifyLoginOtpReq,
    use_case: VerifyLoginOtpUseCase = Depends(get_verify_login_otp_use_case),
    settings: AuthSettings = Depends(get_auth_settings),
):
    result = use_case.execute(VerifyLoginOtpInput(email=req.email, otp=req.otp))
    return _issue_token(result, settings, "Login successful")


@router.get("/get-user", response_model=UserEnvelopeRes, tags=["auth"])
def get_user(user: User = Depends(require_user())):
    return UserEnvelopeRes(user=to_user_res(user))
