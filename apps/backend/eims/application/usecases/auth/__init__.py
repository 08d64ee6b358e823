"""
Auth (OTP) use cases (package exports).
"""

from .auth_results import (
    INVALID_OTP_MESSAGE,
    AuthError,
    AuthErrorCode,
    AuthUserResult,
    OtpRequestResult,
)
from .login_otp import (
    RequestLoginOtpInput,
    RequestLoginOtpUseCase,
    VerifyLoginOtpInput,
    VerifyLoginOtpUseCase,
)
from .signup_otp import (
    RequestSignupOtpInput,
    RequestSignupOtpUseCase,
    VerifySignupOtpInput,
    VerifySignupOtpUseCase,
)

__all__ = [
    "INVALID_OTP_MESSAGE",
    "AuthError",
    "AuthErrorCode",
    "AuthUserResult",
    "OtpRequestResult",
    "RequestLoginOtpInput",
    "RequestLoginOtpUseCase",
    "RequestSignupOtpInput",
    "RequestSignupOtpUseCase",
    "VerifyLoginOtpInput",
    "VerifyLoginOtpUseCase",
    "VerifySignupOtpInput",
    "VerifySignupOtpUseCase",
]
