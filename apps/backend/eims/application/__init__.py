"""
===============================================================================
APPLICATION LAYER (Public API / Exports)
===============================================================================

Expone los servicios de aplicación compartidos:
  - OtpChallengeService: emisión y verificación de códigos OTP
  - ensure_dev_admin: seed de cuenta Admin para desarrollo

Nota:
  - Los casos de uso se importan desde `usecases/` subdirectories.
===============================================================================
"""

from .dev_seed_admin import ensure_dev_admin
from .otp_codes import OtpChallengeService, OtpSettings, hash_otp_code

__all__ = [
    "OtpChallengeService",
    "OtpSettings",
    "ensure_dev_admin",
    "hash_otp_code",
]
