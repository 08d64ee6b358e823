"""
===============================================================================
TARJETA CRC — infrastructure/services/otp_sender.py
===============================================================================

Clase:
    LoggingOtpSender

Responsabilidades:
    - Implementar el puerto OtpSender sin proveedor de correo real.
    - Dejar registro estructurado de cada emisión (email + propósito).
    - En entornos de desarrollo, exponer el código en el log para poder
      completar el flujo sin SMTP.

Colaboradores:
    - domain.services.OtpSender (contrato)
    - crosscutting.logger
===============================================================================
"""

from __future__ import annotations

from ...crosscutting.logger import logger
from ...domain.entities import OtpPurpose


class LoggingOtpSender:
    def __init__(self, *, reveal_codes: bool = False) -> None:
        self._reveal_codes = reveal_codes

    def send_code(self, *, email: str, code: str, purpose: OtpPurpose) -> None:
        extra: dict[str, object] = {"email": email, "purpose": OtpPurpose(purpose).value}
        if self._reveal_codes:
            extra["dev_otp_code"] = code
        logger.info("OTP emitido", extra=extra)
