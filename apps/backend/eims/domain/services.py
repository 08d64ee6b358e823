"""
===============================================================================
TARJETA CRC — domain/services.py
===============================================================================

Módulo:
    Puertos de Servicios Externos (Protocols)

Responsabilidades:
    - Definir el contrato de entrega de OTP (mail u otro canal).
    - Mantener application independiente del proveedor de correo.

Colaboradores:
    - infrastructure/services/otp_sender.py: implementación concreta.
    - application/usecases/auth: consumen este puerto.

Reglas:
    - SOLO interfaces: nada de implementación.
===============================================================================
"""

from __future__ import annotations

from typing import Protocol

from .entities import OtpPurpose


class OtpSender(Protocol):
    """Contrato para entregar un código OTP al dueño del email."""

    def send_code(self, *, email: str, code: str, purpose: OtpPurpose) -> None:
        """Entrega el código. Lanza OtpDeliveryError si el canal falla."""
        ...
