"""
===============================================================================
TARJETA CRC — application/otp_codes.py
===============================================================================

Módulo:
    Servicio de códigos OTP (emitir / verificar)

Responsabilidades:
    - Generar códigos numéricos con `secrets` (CSPRNG).
    - Persistir solo el hash del código, con expiración y contador de intentos.
    - Verificar en tiempo constante y consumir el código (un solo uso).

Colaboradores:
    - domain.repositories.OtpChallengeRepository
    - domain.entities.OtpChallenge / OtpPurpose

Reglas:
    - Un código nuevo reemplaza al anterior para (email, propósito).
    - Código correcto -> se borra (no reutilizable).
    - Expirado o intentos agotados -> se borra y falla.
    - El llamador no distingue "incorrecto" de "expirado".
===============================================================================
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from ..crosscutting.logger import logger
from ..domain.entities import OtpChallenge, OtpPurpose
from ..domain.repositories import OtpChallengeRepository
from ..identity.users import normalize_email


@dataclass(frozen=True, slots=True)
class OtpSettings:
    length: int = 6
    ttl_seconds: int = 600
    max_attempts: int = 5


def hash_otp_code(email: str, purpose: OtpPurpose, code: str) -> str:
    """Hash SHA-256 ligado al email y propósito (el código nunca se guarda)."""
    material = f"{OtpPurpose(purpose).value}:{normalize_email(email)}:{code.strip()}"
    return hashlib.sha256(material.encode("utf-8")).hexdigest()


class OtpChallengeService:
    def __init__(
        self, repository: OtpChallengeRepository, settings: OtpSettings
    ) -> None:
        self._challenges = repository
        self._settings = settings

    def _generate_code(self) -> str:
        return "".join(
            secrets.choice("0123456789") for _ in range(self._settings.length)
        )

    def issue(self, email: str, purpose: OtpPurpose) -> str:
        """Crea (o reemplaza) el desafío y retorna el código en claro."""
        normalized = normalize_email(email)
        code = self._generate_code()
        now = datetime.now(timezone.utc)

        self._challenges.save_challenge(
            OtpChallenge(
                email=normalized,
                purpose=OtpPurpose(purpose),
                code_hash=hash_otp_code(normalized, purpose, code),
                expires_at=now + timedelta(seconds=self._settings.ttl_seconds),
                attempts=0,
                created_at=now,
            )
        )
        return code

    def verify(self, email: str, purpose: OtpPurpose, code: str) -> bool:
        normalized = normalize_email(email)
        purpose = OtpPurpose(purpose)

        challenge = self._challenges.get_challenge(normalized, purpose)
        if challenge is None:
            return False

        if challenge.is_expired():
            self._challenges.delete_challenge(normalized, purpose)
            return False

        expected = hash_otp_code(normalized, purpose, code or "")
        if hmac.compare_digest(challenge.code_hash, expected):
            # R: gana solo quien borra; un verify concurrente con el mismo código pierde.
            return self._challenges.delete_challenge(normalized, purpose)

        # R: cada fallo cuenta; al agotar intentos el desafío desaparece.
        attempts = self._challenges.record_failed_attempt(normalized, purpose)
        if attempts >= self._settings.max_attempts:
            self._challenges.delete_challenge(normalized, purpose)
            logger.warning(
                "OTP invalidado por intentos agotados",
                extra={"purpose": purpose.value, "attempts": attempts},
            )
        return False
