# apps/backend/eims/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas del backend (errores internos)
===============================================================================

Objetivo
--------
Tener excepciones internas coherentes, con:
- error_code estable
- error_id para correlación con logs
- message “humana” (sin filtrar secretos)

Los errores de negocio (validación, permisos, conflictos) NO son excepciones:
los casos de uso devuelven Results tipados. Estas clases cubren fallas de
infraestructura que el cliente solo ve como mensaje genérico.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  EIMSError + subclases

Responsabilidades:
  - Estandarizar errores internos que luego se mapean a HTTP
  - Generar error_id para rastreo

Colaboradores:
  - api/exception_handlers.py (mapea a respuestas problem+json)
  - infrastructure/repositories/postgres/* (lanzan DatabaseError)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class EIMSError(Exception):
    """Base para errores internos del sistema (error_code + error_id + message)."""

    error_code: str = "EIMS_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(EIMSError):
    """Errores de DB (conexión, query, timeout, pool)."""

    error_code: str = "DATABASE_ERROR"


class OtpDeliveryError(EIMSError):
    """El canal de entrega de OTP (mail) falló."""

    error_code: str = "OTP_DELIVERY_ERROR"
