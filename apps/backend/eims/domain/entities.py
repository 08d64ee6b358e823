"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Course, Enrollment, OtpChallenge)

Responsabilidades:
    - Definir estructuras centrales del negocio (sin infraestructura).
    - Course es el agregado: posee su lista de Enrollments embebida y un
      contador de versión para escrituras compare-and-swap.
    - Brindar helpers mínimos para consultar el agregado.

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - domain.enrollment_policy: decide transiciones sobre Enrollment.
    - application/usecases: construyen/consumen estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI.
    - Datos + comportamiento mínimo.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import UUID


def _utcnow() -> datetime:
    """Fecha/hora UTC (helper interno)."""
    return datetime.now(timezone.utc)


def normalize_course_code(code: str | None) -> str:
    """Código canónico de curso: sin espacios extremos y en mayúsculas."""
    return (code or "").strip().upper()


# ---------------------------------------------------------------------------
# Enrollment
# ---------------------------------------------------------------------------


class EnrollmentStatus(str, Enum):
    """Estados de una inscripción (valores tal cual viajan por la API)."""

    PENDING = "Pending"
    PENDING_FOR_FA = "Pending for FA"
    APPROVED = "Approved"
    # Valor histórico de éxito: se acepta al leer, ninguna transición lo produce.
    ENROLLED = "Enrolled"
    REJECTED = "Rejected"

    @property
    def is_final(self) -> bool:
        return self in _FINAL_STATUSES


_FINAL_STATUSES = frozenset(
    {EnrollmentStatus.APPROVED, EnrollmentStatus.ENROLLED, EnrollmentStatus.REJECTED}
)


@dataclass
class Enrollment:
    """
    Inscripción de un estudiante en un curso (hija del agregado Course).

    name/email/department son snapshots tomados al inscribirse; department
    decide qué Faculty Advisor revisa la inscripción.
    """

    student_id: UUID
    student_name: str
    student_email: str
    department: str
    status: EnrollmentStatus = EnrollmentStatus.PENDING
    enrollment_date: datetime = field(default_factory=_utcnow)
    updated_at: Optional[datetime] = None


# ---------------------------------------------------------------------------
# Course
# ---------------------------------------------------------------------------


@dataclass
class Course:
    """Curso dictado por un Instructor, con sus inscripciones embebidas."""

    id: UUID
    title: str
    course_code: str
    credits: int
    instructor_id: UUID
    enrollments: List[Enrollment] = field(default_factory=list)
    version: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def find_enrollment(self, student_id: UUID) -> Enrollment | None:
        for enrollment in self.enrollments:
            if enrollment.student_id == student_id:
                return enrollment
        return None

    def has_enrollment(self, student_id: UUID) -> bool:
        return self.find_enrollment(student_id) is not None

    def enrollments_with_status(self, status: EnrollmentStatus) -> List[Enrollment]:
        return [e for e in self.enrollments if e.status == status]


# ---------------------------------------------------------------------------
# OTP
# ---------------------------------------------------------------------------


class OtpPurpose(str, Enum):
    SIGNUP = "signup"
    LOGIN = "login"


@dataclass
class OtpChallenge:
    """Código de un solo uso pendiente de verificación (se guarda hasheado)."""

    email: str
    purpose: OtpPurpose
    code_hash: str
    expires_at: datetime
    attempts: int = 0
    created_at: Optional[datetime] = None

    def is_expired(self, *, now: datetime | None = None) -> bool:
        return (now or _utcnow()) >= self.expires_at
