"""
===============================================================================
ENROLLMENT USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Business Goal:
    Modelos compartidos de resultado y error para la máquina de estados de
    inscripciones y sus vistas derivadas.

Why (Context / Intención):
    - Los use cases devuelven resultados tipados en lugar de lanzar
      excepciones hacia afuera.
    - CONFLICT cubre tres casos de negocio distintos con el mismo contrato
      HTTP: inscripción duplicada, transición ilegal desde el estado actual
      y escritura concurrente detectada por versión.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Component:
    enrollment_results models (module)

Responsibilities:
    - EnrollmentErrorCode / EnrollmentError como contrato de error.
    - EnrollmentResult (comando sobre una inscripción).
    - PendingEnrollmentsResult (vistas agrupadas por curso).
    - StudentEnrollmentsResult (vista del estudiante).

Collaborators:
    - domain.entities.Course, Enrollment
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.entities import Course, Enrollment


class EnrollmentErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class EnrollmentError:
    code: EnrollmentErrorCode
    message: str
    resource_id: str | None = None
    resource: str | None = None


@dataclass
class EnrollmentResult:
    """Resultado de un comando: curso actualizado + la inscripción afectada."""

    course: Course | None = None
    enrollment: Enrollment | None = None
    error: EnrollmentError | None = None


@dataclass(frozen=True)
class PendingEnrollmentGroup:
    """Inscripciones pendientes de un curso (nunca vacío)."""

    course: Course
    enrollments: List[Enrollment]


@dataclass
class PendingEnrollmentsResult:
    groups: List[PendingEnrollmentGroup] = field(default_factory=list)
    error: EnrollmentError | None = None


@dataclass(frozen=True)
class StudentEnrollmentView:
    course: Course
    enrollment: Enrollment
    instructor_name: str


@dataclass
class StudentEnrollmentsResult:
    items: List[StudentEnrollmentView] = field(default_factory=list)
    error: EnrollmentError | None = None
