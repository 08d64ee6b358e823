"""
===============================================================================
TARJETA CRC — domain/enrollment_policy.py
===============================================================================

Módulo:
    Política de Inscripciones (máquina de estados + decisiones de actor)

Responsabilidades:
    - Definir la tabla de transiciones legales de una inscripción.
    - Decidir, con una función por acción, si un actor puede ejecutarla.
    - Ser 100% testeable: funciones puras, inputs explícitos.

Colaboradores:
    - domain.entities: Course, Enrollment, EnrollmentStatus
    - identity.users: UserCategory, normalize_department
    - application/usecases/enrollment: consultan esta policy antes de escribir.

Reglas (intención):
    - Solo un Student puede inscribirse.
    - Pending lo revisa el Instructor dueño del curso.
    - Pending for FA lo revisa un Faculty Advisor del departamento de la inscripción.
    - Approved / Enrolled / Rejected son finales.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from ..identity.users import UserCategory, normalize_department
from .entities import Course, Enrollment, EnrollmentStatus


class ReviewStage(str, Enum):
    INSTRUCTOR = "instructor"
    FACULTY_ADVISOR = "faculty_advisor"


class ReviewDecision(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


@dataclass(frozen=True, slots=True)
class EnrollmentActor:
    """Actor para decisiones sobre inscripciones."""

    user_id: UUID | None
    category: UserCategory | None
    department: str = ""
    is_faculty_advisor: bool = False


# (estado actual, etapa, decisión) -> estado destino
_TRANSITIONS: dict[
    tuple[EnrollmentStatus, ReviewStage, ReviewDecision], EnrollmentStatus
] = {
    (
        EnrollmentStatus.PENDING,
        ReviewStage.INSTRUCTOR,
        ReviewDecision.APPROVE,
    ): EnrollmentStatus.PENDING_FOR_FA,
    (
        EnrollmentStatus.PENDING,
        ReviewStage.INSTRUCTOR,
        ReviewDecision.REJECT,
    ): EnrollmentStatus.REJECTED,
    (
        EnrollmentStatus.PENDING_FOR_FA,
        ReviewStage.FACULTY_ADVISOR,
        ReviewDecision.APPROVE,
    ): EnrollmentStatus.APPROVED,
    (
        EnrollmentStatus.PENDING_FOR_FA,
        ReviewStage.FACULTY_ADVISOR,
        ReviewDecision.REJECT,
    ): EnrollmentStatus.REJECTED,
}

STAGE_SOURCE_STATUS: dict[ReviewStage, EnrollmentStatus] = {
    ReviewStage.INSTRUCTOR: EnrollmentStatus.PENDING,
    ReviewStage.FACULTY_ADVISOR: EnrollmentStatus.PENDING_FOR_FA,
}


def resolve_transition(
    current: EnrollmentStatus, stage: ReviewStage, decision: ReviewDecision
) -> EnrollmentStatus | None:
    """Estado destino, o None si la transición no es legal desde `current`."""
    return _TRANSITIONS.get((current, stage, decision))


def _is_instructor(actor: EnrollmentActor | None) -> bool:
    return (
        actor is not None
        and actor.user_id is not None
        and actor.category == UserCategory.INSTRUCTOR
    )


def can_enroll(actor: EnrollmentActor | None) -> bool:
    """Solo estudiantes se inscriben."""
    return (
        actor is not None
        and actor.user_id is not None
        and actor.category == UserCategory.STUDENT
    )


def can_review_as_instructor(course: Course, actor: EnrollmentActor | None) -> bool:
    """Revisión de primera etapa: el Instructor dueño del curso."""
    return _is_instructor(actor) and actor.user_id == course.instructor_id


def can_review_as_faculty_advisor(
    enrollment: Enrollment, actor: EnrollmentActor | None
) -> bool:
    """Revisión final: Faculty Advisor del mismo departamento que la inscripción."""
    if not _is_instructor(actor) or not actor.is_faculty_advisor:
        return False
    actor_department = normalize_department(actor.department)
    return bool(actor_department) and actor_department == normalize_department(
        enrollment.department
    )


def can_view_course_roster(course: Course, actor: EnrollmentActor | None) -> bool:
    """Listado de aprobados de un curso: su Instructor."""
    return _is_instructor(actor) and actor.user_id == course.instructor_id


def can_review(
    stage: ReviewStage,
    course: Course,
    enrollment: Enrollment,
    actor: EnrollmentActor | None,
) -> bool:
    if stage == ReviewStage.INSTRUCTOR:
        return can_review_as_instructor(course, actor)
    return can_review_as_faculty_advisor(enrollment, actor)
