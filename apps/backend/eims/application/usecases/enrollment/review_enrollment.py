"""
===============================================================================
USE CASE: Review Enrollment (Instructor / Faculty Advisor)
===============================================================================

Business Goal:
    Aprobar o rechazar una inscripción en la etapa que corresponde:
      - INSTRUCTOR:       Pending        -> Pending for FA | Rejected
      - FACULTY_ADVISOR:  Pending for FA -> Approved       | Rejected

Why (Context / Intención):
    - Dos autoridades distintas: aceptación pedagógica (Instructor del curso)
      y firma administrativa del departamento (Faculty Advisor).
    - La escritura es load -> mutate -> save con chequeo de versión: si otro
      request modificó el curso entre la lectura y la escritura, no se pisa
      nada y el caller recibe CONFLICT.
    - Nunca se retrocede en el grafo: una inscripción finalizada no acepta
      más decisiones.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    ReviewEnrollmentUseCase

Responsibilities:
    - Resolver curso e inscripción.
    - Autorizar al actor para la etapa (policy, una función por acción).
    - Resolver el estado destino con la tabla de transiciones.
    - Persistir con compare-and-swap.

Collaborators:
    - CourseRepository.get_course / save_enrollments
    - enrollment_policy.can_review / resolve_transition

Error Mapping:
    - NOT_FOUND: curso inexistente o sin inscripción para ese estudiante
    - FORBIDDEN: actor no habilitado para la etapa
    - CONFLICT: inscripción finalizada, estado actual no es el origen de la
      etapa, o escritura concurrente
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.enrollment_policy import (
    STAGE_SOURCE_STATUS,
    EnrollmentActor,
    ReviewDecision,
    ReviewStage,
    can_review,
    resolve_transition,
)
from ....domain.repositories import CourseRepository
from .enrollment_results import EnrollmentError, EnrollmentErrorCode, EnrollmentResult


@dataclass(frozen=True)
class ReviewEnrollmentInput:
    course_id: UUID
    student_id: UUID
    stage: ReviewStage
    decision: ReviewDecision
    actor: EnrollmentActor | None


class ReviewEnrollmentUseCase:
    def __init__(self, repository: CourseRepository) -> None:
        self._courses = repository

    def execute(self, input_data: ReviewEnrollmentInput) -> EnrollmentResult:
        stage = ReviewStage(input_data.stage)
        decision = ReviewDecision(input_data.decision)

        # ---------------------------------------------------------------------
        # 1) Cargar agregado e inscripción.
        # ---------------------------------------------------------------------
        course = self._courses.get_course(input_data.course_id)
        if course is None:
            return self._error(
                EnrollmentErrorCode.NOT_FOUND,
                "Course not found.",
                resource="Course",
                resource_id=str(input_data.course_id),
            )

        enrollment = course.find_enrollment(input_data.student_id)
        if enrollment is None:
            return self._error(
                EnrollmentErrorCode.NOT_FOUND,
                "Enrollment not found for this student.",
                resource="Enrollment",
                resource_id=str(input_data.student_id),
            )

        # ---------------------------------------------------------------------
        # 2) Autorizar actor para la etapa.
        # ---------------------------------------------------------------------
        if not can_review(stage, course, enrollment, input_data.actor):
            logger.warning(
                "Revisión de inscripción denegada",
                extra={
                    "course_id": str(course.id),
                    "student_id": str(enrollment.student_id),
                    "stage": stage.value,
                },
            )
            return self._error(
                EnrollmentErrorCode.FORBIDDEN,
                self._forbidden_message(stage),
            )

        # ---------------------------------------------------------------------
        # 3) Transición legal desde el estado actual.
        # ---------------------------------------------------------------------
        previous_status = enrollment.status
        if previous_status.is_final:
            return self._error(
                EnrollmentErrorCode.CONFLICT,
                f"Enrollment is already finalized ('{previous_status.value}').",
            )

        target = resolve_transition(previous_status, stage, decision)
        if target is None:
            return self._error(
                EnrollmentErrorCode.CONFLICT,
                f"Enrollment is '{previous_status.value}'; this review requires "
                f"'{STAGE_SOURCE_STATUS[stage].value}'.",
            )

        # ---------------------------------------------------------------------
        # 4) Mutar y guardar con compare-and-swap.
        # ---------------------------------------------------------------------
        enrollment.status = target
        enrollment.updated_at = datetime.now(timezone.utc)

        updated = self._courses.save_enrollments(
            course.id, course.enrollments, expected_version=course.version
        )
        if updated is None:
            logger.warning(
                "Revisión rechazada por escritura concurrente",
                extra={"course_id": str(course.id), "expected_version": course.version},
            )
            return self._error(
                EnrollmentErrorCode.CONFLICT,
                "Enrollment was modified concurrently; reload and retry.",
            )

        logger.info(
            "Inscripción actualizada",
            extra={
                "course_id": str(course.id),
                "student_id": str(enrollment.student_id),
                "from_status": previous_status.value,
                "to_status": target.value,
                "stage": stage.value,
            },
        )
        return EnrollmentResult(
            course=updated,
            enrollment=updated.find_enrollment(input_data.student_id),
        )

    @staticmethod
    def _forbidden_message(stage: ReviewStage) -> str:
        if stage == ReviewStage.INSTRUCTOR:
            return "Only the course instructor can review this enrollment."
        return "Only a Faculty Advisor of the student's department can review this enrollment."

    @staticmethod
    def _error(
        code: EnrollmentErrorCode,
        message: str,
        *,
        resource: str | None = None,
        resource_id: str | None = None,
    ) -> EnrollmentResult:
        return EnrollmentResult(
            error=EnrollmentError(
                code=code, message=message, resource=resource, resource_id=resource_id
            )
        )
