"""
===============================================================================
USE CASE: Enroll In Course
===============================================================================

Business Goal:
    Un estudiante solicita inscribirse en un curso. La inscripción nace en
    estado Pending, con snapshot de nombre/email/departamento del estudiante.

Why (Context / Intención):
    - El departamento snapshot decide qué Faculty Advisor la revisa después;
      cambios posteriores del perfil no re-rutean inscripciones existentes.
    - No hay re-inscripción: cualquier registro previo (incluso Rejected)
      bloquea una nueva solicitud.

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    EnrollInCourseUseCase

Responsibilities:
    - Validar actor (solo Student).
    - Resolver estudiante y curso.
    - Garantizar unicidad (student, course) bajo escritura con versión.

Collaborators:
    - enrollment_policy.can_enroll
    - CourseRepository.get_course / save_enrollments
    - UserRepository.get_user_by_id

Error Mapping:
    - FORBIDDEN: actor ausente o no Student
    - NOT_FOUND: curso o estudiante inexistente
    - CONFLICT: ya existe inscripción, o el curso cambió durante la escritura
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

from ....crosscutting.logger import logger
from ....domain.entities import Enrollment, EnrollmentStatus
from ....domain.enrollment_policy import EnrollmentActor, can_enroll
from ....domain.repositories import CourseRepository, UserRepository
from .enrollment_results import EnrollmentError, EnrollmentErrorCode, EnrollmentResult


@dataclass(frozen=True)
class EnrollInCourseInput:
    course_id: UUID
    actor: EnrollmentActor | None


class EnrollInCourseUseCase:
    def __init__(
        self, course_repository: CourseRepository, user_repository: UserRepository
    ) -> None:
        self._courses = course_repository
        self._users = user_repository

    def execute(self, input_data: EnrollInCourseInput) -> EnrollmentResult:
        actor = input_data.actor

        # ---------------------------------------------------------------------
        # 1) Solo estudiantes.
        # ---------------------------------------------------------------------
        if not can_enroll(actor):
            return self._error(
                EnrollmentErrorCode.FORBIDDEN, "Only students can enroll in courses."
            )

        student = self._users.get_user_by_id(actor.user_id)
        if student is None:
            return self._error(
                EnrollmentErrorCode.NOT_FOUND,
                "Student not found.",
                resource="Student",
                resource_id=str(actor.user_id),
            )

        # ---------------------------------------------------------------------
        # 2) Curso existente.
        # ---------------------------------------------------------------------
        course = self._courses.get_course(input_data.course_id)
        if course is None:
            return self._error(
                EnrollmentErrorCode.NOT_FOUND,
                "Course not found.",
                resource="Course",
                resource_id=str(input_data.course_id),
            )

        # ---------------------------------------------------------------------
        # 3) Unicidad (student, course), cualquier estado.
        # ---------------------------------------------------------------------
        if course.has_enrollment(student.id):
            return self._error(
                EnrollmentErrorCode.CONFLICT,
                "You are already enrolled in this course.",
            )

        # ---------------------------------------------------------------------
        # 4) Agregar y guardar con compare-and-swap sobre la versión leída.
        # ---------------------------------------------------------------------
        enrollment = Enrollment(
            student_id=student.id,
            student_name=student.full_name,
            student_email=student.email,
            department=student.department,
            status=EnrollmentStatus.PENDING,
            enrollment_date=datetime.now(timezone.utc),
        )
        updated = self._courses.save_enrollments(
            course.id,
            [*course.enrollments, enrollment],
            expected_version=course.version,
        )
        if updated is None:
            logger.warning(
                "Inscripción rechazada por escritura concurrente",
                extra={"course_id": str(course.id), "student_id": str(student.id)},
            )
            return self._error(
                EnrollmentErrorCode.CONFLICT,
                "Course was modified concurrently; please retry.",
            )

        logger.info(
            "Inscripción creada",
            extra={
                "course_id": str(course.id),
                "student_id": str(student.id),
                "status": EnrollmentStatus.PENDING.value,
            },
        )
        return EnrollmentResult(
            course=updated, enrollment=updated.find_enrollment(student.id)
        )

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
