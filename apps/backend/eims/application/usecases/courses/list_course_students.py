"""
===============================================================================
USE CASE: List Course Students (approved roster)
===============================================================================

Business Goal:
    Para un curso identificado por código, devolver las inscripciones que
    completaron el circuito (status = Approved).

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Class:
    ListCourseStudentsUseCase

Responsibilities:
    - Resolver el curso por código normalizado.
    - Verificar que el actor sea el Instructor del curso (policy).
    - Filtrar inscripciones aprobadas.

Collaborators:
    - CourseRepository.get_course_by_code
    - enrollment_policy.can_view_course_roster

Error Mapping:
    - NOT_FOUND: no hay curso con ese código
    - FORBIDDEN: el actor no es el Instructor del curso
===============================================================================
"""

from __future__ import annotations

from ....domain.entities import EnrollmentStatus, normalize_course_code
from ....domain.enrollment_policy import EnrollmentActor, can_view_course_roster
from ....domain.repositories import CourseRepository
from .course_results import CourseError, CourseErrorCode, CourseRosterResult


class ListCourseStudentsUseCase:
    def __init__(self, repository: CourseRepository) -> None:
        self._courses = repository

    def execute(
        self, *, course_code: str, actor: EnrollmentActor | None
    ) -> CourseRosterResult:
        code = normalize_course_code(course_code)
        course = self._courses.get_course_by_code(code) if code else None
        if course is None:
            return CourseRosterResult(
                error=CourseError(
                    code=CourseErrorCode.NOT_FOUND,
                    message="Course not found.",
                    resource_id=code or course_code,
                )
            )

        if not can_view_course_roster(course, actor):
            return CourseRosterResult(
                error=CourseError(
                    code=CourseErrorCode.FORBIDDEN,
                    message="Only the course instructor can view its students.",
                )
            )

        return CourseRosterResult(
            course=course,
            students=course.enrollments_with_status(EnrollmentStatus.APPROVED),
        )
