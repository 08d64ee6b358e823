"""
===============================================================================
USE CASES: Pending Enrollment Views (Instructor / Faculty Advisor)
===============================================================================

Business Goal:
    Vistas de trabajo para cada autoridad revisora:
      - Instructor: inscripciones Pending de SUS cursos.
      - Faculty Advisor: inscripciones Pending for FA de TODOS los cursos
        cuyo departamento snapshot coincide con el del FA.

Notas:
    - Se agrupan por curso y se omiten grupos vacíos.
    - Se recalculan en cada llamada (sin cache).
    - El departamento del FA lo aporta el caller desde el registro del
      usuario, nunca desde el request.
===============================================================================
"""

from __future__ import annotations

from typing import Callable, Iterable
from uuid import UUID

from ....domain.entities import Course, Enrollment, EnrollmentStatus
from ....domain.repositories import CourseRepository
from ....identity.users import normalize_department
from .enrollment_results import (
    EnrollmentError,
    EnrollmentErrorCode,
    PendingEnrollmentGroup,
    PendingEnrollmentsResult,
)


def group_by_course(
    courses: Iterable[Course], predicate: Callable[[Enrollment], bool]
) -> list[PendingEnrollmentGroup]:
    groups: list[PendingEnrollmentGroup] = []
    for course in courses:
        matching = [e for e in course.enrollments if predicate(e)]
        if matching:
            groups.append(PendingEnrollmentGroup(course=course, enrollments=matching))
    return groups


class ListInstructorPendingEnrollmentsUseCase:
    def __init__(self, repository: CourseRepository) -> None:
        self._courses = repository

    def execute(self, instructor_id: UUID) -> PendingEnrollmentsResult:
        courses = self._courses.list_courses_by_instructor(instructor_id)
        return PendingEnrollmentsResult(
            groups=group_by_course(
                (c for c in courses if c.instructor_id == instructor_id),
                lambda e: e.status == EnrollmentStatus.PENDING,
            )
        )


class ListFacultyAdvisorPendingEnrollmentsUseCase:
    def __init__(self, repository: CourseRepository) -> None:
        self._courses = repository

    def execute(self, department: str) -> PendingEnrollmentsResult:
        wanted = normalize_department(department)
        if not wanted:
            return PendingEnrollmentsResult(
                error=EnrollmentError(
                    code=EnrollmentErrorCode.VALIDATION_ERROR,
                    message="Department is required.",
                )
            )

        courses = self._courses.list_courses_with_enrollment_status(
            EnrollmentStatus.PENDING_FOR_FA
        )
        return PendingEnrollmentsResult(
            groups=group_by_course(
                courses,
                lambda e: e.status == EnrollmentStatus.PENDING_FOR_FA
                and normalize_department(e.department) == wanted,
            )
        )
