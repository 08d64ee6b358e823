"""
USE CASE: List Student Enrollments

Una fila por inscripción del estudiante (cualquier estado), con datos del
curso y el nombre del instructor resuelto por lookup.
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import CourseRepository, UserRepository
from .enrollment_results import StudentEnrollmentsResult, StudentEnrollmentView


class ListStudentEnrollmentsUseCase:
    def __init__(
        self, course_repository: CourseRepository, user_repository: UserRepository
    ) -> None:
        self._courses = course_repository
        self._users = user_repository

    def execute(self, student_id: UUID) -> StudentEnrollmentsResult:
        courses = self._courses.list_courses_for_student(student_id)
        if not courses:
            return StudentEnrollmentsResult(items=[])

        instructor_ids = list({c.instructor_id for c in courses})
        names = {
            u.id: u.full_name for u in self._users.get_users_by_ids(instructor_ids)
        }

        items: list[StudentEnrollmentView] = []
        for course in courses:
            enrollment = course.find_enrollment(student_id)
            if enrollment is None:
                continue
            items.append(
                StudentEnrollmentView(
                    course=course,
                    enrollment=enrollment,
                    instructor_name=names.get(course.instructor_id, ""),
                )
            )
        return StudentEnrollmentsResult(items=items)
