"""
USE CASE: List Instructor Courses

"Mis cursos" de un Instructor, con las inscripciones embebidas.
"""

from __future__ import annotations

from uuid import UUID

from ....domain.repositories import CourseRepository
from .course_results import CourseListResult


class ListInstructorCoursesUseCase:
    def __init__(self, repository: CourseRepository) -> None:
        self._courses = repository

    def execute(self, instructor_id: UUID) -> CourseListResult:
        return CourseListResult(
            courses=self._courses.list_courses_by_instructor(instructor_id)
        )
