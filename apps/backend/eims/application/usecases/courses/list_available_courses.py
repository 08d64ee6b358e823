"""
===============================================================================
USE CASE: List Available Courses
===============================================================================

Business Goal:
    Catálogo paginado (page / limit) de todos los cursos para que los
    estudiantes elijan dónde inscribirse. Orden de creación.

Collaborators:
    - CourseRepository.count_courses / list_courses(offset, limit)
    - crosscutting.pagination.PageWindow / PageSlice

Error Mapping:
    - VALIDATION_ERROR: page < 1, limit fuera de [1, max_limit]
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.pagination import PageSlice, PageWindow
from ....domain.repositories import CourseRepository
from .course_results import CourseError, CourseErrorCode, CoursePageResult


class ListAvailableCoursesUseCase:
    def __init__(
        self,
        repository: CourseRepository,
        *,
        default_limit: int = 10,
        max_limit: int = 100,
    ) -> None:
        self._courses = repository
        self._default_limit = default_limit
        self._max_limit = max_limit

    def execute(self, *, page: int = 1, limit: int | None = None) -> CoursePageResult:
        effective_limit = self._default_limit if limit is None else limit

        if page < 1:
            return self._validation_error("page must be >= 1.")
        if effective_limit < 1 or effective_limit > self._max_limit:
            return self._validation_error(
                f"limit must be between 1 and {self._max_limit}."
            )

        window = PageWindow(page=page, limit=effective_limit)
        total = self._courses.count_courses()
        courses = (
            self._courses.list_courses(offset=window.offset, limit=window.limit)
            if window.offset < total
            else []
        )

        return CoursePageResult(
            page=PageSlice(items=courses, page=page, limit=window.limit, total=total)
        )

    @staticmethod
    def _validation_error(message: str) -> CoursePageResult:
        return CoursePageResult(
            error=CourseError(code=CourseErrorCode.VALIDATION_ERROR, message=message)
        )
