"""
Course use cases (package exports).
"""

from .course_results import (
    CourseError,
    CourseErrorCode,
    CourseListResult,
    CoursePageResult,
    CourseResult,
    CourseRosterResult,
)
from .create_course import CreateCourseInput, CreateCourseUseCase
from .list_available_courses import ListAvailableCoursesUseCase
from .list_course_students import ListCourseStudentsUseCase
from .list_instructor_courses import ListInstructorCoursesUseCase

__all__ = [
    "CourseError",
    "CourseErrorCode",
    "CourseListResult",
    "CoursePageResult",
    "CourseResult",
    "CourseRosterResult",
    "CreateCourseInput",
    "CreateCourseUseCase",
    "ListAvailableCoursesUseCase",
    "ListCourseStudentsUseCase",
    "ListInstructorCoursesUseCase",
]
