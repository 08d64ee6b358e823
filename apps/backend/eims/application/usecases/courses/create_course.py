"""
===============================================================================
USE CASE: Create Course
===============================================================================

Business Goal:
    Dar de alta un curso asignado a un Instructor existente.

Why (Context / Intención):
    - El course_code identifica al curso en el roster de aprobados
      (/FetchStudents/{courseCode}); por eso se normaliza y es único.
    - El instructor referenciado debe ser realmente un Instructor: si no,
      nadie podría revisar las inscripciones del curso.

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    CreateCourseUseCase

Responsibilities:
    - Validar título, código y créditos.
    - Resolver el instructor y validar su categoría.
    - Persistir el curso (versión inicial 1, sin inscripciones).

Collaborators:
    - CourseRepository.create_course
    - UserRepository.get_user_by_id

Error Mapping:
    - VALIDATION_ERROR: campos vacíos, créditos <= 0, instructor inexistente
      o que no es Instructor
    - CONFLICT: course_code ya existente
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4

from ....crosscutting.logger import logger
from ....domain.entities import Course, normalize_course_code
from ....domain.repositories import CourseRepository, UserRepository
from ....identity.users import UserCategory
from .course_results import CourseError, CourseErrorCode, CourseResult


@dataclass(frozen=True)
class CreateCourseInput:
    title: str
    course_code: str
    credits: int
    instructor_id: UUID


class CreateCourseUseCase:
    def __init__(
        self, course_repository: CourseRepository, user_repository: UserRepository
    ) -> None:
        self._courses = course_repository
        self._users = user_repository

    def execute(self, input_data: CreateCourseInput) -> CourseResult:
        # ---------------------------------------------------------------------
        # 1) Normalizar y validar campos.
        # ---------------------------------------------------------------------
        title = (input_data.title or "").strip()
        course_code = normalize_course_code(input_data.course_code)

        if not title:
            return self._validation_error("Course title is required.")
        if not course_code:
            return self._validation_error("Course code is required.")
        if input_data.credits is None or input_data.credits <= 0:
            return self._validation_error("Credits must be greater than 0.")

        # ---------------------------------------------------------------------
        # 2) El instructor debe existir y ser Instructor.
        # ---------------------------------------------------------------------
        instructor = self._users.get_user_by_id(input_data.instructor_id)
        if instructor is None or instructor.category != UserCategory.INSTRUCTOR:
            return self._validation_error(
                "Instructor must reference an existing Instructor user."
            )

        # ---------------------------------------------------------------------
        # 3) Persistir (el store garantiza unicidad de course_code).
        # ---------------------------------------------------------------------
        course = Course(
            id=uuid4(),
            title=title,
            course_code=course_code,
            credits=int(input_data.credits),
            instructor_id=instructor.id,
        )
        if not self._courses.create_course(course):
            return CourseResult(
                error=CourseError(
                    code=CourseErrorCode.CONFLICT,
                    message=f"Course code '{course_code}' already exists.",
                )
            )

        logger.info(
            "Curso creado",
            extra={"course_id": str(course.id), "course_code": course_code},
        )
        return CourseResult(course=self._courses.get_course(course.id) or course)

    @staticmethod
    def _validation_error(message: str) -> CourseResult:
        return CourseResult(
            error=CourseError(code=CourseErrorCode.VALIDATION_ERROR, message=message)
        )
