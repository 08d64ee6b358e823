"""
===============================================================================
TARJETA CRC — schemas/courses.py
===============================================================================

Módulo:
    Schemas HTTP para Cursos

Responsabilidades:
    - DTOs de alta de curso, catálogo paginado y cursos del instructor.
    - El catálogo del estudiante no expone inscripciones de terceros.

Colaboradores:
    - schemas.enrollments.EnrollmentRes
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from .base import CamelModel, SuccessRes
from .enrollments import EnrollmentRes


class CreateCourseReq(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    course_code: str = Field(..., min_length=1, max_length=32)
    credits: int = Field(..., gt=0, le=60)
    instructor: UUID = Field(..., description="Id del Instructor a cargo")

    @field_validator("course_code")
    @classmethod
    def normalizar_codigo(cls, v: str) -> str:
        return v.strip().upper()


class CourseSummaryRes(CamelModel):
    id: UUID
    title: str
    course_code: str
    credits: int
    instructor_id: UUID
    created_at: datetime | None = None


class CourseRes(CourseSummaryRes):
    enrollments: list[EnrollmentRes] = Field(default_factory=list)


class CourseEnvelopeRes(SuccessRes):
    course: CourseRes


class CoursesPageRes(SuccessRes):
    courses: list[CourseSummaryRes]
    page: int
    limit: int
    total: int
    total_pages: int


class InstructorCoursesRes(SuccessRes):
    courses: list[CourseRes]


class CourseStudentsRes(SuccessRes):
    course_code: str
    students: list[EnrollmentRes]
