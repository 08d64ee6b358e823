"""
===============================================================================
TARJETA CRC — schemas/enrollments.py
===============================================================================

Módulo:
    Schemas HTTP para Inscripciones

Responsabilidades:
    - DTOs para inscribirse, revisar (Instructor / FA) y vistas de pendientes.
    - Validar el status pedido por cada autoridad revisora.

Notas:
    - Instructor: "Pending for FA" (o su sinónimo "Approved") | "Rejected".
    - Faculty Advisor: "Approved" | "Rejected".
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal
from uuid import UUID

from eims.domain.entities import EnrollmentStatus
from pydantic import Field

from .base import CamelModel, SuccessRes


class EnrollmentRes(CamelModel):
    student_id: UUID
    student_name: str
    student_email: str
    department: str
    status: EnrollmentStatus
    enrollment_date: datetime
    updated_at: datetime | None = None


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class EnrollCourseReq(CamelModel):
    course_id: UUID


class InstructorReviewReq(CamelModel):
    course_id: UUID
    student_id: UUID
    status: Literal["Pending for FA", "Approved", "Rejected"]


class FacultyAdvisorReviewReq(CamelModel):
    course_id: UUID
    student_id: UUID
    status: Literal["Approved", "Rejected"]


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class EnrollmentEnvelopeRes(SuccessRes):
    course_id: UUID
    enrollment: EnrollmentRes


class PendingCourseRes(CamelModel):
    course_id: UUID
    title: str
    course_code: str
    pending_students: list[EnrollmentRes] = Field(default_factory=list)


class PendingEnrollmentsRes(SuccessRes):
    pending_enrollments: list[PendingCourseRes]


class EnrolledCourseRes(CamelModel):
    course_id: UUID
    title: str
    course_code: str
    credits: int
    instructor_id: UUID
    instructor_name: str
    status: EnrollmentStatus
    enrollment_date: datetime


class EnrolledCoursesRes(SuccessRes):
    enrolled_courses: list[EnrolledCourseRes]
