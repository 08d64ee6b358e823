"""
===============================================================================
TARJETA CRC — dependencies.py (Helpers comunes de routers)
===============================================================================

Responsabilidades:
  - Convertir User (auth) -> EnrollmentActor (policy).
  - Mapear entidades de dominio -> DTOs HTTP.

Colaboradores:
  - identity.users.User
  - domain.enrollment_policy.EnrollmentActor
  - schemas.* (DTOs)
===============================================================================
"""

from __future__ import annotations

from eims.domain.entities import Course, Enrollment
from eims.domain.enrollment_policy import EnrollmentActor
from eims.identity.users import User

from .schemas.courses import CourseRes, CourseSummaryRes
from .schemas.enrollments import EnrollmentRes
from .schemas.users import UserRes


def to_enrollment_actor(user: User | None) -> EnrollmentActor | None:
    """
    Convierte User -> EnrollmentActor.

    El departamento sale del registro del usuario, nunca del request.
    """
    if user is None:
        return None
    return EnrollmentActor(
        user_id=user.id,
        category=user.category,
        department=user.department,
        is_faculty_advisor=user.is_faculty_advisor,
    )


def to_user_res(user: User) -> UserRes:
    return UserRes(
        id=user.id,
        full_name=user.full_name,
        email=user.email,
        category=user.category,
        department=user.department,
        fa=user.is_faculty_advisor,
        created_on=user.created_at,
    )


def to_enrollment_res(enrollment: Enrollment) -> EnrollmentRes:
    return EnrollmentRes(
        student_id=enrollment.student_id,
        student_name=enrollment.student_name,
        student_email=enrollment.student_email,
        department=enrollment.department,
        status=enrollment.status,
        enrollment_date=enrollment.enrollment_date,
        updated_at=enrollment.updated_at,
    )


def to_course_summary_res(course: Course) -> CourseSummaryRes:
    return CourseSummaryRes(
        id=course.id,
        title=course.title,
        course_code=course.course_code,
        credits=course.credits,
        instructor_id=course.instructor_id,
        created_at=course.created_at,
    )


def to_course_res(course: Course) -> CourseRes:
    return CourseRes(
        id=course.id,
        title=course.title,
        course_code=course.course_code,
        credits=course.credits,
        instructor_id=course.instructor_id,
        created_at=course.created_at,
        enrollments=[to_enrollment_res(e) for e in course.enrollments],
    )
