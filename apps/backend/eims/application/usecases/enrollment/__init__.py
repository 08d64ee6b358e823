"""
Enrollment use cases (package exports).
"""

from .enroll_in_course import EnrollInCourseInput, EnrollInCourseUseCase
from .enrollment_results import (
    EnrollmentError,
    EnrollmentErrorCode,
    EnrollmentResult,
    PendingEnrollmentGroup,
    PendingEnrollmentsResult,
    StudentEnrollmentsResult,
    StudentEnrollmentView,
)
from .list_student_enrollments import ListStudentEnrollmentsUseCase
from .pending_enrollments import (
    ListFacultyAdvisorPendingEnrollmentsUseCase,
    ListInstructorPendingEnrollmentsUseCase,
)
from .review_enrollment import ReviewEnrollmentInput, ReviewEnrollmentUseCase

__all__ = [
    "EnrollInCourseInput",
    "EnrollInCourseUseCase",
    "EnrollmentError",
    "EnrollmentErrorCode",
    "EnrollmentResult",
    "ListFacultyAdvisorPendingEnrollmentsUseCase",
    "ListInstructorPendingEnrollmentsUseCase",
    "ListStudentEnrollmentsUseCase",
    "PendingEnrollmentGroup",
    "PendingEnrollmentsResult",
    "ReviewEnrollmentInput",
    "ReviewEnrollmentUseCase",
    "StudentEnrollmentView",
    "StudentEnrollmentsResult",
]
