"""
===============================================================================
TARJETA CRC — eims/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, servicios, casos de uso) siguiendo DIP.
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache) para stores y servicios.
  - Centralizar decisiones runtime basadas en Settings (in-memory vs Postgres).

Colaboradores:
  - eims.crosscutting.config.get_settings
  - eims.domain.repositories.* / eims.domain.services.* (puertos)
  - eims.infrastructure.* (implementaciones)
  - eims.application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO debe depender de FastAPI ni de identity.auth_users
    (auth_users importa get_user_repository desde acá).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.otp_codes import OtpChallengeService, OtpSettings
from .application.usecases.auth import (
    RequestLoginOtpUseCase,
    RequestSignupOtpUseCase,
    VerifyLoginOtpUseCase,
    VerifySignupOtpUseCase,
)
from .application.usecases.courses import (
    CreateCourseUseCase,
    ListAvailableCoursesUseCase,
    ListCourseStudentsUseCase,
    ListInstructorCoursesUseCase,
)
from .application.usecases.enrollment import (
    EnrollInCourseUseCase,
    ListFacultyAdvisorPendingEnrollmentsUseCase,
    ListInstructorPendingEnrollmentsUseCase,
    ListStudentEnrollmentsUseCase,
    ReviewEnrollmentUseCase,
)
from .application.usecases.users import (
    CreateUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import (
    CourseRepository,
    OtpChallengeRepository,
    UserRepository,
)
from .domain.services import OtpSender
from .identity.passwords import hash_password, verify_password
from .infrastructure.repositories import (
    InMemoryCourseRepository,
    InMemoryOtpChallengeRepository,
    InMemoryUserRepository,
    PostgresCourseRepository,
    PostgresOtpChallengeRepository,
    PostgresUserRepository,
)
from .infrastructure.services import LoggingOtpSender

# Entornos donde el código OTP se escribe en el log (sin SMTP real).
_OTP_REVEAL_ENVIRONMENTS = frozenset({"local", "development"})


# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Repositorio de usuarios (in-memory en test; Postgres en runtime)."""
    if get_settings().uses_in_memory_store():
        return InMemoryUserRepository()
    return PostgresUserRepository()


@lru_cache(maxsize=1)
def get_course_repository() -> CourseRepository:
    """Repositorio de cursos + inscripciones embebidas."""
    if get_settings().uses_in_memory_store():
        return InMemoryCourseRepository()
    return PostgresCourseRepository()


@lru_cache(maxsize=1)
def get_otp_challenge_repository() -> OtpChallengeRepository:
    if get_settings().uses_in_memory_store():
        return InMemoryOtpChallengeRepository()
    return PostgresOtpChallengeRepository()


# =============================================================================
# Servicios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_otp_sender() -> OtpSender:
    env = get_settings().app_env.strip().lower()
    return LoggingOtpSender(reveal_codes=env in _OTP_REVEAL_ENVIRONMENTS)


@lru_cache(maxsize=1)
def get_otp_settings() -> OtpSettings:
    settings = get_settings()
    return OtpSettings(
        length=settings.otp_length,
        ttl_seconds=settings.otp_ttl_seconds,
        max_attempts=settings.otp_max_attempts,
    )


def get_otp_service() -> OtpChallengeService:
    return OtpChallengeService(get_otp_challenge_repository(), get_otp_settings())


# =============================================================================
# Casos de uso (factory por request)
# =============================================================================


def get_create_user_use_case() -> CreateUserUseCase:
    return CreateUserUseCase(get_user_repository(), password_hasher=hash_password)


def get_get_user_use_case() -> GetUserUseCase:
    return GetUserUseCase(get_user_repository())


def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(get_user_repository())


def get_create_course_use_case() -> CreateCourseUseCase:
    return CreateCourseUseCase(get_course_repository(), get_user_repository())


def get_list_available_courses_use_case() -> ListAvailableCoursesUseCase:
    settings = get_settings()
    return ListAvailableCoursesUseCase(
        get_course_repository(),
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )


def get_list_instructor_courses_use_case() -> ListInstructorCoursesUseCase:
    return ListInstructorCoursesUseCase(get_course_repository())


def get_list_course_students_use_case() -> ListCourseStudentsUseCase:
    return ListCourseStudentsUseCase(get_course_repository())


def get_enroll_in_course_use_case() -> EnrollInCourseUseCase:
    return EnrollInCourseUseCase(get_course_repository(), get_user_repository())


def get_review_enrollment_use_case() -> ReviewEnrollmentUseCase:
    return ReviewEnrollmentUseCase(get_course_repository())


def get_instructor_pending_enrollments_use_case() -> (
    ListInstructorPendingEnrollmentsUseCase
):
    return ListInstructorPendingEnrollmentsUseCase(get_course_repository())


def get_faculty_advisor_pending_enrollments_use_case() -> (
    ListFacultyAdvisorPendingEnrollmentsUseCase
):
    return ListFacultyAdvisorPendingEnrollmentsUseCase(get_course_repository())


def get_student_enrollments_use_case() -> ListStudentEnrollmentsUseCase:
    return ListStudentEnrollmentsUseCase(get_course_repository(), get_user_repository())


def get_request_signup_otp_use_case() -> RequestSignupOtpUseCase:
    return RequestSignupOtpUseCase(
        get_user_repository(), get_otp_service(), get_otp_sender()
    )


def get_verify_signup_otp_use_case() -> VerifySignupOtpUseCase:
    return VerifySignupOtpUseCase(get_otp_service(), get_create_user_use_case())


def get_request_login_otp_use_case() -> RequestLoginOtpUseCase:
    return RequestLoginOtpUseCase(
        get_user_repository(),
        get_otp_service(),
        get_otp_sender(),
        password_verifier=verify_password,
    )


def get_verify_login_otp_use_case() -> VerifyLoginOtpUseCase:
    return VerifyLoginOtpUseCase(get_user_repository(), get_otp_service())
