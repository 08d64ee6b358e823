"""
Name: Test Factories

Responsibilities:
  - Build users, courses and enrollments with sensible defaults
  - Build the EnrollmentActor view of a user for policy checks

Notes:
  - Plain functions (no pytest state); conftest fixtures reuse them
"""

from datetime import datetime, timezone
from uuid import UUID, uuid4

from eims.domain.entities import Course, Enrollment, EnrollmentStatus
from eims.domain.enrollment_policy import EnrollmentActor
from eims.identity.users import User, UserCategory



def build_user(
    *,
    category: UserCategory = UserCategory.STUDENT,
    full_name: str = "Test User",
    email: str | None = None,
    department: str = "Computer Science",
    is_faculty_advisor: bool = False,
    password_hash: str = "not-a-real-hash",
) -> User:
    user_id = uuid4()
    return User(
        id=user_id,
        full_name=full_name,
        email=email or f"{user_id.hex[:8]}@example.com",
        password_hash=password_hash,
        category=category,
        department=department,
        is_faculty_advisor=is_faculty_advisor,
        created_at=datetime.now(timezone.utc),
    )


def build_course(
    *,
    instructor_id: UUID,
    course_code: str = "CS101",
    title: str = "Intro to Programming",
    credits: int = 3,
    enrollments: list[Enrollment] | None = None,
    version: int = 1,
) -> Course:
    return Course(
        id=uuid4(),
        title=title,
        course_code=course_code,
        credits=credits,
        instructor_id=instructor_id,
        enrollments=list(enrollments or []),
        version=version,
        created_at=datetime.now(timezone.utc),
    )


def build_enrollment(
    student: User, *, status: EnrollmentStatus = EnrollmentStatus.PENDING
) -> Enrollment:
    return Enrollment(
        student_id=student.id,
        student_name=student.full_name,
        student_email=student.email,
        department=student.department,
        status=status,
    )


def actor_for(user: User) -> EnrollmentActor:
    return EnrollmentActor(
        user_id=user.id,
        category=user.category,
        department=user.department,
        is_faculty_advisor=user.is_faculty_advisor,
    )

