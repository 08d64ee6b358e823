"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for the domain layer (ports).
- Keep the application/domain independent from infrastructure (PostgreSQL, in-memory).
- Enable dependency inversion and straightforward unit testing (fake repositories).

Collaborators
- domain.entities: Course, Enrollment, OtpChallenge
- identity.users: User, UserCategory
- infrastructure.repositories: postgres/*, in_memory/* implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Implementations MUST match method signatures exactly.

Notes
- Uniqueness (user email, course code) is enforced by the store: create_* methods
  return False instead of raising when the key is taken.
- Course writes after creation go through save_enrollments, a compare-and-swap
  on Course.version.
"""

from typing import List, Optional, Protocol
from uuid import UUID

from ..identity.users import User, UserCategory
from .entities import Course, Enrollment, EnrollmentStatus, OtpChallenge, OtpPurpose


class UserRepository(Protocol):
    """R: Interface for user account persistence."""

    def create_user(self, user: User) -> bool:
        """R: Persist a new user. Returns False if the email is already registered."""
        ...

    def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        """R: Lookup by normalized (trimmed, lower-cased) email."""
        ...

    def list_users(self, *, category: UserCategory | None = None) -> List[User]:
        """R: All users ordered by created_at, optionally filtered by category."""
        ...

    def get_users_by_ids(self, user_ids: List[UUID]) -> List[User]:
        """R: Batch lookup; unknown ids are skipped."""
        ...

    def update_password(self, user_id: UUID, password_hash: str) -> None:
        ...


class CourseRepository(Protocol):
    """
    R: Interface for course persistence (Course aggregate with embedded enrollments).
    """

    def create_course(self, course: Course) -> bool:
        """R: Persist a new course. Returns False if the course code is taken."""
        ...

    def get_course(self, course_id: UUID) -> Optional[Course]:
        ...

    def get_course_by_code(self, course_code: str) -> Optional[Course]:
        """R: Lookup by normalized (trimmed, upper-cased) course code."""
        ...

    def list_courses(self, *, offset: int = 0, limit: int = 10) -> List[Course]:
        """R: Page of courses in creation order."""
        ...

    def count_courses(self) -> int:
        ...

    def list_courses_by_instructor(self, instructor_id: UUID) -> List[Course]:
        ...

    def list_courses_for_student(self, student_id: UUID) -> List[Course]:
        """R: Courses holding an enrollment for the student."""
        ...

    def list_courses_with_enrollment_status(
        self, status: EnrollmentStatus
    ) -> List[Course]:
        """R: Courses holding at least one enrollment in the given status."""
        ...

    def save_enrollments(
        self,
        course_id: UUID,
        enrollments: List[Enrollment],
        *,
        expected_version: int,
    ) -> Optional[Course]:
        """
        R: Replace the course's enrollment list if its version still equals
        expected_version, bumping the version by one.

        Returns:
            The updated Course, or None when the course is missing or the
            version moved (concurrent write). Nothing is written in that case.
        """
        ...


class OtpChallengeRepository(Protocol):
    """R: Interface for pending one-time passcodes (one per email + purpose)."""

    def save_challenge(self, challenge: OtpChallenge) -> None:
        """R: Insert or replace the challenge for (email, purpose)."""
        ...

    def get_challenge(self, email: str, purpose: OtpPurpose) -> Optional[OtpChallenge]:
        ...

    def record_failed_attempt(self, email: str, purpose: OtpPurpose) -> int:
        """R: Increment and return the attempt counter (0 if no challenge)."""
        ...

    def delete_challenge(self, email: str, purpose: OtpPurpose) -> bool:
        """R: True solo si esta llamada borró el desafío (consumo atómico)."""
        ...
