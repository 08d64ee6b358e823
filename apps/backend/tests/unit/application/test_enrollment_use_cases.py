"""
Name: Enrollment Use Case Tests

Responsibilities:
  - Enroll: actor checks, duplicates, concurrent writes
  - Review: two-stage state machine with ownership / department checks
  - Views: instructor and Faculty Advisor pending lists, student enrollments
"""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID, uuid4

import pytest

from factories import actor_for, build_course, build_enrollment, build_user
from eims.application.usecases.enrollment import (
    EnrollInCourseInput,
    EnrollInCourseUseCase,
    EnrollmentErrorCode,
    ListFacultyAdvisorPendingEnrollmentsUseCase,
    ListInstructorPendingEnrollmentsUseCase,
    ListStudentEnrollmentsUseCase,
    ReviewEnrollmentInput,
    ReviewEnrollmentUseCase,
)
from eims.domain.entities import Course, Enrollment, EnrollmentStatus
from eims.domain.enrollment_policy import ReviewDecision, ReviewStage
from eims.identity.users import UserCategory
from eims.infrastructure.repositories import (
    InMemoryCourseRepository,
    InMemoryUserRepository,
)

pytestmark = pytest.mark.unit


class RacingCourseRepository(InMemoryCourseRepository):
    """Simula otra escritura entre la lectura y el save del caso de uso."""

    def __init__(self, intruder: Enrollment) -> None:
        super().__init__()
        self._intruder = intruder

    def save_enrollments(
        self,
        course_id: UUID,
        enrollments: List[Enrollment],
        *,
        expected_version: int,
    ) -> Optional[Course]:
        current = self.get_course(course_id)
        super().save_enrollments(
            course_id,
            [*current.enrollments, self._intruder],
            expected_version=current.version,
        )
        return super().save_enrollments(
            course_id, enrollments, expected_version=expected_version
        )


@pytest.fixture
def users(student, instructor, faculty_advisor) -> InMemoryUserRepository:
    repo = InMemoryUserRepository()
    for user in (student, instructor, faculty_advisor):
        repo.create_user(user)
    return repo


@pytest.fixture
def courses() -> InMemoryCourseRepository:
    return InMemoryCourseRepository()


@pytest.fixture
def course(courses, instructor) -> Course:
    course = build_course(instructor_id=instructor.id, course_code="CS101")
    courses.create_course(course)
    return course


def _review(repo, course, student, stage, decision, actor):
    return ReviewEnrollmentUseCase(repo).execute(
        ReviewEnrollmentInput(
            course_id=course.id,
            student_id=student.id,
            stage=stage,
            decision=decision,
            actor=actor_for(actor),
        )
    )


# ============================================================================
# Enroll
# ============================================================================


class TestEnrollInCourse:
    def test_student_enrolls_as_pending(self, courses, users, course, student):
        result = EnrollInCourseUseCase(courses, users).execute(
            EnrollInCourseInput(course_id=course.id, actor=actor_for(student))
        )

        assert result.error is None
        assert result.enrollment.status == EnrollmentStatus.PENDING
        assert result.enrollment.student_name == "Alice Student"
        assert result.enrollment.department == "Computer Science"
        assert result.course.version == 2

    def test_duplicate_enrollment_is_conflict(self, courses, users, course, student):
        use_case = EnrollInCourseUseCase(courses, users)
        use_case.execute(EnrollInCourseInput(course_id=course.id, actor=actor_for(student)))

        result = use_case.execute(
            EnrollInCourseInput(course_id=course.id, actor=actor_for(student))
        )

        assert result.error.code == EnrollmentErrorCode.CONFLICT
        assert len(courses.get_course(course.id).enrollments) == 1

    def test_rejected_student_cannot_reenroll(self, courses, users, instructor, student):
        course = build_course(
            instructor_id=instructor.id,
            course_code="MA200",
            enrollments=[build_enrollment(student, status=EnrollmentStatus.REJECTED)],
        )
        courses.create_course(course)

        result = EnrollInCourseUseCase(courses, users).execute(
            EnrollInCourseInput(course_id=course.id, actor=actor_for(student))
        )
        assert result.error.code == EnrollmentErrorCode.CONFLICT

    def test_non_student_is_forbidden(self, courses, users, course, instructor):
        result = EnrollInCourseUseCase(courses, users).execute(
            EnrollInCourseInput(course_id=course.id, actor=actor_for(instructor))
        )
        assert result.error.code == EnrollmentErrorCode.FORBIDDEN

    def test_missing_actor_is_forbidden(self, courses, users, course):
        result = EnrollInCourseUseCase(courses, users).execute(
            EnrollInCourseInput(course_id=course.id, actor=None)
        )
        assert result.error.code == EnrollmentErrorCode.FORBIDDEN

    def test_unknown_course_is_not_found(self, courses, users, student):
        missing = uuid4()
        result = EnrollInCourseUseCase(courses, users).execute(
            EnrollInCourseInput(course_id=missing, actor=actor_for(student))
        )
        assert result.error.code == EnrollmentErrorCode.NOT_FOUND
        assert result.error.resource == "Course"
        assert result.error.resource_id == str(missing)

    def test_unknown_student_is_not_found(self, courses, users, course):
        ghost = build_user()
        result = EnrollInCourseUseCase(courses, users).execute(
            EnrollInCourseInput(course_id=course.id, actor=actor_for(ghost))
        )
        assert result.error.code == EnrollmentErrorCode.NOT_FOUND
        assert result.error.resource == "Student"

    def test_concurrent_write_is_conflict(self, users, instructor, student):
        other = build_user()
        repo = RacingCourseRepository(intruder=build_enrollment(other))
        course = build_course(instructor_id=instructor.id)
        repo.create_course(course)

        result = EnrollInCourseUseCase(repo, users).execute(
            EnrollInCourseInput(course_id=course.id, actor=actor_for(student))
        )

        assert result.error.code == EnrollmentErrorCode.CONFLICT
        stored = repo.get_course(course.id)
        assert [e.student_id for e in stored.enrollments] == [other.id]


# ============================================================================
# Review
# ============================================================================


class TestReviewEnrollment:
    @pytest.fixture
    def pending_course(self, courses, instructor, student) -> Course:
        course = build_course(
            instructor_id=instructor.id,
            course_code="CS201",
            enrollments=[build_enrollment(student)],
        )
        courses.create_course(course)
        return course

    def test_full_approval_flow(
        self, courses, pending_course, student, instructor, faculty_advisor
    ):
        first = _review(
            courses,
            pending_course,
            student,
            ReviewStage.INSTRUCTOR,
            ReviewDecision.APPROVE,
            instructor,
        )
        assert first.error is None
        assert first.enrollment.status == EnrollmentStatus.PENDING_FOR_FA
        assert first.enrollment.updated_at is not None

        second = _review(
            courses,
            pending_course,
            student,
            ReviewStage.FACULTY_ADVISOR,
            ReviewDecision.APPROVE,
            faculty_advisor,
        )
        assert second.error is None
        assert second.enrollment.status == EnrollmentStatus.APPROVED
        assert courses.get_course(pending_course.id).version == 3

    def test_instructor_rejection_is_final(
        self, courses, pending_course, student, instructor, faculty_advisor
    ):
        rejected = _review(
            courses,
            pending_course,
            student,
            ReviewStage.INSTRUCTOR,
            ReviewDecision.REJECT,
            instructor,
        )
        assert rejected.enrollment.status == EnrollmentStatus.REJECTED

        for stage, actor in (
            (ReviewStage.INSTRUCTOR, instructor),
            (ReviewStage.FACULTY_ADVISOR, faculty_advisor),
        ):
            again = _review(
                courses, pending_course, student, stage, ReviewDecision.APPROVE, actor
            )
            assert again.error.code == EnrollmentErrorCode.CONFLICT
            assert "already finalized" in again.error.message

    @pytest.mark.parametrize(
        "status", [EnrollmentStatus.APPROVED, EnrollmentStatus.ENROLLED]
    )
    def test_finalized_enrollment_rejects_any_review(
        self, courses, instructor, faculty_advisor, student, status
    ):
        course = build_course(
            instructor_id=instructor.id,
            course_code="CS301",
            enrollments=[build_enrollment(student, status=status)],
        )
        courses.create_course(course)

        for stage, actor in (
            (ReviewStage.INSTRUCTOR, instructor),
            (ReviewStage.FACULTY_ADVISOR, faculty_advisor),
        ):
            result = _review(
                courses, course, student, stage, ReviewDecision.REJECT, actor
            )
            assert result.error.code == EnrollmentErrorCode.CONFLICT
            assert result.error.message == (
                f"Enrollment is already finalized ('{status.value}')."
            )

        assert courses.get_course(course.id).version == 1

    def test_faculty_advisor_cannot_skip_instructor_stage(
        self, courses, pending_course, student, faculty_advisor
    ):
        result = _review(
            courses,
            pending_course,
            student,
            ReviewStage.FACULTY_ADVISOR,
            ReviewDecision.APPROVE,
            faculty_advisor,
        )
        assert result.error.code == EnrollmentErrorCode.CONFLICT
        assert "Pending for FA" in result.error.message

    def test_other_instructor_is_forbidden(self, courses, pending_course, student):
        stranger = build_user(category=UserCategory.INSTRUCTOR)
        result = _review(
            courses,
            pending_course,
            student,
            ReviewStage.INSTRUCTOR,
            ReviewDecision.APPROVE,
            stranger,
        )
        assert result.error.code == EnrollmentErrorCode.FORBIDDEN
        assert (
            courses.get_course(pending_course.id).enrollments[0].status
            == EnrollmentStatus.PENDING
        )

    def test_faculty_advisor_from_other_department_is_forbidden(
        self, courses, instructor, student
    ):
        course = build_course(
            instructor_id=instructor.id,
            enrollments=[build_enrollment(student, status=EnrollmentStatus.PENDING_FOR_FA)],
        )
        courses.create_course(course)
        math_advisor = build_user(
            category=UserCategory.INSTRUCTOR,
            department="Mathematics",
            is_faculty_advisor=True,
        )

        result = _review(
            courses,
            course,
            student,
            ReviewStage.FACULTY_ADVISOR,
            ReviewDecision.APPROVE,
            math_advisor,
        )
        assert result.error.code == EnrollmentErrorCode.FORBIDDEN

    def test_approving_approved_enrollment_is_conflict(
        self, courses, instructor, student, faculty_advisor
    ):
        course = build_course(
            instructor_id=instructor.id,
            enrollments=[build_enrollment(student, status=EnrollmentStatus.APPROVED)],
        )
        courses.create_course(course)

        result = _review(
            courses,
            course,
            student,
            ReviewStage.FACULTY_ADVISOR,
            ReviewDecision.APPROVE,
            faculty_advisor,
        )
        assert result.error.code == EnrollmentErrorCode.CONFLICT

    def test_unknown_course_and_enrollment(
        self, courses, pending_course, instructor, student
    ):
        missing_course = build_course(instructor_id=instructor.id, course_code="NOPE")
        result = _review(
            courses,
            missing_course,
            student,
            ReviewStage.INSTRUCTOR,
            ReviewDecision.APPROVE,
            instructor,
        )
        assert result.error.code == EnrollmentErrorCode.NOT_FOUND
        assert result.error.resource == "Course"

        stranger = build_user()
        result = _review(
            courses,
            pending_course,
            stranger,
            ReviewStage.INSTRUCTOR,
            ReviewDecision.APPROVE,
            instructor,
        )
        assert result.error.code == EnrollmentErrorCode.NOT_FOUND
        assert result.error.resource == "Enrollment"

    def test_concurrent_write_is_conflict(self, instructor, student):
        repo = RacingCourseRepository(intruder=build_enrollment(build_user()))
        course = build_course(
            instructor_id=instructor.id, enrollments=[build_enrollment(student)]
        )
        repo.create_course(course)

        result = _review(
            repo,
            course,
            student,
            ReviewStage.INSTRUCTOR,
            ReviewDecision.APPROVE,
            instructor,
        )

        assert result.error.code == EnrollmentErrorCode.CONFLICT
        stored = repo.get_course(course.id).find_enrollment(student.id)
        assert stored.status == EnrollmentStatus.PENDING


# ============================================================================
# Views
# ============================================================================


class TestPendingViews:
    def test_instructor_sees_only_pending_of_own_courses(
        self, courses, instructor, student
    ):
        other_student = build_user()
        mine = build_course(
            instructor_id=instructor.id,
            course_code="MINE1",
            enrollments=[
                build_enrollment(student),
                build_enrollment(other_student, status=EnrollmentStatus.PENDING_FOR_FA),
            ],
        )
        quiet = build_course(
            instructor_id=instructor.id,
            course_code="MINE2",
            enrollments=[build_enrollment(student, status=EnrollmentStatus.APPROVED)],
        )
        foreign = build_course(
            instructor_id=uuid4(),
            course_code="OTHER",
            enrollments=[build_enrollment(student)],
        )
        for c in (mine, quiet, foreign):
            courses.create_course(c)

        result = ListInstructorPendingEnrollmentsUseCase(courses).execute(instructor.id)

        assert result.error is None
        assert [g.course.id for g in result.groups] == [mine.id]
        assert [e.student_id for e in result.groups[0].enrollments] == [student.id]

    def test_faculty_advisor_sees_department_matches_across_courses(self, courses):
        cs_student = build_user(department="Computer Science")
        math_student = build_user(department="Mathematics")
        first = build_course(
            instructor_id=uuid4(),
            course_code="A1",
            enrollments=[
                build_enrollment(cs_student, status=EnrollmentStatus.PENDING_FOR_FA),
                build_enrollment(math_student, status=EnrollmentStatus.PENDING_FOR_FA),
            ],
        )
        second = build_course(
            instructor_id=uuid4(),
            course_code="B2",
            enrollments=[build_enrollment(math_student, status=EnrollmentStatus.PENDING_FOR_FA)],
        )
        third = build_course(
            instructor_id=uuid4(),
            course_code="C3",
            enrollments=[build_enrollment(cs_student)],
        )
        for c in (first, second, third):
            courses.create_course(c)

        result = ListFacultyAdvisorPendingEnrollmentsUseCase(courses).execute(
            " computer science "
        )

        assert [g.course.id for g in result.groups] == [first.id]
        assert [e.student_id for e in result.groups[0].enrollments] == [cs_student.id]

    def test_faculty_advisor_without_department(self, courses):
        result = ListFacultyAdvisorPendingEnrollmentsUseCase(courses).execute("  ")
        assert result.error.code == EnrollmentErrorCode.VALIDATION_ERROR

    def test_empty_views(self, courses, instructor):
        assert ListInstructorPendingEnrollmentsUseCase(courses).execute(instructor.id).groups == []
        assert (
            ListFacultyAdvisorPendingEnrollmentsUseCase(courses)
            .execute("Computer Science")
            .groups
            == []
        )


class TestStudentEnrollments:
    def test_lists_every_status_with_instructor_name(
        self, courses, users, instructor, student
    ):
        approved = build_course(
            instructor_id=instructor.id,
            course_code="APP1",
            enrollments=[build_enrollment(student, status=EnrollmentStatus.APPROVED)],
        )
        rejected = build_course(
            instructor_id=instructor.id,
            course_code="REJ1",
            enrollments=[build_enrollment(student, status=EnrollmentStatus.REJECTED)],
        )
        unrelated = build_course(instructor_id=instructor.id, course_code="NONE")
        for c in (approved, rejected, unrelated):
            courses.create_course(c)

        result = ListStudentEnrollmentsUseCase(courses, users).execute(student.id)

        statuses = {item.course.course_code: item.enrollment.status for item in result.items}
        assert statuses == {
            "APP1": EnrollmentStatus.APPROVED,
            "REJ1": EnrollmentStatus.REJECTED,
        }
        assert {item.instructor_name for item in result.items} == {"Bob Instructor"}

    def test_student_without_enrollments(self, courses, users, student):
        assert ListStudentEnrollmentsUseCase(courses, users).execute(student.id).items == []
