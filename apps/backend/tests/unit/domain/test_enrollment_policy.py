"""
Name: Enrollment Policy Tests

Responsibilities:
  - Validate the transition table (legal moves, terminal states)
  - Cover actor decisions per action (enroll, instructor review, FA review)
"""

from uuid import uuid4

import pytest

from factories import actor_for, build_course, build_enrollment, build_user
from eims.domain.entities import EnrollmentStatus
from eims.domain.enrollment_policy import (
    EnrollmentActor,
    ReviewDecision,
    ReviewStage,
    can_enroll,
    can_review,
    can_review_as_faculty_advisor,
    can_review_as_instructor,
    can_view_course_roster,
    resolve_transition,
)
from eims.identity.users import UserCategory

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "current, stage, decision, expected",
    [
        (
            EnrollmentStatus.PENDING,
            ReviewStage.INSTRUCTOR,
            ReviewDecision.APPROVE,
            EnrollmentStatus.PENDING_FOR_FA,
        ),
        (
            EnrollmentStatus.PENDING,
            ReviewStage.INSTRUCTOR,
            ReviewDecision.REJECT,
            EnrollmentStatus.REJECTED,
        ),
        (
            EnrollmentStatus.PENDING_FOR_FA,
            ReviewStage.FACULTY_ADVISOR,
            ReviewDecision.APPROVE,
            EnrollmentStatus.APPROVED,
        ),
        (
            EnrollmentStatus.PENDING_FOR_FA,
            ReviewStage.FACULTY_ADVISOR,
            ReviewDecision.REJECT,
            EnrollmentStatus.REJECTED,
        ),
    ],
)
def test_legal_transitions(current, stage, decision, expected):
    assert resolve_transition(current, stage, decision) == expected


@pytest.mark.parametrize(
    "current, stage",
    [
        (EnrollmentStatus.PENDING, ReviewStage.FACULTY_ADVISOR),
        (EnrollmentStatus.PENDING_FOR_FA, ReviewStage.INSTRUCTOR),
        (EnrollmentStatus.APPROVED, ReviewStage.INSTRUCTOR),
        (EnrollmentStatus.APPROVED, ReviewStage.FACULTY_ADVISOR),
        (EnrollmentStatus.REJECTED, ReviewStage.INSTRUCTOR),
        (EnrollmentStatus.REJECTED, ReviewStage.FACULTY_ADVISOR),
        (EnrollmentStatus.ENROLLED, ReviewStage.FACULTY_ADVISOR),
    ],
)
def test_illegal_transitions_resolve_to_none(current, stage):
    for decision in ReviewDecision:
        assert resolve_transition(current, stage, decision) is None


def test_final_statuses():
    assert EnrollmentStatus.APPROVED.is_final
    assert EnrollmentStatus.REJECTED.is_final
    assert EnrollmentStatus.ENROLLED.is_final
    assert not EnrollmentStatus.PENDING.is_final
    assert not EnrollmentStatus.PENDING_FOR_FA.is_final


def test_only_students_can_enroll(student, instructor, admin):
    assert can_enroll(actor_for(student)) is True
    assert can_enroll(actor_for(instructor)) is False
    assert can_enroll(actor_for(admin)) is False
    assert can_enroll(None) is False
    assert can_enroll(EnrollmentActor(user_id=None, category=UserCategory.STUDENT)) is False


def test_instructor_review_requires_course_owner(student, instructor):
    course = build_course(instructor_id=instructor.id)
    other = build_user(category=UserCategory.INSTRUCTOR)

    assert can_review_as_instructor(course, actor_for(instructor)) is True
    assert can_review_as_instructor(course, actor_for(other)) is False
    assert can_review_as_instructor(course, actor_for(student)) is False
    assert can_review_as_instructor(course, None) is False


def test_faculty_advisor_review_matches_department(student, faculty_advisor):
    enrollment = build_enrollment(student, status=EnrollmentStatus.PENDING_FOR_FA)

    assert can_review_as_faculty_advisor(enrollment, actor_for(faculty_advisor)) is True

    other_department = build_user(
        category=UserCategory.INSTRUCTOR,
        department="Mathematics",
        is_faculty_advisor=True,
    )
    assert can_review_as_faculty_advisor(enrollment, actor_for(other_department)) is False


def test_faculty_advisor_department_comparison_is_normalized(student):
    enrollment = build_enrollment(student)
    advisor = build_user(
        category=UserCategory.INSTRUCTOR,
        department="  computer   SCIENCE ",
        is_faculty_advisor=True,
    )
    assert can_review_as_faculty_advisor(enrollment, actor_for(advisor)) is True


def test_faculty_advisor_review_requires_flag_and_instructor(student, instructor):
    enrollment = build_enrollment(student)
    assert can_review_as_faculty_advisor(enrollment, actor_for(instructor)) is False

    flagged_student = EnrollmentActor(
        user_id=uuid4(),
        category=UserCategory.STUDENT,
        department=student.department,
        is_faculty_advisor=True,
    )
    assert can_review_as_faculty_advisor(enrollment, flagged_student) is False


def test_faculty_advisor_with_blank_department_is_denied():
    enrollment_owner = build_user(department="")
    enrollment = build_enrollment(enrollment_owner)
    advisor = build_user(
        category=UserCategory.INSTRUCTOR, department="", is_faculty_advisor=True
    )
    assert can_review_as_faculty_advisor(enrollment, actor_for(advisor)) is False


def test_can_review_dispatches_by_stage(student, instructor, faculty_advisor):
    course = build_course(instructor_id=instructor.id)
    enrollment = build_enrollment(student)

    assert can_review(ReviewStage.INSTRUCTOR, course, enrollment, actor_for(instructor))
    assert not can_review(
        ReviewStage.FACULTY_ADVISOR, course, enrollment, actor_for(instructor)
    )
    assert can_review(
        ReviewStage.FACULTY_ADVISOR, course, enrollment, actor_for(faculty_advisor)
    )


def test_roster_visible_to_course_instructor_only(instructor, faculty_advisor):
    course = build_course(instructor_id=instructor.id)
    assert can_view_course_roster(course, actor_for(instructor)) is True
    assert can_view_course_roster(course, actor_for(faculty_advisor)) is False
