"""
===============================================================================
TARJETA CRC — eims/interfaces/api/http/routers/enrollments.py
===============================================================================

Class/Module:
    Enrollments Router

Responsibilities:
    - Inscripción de estudiantes y su listado.
    - Revisión de primera etapa (Instructor) y final (Faculty Advisor).
    - Vistas de pendientes por autoridad revisora.
    - Traducir EnrollmentError -> RFC7807.

Collaborators:
    - eims.application.usecases.enrollment
    - eims.domain.enrollment_policy (ReviewStage / ReviewDecision)
    - eims.identity.permissions
    - eims.container
    - schemas.enrollments

Notas:
    - El status del body se traduce a una decisión (approve / reject);
      el estado destino lo decide la tabla de transiciones.
===============================================================================
"""

from __future__ import annotations

from eims.application.usecases.enrollment import (
    EnrollInCourseInput,
    EnrollInCourseUseCase,
    EnrollmentResult,
    ListFacultyAdvisorPendingEnrollmentsUseCase,
    ListInstructorPendingEnrollmentsUseCase,
    ListStudentEnrollmentsUseCase,
    PendingEnrollmentsResult,
    ReviewEnrollmentInput,
    ReviewEnrollmentUseCase,
)
from eims.container import (
    get_enroll_in_course_use_case,
    get_faculty_advisor_pending_enrollments_use_case,
    get_instructor_pending_enrollments_use_case,
    get_review_enrollment_use_case,
    get_student_enrollments_use_case,
)
from eims.domain.enrollment_policy import ReviewDecision, ReviewStage
from eims.identity.permissions import Permission, require_permission
from eims.identity.users import User
from fastapi import APIRouter, Depends, status

from ..dependencies import to_enrollment_actor, to_enrollment_res
from ..error_mapping import raise_enrollment_error
from ..schemas.enrollments import (
    EnrollCourseReq,
    EnrolledCourseRes,
    EnrolledCoursesRes,
    EnrollmentEnvelopeRes,
    FacultyAdvisorReviewReq,
    InstructorReviewReq,
    PendingCourseRes,
    PendingEnrollmentsRes,
)

router = APIRouter()

# Status pedido -> decisión. "Approved" en la etapa Instructor es sinónimo
# de "Pending for FA" (el Instructor no puede finalizar una inscripción).
_INSTRUCTOR_DECISIONS: dict[str, ReviewDecision] = {
    "Pending for FA": ReviewDecision.APPROVE,
    "Approved": ReviewDecision.APPROVE,
    "Rejected": ReviewDecision.REJECT,
}

_FACULTY_ADVISOR_DECISIONS: dict[str, ReviewDecision] = {
    "Approved": ReviewDecision.APPROVE,
    "Rejected": ReviewDecision.REJECT,
}


def _to_envelope(result: EnrollmentResult, message: str) -> EnrollmentEnvelopeRes:
    if result.error is not None:
        raise_enrollment_error(result.error)
    return EnrollmentEnvelopeRes(
        message=message,
        course_id=result.course.id,
        enrollment=to_enrollment_res(result.enrollment),
    )


def _to_pending_res(result: PendingEnrollmentsResult) -> PendingEnrollmentsRes:
    if result.error is not None:
        raise_enrollment_error(result.error)
    return PendingEnrollmentsRes(
        pending_enrollments=[
            PendingCourseRes(
                course_id=group.course.id,
                title=group.course.title,
                course_code=group.course.course_code,
                pending_students=[to_enrollment_res(e) for e in group.enrollments],
            )
            for group in result.groups
        ]
    )


# =============================================================================
# Student
# =============================================================================


@router.post(
    "/enroll-course",
    response_model=EnrollmentEnvelopeRes,
    status_code=status.HTTP_201_CREATED,
    tags=["enrollments"],
)
def enroll_course(
    req: EnrollCourseReq,
    use_case: EnrollInCourseUseCase = Depends(get_enroll_in_course_use_case),
    user: User = Depends(require_permission(Permission.ENROLLMENT_CREATE)),
):
    result = use_case.execute(
        EnrollInCourseInput(course_id=req.course_id, actor=to_enrollment_actor(user))
    )
    return _to_envelope(result, "Enrollment request sent")


@router.get(
    "/enrolled-courses", response_model=EnrolledCoursesRes, tags=["enrollments"]
)
def enrolled_courses(
    use_case: ListStudentEnrollmentsUseCase = Depends(
        get_student_enrollments_use_case
    ),
    user: User = Depends(require_permission(Permission.ENROLLMENTS_LIST_OWN)),
):
    result = use_case.execute(user.id)
    if result.error is not None:
        raise_enrollment_error(result.error)
    return EnrolledCoursesRes(
        enrolled_courses=[
            EnrolledCourseRes(
                course_id=item.course.id,
                title=item.course.title,
                course_code=item.course.course_code,
                credits=item.course.credits,
                instructor_id=item.course.instructor_id,
                instructor_name=item.instructor_name,
                status=item.enrollment.status,
                enrollment_date=item.enrollment.enrollment_date,
            )
            for item in result.items
        ]
    )


# =============================================================================
# Instructor
# =============================================================================


@router.get(
    "/instructor/pending-enrollments",
    response_model=PendingEnrollmentsRes,
    tags=["enrollments"],
)
def instructor_pending_enrollments(
    use_case: ListInstructorPendingEnrollmentsUseCase = Depends(
        get_instructor_pending_enrollments_use_case
    ),
    user: User = Depends(require_permission(Permission.ENROLLMENTS_REVIEW_INSTRUCTOR)),
):
    return _to_pending_res(use_case.execute(user.id))


@router.post(
    "/instructor/update-enrollment",
    response_model=EnrollmentEnvelopeRes,
    tags=["enrollments"],
)
def instructor_update_enrollment(
    req: InstructorReviewReq,
    use_case: ReviewEnrollmentUseCase = Depends(get_review_enrollment_use_case),
    user: User = Depends(require_permission(Permission.ENROLLMENTS_REVIEW_INSTRUCTOR)),
):
    result = use_case.execute(
        ReviewEnrollmentInput(
            course_id=req.course_id,
            student_id=req.student_id,
            stage=ReviewStage.INSTRUCTOR,
            decision=_INSTRUCTOR_DECISIONS[req.status],
            actor=to_enrollment_actor(user),
        )
    )
    return _to_envelope(result, "Enrollment status updated")


# =============================================================================
# Faculty Advisor
# =============================================================================


@router.get("/getApproved", response_model=PendingEnrollmentsRes, tags=["enrollments"])
def faculty_advisor_pending_enrollments(
    use_case: ListFacultyAdvisorPendingEnrollmentsUseCase = Depends(
        get_faculty_advisor_pending_enrollments_use_case
    ),
    user: User = Depends(
        require_permission(Permission.ENROLLMENTS_REVIEW_FACULTY_ADVISOR)
    ),
):
    return _to_pending_res(use_case.execute(user.department))


@router.post("/UpdateStatus", response_model=EnrollmentEnvelopeRes, tags=["enrollments"])
def faculty_advisor_update_status(
    req: FacultyAdvisorReviewReq,
    use_case: ReviewEnrollmentUseCase = Depends(get_review_enrollment_use_case),
    user: User = Depends(
        require_permission(Permission.ENROLLMENTS_REVIEW_FACULTY_ADVISOR)
    ),
):
    result = use_case.execute(
        ReviewEnrollmentInput(
            course_id=req.course_id,
            student_id=req.student_id,
            stage=ReviewStage.FACULTY_ADVISOR,
            decision=_FACULTY_ADVISOR_DECISIONS[req.status],
            actor=to_enrollment_actor(user),
        )
    )
    return _to_envelope(result, "Enrollment status updated")
