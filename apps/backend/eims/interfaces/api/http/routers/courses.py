"""
===============================================================================
TARJETA CRC — eims/interfaces/api/http/routers/courses.py
===============================================================================

Class/Module:
    Courses Router

Responsibilities:
    - Alta de cursos (Admin).
    - Catálogo paginado (Student).
    - "Mis cursos" y roster de aprobados (Instructor).
    - Traducir CourseError -> RFC7807.

Collaborators:
    - eims.application.usecases.courses
    - eims.identity.permissions
    - eims.container
    - schemas.courses
===============================================================================
"""

from __future__ import annotations

from eims.application.usecases.courses import (
    CreateCourseInput,
    CreateCourseUseCase,
    ListAvailableCoursesUseCase,
    ListCourseStudentsUseCase,
    ListInstructorCoursesUseCase,
)
from eims.container import (
    get_create_course_use_case,
    get_list_available_courses_use_case,
    get_list_course_students_use_case,
    get_list_instructor_courses_use_case,
)
from eims.identity.permissions import Permission, require_permission
from eims.identity.users import User
from fastapi import APIRouter, Depends, Query, status

from ..dependencies import (
    to_course_res,
    to_course_summary_res,
    to_enrollment_actor,
    to_enrollment_res,
)
from ..error_mapping import raise_course_error
from ..schemas.courses import (
    CourseEnvelopeRes,
    CoursesPageRes,
    CourseStudentsRes,
    CreateCourseReq,
    InstructorCoursesRes,
)

router = APIRouter()


@router.post(
    "/add-course",
    response_model=CourseEnvelopeRes,
    status_code=status.HTTP_201_CREATED,
    tags=["courses"],
)
def add_course(
    req: CreateCourseReq,
    use_case: CreateCourseUseCase = Depends(get_create_course_use_case),
    _user: User = Depends(require_permission(Permission.COURSES_CREATE)),
):
    result = use_case.execute(
        CreateCourseInput(
            title=req.title,
            course_code=req.course_code,
            credits=req.credits,
            instructor_id=req.instructor,
        )
    )
    if result.error is not None:
        raise_course_error(result.error)
    return CourseEnvelopeRes(
        message="Course added successfully", course=to_course_res(result.course)
    )


@router.get("/available-courses", response_model=CoursesPageRes, tags=["courses"])
def available_courses(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    use_case: ListAvailableCoursesUseCase = Depends(
        get_list_available_courses_use_case
    ),
    _user: User = Depends(require_permission(Permission.COURSES_BROWSE)),
):
    result = use_case.execute(page=page, limit=limit)
    if result.error is not None:
        raise_course_error(result.error)

    window = result.page
    return CoursesPageRes(
        courses=[to_course_summary_res(c) for c in window.items],
        page=window.page,
        limit=window.limit,
        total=window.total,
        total_pages=window.total_pages,
    )


@router.get("/FetchCourses", response_model=InstructorCoursesRes, tags=["courses"])
def fetch_instructor_courses(
    use_case: ListInstructorCoursesUseCase = Depends(
        get_list_instructor_courses_use_case
    ),
    user: User = Depends(require_permission(Permission.COURSES_LIST_OWNED)),
):
    result = use_case.execute(user.id)
    if result.error is not None:
        raise_course_error(result.error)
    return InstructorCoursesRes(courses=[to_course_res(c) for c in result.courses])


@router.get(
    "/FetchStudents/{course_code}",
    response_model=CourseStudentsRes,
    tags=["courses"],
)
def fetch_course_students(
    course_code: str,
    use_case: ListCourseStudentsUseCase = Depends(get_list_course_students_use_case),
    user: User = Depends(require_permission(Permission.COURSE_ROSTER_VIEW)),
):
    result = use_case.execute(course_code=course_code, actor=to_enrollment_actor(user))
    if result.error is not None:
        raise_course_error(result.error)
    return CourseStudentsRes(
        course_code=result.course.course_code,
        students=[to_enrollment_res(e) for e in result.students],
    )
