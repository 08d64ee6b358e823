"""
===============================================================================
TARJETA CRC — eims/interfaces/api/http/routers/users.py
===============================================================================

Class/Module:
    Users Router (Admin)

Responsibilities:
    - Exponer alta, listado y detalle de usuarios.
    - Exponer el pick-list de Instructores para el alta de cursos.
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir UserError -> RFC7807.

Collaborators:
    - eims.application.usecases.users
    - eims.identity.permissions (require_permission)
    - eims.container (factories DI)
    - schemas.users (DTOs Pydantic)
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from eims.application.usecases.users import (
    CreateUserInput,
    CreateUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
)
from eims.container import (
    get_create_user_use_case,
    get_get_user_use_case,
    get_list_users_use_case,
)
from eims.identity.permissions import Permission, require_permission
from eims.identity.users import User, UserCategory
from fastapi import APIRouter, Depends, Query, status

from ..dependencies import to_user_res
from ..error_mapping import raise_user_error
from ..schemas.users import (
    CreateUserReq,
    InstructorsListRes,
    UserDetailsRes,
    UserEnvelopeRes,
    UsersListRes,
)

router = APIRouter()


@router.get("/all-users", response_model=UsersListRes, tags=["users"])
def list_all_users(
    category: UserCategory | None = Query(None),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
    _user: User = Depends(require_permission(Permission.USERS_LIST)),
):
    result = use_case.execute(category=category)
    if result.error is not None:
        raise_user_error(result.error)
    return UsersListRes(users=[to_user_res(u) for u in result.users])


@router.post(
    "/add-user",
    response_model=UserEnvelopeRes,
    status_code=status.HTTP_201_CREATED,
    tags=["users"],
)
def add_user(
    req: CreateUserReq,
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
    _user: User = Depends(require_permission(Permission.USERS_CREATE)),
):
    result = use_case.execute(
        CreateUserInput(
            full_name=req.full_name,
            email=req.email,
            password=req.password,
            category=req.category,
            department=req.department,
            is_faculty_advisor=req.fa,
        )
    )
    if result.error is not None:
        raise_user_error(result.error)
    return UserEnvelopeRes(
        message="User created successfully", user=to_user_res(result.user)
    )


@router.get("/view-user/{user_id}", response_model=UserDetailsRes, tags=["users"])
def view_user(
    user_id: UUID,
    use_case: GetUserUseCase = Depends(get_get_user_use_case),
    _user: User = Depends(require_permission(Permission.USERS_VIEW)),
):
    result = use_case.execute(user_id)
    if result.error is not None:
        raise_user_error(result.error)
    return UserDetailsRes(user_details=to_user_res(result.user))


@router.get("/instructors", response_model=InstructorsListRes, tags=["users"])
def list_instructors(
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
    _user: User = Depends(require_permission(Permission.INSTRUCTORS_LIST)),
):
    result = use_case.execute(category=UserCategory.INSTRUCTOR)
    if result.error is not None:
        raise_user_error(result.error)
    return InstructorsListRes(instructors=[to_user_res(u) for u in result.users])
