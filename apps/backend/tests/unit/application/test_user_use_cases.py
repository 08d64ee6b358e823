"""
Name: User Use Case Tests

Responsibilities:
  - Create user (validation, unique email, FA flag only for instructors)
  - Get / list users
"""

from uuid import uuid4

import pytest

from eims.application.usecases.users import (
    CreateUserInput,
    CreateUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UserErrorCode,
)
from eims.identity.users import UserCategory
from eims.infrastructure.repositories import InMemoryUserRepository

pytestmark = pytest.mark.unit


def _fake_hasher(password: str) -> str:
    return f"hashed::{password}"


def _input(**overrides) -> CreateUserInput:
    data = dict(
        full_name="Alice Student",
        email="Alice@Example.com",
        password="password123",
        category=UserCategory.STUDENT,
        department="Computer Science",
    )
    data.update(overrides)
    return CreateUserInput(**data)


@pytest.fixture
def repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


class TestCreateUser:
    def test_creates_user_with_hashed_password(self, repo):
        result = CreateUserUseCase(repo, password_hasher=_fake_hasher).execute(_input())

        assert result.error is None
        assert result.user.email == "alice@example.com"
        assert result.user.password_hash == "hashed::password123"
        assert result.user.created_at is not None
        assert repo.get_user_by_email("alice@example.com") is not None

    def test_duplicate_email_is_conflict(self, repo):
        use_case = CreateUserUseCase(repo, password_hasher=_fake_hasher)
        use_case.execute(_input())

        result = use_case.execute(_input(email=" ALICE@example.com"))
        assert result.error.code == UserErrorCode.CONFLICT

    @pytest.mark.parametrize(
        "overrides",
        [
            {"full_name": " "},
            {"email": "not-an-email"},
            {"department": ""},
            {"password": "short"},
            {"category": "Janitor"},
        ],
    )
    def test_validation_errors(self, repo, overrides):
        result = CreateUserUseCase(repo, password_hasher=_fake_hasher).execute(
            _input(**overrides)
        )
        assert result.error.code == UserErrorCode.VALIDATION_ERROR
        assert repo.list_users() == []

    def test_faculty_advisor_flag_only_for_instructors(self, repo):
        use_case = CreateUserUseCase(repo, password_hasher=_fake_hasher)

        student = use_case.execute(_input(is_faculty_advisor=True)).user
        advisor = use_case.execute(
            _input(
                email="carol@example.com",
                category=UserCategory.INSTRUCTOR,
                is_faculty_advisor=True,
            )
        ).user

        assert student.is_faculty_advisor is False
        assert advisor.is_faculty_advisor is True
        assert advisor.acts_as_faculty_advisor is True


class TestReadUsers:
    def test_get_user(self, repo):
        created = CreateUserUseCase(repo, password_hasher=_fake_hasher).execute(_input()).user

        assert GetUserUseCase(repo).execute(created.id).user.id == created.id

        missing = GetUserUseCase(repo).execute(uuid4())
        assert missing.error.code == UserErrorCode.NOT_FOUND

    def test_list_users_by_category(self, repo):
        use_case = CreateUserUseCase(repo, password_hasher=_fake_hasher)
        use_case.execute(_input())
        use_case.execute(
            _input(email="bob@example.com", category=UserCategory.INSTRUCTOR)
        )

        instructors = ListUsersUseCase(repo).execute(category=UserCategory.INSTRUCTOR)
        assert [u.email for u in instructors.users] == ["bob@example.com"]
        assert len(ListUsersUseCase(repo).execute().users) == 2
