"""
Name: JWT Auth + Permission Tests

Responsibilities:
  - Token issue / decode round trip and rejection paths
  - require_user: missing token -> 401, bad token / unknown user -> 403
  - require_permission: category matrix
  - Argon2 password helpers
"""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from factories import build_user
from eims.api.exception_handlers import register_exception_handlers
from eims.container import get_user_repository
from eims.crosscutting.error_responses import AppHTTPException
from eims.identity.auth_users import (
    AuthSettings,
    authenticate_user,
    create_access_token,
    decode_access_token,
    get_auth_settings,
    require_user,
)
from eims.identity.passwords import hash_password, verify_password
from eims.identity.permissions import Permission, is_allowed, require_permission
from eims.identity.users import User, UserCategory
from eims.infrastructure.repositories import InMemoryUserRepository

pytestmark = pytest.mark.unit

SETTINGS = AuthSettings(jwt_secret="test-secret", jwt_access_ttl_minutes=30)


def _build_app(users: InMemoryUserRepository) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/me")
    def me(user: User = Depends(require_user())):
        return {"id": str(user.id)}

    @app.get("/admin-only")
    def admin_only(_: User = Depends(require_permission(Permission.USERS_LIST))):
        return {"ok": True}

    app.dependency_overrides[get_auth_settings] = lambda: SETTINGS
    app.dependency_overrides[get_user_repository] = lambda: users
    return app


class TestTokens:
    def test_round_trip(self):
        user = build_user(category=UserCategory.INSTRUCTOR)
        token, expires_in = create_access_token(user, SETTINGS)

        payload = decode_access_token(token, SETTINGS)

        assert expires_in == 30 * 60
        assert payload.user_id == str(user.id)
        assert payload.category == UserCategory.INSTRUCTOR

    def test_wrong_secret_is_forbidden(self):
        token, _ = create_access_token(build_user(), SETTINGS)
        other = AuthSettings(jwt_secret="another-secret", jwt_access_ttl_minutes=30)

        with pytest.raises(AppHTTPException) as exc_info:
            decode_access_token(token, other)
        assert exc_info.value.status_code == 403

    def test_expired_token_is_forbidden(self):
        user = build_user()
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = jwt.encode(
            {
                "sub": str(user.id),
                "email": user.email,
                "category": user.category.value,
                "iat": int(past.timestamp()),
                "exp": int((past + timedelta(minutes=5)).timestamp()),
                "typ": "access",
            },
            SETTINGS.jwt_secret,
            algorithm="HS256",
        )

        with pytest.raises(AppHTTPException) as exc_info:
            decode_access_token(token, SETTINGS)
        assert exc_info.value.status_code == 403
        assert "expirado" in exc_info.value.detail


class TestRequireUser:
    def test_missing_token_is_unauthorized(self):
        client = TestClient(_build_app(InMemoryUserRepository()))

        response = client.get("/me")

        assert response.status_code == 401
        body = response.json()
        assert body["error"] is True
        assert body["code"] == "UNAUTHORIZED"
        assert body["message"] == body["detail"]

    def test_malformed_header_is_unauthorized(self):
        client = TestClient(_build_app(InMemoryUserRepository()))
        response = client.get("/me", headers={"Authorization": "Token abc"})
        assert response.status_code == 401

    def test_invalid_token_is_forbidden(self):
        client = TestClient(_build_app(InMemoryUserRepository()))
        response = client.get("/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 403

    def test_unknown_user_is_forbidden(self):
        token, _ = create_access_token(build_user(), SETTINGS)
        client = TestClient(_build_app(InMemoryUserRepository()))

        response = client.get("/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 403

    def test_valid_token_resolves_user(self):
        users = InMemoryUserRepository()
        user = build_user()
        users.create_user(user)
        token, _ = create_access_token(user, SETTINGS)
        client = TestClient(_build_app(users))

        response = client.get("/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json() == {"id": str(user.id)}

    def test_permission_denied_is_forbidden(self):
        users = InMemoryUserRepository()
        admin = build_user(category=UserCategory.ADMIN)
        student = build_user()
        users.create_user(admin)
        users.create_user(student)
        client = TestClient(_build_app(users))

        admin_token, _ = create_access_token(admin, SETTINGS)
        student_token, _ = create_access_token(student, SETTINGS)

        ok = client.get("/admin-only", headers={"Authorization": f"Bearer {admin_token}"})
        denied = client.get(
            "/admin-only", headers={"Authorization": f"Bearer {student_token}"}
        )

        assert ok.status_code == 200
        assert denied.status_code == 403
        assert denied.json()["code"] == "FORBIDDEN"


class TestPermissions:
    @pytest.mark.parametrize(
        "permission, category, fa, expected",
        [
            (Permission.USERS_CREATE, UserCategory.ADMIN, False, True),
            (Permission.USERS_CREATE, UserCategory.INSTRUCTOR, False, False),
            (Permission.COURSES_CREATE, UserCategory.ADMIN, False, True),
            (Permission.COURSES_BROWSE, UserCategory.STUDENT, False, True),
            (Permission.COURSES_BROWSE, UserCategory.INSTRUCTOR, False, False),
            (Permission.ENROLLMENT_CREATE, UserCategory.STUDENT, False, True),
            (Permission.ENROLLMENT_CREATE, UserCategory.ADMIN, False, False),
            (Permission.ENROLLMENTS_REVIEW_INSTRUCTOR, UserCategory.INSTRUCTOR, False, True),
            (Permission.ENROLLMENTS_REVIEW_FACULTY_ADVISOR, UserCategory.INSTRUCTOR, False, False),
            (Permission.ENROLLMENTS_REVIEW_FACULTY_ADVISOR, UserCategory.INSTRUCTOR, True, True),
            (Permission.ENROLLMENTS_REVIEW_FACULTY_ADVISOR, UserCategory.STUDENT, True, False),
            (Permission.USERS_VIEW, UserCategory.STUDENT, False, True),
        ],
    )
    def test_matrix(self, permission, category, fa, expected):
        user = build_user(category=category, is_faculty_advisor=fa)
        assert is_allowed(user, permission) is expected

    def test_anonymous_is_denied(self):
        assert is_allowed(None, Permission.USERS_VIEW) is False


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("password123")
        assert hashed != "password123"
        assert verify_password("password123", hashed) is True
        assert verify_password("wrong", hashed) is False
        assert verify_password("password123", "not-a-hash") is False

    def test_authenticate_user(self):
        users = InMemoryUserRepository()
        user = build_user(email="alice@example.com", password_hash=hash_password("secret-pw"))
        users.create_user(user)

        assert authenticate_user(" ALICE@example.com", "secret-pw", users).id == user.id
        assert authenticate_user("alice@example.com", "nope", users) is None
        assert authenticate_user("", "secret-pw", users) is None
