"""
Name: Crosscutting Tests

Responsibilities:
  - Pagination math
  - Settings validation (page sizes, OTP bounds, production secrets)
  - Problem-details payloads from typed internal errors
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import ValidationError

from eims.api.exception_handlers import register_exception_handlers
from eims.crosscutting.config import Settings
from eims.crosscutting.error_responses import conflict, not_found
from eims.crosscutting.exceptions import DatabaseError, OtpDeliveryError
from eims.crosscutting.pagination import PageSlice, PageWindow, total_pages

pytestmark = pytest.mark.unit


# ============================================================================
# Pagination
# ============================================================================


@pytest.mark.parametrize(
    "total, limit, expected",
    [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 5, 5)],
)
def test_total_pages(total, limit, expected):
    assert total_pages(total, limit) == expected


def test_page_window_offset():
    assert PageWindow(page=1, limit=10).offset == 0
    assert PageWindow(page=3, limit=10).offset == 20


def test_page_slice_exposes_total_pages():
    assert PageSlice(items=[1, 2], page=1, limit=2, total=5).total_pages == 3


# ============================================================================
# Settings
# ============================================================================


class TestSettings:
    def test_test_environment_uses_in_memory_store(self):
        assert Settings(database_url="postgres://", app_env="test").uses_in_memory_store()
        assert Settings(database_url="postgres://", app_env="CI").uses_in_memory_store()
        assert not Settings(
            database_url="postgres://", app_env="development"
        ).uses_in_memory_store()

    def test_default_page_size_cannot_exceed_max(self):
        with pytest.raises(ValidationError):
            Settings(database_url="postgres://", default_page_size=50, max_page_size=20)

    def test_otp_length_bounds(self):
        with pytest.raises(ValidationError):
            Settings(database_url="postgres://", otp_length=3)

    def test_production_requires_strong_secret(self):
        with pytest.raises(ValidationError):
            Settings(database_url="postgres://", app_env="production")

        strong = "x" * 40
        settings = Settings(
            database_url="postgres://", app_env="production", jwt_secret=strong
        )
        assert settings.is_production()

    def test_allowed_origins_list(self):
        settings = Settings(
            database_url="postgres://",
            allowed_origins="http://a.test, ,http://b.test",
        )
        assert settings.get_allowed_origins_list() == ["http://a.test", "http://b.test"]


# ============================================================================
# Error responses
# ============================================================================


def _build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/db")
    def db_down():
        raise DatabaseError("connection refused")

    @app.get("/mail")
    def mail_down():
        raise OtpDeliveryError("smtp timeout")

    @app.get("/missing")
    def missing():
        raise not_found("Course", "abc")

    @app.get("/taken")
    def taken():
        raise conflict("Email is already registered.")

    return app


class TestProblemResponses:
    def test_database_error_is_generic_503(self):
        response = TestClient(_build_app()).get("/db")

        assert response.status_code == 503
        assert response.headers["content-type"].startswith("application/problem+json")
        body = response.json()
        assert body["code"] == "DATABASE_ERROR"
        assert body["error"] is True
        assert "connection refused" not in body["detail"]

    def test_otp_delivery_error_is_503(self):
        response = TestClient(_build_app()).get("/mail")
        assert response.status_code == 503
        assert response.json()["code"] == "SERVICE_UNAVAILABLE"

    def test_not_found_and_conflict_carry_message(self):
        client = TestClient(_build_app())

        missing = client.get("/missing").json()
        assert missing["status"] == 404
        assert "Course 'abc'" in missing["message"]

        taken = client.get("/taken").json()
        assert taken["status"] == 409
        assert taken["message"] == "Email is already registered."
        assert taken["detail"] == taken["message"]
