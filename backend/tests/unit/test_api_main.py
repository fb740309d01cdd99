"""Tests for the application factory.

These tests verify, without a database (services are patched and the
auth dependencies overridden):
- Service errors raised behind the wizard endpoints keep the error envelope
- Malformed wizard requests answer 400 with one detail per field
- Unexpected exceptions become a generic 500
- Response headers for API responses and stored uploads
- Stored uploads are served from the upload directory
"""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.deps import require_employer, require_job_seeker
from app.core.config import settings
from app.core.database import get_db
from app.core.errors import InvalidStateError, ValidationError
from app.main import create_app
from app.models.user import USER_TYPE_EMPLOYER, USER_TYPE_JOB_SEEKER, User
from tests.conftest import EMPLOYER_USER_ID, TEST_USER_ID

_JOB_SEEKER = "/api/v1/job-seeker/onboarding"
_JOB_POSTING = "/api/v1/employer/job-postings/wizard"
_WEB_ORIGIN = "http://localhost:3000"


@pytest.fixture
def app():
    test_app = create_app()

    async def no_db() -> AsyncGenerator[None, None]:
        yield None

    test_app.dependency_overrides[get_db] = no_db
    test_app.dependency_overrides[require_job_seeker] = lambda: User(
        id=TEST_USER_ID, email="pencari@example.com", user_type=USER_TYPE_JOB_SEEKER
    )
    test_app.dependency_overrides[require_employer] = lambda: User(
        id=EMPLOYER_USER_ID, email="hrd@example.com", user_type=USER_TYPE_EMPLOYER
    )
    return test_app


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    # Unhandled exceptions are rendered by the app, not re-raised into tests
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# =============================================================================
# Error envelope
# =============================================================================


class TestServiceErrors:
    """APIError subclasses raised by the onboarding services."""

    @pytest.mark.asyncio
    async def test_save_after_completion_is_422(self, client):
        with patch(
            "app.api.v1.job_seeker_onboarding.save_step",
            AsyncMock(side_effect=InvalidStateError("Onboarding already completed")),
        ):
            response = await client.post(_JOB_SEEKER, json={"step": 3, "data": {}})

        assert response.status_code == 422
        assert response.json() == {
            "error": {
                "code": "INVALID_STATE_TRANSITION",
                "message": "Onboarding already completed",
                "details": None,
            }
        }

    @pytest.mark.asyncio
    async def test_incomplete_submit_carries_field_details(self, client):
        error = ValidationError.from_field_errors(
            "Submitted draft is incomplete",
            {"tanggalLahir": "Tanggal lahir wajib diisi"},
        )
        with patch(
            "app.api.v1.job_seeker_onboarding.finalize",
            AsyncMock(side_effect=error),
        ):
            response = await client.post(f"{_JOB_SEEKER}/submit", json={})

        assert response.status_code == 400
        body = response.json()
        assert "data" not in body
        assert body["error"]["details"] == [
            {"field": "tanggalLahir", "message": "Tanggal lahir wajib diisi"}
        ]

    @pytest.mark.asyncio
    async def test_job_posting_before_company_profile(self, client):
        with patch(
            "app.api.v1.job_posting_wizard.finalize",
            AsyncMock(
                side_effect=InvalidStateError("Complete employer onboarding first")
            ),
        ):
            response = await client.post(f"{_JOB_POSTING}/submit", json={})

        assert response.status_code == 422
        assert response.json()["error"]["message"] == (
            "Complete employer onboarding first"
        )

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_generic_500(self, client):
        with patch(
            "app.api.v1.job_seeker_onboarding.get_draft",
            AsyncMock(side_effect=RuntimeError("connection to db-prod-01 refused")),
        ):
            response = await client.get(_JOB_SEEKER)

        assert response.status_code == 500
        assert response.json()["error"] == {
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "details": None,
        }
        assert "db-prod-01" not in response.text


class TestRequestValidation:
    """Malformed bodies on the wizard endpoints."""

    @pytest.mark.asyncio
    async def test_step_below_one(self, client):
        response = await client.post(_JOB_SEEKER, json={"step": 0, "data": {}})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert [d["field"] for d in error["details"]] == ["step"]
        assert error["details"][0]["message"]

    @pytest.mark.asyncio
    async def test_unknown_top_level_field(self, client):
        response = await client.post(
            _JOB_SEEKER, json={"step": 1, "data": {}, "user_id": "x"}
        )

        assert response.status_code == 400
        fields = [d["field"] for d in response.json()["error"]["details"]]
        assert fields == ["user_id"]

    @pytest.mark.asyncio
    async def test_submit_body_must_be_an_object(self, client):
        response = await client.post(f"{_JOB_SEEKER}/submit", json=["Budi"])

        assert response.status_code == 400
        assert response.json()["error"]["details"][0]["field"] == "body"


# =============================================================================
# Headers and uploads
# =============================================================================


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")
        assert response.json() == {"status": "healthy"}


class TestResponseHeaders:
    """Security headers differ between API responses and stored uploads."""

    @pytest.mark.asyncio
    async def test_draft_responses_are_not_cached(self, client):
        with patch(
            "app.api.v1.job_seeker_onboarding.get_draft",
            AsyncMock(side_effect=InvalidStateError("x")),
        ):
            response = await client.get(_JOB_SEEKER)

        assert "no-store" in response.headers["cache-control"]
        assert response.headers["cross-origin-resource-policy"] == "same-origin"
        assert response.headers["x-frame-options"] == "DENY"

    @pytest.mark.asyncio
    async def test_uploads_may_be_embedded_cross_origin(self, client):
        response = await client.get("/uploads/missing.png")

        assert response.status_code == 404
        assert response.headers["cross-origin-resource-policy"] == "cross-origin"
        assert "no-store" not in response.headers.get("cache-control", "")

    @pytest.mark.asyncio
    async def test_hsts_only_in_production(self, client, monkeypatch):
        response = await client.get("/health")
        assert "strict-transport-security" not in response.headers

        monkeypatch.setattr(settings, "environment", "production")
        response = await client.get("/health")
        assert "max-age=31536000" in response.headers["strict-transport-security"]

    @pytest.mark.asyncio
    async def test_wizard_preflight_from_web_app(self, client):
        response = await client.options(
            _JOB_SEEKER,
            headers={
                "Origin": _WEB_ORIGIN,
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == _WEB_ORIGIN
        assert response.headers["access-control-allow-credentials"] == "true"


class TestUploadsMount:
    """Static serving of stored uploads."""

    @pytest.mark.asyncio
    async def test_serves_stored_file(self, tmp_path, monkeypatch):
        upload_dir = tmp_path / "served"
        monkeypatch.setattr(settings, "upload_dir", str(upload_dir))
        test_app = create_app()
        (upload_dir / "3f2a9c1d-cv-budi.pdf").write_bytes(b"%PDF-1.7")

        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/uploads/3f2a9c1d-cv-budi.pdf")

        assert response.status_code == 200
        assert response.content == b"%PDF-1.7"

