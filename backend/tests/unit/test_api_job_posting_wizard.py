"""Tests for the job-posting wizard API.

These tests verify:
- The wizard requires a completed employer profile
- Each submission creates a new job posting with its locations
- The saved draft is cleared after submission so the next posting starts fresh
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.job_posting import JobPosting, JobPostingLocation
from app.wizard.flows.job_posting import JOB_POSTING_WIZARD

_ENDPOINT = "/api/v1/employer/job-postings/wizard"
_SUBMIT = f"{_ENDPOINT}/submit"


class TestWithoutEmployerProfile:
    """Employers must finish onboarding before posting jobs."""

    @pytest.mark.asyncio
    async def test_get_returns_fresh_draft(self, employer_client: AsyncClient):
        data = (await employer_client.get(_ENDPOINT)).json()["data"]
        assert data["status"] == "NOT_STARTED"
        assert data["draft"] == JOB_POSTING_WIZARD.initial_draft()

    @pytest.mark.asyncio
    async def test_save_is_rejected(self, employer_client: AsyncClient):
        response = await employer_client.post(_ENDPOINT, json={"step": 1, "data": {}})
        assert response.status_code == 422
        assert "employer onboarding" in response.json()["error"]["message"]

    @pytest.mark.asyncio
    async def test_submit_is_rejected(
        self, employer_client: AsyncClient, job_posting_draft
    ):
        response = await employer_client.post(_SUBMIT, json=job_posting_draft)
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_job_seeker_is_forbidden(self, client: AsyncClient):
        response = await client.get(_ENDPOINT)
        assert response.status_code == 403


class TestPublishing:
    """Submitting complete posting drafts."""

    @pytest.mark.asyncio
    async def test_creates_posting_with_locations(
        self,
        employer_client: AsyncClient,
        db_session: AsyncSession,
        employer_profile,
        job_posting_draft,
    ):
        await employer_client.post(
            _ENDPOINT, json={"step": 3, "data": job_posting_draft}
        )

        response = await employer_client.post(_SUBMIT, json=job_posting_draft)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["redirect_url"] == "/employer/jobs"

        posting = (await db_session.execute(select(JobPosting))).scalar_one()
        assert str(posting.id) == data["entity_id"]
        assert posting.employer_id == employer_profile.id
        assert posting.responsibilities == ["Mencatat stok masuk dan keluar"]
        assert posting.number_of_positions == 2
        assert posting.application_deadline == "31/12/2099"

        location = (await db_session.execute(select(JobPostingLocation))).scalar_one()
        assert location.city == "Surabaya"
        assert location.is_remote is False

        reloaded = (await employer_client.get(_ENDPOINT)).json()["data"]
        assert reloaded["status"] == "NOT_STARTED"

    @pytest.mark.asyncio
    async def test_each_submission_is_a_new_posting(
        self,
        employer_client: AsyncClient,
        db_session: AsyncSession,
        employer_profile,  # noqa: ARG002
        job_posting_draft,
    ):
        await employer_client.post(_SUBMIT, json=job_posting_draft)
        job_posting_draft["jobTitle"] = "Kepala Gudang"
        await employer_client.post(_SUBMIT, json=job_posting_draft)

        count = (
            await db_session.execute(select(func.count()).select_from(JobPosting))
        ).scalar_one()
        assert count == 2

    @pytest.mark.asyncio
    async def test_age_range_error(
        self,
        employer_client: AsyncClient,
        employer_profile,  # noqa: ARG002
        job_posting_draft,
    ):
        job_posting_draft["expectations"]["ageRange"] = {"min": 40, "max": 30}

        response = await employer_client.post(_SUBMIT, json=job_posting_draft)

        assert response.status_code == 400
        assert response.json()["error"]["details"] == [
            {
                "field": "ageRange",
                "message": "Umur maksimal harus lebih besar dari umur minimal",
            }
        ]
