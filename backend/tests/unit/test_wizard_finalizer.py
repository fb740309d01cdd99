"""Tests for the Submission Finalizer.

These tests verify:
- Local whole-draft validation before any request
- Success discards the draft and routes to the redirect URL
- Server failures keep the draft and allow a retry
- Double submission is refused
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from app.wizard.client import WizardApiClient, WizardClientError
from app.wizard.finalizer import (
    ALREADY_SUBMITTED,
    INCOMPLETE_DRAFT,
    SUBMIT_IN_PROGRESS,
    SubmissionFinalizer,
)
from app.wizard.flows.job_seeker import JOB_SEEKER_WIZARD
from app.wizard.navigator import StepNavigator
from app.wizard.storage import InMemoryDraftStorage
from app.wizard.store import WizardStateStore, WizardStatus
from app.wizard.validation import StepValidator

ENTITY_ID = "7c1e9d1c-3f7b-4b6e-9a4f-0d2f3b5e6a71"


@pytest.fixture
def api_client() -> AsyncMock:
    client = AsyncMock(spec=WizardApiClient)
    client.submit.return_value = {
        "success": True,
        "entity_id": ENTITY_ID,
        "redirect_url": "/job-seeker/dashboard",
    }
    return client


@pytest.fixture
def routes() -> list[str]:
    return []


@pytest.fixture
def local() -> InMemoryDraftStorage:
    return InMemoryDraftStorage()


@pytest.fixture
def finalizer(api_client, routes, local) -> SubmissionFinalizer:
    navigator = StepNavigator(
        WizardStateStore(JOB_SEEKER_WIZARD),
        StepValidator(JOB_SEEKER_WIZARD),
        client=api_client,
        local_storage=local,
        router=routes.append,
    )
    return SubmissionFinalizer(navigator, api_client)


class TestSubmit:
    """SubmissionFinalizer.submit()."""

    @pytest.mark.asyncio
    async def test_incomplete_draft_is_not_sent(self, finalizer, api_client):
        result = await finalizer.submit()

        assert result.success is False
        assert result.error == INCOMPLETE_DRAFT
        assert result.failed_step == 1
        assert "email" in result.field_errors
        api_client.submit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_success_discards_draft_and_routes(
        self, finalizer, api_client, routes, local, job_seeker_draft
    ):
        store = finalizer.navigator.store
        store.update(job_seeker_draft)
        local.save("onboardingData", store.snapshot())

        result = await finalizer.submit()

        assert result.success is True
        assert result.entity_id == ENTITY_ID
        assert result.redirect_url == "/job-seeker/dashboard"
        api_client.submit.assert_awaited_once()
        assert store.status is WizardStatus.SUBMITTED
        assert store.get()["namaLengkap"] == ""
        assert local.load("onboardingData") is None
        assert routes == ["/job-seeker/dashboard"]

    @pytest.mark.asyncio
    async def test_missing_redirect_falls_back_to_success_route(
        self, finalizer, api_client, routes, job_seeker_draft
    ):
        api_client.submit.return_value = {"entity_id": ENTITY_ID}
        result = await finalizer.submit(job_seeker_draft)
        assert result.redirect_url == JOB_SEEKER_WIZARD.success_route
        assert routes == [JOB_SEEKER_WIZARD.success_route]

    @pytest.mark.asyncio
    async def test_already_completed_is_reported(
        self, finalizer, api_client, job_seeker_draft
    ):
        api_client.submit.return_value = {
            "entity_id": ENTITY_ID,
            "redirect_url": "/job-seeker/dashboard",
            "already_completed": True,
        }
        result = await finalizer.submit(job_seeker_draft)
        assert result.success is True
        assert result.already_completed is True

    @pytest.mark.asyncio
    async def test_server_rejection_keeps_draft_for_retry(
        self, finalizer, api_client, routes, job_seeker_draft
    ):
        store = finalizer.navigator.store
        store.update(job_seeker_draft)
        api_client.submit.side_effect = WizardClientError(
            "Submitted draft is incomplete",
            status_code=400,
            field_errors={"cvFileUrl": "CV/Resume wajib diunggah"},
        )

        result = await finalizer.submit()

        assert result.success is False
        assert result.field_errors == {"cvFileUrl": "CV/Resume wajib diunggah"}
        assert store.status is WizardStatus.IN_PROGRESS
        assert store.get()["namaLengkap"] == "Budi Santoso"
        assert routes == []

        api_client.submit.side_effect = None
        retry = await finalizer.submit()
        assert retry.success is True

    @pytest.mark.asyncio
    async def test_second_submit_after_success_is_refused(
        self, finalizer, api_client, job_seeker_draft
    ):
        await finalizer.submit(job_seeker_draft)
        result = await finalizer.submit(job_seeker_draft)
        assert result.success is False
        assert result.error == ALREADY_SUBMITTED
        api_client.submit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_concurrent_submit_is_refused(
        self, finalizer, api_client, job_seeker_draft
    ):
        release = asyncio.Event()

        async def slow_submit(_draft):
            await release.wait()
            return {"entity_id": ENTITY_ID}

        api_client.submit.side_effect = slow_submit

        first = asyncio.create_task(finalizer.submit(job_seeker_draft))
        await asyncio.sleep(0)
        second = await finalizer.submit(job_seeker_draft)
        release.set()

        assert second.error == SUBMIT_IN_PROGRESS
        assert (await first).success is True
        api_client.submit.assert_awaited_once()
