"""Tests for UserRepository.

Tests cover lookups, creation with account types, the restricted update
whitelist, and the onboarding flag.
"""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import USER_TYPE_EMPLOYER, USER_TYPE_JOB_SEEKER
from app.repositories.user_repository import UserRepository

_MISSING_UUID = uuid.UUID("99999999-9999-9999-9999-999999999999")
_TEST_EMAIL = "pencari@example.com"


class TestGetById:
    """Test UserRepository.get_by_id()."""

    async def test_returns_user_when_found(self, db_session: AsyncSession, test_user):
        user = await UserRepository.get_by_id(db_session, test_user.id)
        assert user is not None
        assert user.email == test_user.email

    async def test_returns_none_when_not_found(self, db_session: AsyncSession):
        assert await UserRepository.get_by_id(db_session, _MISSING_UUID) is None


class TestGetByEmail:
    """Test UserRepository.get_by_email()."""

    async def test_email_lookup_is_case_insensitive(
        self, db_session: AsyncSession, test_user
    ):
        user = await UserRepository.get_by_email(db_session, "PENCARI@Example.com")
        assert user is not None
        assert user.id == test_user.id

    async def test_returns_none_when_not_found(self, db_session: AsyncSession):
        assert await UserRepository.get_by_email(db_session, "nobody@example.com") is None


class TestCreate:
    """Test UserRepository.create()."""

    async def test_defaults_to_job_seeker(self, db_session: AsyncSession):
        user = await UserRepository.create(db_session, email="baru@example.com")
        assert user.id is not None
        assert user.user_type == USER_TYPE_JOB_SEEKER
        assert user.onboarding_completed is False
        assert user.created_at is not None

    async def test_creates_employer(self, db_session: AsyncSession):
        user = await UserRepository.create(
            db_session,
            email="HRD@PerusahaanKu.co.id",
            name="Tim HRD",
            user_type=USER_TYPE_EMPLOYER,
        )
        assert user.email == "hrd@perusahaanku.co.id"
        assert user.user_type == USER_TYPE_EMPLOYER

    async def test_rejects_duplicate_email_case_insensitive(
        self,
        db_session: AsyncSession,
        test_user,  # noqa: ARG002
    ):
        with pytest.raises(IntegrityError):
            await UserRepository.create(db_session, email=_TEST_EMAIL.upper())

    async def test_rejects_unknown_user_type(self, db_session: AsyncSession):
        with pytest.raises(IntegrityError):
            await UserRepository.create(
                db_session, email="admin@example.com", user_type="admin"
            )


class TestUpdate:
    """Test UserRepository.update() and mark_onboarding_completed()."""

    async def test_updates_whitelisted_fields(self, db_session: AsyncSession, test_user):
        user = await UserRepository.update(
            db_session, test_user.id, name="Budi", image="https://example.com/b.jpg"
        )
        assert user is not None
        assert user.name == "Budi"
        assert user.image == "https://example.com/b.jpg"

    async def test_returns_none_for_nonexistent_user(self, db_session: AsyncSession):
        assert await UserRepository.update(db_session, _MISSING_UUID, name="X") is None

    @pytest.mark.parametrize("field", ["id", "email", "user_type"])
    async def test_rejects_protected_fields(
        self, db_session: AsyncSession, test_user, field
    ):
        with pytest.raises(ValueError, match=field):
            await UserRepository.update(db_session, test_user.id, **{field: "x"})

    async def test_mark_onboarding_completed(self, db_session: AsyncSession, test_user):
        user = await UserRepository.mark_onboarding_completed(db_session, test_user.id)
        assert user is not None
        assert user.onboarding_completed is True
