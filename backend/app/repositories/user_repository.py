"""Repository for User operations.

Provides database access for the users table. Account creation and sign-in
live outside this service; the onboarding wizards only read users and flip
their onboarding flag.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import USER_TYPE_JOB_SEEKER, User

# Fields that may be updated via UserRepository.update().
# Security: Never add 'id', 'email', 'user_type', 'created_at', or 'updated_at'.
# - user_type: chosen at sign-up; switching it would orphan onboarding data
_UPDATABLE_FIELDS: frozenset[str] = frozenset(
    {
        "name",
        "image",
        "onboarding_completed",
    }
)


class UserRepository:
    """Stateless repository for User table operations.

    All methods are static, no instance state. Pass an AsyncSession
    for every call so the caller controls transaction boundaries.
    """

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: uuid.UUID) -> User | None:
        """Fetch a user by primary key.

        Args:
            db: Async database session.
            user_id: UUID primary key.

        Returns:
            User if found, None otherwise.
        """
        return await db.get(User, user_id)

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> User | None:
        """Fetch a user by email address (case-insensitive)."""
        stmt = select(User).where(User.email == email.lower())
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def create(
        db: AsyncSession,
        *,
        email: str,
        name: str | None = None,
        user_type: str = USER_TYPE_JOB_SEEKER,
        image: str | None = None,
    ) -> User:
        """Create a new user.

        Email is normalized to lowercase before storage.

        Raises:
            sqlalchemy.exc.IntegrityError: If email already exists or
                user_type is not a known account type.
        """
        user = User(
            email=email.lower(),
            name=name,
            user_type=user_type,
            image=image,
        )
        db.add(user)
        await db.flush()
        await db.refresh(user)
        return user

    @staticmethod
    async def update(
        db: AsyncSession,
        user_id: uuid.UUID,
        **kwargs: str | bool | None,
    ) -> User | None:
        """Update user fields.

        Only fields in _UPDATABLE_FIELDS are allowed.

        Returns:
            Updated User if found, None if user does not exist.

        Raises:
            ValueError: If an unknown field name is passed.
        """
        unknown = set(kwargs) - _UPDATABLE_FIELDS
        if unknown:
            msg = f"Unknown fields: {', '.join(sorted(unknown))}"
            raise ValueError(msg)

        user = await db.get(User, user_id)
        if user is None:
            return None

        for field, value in kwargs.items():
            setattr(user, field, value)

        await db.flush()
        await db.refresh(user)
        return user

    @staticmethod
    async def mark_onboarding_completed(
        db: AsyncSession, user_id: uuid.UUID
    ) -> User | None:
        """Flag the user's onboarding as finished."""
        return await UserRepository.update(db, user_id, onboarding_completed=True)
