"""
User Repository Implementation

SQLAlchemy persistence for user accounts and their subscription records.
Email lookups are case-insensitive; emails are stored lower-cased.
"""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from botanical_buddy.modules.user_management.domain.models.subscription import SubscriptionStatus
from botanical_buddy.modules.user_management.infrastructure.database.models import (
    SubscriptionModel,
    UserModel,
)
from botanical_buddy.shared.core.exceptions import BadRequestError

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "User with this email already exists"


class UserRepositoryImpl:
    """Repository for user accounts."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, user: UserModel) -> UserModel:
        """
        Insert a new user.

        Raises:
            BadRequestError: If a user with the same email already exists
        """
        user.email = user.email.lower()
        self._session.add(user)
        try:
            await self._session.flush()
        except IntegrityError as e:
            await self._session.rollback()
            logger.warning(f"User creation failed - email already exists: {user.email}")
            raise BadRequestError(DUPLICATE_EMAIL_MESSAGE) from e

        logger.info(f"Created user with ID: {user.id}")
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[UserModel]:
        result = await self._session.execute(select(UserModel).where(UserModel.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[UserModel]:
        stmt = select(UserModel).where(func.lower(UserModel.email) == email.strip().lower())
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def get_active_subscription(self, user_id: UUID) -> Optional[SubscriptionModel]:
        """Most recently started active subscription, if any."""
        stmt = (
            select(SubscriptionModel)
            .where(
                SubscriptionModel.user_id == user_id,
                SubscriptionModel.status == SubscriptionStatus.ACTIVE.value,
            )
            .order_by(SubscriptionModel.created_at.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()
