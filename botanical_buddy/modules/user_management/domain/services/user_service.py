# 📄 File: botanical_buddy/modules/user_management/domain/services/user_service.py
#
# 🧭 Purpose (Layman Explanation):
# Signs people up, checks their password when they log in, and reports how much of their
# plan they are using.
#
# 🧪 Purpose (Technical Summary):
# Account use cases: registration with bcrypt hashing, credential authentication with a
# single generic failure, profile lookup and tier usage reporting.
#
# 🔗 Dependencies:
# - user_management repository and tier policy
# - plant_management UserPlantRepository (plant counts)
# - botanical_buddy.shared.core.security
#
# 🔄 Connected Modules / Calls From:
# - user_management presentation auth and users routers

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from botanical_buddy.modules.plant_management.infrastructure.database.repositories import (
    UserPlantRepository,
)
from botanical_buddy.modules.user_management.domain.models.subscription import SubscriptionTier
from botanical_buddy.modules.user_management.domain.services.tier_policy import (
    can_add_resource,
    resource_limit,
)
from botanical_buddy.modules.user_management.infrastructure.database.models import UserModel
from botanical_buddy.modules.user_management.infrastructure.database.user_repository_impl import (
    DUPLICATE_EMAIL_MESSAGE,
    UserRepositoryImpl,
)
from botanical_buddy.shared.core.exceptions import (
    AuthenticationError,
    BadRequestError,
    NotFoundError,
)
from botanical_buddy.shared.core.security import SecurityManager

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class UserService:
    """Account use cases."""

    def __init__(self, session: AsyncSession, security_manager: SecurityManager):
        self.users = UserRepositoryImpl(session)
        self.plants = UserPlantRepository(session)
        self.security = security_manager

    async def register(
        self,
        email: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> UserModel:
        """
        Create an account on the Free tier.

        Raises:
            BadRequestError: Email already registered (any letter case)
        """
        if await self.users.email_exists(email):
            logger.warning(f"Registration rejected, email already registered: {email}")
            raise BadRequestError(DUPLICATE_EMAIL_MESSAGE)

        user = UserModel(
            email=email,
            password_hash=self.security.hash_password(password),
            first_name=first_name,
            last_name=last_name,
            subscription_tier=SubscriptionTier.FREE.value,
            email_verified=False,
        )
        return await self.users.create(user)

    async def authenticate(self, email: str, password: str) -> UserModel:
        """
        Check credentials.

        Raises:
            AuthenticationError: Unknown email or wrong password (indistinguishable)
        """
        user = await self.users.get_by_email(email)
        if user is None or not self.security.verify_password(password, user.password_hash):
            logger.warning(f"Login failed for email: {email}")
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
        return user

    async def get_user(self, user_id: UUID) -> UserModel:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User")
        return user

    async def get_usage(self, user_id: UUID) -> Dict[str, Any]:
        """Plant usage against the user's tier limit."""
        user = await self.get_user(user_id)
        plant_count = await self.plants.count_owned(user_id)
        subscription = await self.users.get_active_subscription(user_id)

        return {
            "tier": user.subscription_tier,
            "plant_count": plant_count,
            "plant_limit": resource_limit(user.subscription_tier),
            "can_add_plant": can_add_resource(user.subscription_tier, plant_count),
            "subscription": subscription,
        }
