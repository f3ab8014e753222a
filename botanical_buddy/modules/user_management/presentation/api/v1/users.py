"""
User API endpoints.

Account-level views for the authenticated user.
"""

import logging

from fastapi import APIRouter, Depends

from botanical_buddy.modules.user_management.domain.services.user_service import UserService
from botanical_buddy.modules.user_management.presentation.api.schemas.user_schemas import (
    SubscriptionResponse,
    UsageResponse,
)
from botanical_buddy.modules.user_management.presentation.api.v1.auth import get_user_service
from botanical_buddy.shared.core.dependencies import CurrentUser, get_current_user
from botanical_buddy.shared.core.responses import ApiResponse

logger = logging.getLogger(__name__)

users_router = APIRouter()


@users_router.get(
    "/me/usage",
    response_model=ApiResponse[UsageResponse],
    summary="Plan usage",
    description="Plant count, tier limit and the active subscription of the current user",
)
async def get_my_usage(
    current_user: CurrentUser = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> ApiResponse[UsageResponse]:
    usage = await user_service.get_usage(current_user.user_id)
    subscription = usage.pop("subscription")

    return ApiResponse(
        data=UsageResponse(
            **usage,
            subscription=SubscriptionResponse.model_validate(subscription) if subscription else None,
        )
    )
