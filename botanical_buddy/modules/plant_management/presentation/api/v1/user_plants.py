"""
User plant endpoints.

Every route is scoped to the authenticated user; another user's plant id
answers 404 exactly like an unknown id.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from botanical_buddy.modules.plant_management.domain.services.user_plant_service import (
    UserPlantService,
)
from botanical_buddy.modules.plant_management.presentation.api.schemas.plant_schemas import (
    UserPlantCreateRequest,
    UserPlantResponse,
    UserPlantUpdateRequest,
)
from botanical_buddy.shared.core.dependencies import CurrentUser, get_current_user
from botanical_buddy.shared.core.responses import ApiResponse
from botanical_buddy.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)

user_plants_router = APIRouter()


def get_user_plant_service(session: AsyncSession = Depends(get_db_session)) -> UserPlantService:
    return UserPlantService(session)


@user_plants_router.get(
    "/",
    response_model=ApiResponse[List[UserPlantResponse]],
    summary="List my plants",
    description="All plants of the current user with their address, newest first",
)
async def list_user_plants(
    current_user: CurrentUser = Depends(get_current_user),
    service: UserPlantService = Depends(get_user_plant_service),
) -> ApiResponse[List[UserPlantResponse]]:
    plants = await service.list_plants(current_user.user_id)
    data = [UserPlantResponse.model_validate(plant) for plant in plants]
    return ApiResponse(data=data, count=len(data))


@user_plants_router.get(
    "/{plant_id}",
    response_model=ApiResponse[UserPlantResponse],
    summary="Get plant",
    responses={404: {"description": "Plant not found"}},
)
async def get_user_plant(
    plant_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserPlantService = Depends(get_user_plant_service),
) -> ApiResponse[UserPlantResponse]:
    plant = await service.get_plant(plant_id, current_user.user_id)
    return ApiResponse(data=UserPlantResponse.model_validate(plant))


@user_plants_router.post(
    "/",
    response_model=ApiResponse[UserPlantResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add plant",
    responses={400: {"description": "Plant limit reached or invalid address"}},
)
async def create_user_plant(
    plant_data: UserPlantCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserPlantService = Depends(get_user_plant_service),
) -> ApiResponse[UserPlantResponse]:
    plant = await service.create_plant(current_user.user_id, plant_data.model_dump())
    return ApiResponse(data=UserPlantResponse.model_validate(plant))


@user_plants_router.put(
    "/{plant_id}",
    response_model=ApiResponse[None],
    summary="Update plant",
    description="Partial update: only fields present and non-null in the body are changed",
    responses={400: {"description": "Invalid address"}, 404: {"description": "Plant not found"}},
)
async def update_user_plant(
    plant_id: UUID,
    plant_data: UserPlantUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserPlantService = Depends(get_user_plant_service),
) -> ApiResponse[None]:
    await service.update_plant(plant_id, current_user.user_id, plant_data.model_dump(exclude_unset=True))
    return ApiResponse(message="Plant updated successfully")


@user_plants_router.delete(
    "/{plant_id}",
    response_model=ApiResponse[None],
    summary="Delete plant",
    description="Deletes the plant and all of its care logs",
    responses={404: {"description": "Plant not found"}},
)
async def delete_user_plant(
    plant_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserPlantService = Depends(get_user_plant_service),
) -> ApiResponse[None]:
    await service.delete_plant(plant_id, current_user.user_id)
    return ApiResponse(message="Plant deleted successfully")
