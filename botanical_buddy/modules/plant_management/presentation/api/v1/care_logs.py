"""
Plant care log endpoints.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from botanical_buddy.modules.plant_management.domain.services.care_log_service import CareLogService
from botanical_buddy.modules.plant_management.presentation.api.schemas.care_log_schemas import (
    CareLogCreateRequest,
    CareLogResponse,
    CareLogUpdateRequest,
    CareStatisticsResponse,
)
from botanical_buddy.shared.core.dependencies import CurrentUser, get_current_user
from botanical_buddy.shared.core.responses import ApiResponse
from botanical_buddy.shared.infrastructure.database.session import get_db_session

logger = logging.getLogger(__name__)

care_logs_router = APIRouter()


def get_care_log_service(session: AsyncSession = Depends(get_db_session)) -> CareLogService:
    return CareLogService(session)


@care_logs_router.get(
    "/plant/{plant_id}",
    response_model=ApiResponse[List[CareLogResponse]],
    summary="Care history of a plant",
    description="Care logs of one plant, most recent event first",
    responses={404: {"description": "Plant not found"}},
)
async def list_plant_care_logs(
    plant_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: CareLogService = Depends(get_care_log_service),
) -> ApiResponse[List[CareLogResponse]]:
    logs = await service.list_for_plant(plant_id, current_user.user_id)
    data = [CareLogResponse.model_validate(log) for log in logs]
    return ApiResponse(data=data, count=len(data))


@care_logs_router.get(
    "/plant/{plant_id}/statistics",
    response_model=ApiResponse[CareStatisticsResponse],
    summary="Care statistics of a plant",
    responses={404: {"description": "Plant not found"}},
)
async def get_plant_care_statistics(
    plant_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: CareLogService = Depends(get_care_log_service),
) -> ApiResponse[CareStatisticsResponse]:
    statistics = await service.statistics_for_plant(plant_id, current_user.user_id)
    return ApiResponse(data=CareStatisticsResponse(**statistics))


@care_logs_router.get(
    "/{log_id}",
    response_model=ApiResponse[CareLogResponse],
    summary="Get care log",
    responses={404: {"description": "Care log not found"}},
)
async def get_care_log(
    log_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: CareLogService = Depends(get_care_log_service),
) -> ApiResponse[CareLogResponse]:
    log = await service.get_log(log_id, current_user.user_id)
    return ApiResponse(data=CareLogResponse.model_validate(log))


@care_logs_router.post(
    "/",
    response_model=ApiResponse[CareLogResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Log a care event",
    responses={400: {"description": "Invalid plant"}},
)
async def create_care_log(
    log_data: CareLogCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: CareLogService = Depends(get_care_log_service),
) -> ApiResponse[CareLogResponse]:
    log = await service.create_log(current_user.user_id, log_data.model_dump())
    return ApiResponse(data=CareLogResponse.model_validate(log))


@care_logs_router.put(
    "/{log_id}",
    response_model=ApiResponse[None],
    summary="Update care log",
    description="Partial update: only fields present and non-null in the body are changed",
    responses={404: {"description": "Care log not found"}},
)
async def update_care_log(
    log_id: UUID,
    log_data: CareLogUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: CareLogService = Depends(get_care_log_service),
) -> ApiResponse[None]:
    await service.update_log(log_id, current_user.user_id, log_data.model_dump(exclude_unset=True))
    return ApiResponse(message="Care log updated successfully")


@care_logs_router.delete(
    "/{log_id}",
    response_model=ApiResponse[None],
    summary="Delete care log",
    responses={404: {"description": "Care log not found"}},
)
async def delete_care_log(
    log_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    service: CareLogService = Depends(get_care_log_service),
) -> ApiResponse[None]:
    await service.delete_log(log_id, current_user.user_id)
    return ApiResponse(message="Care log deleted successfully")
