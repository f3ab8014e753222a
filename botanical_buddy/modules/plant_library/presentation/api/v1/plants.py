# 📄 File: botanical_buddy/modules/plant_library/presentation/api/v1/plants.py
#
# 🧭 Purpose (Layman Explanation):
# Lets logged-in users browse and search the plant encyclopedia to find species for
# their collection.
#
# 🧪 Purpose (Technical Summary):
# Authenticated proxy endpoints over the cached Trefle catalogue. Provider failures are
# answered with a 502 envelope naming the failed action, without provider details.
#
# 🔗 Dependencies:
# - FastAPI router
# - plant_library PlantLibraryService, TrefleClient
# - botanical_buddy.shared.core.dependencies (auth, cache)
#
# 🔄 Connected Modules / Calls From:
# - botanical_buddy.api.v1.router (mounted at /api/v1/plants)

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from fastapi import APIRouter, Depends, Query, Request

from botanical_buddy.modules.plant_library.domain.services.plant_library_service import (
    PlantLibraryService,
)
from botanical_buddy.modules.plant_library.infrastructure.external.trefle_client import TrefleClient
from botanical_buddy.modules.plant_library.domain.models.plant_catalogue import (
    TreflePlant,
    TreflePlantDetail,
    TreflePlantPage,
)
from botanical_buddy.shared.config.settings import get_settings
from botanical_buddy.shared.core.dependencies import CurrentUser, get_cache, get_current_user
from botanical_buddy.shared.core.exceptions import BadRequestError, ExternalAPIError, NotFoundError
from botanical_buddy.shared.core.responses import ApiResponse
from botanical_buddy.shared.infrastructure.cache.memory_cache import TTLCache

logger = logging.getLogger(__name__)

UPSTREAM_UNAVAILABLE = "The plant catalogue is currently unavailable. Please try again later."

plants_router = APIRouter()


def get_trefle_client(request: Request) -> TrefleClient:
    return request.app.state.trefle_client


def get_plant_library_service(
    client: TrefleClient = Depends(get_trefle_client),
    cache: TTLCache = Depends(get_cache),
) -> PlantLibraryService:
    return PlantLibraryService(client, cache, ttl=get_settings().CACHE_PLANT_LIBRARY_TTL)


@contextmanager
def upstream_action(action: str, not_found: Optional[str] = None) -> Iterator[None]:
    """Re-label provider failures with the action that failed."""
    try:
        yield
    except ExternalAPIError as e:
        if not_found and e.api_status_code == 404:
            raise NotFoundError(not_found) from e
        logger.error(f"Failed to {action}: {e.message} (status={e.api_status_code})")
        raise ExternalAPIError(
            e.api_name,
            message=f"Failed to {action}",
            api_status_code=e.api_status_code,
            details=UPSTREAM_UNAVAILABLE,
        ) from e


def _page_response(result: TreflePlantPage, **extra) -> ApiResponse[List[TreflePlant]]:
    return ApiResponse(
        data=result.data,
        count=len(result.data),
        meta=result.meta,
        links=result.links,
        **extra,
    )


@plants_router.get(
    "/",
    response_model=ApiResponse[List[TreflePlant]],
    summary="Browse plant catalogue",
    responses={502: {"description": "Plant catalogue unavailable"}},
)
async def list_plants(
    page: int = Query(1, ge=1),
    current_user: CurrentUser = Depends(get_current_user),
    service: PlantLibraryService = Depends(get_plant_library_service),
) -> ApiResponse[List[TreflePlant]]:
    with upstream_action("retrieve plants"):
        result = await service.list_plants(page)
    return _page_response(result)


@plants_router.get(
    "/search",
    response_model=ApiResponse[List[TreflePlant]],
    summary="Search plant catalogue",
    responses={
        400: {"description": "Missing query"},
        502: {"description": "Plant catalogue unavailable"},
    },
)
async def search_plants(
    q: Optional[str] = Query(None, max_length=200, description="Search text"),
    page: int = Query(1, ge=1),
    current_user: CurrentUser = Depends(get_current_user),
    service: PlantLibraryService = Depends(get_plant_library_service),
) -> ApiResponse[List[TreflePlant]]:
    if not q or not q.strip():
        raise BadRequestError("Missing required parameter: q (query)")

    with upstream_action("search plants"):
        result = await service.search_plants(q, page)
    return _page_response(result, query=q.strip())


@plants_router.get(
    "/filter/common-name",
    response_model=ApiResponse[List[TreflePlant]],
    summary="Filter plant catalogue by common name",
    responses={
        400: {"description": "Missing name"},
        502: {"description": "Plant catalogue unavailable"},
    },
)
async def filter_by_common_name(
    name: Optional[str] = Query(None, max_length=200, description="Common name"),
    page: int = Query(1, ge=1),
    current_user: CurrentUser = Depends(get_current_user),
    service: PlantLibraryService = Depends(get_plant_library_service),
) -> ApiResponse[List[TreflePlant]]:
    if not name or not name.strip():
        raise BadRequestError("Missing required parameter: name (common name)")

    with upstream_action("filter plants"):
        result = await service.filter_by_common_name(name, page)
    return _page_response(result, filter=name.strip())


@plants_router.get(
    "/{plant_id}",
    response_model=ApiResponse[TreflePlantDetail],
    summary="Plant species details",
    responses={
        400: {"description": "Invalid plant ID"},
        502: {"description": "Plant catalogue unavailable"},
    },
)
async def get_plant(
    plant_id: int,
    current_user: CurrentUser = Depends(get_current_user),
    service: PlantLibraryService = Depends(get_plant_library_service),
) -> ApiResponse[TreflePlantDetail]:
    if plant_id <= 0:
        raise BadRequestError("Invalid plant ID")

    with upstream_action("retrieve plant details", not_found="Plant"):
        plant = await service.get_plant(plant_id)
    return ApiResponse(data=plant)
