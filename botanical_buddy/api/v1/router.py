# 📄 File: botanical_buddy/api/v1/router.py
#
# 🧭 Purpose (Layman Explanation):
# The traffic director for version 1 of the API: sends sign-in requests to the account
# handlers, plant requests to the plant handlers, and so on.
#
# 🧪 Purpose (Technical Summary):
# Aggregates every module router under its /api/v1 prefix. Weather routes share the
# /addresses prefix because weather is always looked up per address.
#
# 🔗 Dependencies:
# - FastAPI APIRouter
# - module presentation routers
#
# 🔄 Connected Modules / Calls From:
# - botanical_buddy.main

from fastapi import APIRouter

from botanical_buddy.modules.plant_library.presentation.api.v1.plants import plants_router
from botanical_buddy.modules.plant_management.presentation.api.v1.addresses import addresses_router
from botanical_buddy.modules.plant_management.presentation.api.v1.care_logs import care_logs_router
from botanical_buddy.modules.plant_management.presentation.api.v1.user_plants import user_plants_router
from botanical_buddy.modules.user_management.presentation.api.v1.auth import auth_router
from botanical_buddy.modules.user_management.presentation.api.v1.users import users_router
from botanical_buddy.modules.weather_environmental.presentation.api.v1.weather import weather_router

ROUTE_PREFIXES = {
    "auth": "/auth",
    "users": "/users",
    "addresses": "/addresses",
    "user_plants": "/user-plants",
    "care_logs": "/plant-care-logs",
    "plants": "/plants",
}

api_v1_router = APIRouter()

api_v1_router.include_router(auth_router, prefix=ROUTE_PREFIXES["auth"], tags=["Authentication"])
api_v1_router.include_router(users_router, prefix=ROUTE_PREFIXES["users"], tags=["Users"])
api_v1_router.include_router(addresses_router, prefix=ROUTE_PREFIXES["addresses"], tags=["Addresses"])
api_v1_router.include_router(weather_router, prefix=ROUTE_PREFIXES["addresses"], tags=["Weather"])
api_v1_router.include_router(user_plants_router, prefix=ROUTE_PREFIXES["user_plants"], tags=["User Plants"])
api_v1_router.include_router(care_logs_router, prefix=ROUTE_PREFIXES["care_logs"], tags=["Plant Care Logs"])
api_v1_router.include_router(plants_router, prefix=ROUTE_PREFIXES["plants"], tags=["Plant Library"])
