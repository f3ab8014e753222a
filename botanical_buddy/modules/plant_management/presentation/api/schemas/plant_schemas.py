"""
User Plant API Schemas
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from botanical_buddy.modules.plant_management.presentation.api.schemas.address_schemas import (
    AddressResponse,
)


class UserPlantCreateRequest(BaseModel):
    address_id: Optional[UUID] = None
    trefle_plant_id: Optional[int] = Field(None, gt=0, description="Species id from /plants")
    common_name: Optional[str] = Field(None, max_length=255)
    scientific_name: Optional[str] = Field(None, max_length=255)
    nickname: Optional[str] = Field(None, max_length=100)
    date_planted: Optional[date] = None
    location: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None
    photo_url: Optional[str] = Field(None, max_length=500)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "trefle_plant_id": 182512,
                "common_name": "Swiss cheese plant",
                "scientific_name": "Monstera deliciosa",
                "nickname": "Monty",
                "location": "Living room",
            }
        }
    )


class UserPlantUpdateRequest(BaseModel):
    """Partial update; omitted or null fields are left unchanged."""

    address_id: Optional[UUID] = None
    nickname: Optional[str] = Field(None, max_length=100)
    date_planted: Optional[date] = None
    location: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None
    photo_url: Optional[str] = Field(None, max_length=500)


class UserPlantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    address_id: Optional[UUID] = None
    trefle_plant_id: Optional[int] = None
    common_name: Optional[str] = None
    scientific_name: Optional[str] = None
    nickname: Optional[str] = None
    date_planted: Optional[date] = None
    location: Optional[str] = None
    notes: Optional[str] = None
    photo_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    address: Optional[AddressResponse] = None
