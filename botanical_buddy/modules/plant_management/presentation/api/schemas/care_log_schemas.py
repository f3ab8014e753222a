"""
Plant Care Log API Schemas
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CareLogCreateRequest(BaseModel):
    user_plant_id: UUID
    care_type: str = Field(..., min_length=1, max_length=50, examples=["watering"])
    date_time: Optional[datetime] = Field(None, description="Defaults to now")
    amount: Optional[str] = Field(None, max_length=50, examples=["250 ml"])
    notes: Optional[str] = None


class CareLogUpdateRequest(BaseModel):
    """Partial update; omitted or null fields are left unchanged."""

    care_type: Optional[str] = Field(None, min_length=1, max_length=50)
    date_time: Optional[datetime] = None
    amount: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = None


class CareLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_plant_id: UUID
    care_type: str
    date_time: datetime
    amount: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime


class CareTypeStatistics(BaseModel):
    care_type: str
    count: int
    last_entry: datetime
    first_entry: datetime


class CareStatisticsResponse(BaseModel):
    total_logs: int
    care_types: List[CareTypeStatistics]
