"""
Daily Weather Model

One persisted weather observation per address per UTC day, as served to clients
and held in the lookup cache.
"""

from datetime import date, datetime
from uuid import UUID
from typing import Optional

from pydantic import BaseModel, ConfigDict


class DailyWeather(BaseModel):
    """Detached copy of a weather_data row."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    address_id: UUID
    date: date
    temperature: Optional[float] = None
    humidity: Optional[int] = None
    precipitation: Optional[float] = None
    conditions: Optional[str] = None
    created_at: datetime
