"""
User API Schemas

Response Schemas:
- UserResponse: Public user profile
- SubscriptionResponse: Active subscription summary
- UsageResponse: Plan usage against the tier limit
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class UserResponse(BaseModel):
    """Public profile of a user. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    subscription_tier: str
    email_verified: bool
    created_at: datetime


class SubscriptionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tier: str
    status: str
    current_period_start: Optional[datetime] = None
    current_period_end: Optional[datetime] = None
    cancel_at_period_end: bool = False


class UsageResponse(BaseModel):
    """How many plants a user has and how many their tier allows."""

    tier: str
    plant_count: int
    plant_limit: Optional[int] = None
    can_add_plant: bool
    subscription: Optional[SubscriptionResponse] = None
