"""
SQLAlchemy Models for Plant Management

Models:
- AddressModel: A user's location where plants are kept
- UserPlantModel: A plant in a user's collection, optionally linked to a Trefle species
- PlantCareLogModel: A care event (watering, fertilizing, pruning, ...) for one plant

Ownership chain: users -> addresses, users -> user_plants -> plant_care_logs.
Deleting a user removes its addresses and plants; deleting a plant removes its care
logs; deleting an address clears user_plants.address_id (the service layer refuses
such deletes while plants still reference the address).
"""

from uuid import uuid4

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship

from botanical_buddy.shared.infrastructure.database.connection import Base
from botanical_buddy.shared.utils.helpers import utcnow


# =============================================================================
# ADDRESS MODEL
# =============================================================================

class AddressModel(Base):
    """SQLAlchemy model for user addresses."""
    __tablename__ = "addresses"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4, nullable=False)
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    address_line1 = Column(String(255), nullable=False)
    address_line2 = Column(String(255), nullable=True)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=True)
    country = Column(String(100), nullable=False)
    postal_code = Column(String(20), nullable=True)
    latitude = Column(
        Numeric(10, 8),
        nullable=True,
        comment="Set by geocoding, required for weather lookups"
    )
    longitude = Column(Numeric(11, 8), nullable=True)
    timezone = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<AddressModel(id={self.id}, city={self.city})>"


# =============================================================================
# USER PLANT MODEL
# =============================================================================

class UserPlantModel(Base):
    """SQLAlchemy model for plants in a user's collection."""
    __tablename__ = "user_plants"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4, nullable=False)
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    address_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("addresses.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    trefle_plant_id = Column(Integer, nullable=True, comment="Species id in the Trefle catalogue")
    common_name = Column(String(255), nullable=True)
    scientific_name = Column(String(255), nullable=True)
    nickname = Column(String(100), nullable=True)
    date_planted = Column(Date, nullable=True)
    location = Column(String(255), nullable=True, comment="Spot within the address, e.g. 'kitchen window'")
    notes = Column(Text, nullable=True)
    photo_url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Async sessions cannot lazy load; use selectinload or refresh
    address = relationship("AddressModel")

    def __repr__(self) -> str:
        return f"<UserPlantModel(id={self.id}, common_name={self.common_name})>"


# =============================================================================
# PLANT CARE LOG MODEL
# =============================================================================

class PlantCareLogModel(Base):
    """SQLAlchemy model for plant care events."""
    __tablename__ = "plant_care_logs"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4, nullable=False)
    user_plant_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("user_plants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    care_type = Column(String(50), nullable=False, comment="watering, fertilizing, pruning, ...")
    date_time = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    amount = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<PlantCareLogModel(id={self.id}, care_type={self.care_type})>"
