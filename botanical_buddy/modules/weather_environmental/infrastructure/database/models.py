"""
SQLAlchemy Models for Weather & Environmental Data

WeatherDataModel keeps one observation per address per calendar day (UTC).
The (address_id, date) unique constraint lets concurrent writers insert with
ON CONFLICT DO NOTHING and still end up with a single row.
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
    UniqueConstraint,
    Uuid,
)

from botanical_buddy.shared.infrastructure.database.connection import Base
from botanical_buddy.shared.utils.helpers import utcnow


class WeatherDataModel(Base):
    """SQLAlchemy model for daily weather observations per address."""
    __tablename__ = "weather_data"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4, nullable=False)
    address_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("addresses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date = Column(Date, nullable=False, comment="Calendar day (UTC) of the observation")
    temperature = Column(Numeric(5, 2), nullable=True, comment="Degrees Celsius")
    humidity = Column(Integer, nullable=True, comment="Relative humidity, percent")
    precipitation = Column(Numeric(5, 2), nullable=True, comment="Millimetres; 0 when the provider omits it")
    conditions = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint("address_id", "date", name="uq_weather_data_address_id_date"),
    )

    def __repr__(self) -> str:
        return f"<WeatherDataModel(address_id={self.address_id}, date={self.date})>"
