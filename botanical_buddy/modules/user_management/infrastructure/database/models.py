"""
SQLAlchemy Models for User Management

Models:
- UserModel: Account, credentials and subscription tier
- SubscriptionModel: Billing periods for a user's plan

All models use UUID primary keys and timezone-aware timestamps. Child rows
are removed by the database (ON DELETE CASCADE) when a user is deleted.
"""

from uuid import uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    String,
    Uuid,
)

from botanical_buddy.shared.infrastructure.database.connection import Base
from botanical_buddy.shared.utils.helpers import utcnow


# =============================================================================
# USER MODEL
# =============================================================================

class UserModel(Base):
    """SQLAlchemy model for user accounts."""
    __tablename__ = "users"

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
        nullable=False,
        comment="Unique identifier for each user"
    )
    email = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Lower-cased email address"
    )
    password_hash = Column(
        String(255),
        nullable=False,
        comment="Hashed password using bcrypt"
    )
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    subscription_tier = Column(
        String(20),
        nullable=False,
        default="Free",
        comment="Free, Basic or Premium"
    )
    billing_customer_id = Column(
        String(255),
        nullable=True,
        comment="Customer reference at the billing provider"
    )
    email_verified = Column(
        Boolean,
        nullable=False,
        default=False,
        comment="Email verification status"
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email}, tier={self.subscription_tier})>"


# =============================================================================
# SUBSCRIPTION MODEL
# =============================================================================

class SubscriptionModel(Base):
    """SQLAlchemy model for a user's subscription billing periods."""
    __tablename__ = "subscriptions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4, nullable=False)
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tier = Column(String(20), nullable=False)
    status = Column(
        String(20),
        nullable=False,
        default="active",
        comment="active, cancelled or past_due"
    )
    billing_subscription_id = Column(
        String(255),
        nullable=True,
        comment="Subscription reference at the billing provider"
    )
    current_period_start = Column(DateTime(timezone=True), nullable=True)
    current_period_end = Column(DateTime(timezone=True), nullable=True)
    cancel_at_period_end = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint(
            "status IN ('active', 'cancelled', 'past_due')",
            name="status",
        ),
    )

    def __repr__(self) -> str:
        return f"<SubscriptionModel(id={self.id}, user_id={self.user_id}, status={self.status})>"
