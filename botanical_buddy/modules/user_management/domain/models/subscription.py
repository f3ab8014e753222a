"""
Subscription domain enumerations.

Tier names are stored verbatim in ``users.subscription_tier`` and
``subscriptions.tier``; comparisons are exact.
"""

from enum import Enum


class SubscriptionTier(str, Enum):
    """Subscription tier gating resource-creation limits"""
    FREE = "Free"
    BASIC = "Basic"
    PREMIUM = "Premium"


class SubscriptionStatus(str, Enum):
    """Billing state of a subscription record"""
    ACTIVE = "active"
    CANCELLED = "cancelled"
    PAST_DUE = "past_due"
