# 📄 File: botanical_buddy/modules/user_management/domain/services/tier_policy.py
#
# 🧭 Purpose (Layman Explanation):
# Decides whether someone may add another plant based on their plan:
# Free gets 5 plants, Basic gets 25, Premium is unlimited.
#
# 🧪 Purpose (Technical Summary):
# Pure tier policy. Unknown tier names are denied. Callers evaluate it right before
# the insert in the same unit of work.
#
# 🔗 Dependencies:
# - botanical_buddy.modules.user_management.domain.models.subscription
#
# 🔄 Connected Modules / Calls From:
# - plant_management UserPlantService.create_plant
# - user_management UserService.get_usage

from typing import Dict, Optional, Union

from botanical_buddy.modules.user_management.domain.models.subscription import SubscriptionTier

# None means unlimited
TIER_RESOURCE_LIMITS: Dict[str, Optional[int]] = {
    SubscriptionTier.FREE.value: 5,
    SubscriptionTier.BASIC.value: 25,
    SubscriptionTier.PREMIUM.value: None,
}


def _tier_name(tier: Union[str, SubscriptionTier, None]) -> Optional[str]:
    if isinstance(tier, SubscriptionTier):
        return tier.value
    return tier


def resource_limit(tier: Union[str, SubscriptionTier, None]) -> Optional[int]:
    """
    Maximum number of resources for a tier.

    Returns:
        Optional[int]: The limit, None for unlimited tiers, 0 for unknown tiers
    """
    name = _tier_name(tier)
    if name not in TIER_RESOURCE_LIMITS:
        return 0
    return TIER_RESOURCE_LIMITS[name]


def can_add_resource(tier: Union[str, SubscriptionTier, None], current_count: int) -> bool:
    """
    Check whether a user on ``tier`` who already owns ``current_count`` resources
    may create one more.

    Args:
        tier: Subscription tier name
        current_count: Resources currently owned

    Returns:
        bool: True if creation is allowed
    """
    name = _tier_name(tier)
    if name not in TIER_RESOURCE_LIMITS:
        return False

    limit = TIER_RESOURCE_LIMITS[name]
    return limit is None or current_count < limit
