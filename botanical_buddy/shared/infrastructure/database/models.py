"""
Model registry.

Importing this module registers every table on ``Base.metadata``; used by
schema creation at startup and by Alembic autogenerate.
"""

from botanical_buddy.modules.user_management.infrastructure.database.models import (  # noqa: F401
    SubscriptionModel,
    UserModel,
)
from botanical_buddy.modules.plant_management.infrastructure.database.models import (  # noqa: F401
    AddressModel,
    PlantCareLogModel,
    UserPlantModel,
)
from botanical_buddy.modules.weather_environmental.infrastructure.database.models import (  # noqa: F401
    WeatherDataModel,
)
from botanical_buddy.shared.infrastructure.database.connection import Base

metadata = Base.metadata
