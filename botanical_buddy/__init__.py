# 📄 File: botanical_buddy/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'botanical_buddy' folder as our plant tracking application and records
# which version of the app this is.
#
# 🧪 Purpose (Technical Summary):
# Package initialization with version metadata for the Botanical Buddy FastAPI service.
#
# 🔗 Dependencies:
# - None
#
# 🔄 Connected Modules / Calls From:
# - botanical_buddy.main (application metadata)
# - Health endpoint version reporting

"""
Botanical Buddy - Plant Care Tracking API

Backend API for tracking a personal plant collection: addresses, plants,
care logs, local weather and a cached plant taxonomy lookup.
"""

__version__ = "1.0.0"
__title__ = "Botanical Buddy API"
__description__ = "Plant care tracking API with taxonomy and weather lookups"
