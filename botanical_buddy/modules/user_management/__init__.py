# 📄 File: botanical_buddy/modules/user_management/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups everything about user accounts: signing up, logging in and plan limits.
# 🧪 Purpose (Technical Summary):
# User management module: registration and login with bearer tokens, demo token issuance,
# subscription tiers and the tier policy for plant counts.
# 🔗 Dependencies:
# FastAPI, SQLAlchemy, pydantic, passlib, python-jose
# 🔄 Connected Modules / Calls From:
# botanical_buddy.api.v1.router, plant_management (tier policy)
