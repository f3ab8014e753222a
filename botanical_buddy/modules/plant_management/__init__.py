# 📄 File: botanical_buddy/modules/plant_management/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups everything about a user's own garden: addresses, plants and their care history.
# 🧪 Purpose (Technical Summary):
# Plant management module with owner-scoped repositories for addresses, user plants and
# plant care logs, the address referential guard and care statistics.
# 🔗 Dependencies:
# FastAPI, SQLAlchemy, pydantic
# 🔄 Connected Modules / Calls From:
# botanical_buddy.api.v1.router, weather_environmental (address ownership)
