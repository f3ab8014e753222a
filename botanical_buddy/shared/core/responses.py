# 📄 File: botanical_buddy/shared/core/responses.py
#
# 🧭 Purpose (Layman Explanation):
# Every answer the API sends back is wrapped the same way ("success", then the data or
# the error), so the mobile app always knows where to look.
#
# 🧪 Purpose (Technical Summary):
# Generic pydantic response envelope used as the response_model of every endpoint.
# Top-level fields left as None are dropped from the serialized JSON.
#
# 🔗 Dependencies:
# - pydantic v2 (generic models, model_serializer)
#
# 🔄 Connected Modules / Calls From:
# - All presentation routers
# - botanical_buddy.api.middleware.error_handling (error shape)

from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, model_serializer

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    """Uniform success/error envelope."""

    success: bool = True
    data: Optional[DataT] = None
    error: Optional[str] = None
    message: Optional[str] = None
    count: Optional[int] = None
    meta: Optional[Dict[str, Any]] = None
    links: Optional[Dict[str, Any]] = None
    query: Optional[str] = None
    filter: Optional[str] = None

    @model_serializer(mode="wrap")
    def _drop_unset_fields(self, handler) -> Dict[str, Any]:
        payload = handler(self)
        return {key: value for key, value in payload.items() if value is not None}


def error_envelope(error: str, message: Optional[str] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"success": False, "error": error}
    if message:
        payload["message"] = message
    return payload
