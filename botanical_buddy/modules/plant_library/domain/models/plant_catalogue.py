"""
Plant Catalogue Models

Subset of the Trefle v1 JSON (snake_case) consumed by the plant library.
Unknown fields are ignored.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class TreflePlant(BaseModel):
    """Summary entry from list/search results."""

    id: int
    common_name: Optional[str] = None
    scientific_name: Optional[str] = None
    family_common_name: Optional[str] = None
    image_url: Optional[str] = None
    slug: Optional[str] = None


class TreflePlantDetail(BaseModel):
    """Single species record."""

    id: int
    common_name: Optional[str] = None
    scientific_name: Optional[str] = None
    family: Optional[str] = None
    genus: Optional[str] = None
    observations: Optional[str] = None
    vegetable: bool = False
    image_url: Optional[str] = None

    @field_validator("family", "genus", mode="before")
    @classmethod
    def flatten_taxon(cls, v: Any) -> Any:
        # Trefle nests some taxa as objects with a "name" key
        if isinstance(v, dict):
            return v.get("name")
        return v

    @field_validator("vegetable", mode="before")
    @classmethod
    def default_vegetable(cls, v: Any) -> Any:
        return bool(v) if v is not None else False


class TreflePlantPage(BaseModel):
    """Paginated list with provider links and metadata."""

    data: List[TreflePlant] = Field(default_factory=list)
    links: Dict[str, Optional[str]] = Field(default_factory=dict)
    meta: Dict[str, Any] = Field(default_factory=dict)


class TreflePlantDetailEnvelope(BaseModel):
    data: TreflePlantDetail
    meta: Dict[str, Any] = Field(default_factory=dict)
