"""
Helix Tags - Schemas

Pydantic models for tag management.
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Tag Schemas
# =============================================================================

class Tag(BaseModel):
    """
    Stored tag document: ``users/{uid}/tags/{id}``.

    The document fields are ``name`` and ``createdAt``; ``id`` is assigned
    by the store.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    created_at: datetime = Field(..., alias="createdAt")


class TagCreate(BaseModel):
    """Create a new tag. Surrounding whitespace is dropped."""
    name: str = Field(..., description="Tag name")

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return value.strip()


class TagResponse(BaseModel):
    """Tag response."""
    id: str
    name: str
    created_at: datetime


class TagListResponse(BaseModel):
    """Tags of the current user, ordered by name."""
    items: List[TagResponse]
    names: List[str] = Field(default_factory=list, description="Tag names in the same order")
    total: int


# =============================================================================
# Delete by Name
# =============================================================================

class TagDeleteByName(BaseModel):
    """Delete every tag document matching any of the names, trimmed like on create."""
    names: List[str] = Field(..., min_length=1, max_length=100)

    @field_validator("names")
    @classmethod
    def strip_names(cls, value: List[str]) -> List[str]:
        return [name.strip() for name in value]


class TagNameDeleteOutcome(BaseModel):
    """What happened to one name of a delete-by-name batch."""
    name: str
    deleted_count: int = 0
    error: str | None = None


class TagDeleteResult(BaseModel):
    """Result of a delete-by-name batch."""
    results: List[TagNameDeleteOutcome]
    deleted_count: int
    failed_names: List[str] = Field(default_factory=list)
    message: str
