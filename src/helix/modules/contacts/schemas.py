"""
Helix Contacts - Schemas

Pydantic models for browsing contacts and bulk tagging.
"""

from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class SortOption(str, Enum):
    """Contact list order."""
    NAME = "name"
    DATE_ADDED = "date_added"


class Contact(BaseModel):
    """Stored contact document: ``users/{uid}/contacts/{id}``."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    company: str | None = None
    position: str | None = None
    phone: str | None = None
    email: str | None = None
    note: str | None = None
    tags: List[str] | None = None
    date_added: datetime = Field(..., alias="dateAdded")
    date_modified: datetime | None = Field(default=None, alias="dateModified")


class ContactQuery(BaseModel):
    """Search text, selected tags and sort order of the contact list."""
    search: str = ""
    tags: set[str] = Field(default_factory=set)
    sort: SortOption = SortOption.NAME


class ContactResponse(BaseModel):
    """Contact response."""
    id: str
    name: str
    company: str | None = None
    position: str | None = None
    phone: str | None = None
    email: str | None = None
    note: str | None = None
    tags: List[str] = Field(default_factory=list)
    date_added: datetime
    date_modified: datetime | None = None


class ContactListResponse(BaseModel):
    """Filtered and sorted contacts."""
    items: List[ContactResponse]
    total: int
    tag_filter_label: str


class BulkTagAction(BaseModel):
    """Bulk add/remove tag names on multiple contacts."""
    contact_ids: List[str] = Field(..., min_length=1, max_length=100)
    add_tags: List[str] = Field(default_factory=list)
    remove_tags: List[str] = Field(default_factory=list)
