"""
Helix Tags Module

Tag management with:
- User-scoped tag collections (users/{uid}/tags)
- Add, list, delete by name, delete by id
- Tag selection state for the contact filter and the tag manager
"""

from .router import router
from .schemas import (
    Tag, TagCreate, TagResponse, TagListResponse,
    TagDeleteByName, TagNameDeleteOutcome, TagDeleteResult,
)
from .selection import TagSelection
from .service import TagsService, get_tags_service

__all__ = [
    "router",
    "TagsService",
    "get_tags_service",
    "TagSelection",
    "Tag",
    "TagCreate",
    "TagResponse",
    "TagListResponse",
    "TagDeleteByName",
    "TagNameDeleteOutcome",
    "TagDeleteResult",
]
