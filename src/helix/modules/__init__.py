"""Helix Modules - All application modules."""

from helix.modules.tags import router as tags_router
from helix.modules.contacts import router as contacts_router

__all__ = [
    "tags_router",
    "contacts_router",
]
