"""
Helix Contacts Module

Contact list state behind the search bar, sort menu and tag filter:
- Search over name and company
- Filter by selected tag names
- Sort by name or date added
- Bulk tag assignment
"""

from .router import router
from .schemas import BulkTagAction, Contact, ContactListResponse, ContactQuery, ContactResponse, SortOption
from .service import ContactsService, get_contacts_service

__all__ = [
    "router",
    "ContactsService",
    "get_contacts_service",
    "BulkTagAction",
    "Contact",
    "ContactListResponse",
    "ContactQuery",
    "ContactResponse",
    "SortOption",
]
