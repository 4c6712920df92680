"""
Helix Contacts - Repository.

Store operations for ``users/{uid}/contacts``.
"""

from datetime import datetime, timezone

from helix.core.document_store import Document
from helix.core.repository import BaseRepository
from helix.modules.contacts.schemas import Contact


class ContactsRepository(BaseRepository[Contact]):
    """Repository for a user's contact documents."""

    @property
    def collection_name(self) -> str:
        return "contacts"

    def to_model(self, doc: Document) -> Contact:
        return Contact.model_validate(doc)

    async def list_newest_first(self, user_id: str) -> list[Contact]:
        return await self.list(user_id, order_by="dateAdded", descending=True)

    async def set_tags(self, user_id: str, contact_id: str, tags: list[str]) -> None:
        """Replace the contact's tag names and bump ``dateModified``."""
        await self.update(
            user_id,
            contact_id,
            {"tags": tags, "dateModified": datetime.now(timezone.utc)},
        )
