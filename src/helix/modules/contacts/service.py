"""
Helix Contacts - Service

Contact browsing (search, tag filter, sort) and bulk tag assignment.
"""

import logging

from helix.auth.schemas import User
from helix.exceptions import HelixException
from helix.schemas import BulkActionResult
from helix.modules.tags.selection import TagSelection
from .query import apply_query
from .repository import ContactsRepository
from .schemas import BulkTagAction, Contact, ContactListResponse, ContactQuery, ContactResponse

logger = logging.getLogger(__name__)


def _to_response(contact: Contact) -> ContactResponse:
    return ContactResponse(
        id=contact.id,
        name=contact.name,
        company=contact.company,
        position=contact.position,
        phone=contact.phone,
        email=contact.email,
        note=contact.note,
        tags=contact.tags or [],
        date_added=contact.date_added,
        date_modified=contact.date_modified,
    )


def merge_tags(current: list[str] | None, add: list[str], remove: list[str]) -> list[str]:
    """Apply additions then removals, keeping first-seen order and no repeats."""
    removed = set(remove)
    merged: list[str] = []
    for name in [*(current or []), *add]:
        if name not in removed and name not in merged:
            merged.append(name)
    return merged


class ContactsService:
    """Reads and tags the current user's contacts."""

    def __init__(self, repository: ContactsRepository | None = None):
        self.repository = repository or ContactsRepository()

    async def list_contacts(self, query: ContactQuery, user: User) -> ContactListResponse:
        """Contacts filtered by search text and selected tags, sorted."""
        contacts = await self.repository.list_newest_first(user.id)
        items = apply_query(contacts, query)
        return ContactListResponse(
            items=[_to_response(c) for c in items],
            total=len(items),
            tag_filter_label=TagSelection(query.tags).label,
        )

    async def bulk_update_tags(self, data: BulkTagAction, user: User) -> BulkActionResult:
        """Add/remove tag names on several contacts; each contact independently."""
        success_count = 0
        failed_ids: list[str] = []

        for contact_id in data.contact_ids:
            try:
                contact = await self.repository.get_by_id_or_raise(user.id, contact_id)
                tags = merge_tags(contact.tags, data.add_tags, data.remove_tags)
                if tags != (contact.tags or []):
                    await self.repository.set_tags(user.id, contact_id, tags)
                success_count += 1
            except HelixException as e:
                logger.warning(f"Failed to update tags for contact {contact_id}: {e.code} {e.message}")
                failed_ids.append(contact_id)

        logger.info(
            f"[AUDIT] bulk_update_tags contacts={len(data.contact_ids)} "
            f"add={data.add_tags} remove={data.remove_tags} by {user.id}"
        )

        return BulkActionResult(
            success_count=success_count,
            failed_count=len(failed_ids),
            failed_ids=failed_ids,
            message=f"Updated tags for {success_count}/{len(data.contact_ids)} contacts",
        )

    async def remove_tag_everywhere(self, name: str, user: User) -> int:
        """Strip a tag name from every contact that carries it. Returns the count."""
        contacts = await self.repository.list(user.id)
        updated = 0
        for contact in contacts:
            if contact.tags and name in contact.tags:
                await self.repository.set_tags(user.id, contact.id, [t for t in contact.tags if t != name])
                updated += 1
        return updated


def get_contacts_service() -> ContactsService:
    """Build a contacts service over the configured store."""
    return ContactsService()
