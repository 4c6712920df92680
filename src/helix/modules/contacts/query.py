"""Helix Contacts - list filtering and ordering."""

from typing import Iterable

from helix.modules.contacts.schemas import Contact, ContactQuery, SortOption


def matches_search(contact: Contact, search: str) -> bool:
    """Case-insensitive substring match on '<name> <company>'."""
    content = f"{contact.name} {contact.company or ''}"
    return search.lower() in content.lower()


def matches_tags(contact: Contact, selected: set[str]) -> bool:
    """True if the contact carries at least one selected tag."""
    if not contact.tags:
        return False
    return not selected.isdisjoint(contact.tags)


def apply_query(contacts: Iterable[Contact], query: ContactQuery) -> list[Contact]:
    """Search filter, then tag filter, then sort."""
    result = list(contacts)

    if query.search:
        result = [c for c in result if matches_search(c, query.search)]

    if query.tags:
        result = [c for c in result if matches_tags(c, query.tags)]

    if query.sort == SortOption.NAME:
        result.sort(key=lambda c: c.name)
    else:
        result.sort(key=lambda c: c.date_added, reverse=True)

    return result
