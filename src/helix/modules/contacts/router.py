"""Helix Contacts - Router.

Contact list browsing and bulk tagging.
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from helix.auth import get_current_user
from helix.auth.schemas import User
from helix.deps import require_contacts
from helix.modules.contacts.schemas import BulkTagAction, ContactListResponse, ContactQuery, SortOption
from helix.modules.contacts.service import ContactsService, get_contacts_service
from helix.schemas import BulkActionResult, ErrorResponse

router = APIRouter(
    prefix="/contacts",
    tags=["Contacts"],
    dependencies=[require_contacts],
    responses={
        401: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)


@router.get("", response_model=ContactListResponse)
async def list_contacts(
    search: str = Query(default="", description="Matches name or company, case-insensitive"),
    tags: List[str] = Query(default=[], description="Keep contacts carrying any of these tags"),
    sort: SortOption = Query(default=SortOption.NAME),
    user: User = Depends(get_current_user),
    service: ContactsService = Depends(get_contacts_service),
) -> ContactListResponse:
    """List the current user's contacts, filtered and sorted."""
    query = ContactQuery(search=search, tags=set(tags), sort=sort)
    return await service.list_contacts(query, user)


@router.post("/bulk/tags", response_model=BulkActionResult)
async def bulk_update_tags(
    data: BulkTagAction,
    user: User = Depends(get_current_user),
    service: ContactsService = Depends(get_contacts_service),
) -> BulkActionResult:
    """Bulk add/remove tags on multiple contacts."""
    return await service.bulk_update_tags(data, user)
