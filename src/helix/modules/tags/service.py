"""
Helix Tags - Service

Business logic for tag management against the user's tag collection.
"""

import asyncio
import logging
from typing import TYPE_CHECKING

from helix.auth.schemas import User
from helix.config import TagsSettings, get_settings
from helix.exceptions import HelixException, NotFoundException, ValidationException
from .repository import TagsRepository
from .schemas import (
    Tag, TagCreate, TagResponse, TagListResponse,
    TagDeleteByName, TagNameDeleteOutcome, TagDeleteResult,
)

if TYPE_CHECKING:
    from helix.modules.contacts.service import ContactsService

logger = logging.getLogger(__name__)


def _to_response(tag: Tag) -> TagResponse:
    return TagResponse(id=tag.id, name=tag.name, created_at=tag.created_at)


class TagsService:
    """
    Manages a user's tags.

    Tags are:
    - Scoped by user id (``users/{uid}/tags``, never cross-user)
    - Keyed by name for display and delete-by-name; duplicates are possible
    - Created and deleted, never updated in place
    """

    def __init__(
        self,
        repository: TagsRepository | None = None,
        contacts: "ContactsService | None" = None,
        settings: TagsSettings | None = None,
    ):
        from helix.modules.contacts.service import ContactsService

        self.repository = repository or TagsRepository()
        self.contacts = contacts or ContactsService()
        self.settings = settings or get_settings().tags

    # -------------------------------------------------------------------------
    # Fetch
    # -------------------------------------------------------------------------

    async def list_tags(self, user: User) -> TagListResponse:
        """List all tags for the user, ordered by name."""
        tags = await self.repository.list_by_name(user.id)
        return TagListResponse(
            items=[_to_response(t) for t in tags],
            names=[t.name for t in tags],
            total=len(tags),
        )

    # -------------------------------------------------------------------------
    # Add
    # -------------------------------------------------------------------------

    def _validate_name(self, name: str) -> str:
        name = name.strip()
        if not name:
            raise ValidationException(
                "Tag name must not be empty",
                errors=[{"field": "name", "error": "empty"}],
            )
        if len(name) > self.settings.max_name_length:
            raise ValidationException(
                f"Tag name is longer than {self.settings.max_name_length} characters",
                errors=[{"field": "name", "error": "too_long"}],
            )
        return name

    async def create_tag(self, data: TagCreate, user: User) -> TagResponse:
        """Write one ``{name, createdAt}`` document for a non-empty name."""
        name = self._validate_name(data.name)

        if self.settings.dedupe_on_create:
            for existing in await self.repository.list_by_name(user.id):
                if existing.name.lower() == name.lower():
                    logger.info(f"Tag '{name}' already exists for {user.id}, returning {existing.id}")
                    return _to_response(existing)

        tag = await self.repository.add(user.id, name)
        logger.info(f"[AUDIT] create tag {tag.id} '{name}' by {user.id}")
        return _to_response(tag)

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    async def _delete_name(self, name: str, user: User) -> TagNameDeleteOutcome:
        try:
            tags = await self.repository.find_by_name(user.id, name)
        except HelixException as e:
            logger.warning(f"Failed to look up tag '{name}' for {user.id}: {e.code} {e.message}")
            return TagNameDeleteOutcome(name=name, error=e.message)

        results = await asyncio.gather(
            *(self.repository.delete(user.id, tag.id) for tag in tags),
            return_exceptions=True,
        )

        errors = [r for r in results if isinstance(r, BaseException)]
        for error in errors:
            if not isinstance(error, HelixException):
                raise error
        deleted = len(results) - len(errors)

        if errors:
            first = errors[0]
            logger.warning(
                f"Failed to delete {len(errors)}/{len(results)} '{name}' tags for {user.id}: "
                f"{first.code} {first.message}"
            )
            return TagNameDeleteOutcome(name=name, deleted_count=deleted, error=first.message)
        return TagNameDeleteOutcome(name=name, deleted_count=deleted)

    async def delete_tags_by_name(self, data: TagDeleteByName, user: User) -> TagDeleteResult:
        """
        Delete every document matching each name.

        Names, and the documents under each name, are deleted concurrently
        and independently; a failing delete is reported and does not stop
        the others.
        """
        names = list(dict.fromkeys(data.names))
        results = await asyncio.gather(*(self._delete_name(name, user) for name in names))

        deleted_count = sum(r.deleted_count for r in results)
        failed_names = [r.name for r in results if r.error is not None]

        logger.info(
            f"[AUDIT] delete tags by name {names} by {user.id}: "
            f"{deleted_count} documents, {len(failed_names)} failed"
        )

        return TagDeleteResult(
            results=list(results),
            deleted_count=deleted_count,
            failed_names=failed_names,
            message=f"Deleted {deleted_count} tag documents for {len(names) - len(failed_names)}/{len(names)} names",
        )

    async def delete_tag(self, tag_id: str, user: User) -> bool:
        """
        Delete one tag document by id.

        The name is also removed from the user's contacts unless another tag
        document still carries it.
        """
        tag = await self.repository.get_by_id(user.id, tag_id)
        if tag is None:
            raise NotFoundException("tag", tag_id)

        await self.repository.delete(user.id, tag_id)

        remaining = await self.repository.find_by_name(user.id, tag.name)
        if not remaining:
            updated = await self.contacts.remove_tag_everywhere(tag.name, user)
            logger.info(f"Removed tag '{tag.name}' from {updated} contacts of {user.id}")

        logger.info(f"[AUDIT] delete tag {tag_id} '{tag.name}' by {user.id}")
        return True


def get_tags_service() -> TagsService:
    """Build a tags service over the configured store."""
    return TagsService()
