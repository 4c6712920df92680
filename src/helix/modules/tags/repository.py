"""
Helix Tags - Repository.

Store operations for ``users/{uid}/tags``.
"""

from datetime import datetime, timezone

from helix.core.document_store import Document
from helix.core.repository import BaseRepository
from helix.modules.tags.schemas import Tag


class TagsRepository(BaseRepository[Tag]):
    """Repository for a user's tag documents."""

    @property
    def collection_name(self) -> str:
        return "tags"

    def to_model(self, doc: Document) -> Tag:
        return Tag.model_validate(doc)

    async def list_by_name(self, user_id: str) -> list[Tag]:
        """All tags of the user, ordered by name."""
        return await self.list(user_id, order_by="name")

    async def find_by_name(self, user_id: str, name: str) -> list[Tag]:
        """Every tag document with exactly this name (duplicates included)."""
        return await self.find_by(user_id, "name", name)

    async def add(self, user_id: str, name: str, created_at: datetime | None = None) -> Tag:
        """Insert one ``{name, createdAt}`` document."""
        return await self.create(
            user_id,
            {"name": name, "createdAt": created_at or datetime.now(timezone.utc)},
        )
