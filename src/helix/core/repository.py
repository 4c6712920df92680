"""
Helix Core - Base Repository.

Abstract base class for all repositories following the repository pattern.
Every store call runs in a worker thread, bounded by STORE_TIMEOUT_SECONDS.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

from helix.config import get_settings
from helix.core.document_store import Document, DocumentStore, get_document_store
from helix.exceptions import NotFoundException, StoreTimeoutException

T = TypeVar("T")


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository over a per-user document collection.

    All module repositories should inherit from this class.
    """

    def __init__(self, store: DocumentStore | None = None, timeout_seconds: float | None = None):
        """Initialize repository with optional store and timeout."""
        self._store = store or get_document_store()
        self._timeout = timeout_seconds or get_settings().store_timeout_seconds

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """Return the collection name for this repository."""
        ...

    @abstractmethod
    def to_model(self, doc: Document) -> T:
        """Convert a stored document into the repository's model."""
        ...

    async def _run(self, operation: str, func: Callable[..., Any], *args: Any) -> Any:
        try:
            return await asyncio.wait_for(asyncio.to_thread(func, *args), timeout=self._timeout)
        except asyncio.TimeoutError:
            raise StoreTimeoutException(f"{self.collection_name}.{operation}", self._timeout)

    async def list(self, user_id: str, order_by: str | None = None, descending: bool = False) -> list[T]:
        """
        List every record owned by the user.

        Args:
            user_id: Owner of the collection
            order_by: Optional field to order by
            descending: Order direction

        Returns:
            Records in store order (or ordered by ``order_by``)
        """
        docs = await self._run("list", self._store.list, user_id, self.collection_name, order_by, descending)
        return [self.to_model(doc) for doc in docs]

    async def find_by(self, user_id: str, field: str, value: Any) -> list[T]:
        """List records whose ``field`` equals ``value``."""
        docs = await self._run("find", self._store.find, user_id, self.collection_name, field, value)
        return [self.to_model(doc) for doc in docs]

    async def get_by_id(self, user_id: str, id: str) -> T | None:
        """
        Get a single record by ID.

        Returns:
            The record if found, None otherwise
        """
        doc = await self._run("get", self._store.get, user_id, self.collection_name, id)
        return self.to_model(doc) if doc is not None else None

    async def get_by_id_or_raise(self, user_id: str, id: str) -> T:
        """
        Get a single record by ID, raise if not found.

        Raises:
            NotFoundException: If record not found
        """
        result = await self.get_by_id(user_id, id)
        if result is None:
            raise NotFoundException(self.collection_name, id)
        return result

    async def create(self, user_id: str, data: dict[str, Any]) -> T:
        """Create a new record and return it with its store-assigned id."""
        doc = await self._run("create", self._store.add, user_id, self.collection_name, data)
        return self.to_model(doc)

    async def update(self, user_id: str, id: str, data: dict[str, Any]) -> None:
        """Merge fields into an existing record."""
        await self._run("update", self._store.update, user_id, self.collection_name, id, data)

    async def delete(self, user_id: str, id: str) -> bool:
        """Delete a record by ID."""
        await self._run("delete", self._store.delete, user_id, self.collection_name, id)
        return True
