"""
Helix Core - Document Store.

Per-user document collections: ``users/{user_id}/{collection}``.

Stores are synchronous, like the SDKs they wrap; repositories run them in
worker threads. Documents are plain dicts; every returned document carries
its store-assigned ``id``.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from copy import deepcopy
from typing import Any
from uuid import uuid4

from helix.config import get_settings
from helix.exceptions import NotFoundException

logger = logging.getLogger(__name__)

Document = dict[str, Any]


class DocumentStore(ABC):
    """Abstract per-user document store."""

    name: str = "abstract"

    @abstractmethod
    def list(
        self,
        user_id: str,
        collection: str,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Document]:
        """List every document in the user's collection."""

    @abstractmethod
    def find(self, user_id: str, collection: str, field: str, value: Any) -> list[Document]:
        """List documents whose ``field`` equals ``value``."""

    @abstractmethod
    def get(self, user_id: str, collection: str, doc_id: str) -> Document | None:
        """Get one document, or None if it does not exist."""

    @abstractmethod
    def add(self, user_id: str, collection: str, data: Document) -> Document:
        """Insert a document with a store-assigned id and return it."""

    @abstractmethod
    def update(self, user_id: str, collection: str, doc_id: str, data: Document) -> None:
        """Merge ``data`` into an existing document. Raises NotFoundException."""

    @abstractmethod
    def delete(self, user_id: str, collection: str, doc_id: str) -> None:
        """Delete a document. Deleting a missing document is a no-op."""


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store for local development and tests."""

    name = "memory"

    def __init__(self):
        # {(user_id, collection): {doc_id: data}}
        self._collections: dict[tuple[str, str], dict[str, Document]] = {}
        self._lock = threading.Lock()

    def _collection(self, user_id: str, collection: str) -> dict[str, Document]:
        return self._collections.setdefault((user_id, collection), {})

    @staticmethod
    def _with_id(doc_id: str, data: Document) -> Document:
        doc = deepcopy(data)
        doc["id"] = doc_id
        return doc

    def list(self, user_id, collection, order_by=None, descending=False):
        with self._lock:
            docs = [self._with_id(doc_id, data) for doc_id, data in self._collection(user_id, collection).items()]

        if order_by:
            # Firestore drops documents missing the order field
            docs = [d for d in docs if d.get(order_by) is not None]
            docs.sort(key=lambda d: d[order_by], reverse=descending)
        return docs

    def find(self, user_id, collection, field, value):
        with self._lock:
            return [
                self._with_id(doc_id, data)
                for doc_id, data in self._collection(user_id, collection).items()
                if data.get(field) == value
            ]

    def get(self, user_id, collection, doc_id):
        with self._lock:
            data = self._collection(user_id, collection).get(doc_id)
            return self._with_id(doc_id, data) if data is not None else None

    def add(self, user_id, collection, data):
        doc_id = uuid4().hex
        with self._lock:
            stored = {k: v for k, v in deepcopy(data).items() if k != "id"}
            self._collection(user_id, collection)[doc_id] = stored
            return self._with_id(doc_id, stored)

    def update(self, user_id, collection, doc_id, data):
        with self._lock:
            docs = self._collection(user_id, collection)
            if doc_id not in docs:
                raise NotFoundException(collection, doc_id)
            docs[doc_id].update({k: v for k, v in deepcopy(data).items() if k != "id"})

    def delete(self, user_id, collection, doc_id):
        with self._lock:
            self._collection(user_id, collection).pop(doc_id, None)


# =============================================================================
# Factory
# =============================================================================

_document_store: DocumentStore | None = None


def create_document_store(backend: str) -> DocumentStore:
    """Build the store for a STORAGE_BACKEND value."""
    if backend == "memory":
        return InMemoryDocumentStore()

    if backend == "firestore":
        from helix.core.firebase_client import get_firestore_client
        from helix.core.firestore_store import FirestoreDocumentStore

        return FirestoreDocumentStore(get_firestore_client())

    if backend == "supabase":
        from helix.core.supabase_store import SupabaseDocumentStore, get_supabase_client

        return SupabaseDocumentStore(get_supabase_client())

    raise ValueError(f"Unknown storage backend: {backend}")


def get_document_store() -> DocumentStore:
    """Get the document store singleton for the configured backend."""
    global _document_store
    if _document_store is None:
        backend = get_settings().storage_backend
        _document_store = create_document_store(backend)
        logger.info(f"Document store initialized [backend={backend}]")
    return _document_store


def reset_document_store() -> None:
    """Drop the store singleton (settings changes, tests)."""
    global _document_store
    _document_store = None
