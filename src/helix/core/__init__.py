"""
Helix Core - storage plumbing shared by all modules.

- document_store: per-user document collections (memory / Firestore / Supabase)
- repository: async repository base over a document collection
"""

from helix.core.document_store import (
    DocumentStore,
    InMemoryDocumentStore,
    get_document_store,
    reset_document_store,
)
from helix.core.repository import BaseRepository

__all__ = [
    "DocumentStore",
    "InMemoryDocumentStore",
    "get_document_store",
    "reset_document_store",
    "BaseRepository",
]
