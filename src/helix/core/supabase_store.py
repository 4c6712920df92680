"""
Helix Core - Supabase Document Store.

Each collection is a table with a ``user_id`` column standing in for the
parent user document. Expected schema (Supabase):

- tags(id uuid primary key default gen_random_uuid(), user_id text,
  name text, "createdAt" timestamptz)
- contacts(id uuid primary key default gen_random_uuid(), user_id text,
  name text, company text, tags text[], "dateAdded" timestamptz, ...)
"""

from __future__ import annotations

from datetime import datetime
from functools import lru_cache
from typing import Any

from postgrest.exceptions import APIError
from supabase import Client, create_client

from helix.config import get_settings
from helix.core.document_store import Document, DocumentStore
from helix.exceptions import ExternalServiceException, NotFoundException


@lru_cache
def get_supabase_client() -> Client:
    """Get configured Supabase client (service role key, cached)."""
    settings = get_settings()
    return create_client(
        supabase_url=settings.supabase.url,
        supabase_key=settings.supabase.service_role_key,
    )


def _serialize(data: Document) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for key, value in data.items():
        if key == "id":
            continue
        payload[key] = value.isoformat() if isinstance(value, datetime) else value
    return payload


def _to_document(row: dict[str, Any]) -> Document:
    doc = {k: v for k, v in row.items() if k != "user_id"}
    doc["id"] = str(row["id"])
    return doc


class SupabaseDocumentStore(DocumentStore):
    """Document store backed by Supabase (PostgREST) tables."""

    name = "supabase"

    def __init__(self, client: Client):
        self._client = client

    def _owned(self, collection: str, user_id: str):
        return self._client.table(collection).select("*").eq("user_id", user_id)

    def list(self, user_id, collection, order_by=None, descending=False):
        query = self._owned(collection, user_id)
        if order_by:
            query = query.order(order_by, desc=descending)
        try:
            response = query.execute()
        except APIError as e:
            raise ExternalServiceException("Supabase", e.message or str(e)) from e
        return [_to_document(row) for row in response.data or []]

    def find(self, user_id, collection, field, value):
        try:
            response = self._owned(collection, user_id).eq(field, value).execute()
        except APIError as e:
            raise ExternalServiceException("Supabase", e.message or str(e)) from e
        return [_to_document(row) for row in response.data or []]

    def get(self, user_id, collection, doc_id):
        try:
            response = self._owned(collection, user_id).eq("id", doc_id).limit(1).execute()
        except APIError as e:
            raise ExternalServiceException("Supabase", e.message or str(e)) from e
        rows = response.data or []
        return _to_document(rows[0]) if rows else None

    def add(self, user_id, collection, data):
        payload = _serialize(data)
        payload["user_id"] = user_id
        try:
            response = self._client.table(collection).insert(payload).execute()
        except APIError as e:
            raise ExternalServiceException("Supabase", e.message or str(e)) from e
        return _to_document(response.data[0])

    def update(self, user_id, collection, doc_id, data):
        try:
            response = (
                self._client.table(collection)
                .update(_serialize(data))
                .eq("id", doc_id)
                .eq("user_id", user_id)
                .execute()
            )
        except APIError as e:
            raise ExternalServiceException("Supabase", e.message or str(e)) from e
        if not response.data:
            raise NotFoundException(collection, doc_id)

    def delete(self, user_id, collection, doc_id):
        try:
            self._client.table(collection).delete().eq("id", doc_id).eq("user_id", user_id).execute()
        except APIError as e:
            raise ExternalServiceException("Supabase", e.message or str(e)) from e
