"""
Helix Core - Firestore Document Store.

Maps ``users/{user_id}/{collection}`` onto Firestore subcollections.
"""

from __future__ import annotations

import logging
from typing import Any

from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions
from google.cloud.firestore_v1.base_query import FieldFilter

from helix.core.document_store import Document, DocumentStore
from helix.exceptions import ExternalServiceException, NotFoundException

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"


class FirestoreDocumentStore(DocumentStore):
    """Document store backed by Cloud Firestore."""

    name = "firestore"

    def __init__(self, client):
        self._client = client

    def _collection(self, user_id: str, collection: str):
        return self._client.collection(USERS_COLLECTION).document(user_id).collection(collection)

    @staticmethod
    def _to_document(snapshot) -> Document:
        doc = snapshot.to_dict() or {}
        doc["id"] = snapshot.id
        return doc

    def list(self, user_id, collection, order_by=None, descending=False):
        query = self._collection(user_id, collection)
        if order_by:
            direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            query = query.order_by(order_by, direction=direction)
        try:
            return [self._to_document(snapshot) for snapshot in query.stream()]
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Firestore list {collection} failed for {user_id}: {e}")
            raise ExternalServiceException("Firestore", str(e)) from e

    def find(self, user_id: str, collection: str, field: str, value: Any) -> list[Document]:
        query = self._collection(user_id, collection).where(filter=FieldFilter(field, "==", value))
        try:
            return [self._to_document(snapshot) for snapshot in query.stream()]
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Firestore query {collection}.{field} failed for {user_id}: {e}")
            raise ExternalServiceException("Firestore", str(e)) from e

    def get(self, user_id, collection, doc_id):
        try:
            snapshot = self._collection(user_id, collection).document(doc_id).get()
        except google_exceptions.GoogleAPIError as e:
            raise ExternalServiceException("Firestore", str(e)) from e
        return self._to_document(snapshot) if snapshot.exists else None

    def add(self, user_id, collection, data):
        payload = {k: v for k, v in data.items() if k != "id"}
        try:
            _, doc_ref = self._collection(user_id, collection).add(payload)
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Firestore add to {collection} failed for {user_id}: {e}")
            raise ExternalServiceException("Firestore", str(e)) from e
        return {**payload, "id": doc_ref.id}

    def update(self, user_id, collection, doc_id, data):
        payload = {k: v for k, v in data.items() if k != "id"}
        try:
            self._collection(user_id, collection).document(doc_id).update(payload)
        except google_exceptions.NotFound as e:
            raise NotFoundException(collection, doc_id) from e
        except google_exceptions.GoogleAPIError as e:
            raise ExternalServiceException("Firestore", str(e)) from e

    def delete(self, user_id, collection, doc_id):
        try:
            self._collection(user_id, collection).document(doc_id).delete()
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Firestore delete {collection}/{doc_id} failed for {user_id}: {e}")
            raise ExternalServiceException("Firestore", str(e)) from e
