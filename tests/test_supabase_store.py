"""Tests for the Supabase store against a mocked client."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from helix.core.supabase_store import SupabaseDocumentStore
from helix.exceptions import ExternalServiceException, NotFoundException


def _response(rows):
    response = MagicMock()
    response.data = rows
    return response


@pytest.fixture
def client():
    return MagicMock()


class TestReads:
    """list / find / get are filtered by user_id."""

    def test_list_scoped_and_ordered(self, client):
        owned = client.table.return_value.select.return_value.eq.return_value
        owned.order.return_value.execute.return_value = _response(
            [{"id": 7, "user_id": "uid-1", "name": "Work", "createdAt": "2024-11-30T00:00:00+00:00"}]
        )
        store = SupabaseDocumentStore(client)

        docs = store.list("uid-1", "tags", order_by="name")

        client.table.assert_called_with("tags")
        client.table.return_value.select.return_value.eq.assert_called_with("user_id", "uid-1")
        owned.order.assert_called_once_with("name", desc=False)
        assert docs == [{"id": "7", "name": "Work", "createdAt": "2024-11-30T00:00:00+00:00"}]

    def test_find_adds_equality(self, client):
        owned = client.table.return_value.select.return_value.eq.return_value
        owned.eq.return_value.execute.return_value = _response([])
        store = SupabaseDocumentStore(client)

        assert store.find("uid-1", "tags", "name", "Work") == []
        owned.eq.assert_called_once_with("name", "Work")

    def test_get_missing(self, client):
        owned = client.table.return_value.select.return_value.eq.return_value
        owned.eq.return_value.limit.return_value.execute.return_value = _response([])
        store = SupabaseDocumentStore(client)

        assert store.get("uid-1", "tags", "abc") is None


class TestWrites:
    """insert / update / delete."""

    def test_add_serializes_datetimes_and_sets_owner(self, client):
        client.table.return_value.insert.return_value.execute.return_value = _response(
            [{"id": "t1", "user_id": "uid-1", "name": "VIP", "createdAt": "2024-11-30T00:00:00+00:00"}]
        )
        store = SupabaseDocumentStore(client)

        doc = store.add("uid-1", "tags", {"name": "VIP", "createdAt": datetime(2024, 11, 30, tzinfo=timezone.utc)})

        client.table.return_value.insert.assert_called_once_with(
            {"name": "VIP", "createdAt": "2024-11-30T00:00:00+00:00", "user_id": "uid-1"}
        )
        assert doc["id"] == "t1"
        assert "user_id" not in doc

    def test_update_no_rows_is_not_found(self, client):
        chain = client.table.return_value.update.return_value.eq.return_value.eq.return_value
        chain.execute.return_value = _response([])
        store = SupabaseDocumentStore(client)

        with pytest.raises(NotFoundException):
            store.update("uid-1", "contacts", "c1", {"tags": ["Work"]})


class TestErrors:
    """PostgREST errors are surfaced as ExternalServiceException."""

    def test_list_api_error(self, client):
        owned = client.table.return_value.select.return_value.eq.return_value
        owned.execute.side_effect = APIError({"message": "permission denied for table tags", "code": "42501"})
        store = SupabaseDocumentStore(client)

        with pytest.raises(ExternalServiceException) as exc_info:
            store.list("uid-1", "tags")

        assert "permission denied" in exc_info.value.message
        assert exc_info.value.details == {"service": "Supabase"}
