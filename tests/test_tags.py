"""
Tests for the tags module (fetch, add, delete by name, delete by id).
"""

from datetime import datetime, timezone


def _names(client, headers) -> list[str]:
    response = client.get("/tags", headers=headers)
    assert response.status_code == 200
    return response.json()["names"]


class TestTagFetch:
    """Tag fetch tests."""

    def test_empty_user_has_no_tags(self, client, auth_headers):
        response = client.get("/tags", headers=auth_headers())
        assert response.status_code == 200

        data = response.json()
        assert data["items"] == []
        assert data["names"] == []
        assert data["total"] == 0

    def test_tags_ordered_by_name(self, client, auth_headers, store):
        now = datetime.now(timezone.utc)
        for name in ["Work", "Family", "VIP"]:
            store.add("user-1", "tags", {"name": name, "createdAt": now})

        assert _names(client, auth_headers()) == ["Family", "VIP", "Work"]

    def test_items_carry_id_and_created_at(self, client, auth_headers, store):
        doc = store.add("user-1", "tags", {"name": "Friend", "createdAt": datetime(2024, 11, 30, tzinfo=timezone.utc)})

        item = client.get("/tags", headers=auth_headers()).json()["items"][0]
        assert item["id"] == doc["id"]
        assert item["name"] == "Friend"
        assert item["created_at"].startswith("2024-11-30")

    def test_tags_are_scoped_per_user(self, client, auth_headers):
        client.post("/tags", json={"name": "Mine"}, headers=auth_headers("alice"))

        assert _names(client, auth_headers("alice")) == ["Mine"]
        assert _names(client, auth_headers("bob")) == []


class TestTagAdd:
    """Tag add tests."""

    def test_add_writes_exactly_one_document(self, client, auth_headers, store):
        headers = auth_headers()
        response = client.post("/tags", json={"name": "VIP"}, headers=headers)
        assert response.status_code == 201
        assert response.json()["name"] == "VIP"

        docs = store.find("user-1", "tags", "name", "VIP")
        assert len(docs) == 1
        assert set(docs[0]) == {"id", "name", "createdAt"}
        assert _names(client, headers) == ["VIP"]

    def test_empty_name_rejected(self, client, auth_headers, store):
        response = client.post("/tags", json={"name": ""}, headers=auth_headers())
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert store.list("user-1", "tags") == []

    def test_whitespace_name_rejected(self, client, auth_headers, store):
        response = client.post("/tags", json={"name": "   "}, headers=auth_headers())
        assert response.status_code == 400
        assert store.list("user-1", "tags") == []

    def test_name_is_trimmed(self, client, auth_headers):
        response = client.post("/tags", json={"name": "  Work  "}, headers=auth_headers())
        assert response.status_code == 201
        assert response.json()["name"] == "Work"

    def test_too_long_name_rejected(self, client, auth_headers, store):
        response = client.post("/tags", json={"name": "x" * 51}, headers=auth_headers())
        assert response.status_code == 400
        assert store.list("user-1", "tags") == []

    def test_duplicates_allowed_by_default(self, client, auth_headers, store):
        headers = auth_headers()
        first = client.post("/tags", json={"name": "Work"}, headers=headers).json()
        second = client.post("/tags", json={"name": "Work"}, headers=headers).json()

        assert first["id"] != second["id"]
        assert len(store.find("user-1", "tags", "name", "Work")) == 2

    def test_dedupe_on_create_returns_existing(self, client, auth_headers, store, monkeypatch):
        from helix.config import get_settings

        monkeypatch.setenv("TAGS_DEDUPE_ON_CREATE", "true")
        get_settings.cache_clear()

        headers = auth_headers()
        first = client.post("/tags", json={"name": "Work"}, headers=headers).json()
        second = client.post("/tags", json={"name": "work"}, headers=headers).json()

        assert second["id"] == first["id"]
        assert len(store.list("user-1", "tags")) == 1


class TestTagDeleteByName:
    """Delete-by-name tests."""

    def test_deletes_every_duplicate(self, client, auth_headers, store):
        headers = auth_headers()
        for name in ["Work", "Work", "Friend"]:
            client.post("/tags", json={"name": name}, headers=headers)

        response = client.post("/tags/delete", json={"names": ["Work"]}, headers=headers)
        assert response.status_code == 200

        data = response.json()
        assert data["deleted_count"] == 2
        assert data["failed_names"] == []
        assert data["results"] == [{"name": "Work", "deleted_count": 2, "error": None}]
        assert _names(client, headers) == ["Friend"]

    def test_names_are_trimmed(self, client, auth_headers):
        headers = auth_headers()
        client.post("/tags", json={"name": "  Work "}, headers=headers)

        data = client.post("/tags/delete", json={"names": [" Work"]}, headers=headers).json()
        assert data["results"] == [{"name": "Work", "deleted_count": 1, "error": None}]
        assert _names(client, headers) == []

    def test_unknown_name_deletes_nothing(self, client, auth_headers):
        headers = auth_headers()
        client.post("/tags", json={"name": "Friend"}, headers=headers)

        data = client.post("/tags/delete", json={"names": ["Nope"]}, headers=headers).json()
        assert data["deleted_count"] == 0
        assert _names(client, headers) == ["Friend"]

    def test_only_touches_own_tags(self, client, auth_headers):
        client.post("/tags", json={"name": "Work"}, headers=auth_headers("alice"))
        client.post("/tags", json={"name": "Work"}, headers=auth_headers("bob"))

        client.post("/tags/delete", json={"names": ["Work"]}, headers=auth_headers("alice"))

        assert _names(client, auth_headers("alice")) == []
        assert _names(client, auth_headers("bob")) == ["Work"]

    def test_empty_names_rejected(self, client, auth_headers):
        response = client.post("/tags/delete", json={"names": []}, headers=auth_headers())
        assert response.status_code == 422


class TestTagDeleteById:
    """Delete-by-id tests."""

    def test_delete_by_id_removes_only_that_document(self, client, auth_headers, store):
        headers = auth_headers()
        first = client.post("/tags", json={"name": "Work"}, headers=headers).json()
        client.post("/tags", json={"name": "Work"}, headers=headers)

        response = client.delete(f"/tags/{first['id']}", headers=headers)
        assert response.status_code == 204

        remaining = store.find("user-1", "tags", "name", "Work")
        assert len(remaining) == 1
        assert remaining[0]["id"] != first["id"]

    def test_delete_missing_id_is_404(self, client, auth_headers):
        response = client.delete("/tags/does-not-exist", headers=auth_headers())
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_delete_strips_tag_from_contacts(self, client, auth_headers, store, seed_contact):
        headers = auth_headers()
        tag = client.post("/tags", json={"name": "Work"}, headers=headers).json()
        contact = seed_contact("user-1", "Ada", 1, tags=["Work", "Friend"])

        client.delete(f"/tags/{tag['id']}", headers=headers)

        assert store.get("user-1", "contacts", contact["id"])["tags"] == ["Friend"]

    def test_delete_keeps_contact_tags_while_duplicate_exists(self, client, auth_headers, store, seed_contact):
        headers = auth_headers()
        tag = client.post("/tags", json={"name": "Work"}, headers=headers).json()
        client.post("/tags", json={"name": "Work"}, headers=headers)
        contact = seed_contact("user-1", "Ada", 1, tags=["Work"])

        client.delete(f"/tags/{tag['id']}", headers=headers)

        assert store.get("user-1", "contacts", contact["id"])["tags"] == ["Work"]


class TestTagScenario:
    """End-to-end picker flow."""

    def test_select_add_delete_flow(self, client, auth_headers):
        from helix.modules.tags import TagSelection

        headers = auth_headers()
        for name in ["Friend", "Work"]:
            client.post("/tags", json={"name": name}, headers=headers)

        selected = TagSelection()
        selected.toggle("Friend")
        assert selected == {"Friend"}
        selected.toggle("Friend")
        assert selected == set()

        client.post("/tags", json={"name": "VIP"}, headers=headers)
        assert set(_names(client, headers)) == {"Friend", "Work", "VIP"}

        client.post("/tags/delete", json={"names": ["Work"]}, headers=headers)
        assert set(_names(client, headers)) == {"Friend", "VIP"}


class TestTagsFeatureFlag:
    """Feature flag tests."""

    def test_disabled_tags_feature_returns_503(self, client, auth_headers, monkeypatch):
        from helix.config import get_settings

        monkeypatch.setenv("FEATURE_TAGS", "false")
        get_settings.cache_clear()

        response = client.get("/tags", headers=auth_headers())
        assert response.status_code == 503
        assert response.json()["error"]["code"] == "FEATURE_DISABLED"
