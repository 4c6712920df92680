"""
Tests for configuration module.
"""


class TestFeatureFlags:
    """Feature flags tests."""

    def test_default_features_enabled(self):
        """Test all features are enabled by default."""
        from helix.config import FeatureFlags

        flags = FeatureFlags()
        assert flags.tags is True
        assert flags.contacts is True

    def test_to_dict(self):
        """Test feature flags to dict."""
        from helix.config import FeatureFlags

        result = FeatureFlags().to_dict()
        assert result == {"tags": True, "contacts": True}

    def test_env_override(self, monkeypatch):
        from helix.config import FeatureFlags

        monkeypatch.setenv("FEATURE_CONTACTS", "false")
        assert FeatureFlags().contacts is False


class TestSettings:
    """Root settings tests."""

    def test_storage_backend_from_env(self, monkeypatch):
        from helix.config import get_settings

        monkeypatch.setenv("STORAGE_BACKEND", "firestore")
        get_settings.cache_clear()
        assert get_settings().storage_backend == "firestore"

    def test_tags_defaults(self):
        from helix.config import TagsSettings

        tags = TagsSettings()
        assert tags.dedupe_on_create is False
        assert tags.max_name_length == 50


class TestFirebaseSettings:
    """Service account settings tests."""

    def test_missing_fields(self):
        from helix.config import FirebaseSettings

        settings = FirebaseSettings(type="service_account", project_id="helix")
        assert settings.missing_fields() == ["private_key", "client_email"]

    def test_private_key_newlines_unescaped(self):
        from helix.config import FirebaseSettings

        settings = FirebaseSettings(private_key="-----BEGIN-----\\nabc\\n-----END-----")
        assert settings.service_account_info()["private_key"] == "-----BEGIN-----\nabc\n-----END-----"


class TestExceptions:
    """Exception tests."""

    def test_unauthorized_exception(self):
        from helix.exceptions import UnauthorizedException

        exc = UnauthorizedException()
        assert exc.status_code == 401
        assert exc.code == "UNAUTHORIZED"

    def test_not_found_exception(self):
        from helix.exceptions import NotFoundException

        exc = NotFoundException("tag", "123")
        assert exc.status_code == 404
        assert exc.code == "NOT_FOUND"
        assert "tag" in exc.message

    def test_feature_disabled_exception(self):
        from helix.exceptions import FeatureDisabledException

        exc = FeatureDisabledException("contacts")
        assert exc.status_code == 503
        assert exc.code == "FEATURE_DISABLED"
        assert "contacts" in exc.message

    def test_store_timeout_exception(self):
        from helix.exceptions import StoreTimeoutException

        exc = StoreTimeoutException("tags.list", 10.0)
        assert exc.status_code == 504
        assert exc.details == {"operation": "tags.list", "timeout_seconds": 10.0}
