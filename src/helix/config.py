"""
Helix Configuration Module.

Handles all application settings, feature flags, and environment configuration.
Uses pydantic-settings for validation and type safety.

Storage: Cloud Firestore (firebase-admin) in production, Supabase or an
in-process store as alternates.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FeatureFlags(BaseSettings):
    """Feature flags for enabling/disabling modules."""

    model_config = SettingsConfigDict(env_prefix="FEATURE_")

    tags: bool = True
    contacts: bool = True

    def to_dict(self) -> dict[str, bool]:
        """Return feature flags as dictionary for health endpoint."""
        return {
            "tags": self.tags,
            "contacts": self.contacts,
        }


class FirebaseSettings(BaseSettings):
    """Firebase service account configuration (Firestore + Auth)."""

    model_config = SettingsConfigDict(env_prefix="FIREBASE_")

    type: str | None = Field(default=None, description="Service account type (usually 'service_account')")
    project_id: str | None = Field(default=None, description="Firebase project ID")
    private_key_id: str | None = None
    private_key: str | None = Field(default=None, description="PEM private key, '\\n' escaped")
    client_email: str | None = None
    client_id: str | None = None
    auth_uri: str | None = None
    token_uri: str | None = None
    auth_provider_x509_cert_url: str | None = None
    client_x509_cert_url: str | None = None
    universe_domain: str | None = None

    def service_account_info(self) -> dict[str, str | None]:
        """Return the service account dict expected by credentials.Certificate."""
        return {
            "type": self.type,
            "project_id": self.project_id,
            "private_key_id": self.private_key_id,
            "private_key": self.private_key.replace("\\n", "\n") if self.private_key else None,
            "client_email": self.client_email,
            "client_id": self.client_id,
            "auth_uri": self.auth_uri,
            "token_uri": self.token_uri,
            "auth_provider_x509_cert_url": self.auth_provider_x509_cert_url,
            "client_x509_cert_url": self.client_x509_cert_url,
            "universe_domain": self.universe_domain,
        }

    def missing_fields(self) -> list[str]:
        """Required service account fields that are not configured."""
        info = self.service_account_info()
        return [name for name in ("type", "project_id", "private_key", "client_email") if not info.get(name)]


class SupabaseSettings(BaseSettings):
    """Supabase configuration (alternate tag/contact store)."""

    model_config = SettingsConfigDict(env_prefix="SUPABASE_")

    url: str = Field(default="https://demo.supabase.co", description="Supabase project URL")
    service_role_key: str = Field(default="demo-service-role-key", description="Supabase service role key")


class TagsSettings(BaseSettings):
    """Tag module behaviour."""

    model_config = SettingsConfigDict(env_prefix="TAGS_")

    dedupe_on_create: bool = Field(
        default=False,
        description="If true, adding a tag whose name already exists (case-insensitive) returns the existing tag.",
    )
    max_name_length: int = Field(default=50, ge=1, description="Maximum tag name length")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    app_debug: bool = False
    app_log_level: str = "INFO"

    # Storage
    storage_backend: Literal["firestore", "supabase", "memory"] = Field(
        default="memory",
        description="Document store holding users/{uid}/tags and users/{uid}/contacts",
        validation_alias="STORAGE_BACKEND",
    )
    store_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Upper bound for a single store call",
        validation_alias="STORE_TIMEOUT_SECONDS",
    )

    # Auth
    auth_jwt_secret: str = Field(
        default="dev-insecure-jwt-secret-change-me",
        description="HMAC secret for service-issued access tokens",
        validation_alias="AUTH_JWT_SECRET",
    )
    auth_jwt_algorithm: str = Field(default="HS256", validation_alias="AUTH_JWT_ALGORITHM")
    auth_access_token_ttl_seconds: int = Field(
        default=3600,
        ge=60,
        validation_alias="AUTH_ACCESS_TOKEN_TTL_SECONDS",
    )
    auth_firebase_enabled: bool = Field(
        default=True,
        description="Accept Firebase ID tokens when the service token check fails",
        validation_alias="AUTH_FIREBASE_ENABLED",
    )

    # Nested settings
    features: FeatureFlags = Field(default_factory=FeatureFlags)
    firebase: FirebaseSettings = Field(default_factory=FirebaseSettings)
    supabase: SupabaseSettings = Field(default_factory=SupabaseSettings)
    tags: TagsSettings = Field(default_factory=TagsSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
