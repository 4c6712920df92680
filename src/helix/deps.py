"""
Helix - Dependency Injection.

FastAPI dependencies for feature flags.
"""

from typing import Annotated

from fastapi import Depends

from helix.config import FeatureFlags, Settings, get_settings
from helix.exceptions import FeatureDisabledException


def get_features(settings: Annotated[Settings, Depends(get_settings)]) -> FeatureFlags:
    """Get feature flags from settings."""
    return settings.features


def require_feature(feature_name: str):
    """Create a dependency that requires a specific feature to be enabled."""

    def check_feature(features: Annotated[FeatureFlags, Depends(get_features)]) -> bool:
        if not getattr(features, feature_name, False):
            raise FeatureDisabledException(feature_name)
        return True

    return check_feature


# Specific feature guards
require_tags = Depends(require_feature("tags"))
require_contacts = Depends(require_feature("contacts"))
