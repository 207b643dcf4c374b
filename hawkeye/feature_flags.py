"""
Feature switches for the optional parts of the backend.

Both default to on and are read from the environment once per process:

- FEATURE_CATALOG_IMPORT=false makes POST /api/import-csv answer 503
- FEATURE_LIVE_RELAY=false leaves the /ws endpoint unmounted
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class FeatureFlags(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False)

    feature_catalog_import: bool = True
    feature_live_relay: bool = True


@lru_cache()
def get_feature_flags() -> FeatureFlags:
    """Process-wide flags. Use FastAPI Depends() so tests can override them."""
    return FeatureFlags()
