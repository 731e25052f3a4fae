from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


# Role vocabulary of the Grafana org/Cloud API; callers may still pass any string.
ROLES: tuple[str, ...] = ("Admin", "Viewer", "Editor", "MetricsPublisher")

# Realm types accepted by Cloud Access Policies.
REALM_TYPES: tuple[str, ...] = ("org", "stack")

IdStrategy = Literal["count", "monotonic"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "mockgrafana"

    # Seed the shared random source for reproducible fixtures; None draws from OS entropy.
    random_seed: int | None = None
    # "count" assigns len(collection) + 1 like the real mock; "monotonic" never reissues an id.
    id_strategy: IdStrategy = "count"
    # Off by default: the reference client bumps the counter on a throwaway copy.
    persist_token_counts: bool = False
    # Service account logins are derived from names with this prefix.
    service_account_login_prefix: str = "sa-"
    # Upper bound (exclusive) of the random suffix appended to generated credentials.
    credential_suffix_max: int = 99999
    # Cloud Access Policy tokens carry a fixed value instead of a random secret.
    access_policy_token_placeholder: str = "MockToken"
    # Region used by fixture generators that go through region-scoped operations.
    fixture_region: str = "us"


@lru_cache
def get_settings() -> Settings:
    return Settings()
