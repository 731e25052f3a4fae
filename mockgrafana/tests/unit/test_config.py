from __future__ import annotations

import pytest
from pydantic import ValidationError

from mockgrafana.core.config import Settings, get_settings
from mockgrafana.services.directory import new_client


@pytest.fixture
def fresh_settings_cache() -> None:
    # Keep the cached settings built here from leaking into later tests.
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults_preserve_reference_behavior() -> None:
    settings = Settings(_env_file=None)
    assert settings.id_strategy == "count"
    assert settings.persist_token_counts is False
    assert settings.access_policy_token_placeholder == "MockToken"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ID_STRATEGY", "monotonic")
    monkeypatch.setenv("PERSIST_TOKEN_COUNTS", "true")

    settings = Settings(_env_file=None)

    assert settings.id_strategy == "monotonic"
    assert settings.persist_token_counts is True


def test_unknown_id_strategy_fails_validation() -> None:
    with pytest.raises(ValidationError):
        Settings(id_strategy="random")


def test_new_client_falls_back_to_cached_settings(fresh_settings_cache: None) -> None:
    client = new_client()
    assert client.settings is get_settings()
    client.initialize("my-org")
    assert client.get_service_accounts() == []
