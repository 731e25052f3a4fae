from __future__ import annotations

import pytest

from mockgrafana.core.config import Settings
from mockgrafana.services import telemetry
from mockgrafana.services.directory import MockClient
from mockgrafana.tests.utils.clock import FIXED_NOW


@pytest.fixture
def settings() -> Settings:
    # Seeded settings keep generated names stable across runs.
    return Settings(random_seed=1234)


@pytest.fixture
def client(settings: Settings) -> MockClient:
    # One directory per test; the directory carries no locking of its own.
    return MockClient(settings, time_provider=lambda: FIXED_NOW)


@pytest.fixture(autouse=True)
def reset_telemetry_between_tests() -> None:
    # Counters are module-level; keep them from leaking across tests.
    telemetry.reset_counters()
    yield
    telemetry.reset_counters()
