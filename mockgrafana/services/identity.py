from __future__ import annotations

import random
from collections import defaultdict
from datetime import datetime, timezone

from mockgrafana.core.config import Settings
from mockgrafana.core.errors import ConfigurationError


ID_STRATEGY_COUNT = "count"
ID_STRATEGY_MONOTONIC = "monotonic"
_ID_STRATEGIES = {ID_STRATEGY_COUNT, ID_STRATEGY_MONOTONIC}

# Collection keys used for per-collection id sequences.
SERVICE_ACCOUNTS = "service_accounts"
SERVICE_ACCOUNT_TOKENS = "service_account_tokens"
CLOUD_API_KEYS = "cloud_api_keys"
ACCESS_POLICIES = "access_policies"
ACCESS_POLICY_TOKENS = "access_policy_tokens"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_random_source(settings: Settings) -> random.Random:
    # One generator per directory; reseeding per call correlates rapid successive draws.
    return random.Random(settings.random_seed)


class IdAllocator:
    """Assigns integer ids per collection.

    The ``count`` strategy reproduces the reference behavior: the next id is
    the number of live entries plus one, so an id freed by a delete (or held by
    a survivor of a swap) can be handed out again. The ``monotonic`` strategy
    keeps a high-water mark per collection and never reissues a value.
    """

    def __init__(self, strategy: str = ID_STRATEGY_COUNT) -> None:
        if strategy not in _ID_STRATEGIES:
            raise ConfigurationError(f"Unsupported id strategy: {strategy}")
        self._strategy = strategy
        self._issued: dict[str, int] = defaultdict(int)

    @property
    def strategy(self) -> str:
        return self._strategy

    def next_id(self, collection: str, live_count: int) -> int:
        if self._strategy == ID_STRATEGY_MONOTONIC:
            self._issued[collection] += 1
            return self._issued[collection]
        return live_count + 1


def credential_for(name: str, rng: random.Random, upper: int) -> str:
    # Opaque but traceable credential: the owning name plus a random suffix.
    return f"{name}-{rng.randrange(upper)}"
