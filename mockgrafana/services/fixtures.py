from __future__ import annotations

import random

from mockgrafana.core.config import REALM_TYPES, ROLES
from mockgrafana.domain.models import (
    CloudAccessPolicy,
    CloudAccessPolicyLabelPolicy,
    CloudAccessPolicyRealm,
    CloudAccessPolicyToken,
    CloudAPIKey,
    CreateCloudAccessPolicyInput,
    CreateCloudAccessPolicyTokenInput,
    CreateCloudAPIKeyInput,
    CreateServiceAccountRequest,
    CreateServiceAccountTokenRequest,
    CreateServiceAccountTokenResponse,
    ServiceAccountDTO,
)
from mockgrafana.services.directory import MockClient


SCOPE_RESOURCES: tuple[str, ...] = ("metrics", "logs", "traces", "alerts", "rules")
SCOPE_PERMISSIONS: tuple[str, ...] = ("read", "write")

_STRING_SPACE = 99999


def role_generator(rng: random.Random) -> str:
    return rng.choice(ROLES)


def scope_generator(rng: random.Random) -> str:
    return f"{rng.choice(SCOPE_RESOURCES)}:{rng.choice(SCOPE_PERMISSIONS)}"


def string_generator(rng: random.Random, seed: int = 0) -> str:
    # Callers pass a collection-size counter as seed to spread successive names apart.
    first = rng.randrange(_STRING_SPACE)
    second = (rng.randrange(_STRING_SPACE) + seed) % _STRING_SPACE
    return f"randomString-{first}{second}"


def new_realm(realm_type: str, identifier: str, *selectors: str) -> CloudAccessPolicyRealm:
    return CloudAccessPolicyRealm(
        type=realm_type,
        identifier=identifier,
        label_policies=[CloudAccessPolicyLabelPolicy(selector=selector) for selector in selectors],
    )


def realm_generator(rng: random.Random) -> CloudAccessPolicyRealm:
    return new_realm(rng.choice(REALM_TYPES), string_generator(rng))


# Generators go through the create operations and never retry; name collisions propagate.

# Service accounts


def generate_service_account(client: MockClient, name: str = "", role: str = "") -> ServiceAccountDTO:
    rng = client.random
    if not name:
        name = string_generator(rng, len(client.service_accounts) + 1)
    if not role:
        role = role_generator(rng)
    return client.create_service_account(CreateServiceAccountRequest(name=name, role=role))


def generate_service_accounts(client: MockClient, count: int) -> list[ServiceAccountDTO]:
    return [generate_service_account(client) for _ in range(count)]


def generate_service_account_token(
    client: MockClient, service_account_id: int, name: str = ""
) -> CreateServiceAccountTokenResponse:
    if not name:
        name = string_generator(client.random, len(client.tokens) + 1)
    return client.create_service_account_token(
        CreateServiceAccountTokenRequest(name=name, service_account_id=service_account_id)
    )


def generate_service_account_tokens(
    client: MockClient, service_account_id: int, count: int
) -> list[CreateServiceAccountTokenResponse]:
    return [generate_service_account_token(client, service_account_id) for _ in range(count)]


# Cloud API keys


def generate_cloud_api_key(client: MockClient, name: str = "", role: str = "") -> CloudAPIKey:
    rng = client.random
    if not name:
        name = string_generator(rng, len(client.cloud_api_keys) + 1)
    if not role:
        role = role_generator(rng)
    return client.create_cloud_api_key("", CreateCloudAPIKeyInput(name=name, role=role))


def generate_cloud_api_keys(
    client: MockClient, count: int, prefix: str = "", role: str = ""
) -> list[CloudAPIKey]:
    keys: list[CloudAPIKey] = []
    for _ in range(count):
        name = ""
        if prefix:
            name = f"{prefix}-{string_generator(client.random, len(client.cloud_api_keys) + 1)}"
        keys.append(generate_cloud_api_key(client, name, role))
    return keys


# Cloud Access Policies


def generate_cloud_access_policy(client: MockClient, name: str = "") -> CloudAccessPolicy:
    rng = client.random
    if not name:
        name = string_generator(rng, len(client.cloud_access_policy_items) + 1)
    policy_input = CreateCloudAccessPolicyInput(
        name=name,
        display_name=name,
        scopes=[scope_generator(rng)],
        realms=[realm_generator(rng)],
    )
    return client.create_cloud_access_policy(client.settings.fixture_region, policy_input)


def generate_cloud_access_policies(client: MockClient, count: int, prefix: str = "") -> list[CloudAccessPolicy]:
    policies: list[CloudAccessPolicy] = []
    for _ in range(count):
        name = ""
        if prefix:
            name = f"{prefix}-{string_generator(client.random, len(client.cloud_access_policy_items) + 1)}"
        policies.append(generate_cloud_access_policy(client, name))
    return policies


def generate_cloud_access_policy_token(
    client: MockClient, access_policy_id: str, name: str = ""
) -> CloudAccessPolicyToken:
    if not name:
        name = string_generator(client.random, len(client.cloud_access_policy_token_items) + 1)
    token_input = CreateCloudAccessPolicyTokenInput(
        access_policy_id=access_policy_id,
        name=name,
        display_name=name,
    )
    return client.create_cloud_access_policy_token(client.settings.fixture_region, token_input)


def generate_cloud_access_policy_tokens(
    client: MockClient, count: int, access_policy_id: str, prefix: str = ""
) -> list[CloudAccessPolicyToken]:
    tokens: list[CloudAccessPolicyToken] = []
    for _ in range(count):
        name = ""
        if prefix:
            name = f"{prefix}-{string_generator(client.random, len(client.cloud_access_policy_token_items) + 1)}"
        tokens.append(generate_cloud_access_policy_token(client, access_policy_id, name))
    return tokens
