from __future__ import annotations

import random
from datetime import datetime
from typing import Callable

from mockgrafana.core.config import Settings, get_settings
from mockgrafana.domain.models import (
    CloudAccessPolicy,
    CloudAccessPolicyItems,
    CloudAccessPolicyToken,
    CloudAccessPolicyTokenItems,
    CloudAPIKey,
    CreateCloudAccessPolicyInput,
    CreateCloudAccessPolicyTokenInput,
    CreateCloudAPIKeyInput,
    CreateServiceAccountRequest,
    CreateServiceAccountTokenRequest,
    CreateServiceAccountTokenResponse,
    GetServiceAccountTokensResponse,
    ListCloudAPIKeysOutput,
    ServiceAccountDTO,
    ServiceAccountToken,
)
from mockgrafana.services.directory.access_policies import CloudAccessPolicyRegistry
from mockgrafana.services.directory.cloud_api_keys import CloudAPIKeyRegistry
from mockgrafana.services.directory.context import DirectoryContext
from mockgrafana.services.directory.service_accounts import ServiceAccountRegistry
from mockgrafana.services.identity import IdAllocator, new_random_source, utc_now


class MockClient:
    """In-memory stand-in for the Grafana API client.

    Method names and payload shapes follow the real client so code written
    against it can be pointed here unchanged. All state lives on the instance
    and there is no internal locking: use one client per test, or guard the
    whole instance when sharing it across threads.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        rng: random.Random | None = None,
        time_provider: Callable[[], datetime] | None = None,
    ) -> None:
        resolved = settings or get_settings()
        # Inject randomness and time so fixture data and timestamps are reproducible in tests.
        self._context = DirectoryContext(
            settings=resolved,
            ids=IdAllocator(resolved.id_strategy),
            rng=rng if rng is not None else new_random_source(resolved),
            time_provider=time_provider or utc_now,
        )
        self._service_accounts = ServiceAccountRegistry(self._context)
        self._cloud_api_keys = CloudAPIKeyRegistry(self._context)
        self._access_policies = CloudAccessPolicyRegistry(self._context)

    @property
    def settings(self) -> Settings:
        return self._context.settings

    @property
    def random(self) -> random.Random:
        return self._context.rng

    # Live collections, exposed for assertions in tests.

    @property
    def service_accounts(self) -> list[ServiceAccountDTO]:
        return self._service_accounts.accounts

    @property
    def tokens(self) -> list[ServiceAccountToken]:
        return self._service_accounts.tokens

    @property
    def cloud_api_keys(self) -> list[CloudAPIKey]:
        return self._cloud_api_keys.keys

    @property
    def cloud_access_policy_items(self) -> list[CloudAccessPolicy]:
        return self._access_policies.policies

    @property
    def cloud_access_policy_token_items(self) -> list[CloudAccessPolicyToken]:
        return self._access_policies.tokens

    def initialize(self, org: str) -> None:
        # The real wrapper resolves org credentials here; nothing to resolve in memory.
        _ = org

    # Service accounts

    def create_service_account(self, request: CreateServiceAccountRequest) -> ServiceAccountDTO:
        return self._service_accounts.create_service_account(request)

    def get_service_accounts(self) -> list[ServiceAccountDTO]:
        return self._service_accounts.get_service_accounts()

    def delete_service_account(self, service_account_id: int) -> None:
        self._service_accounts.delete_service_account(service_account_id)

    def create_service_account_token(
        self, request: CreateServiceAccountTokenRequest
    ) -> CreateServiceAccountTokenResponse:
        return self._service_accounts.create_service_account_token(request)

    def get_service_account_tokens(self, service_account_id: int) -> list[GetServiceAccountTokensResponse]:
        return self._service_accounts.get_service_account_tokens(service_account_id)

    def delete_service_account_token(self, service_account_id: int, token_id: int) -> None:
        self._service_accounts.delete_service_account_token(service_account_id, token_id)

    # Cloud API keys

    def create_cloud_api_key(self, org: str, key_input: CreateCloudAPIKeyInput) -> CloudAPIKey:
        return self._cloud_api_keys.create_cloud_api_key(org, key_input)

    def list_cloud_api_keys(self, org: str) -> ListCloudAPIKeysOutput:
        return self._cloud_api_keys.list_cloud_api_keys(org)

    def delete_cloud_api_key(self, org: str, key_name: str) -> None:
        self._cloud_api_keys.delete_cloud_api_key(org, key_name)

    # Cloud Access Policies

    def create_cloud_access_policy(
        self, region: str, policy_input: CreateCloudAccessPolicyInput
    ) -> CloudAccessPolicy:
        return self._access_policies.create_cloud_access_policy(region, policy_input)

    def cloud_access_policies(self, region: str) -> CloudAccessPolicyItems:
        return self._access_policies.cloud_access_policies(region)

    def delete_cloud_access_policy(self, region: str, policy_id: str) -> None:
        self._access_policies.delete_cloud_access_policy(region, policy_id)

    def create_cloud_access_policy_token(
        self, region: str, token_input: CreateCloudAccessPolicyTokenInput
    ) -> CloudAccessPolicyToken:
        return self._access_policies.create_cloud_access_policy_token(region, token_input)

    def cloud_access_policy_tokens(self, region: str, access_policy_id: str) -> CloudAccessPolicyTokenItems:
        return self._access_policies.cloud_access_policy_tokens(region, access_policy_id)

    def cloud_access_policy_token_by_id(self, region: str, token_id: str) -> CloudAccessPolicyToken:
        return self._access_policies.cloud_access_policy_token_by_id(region, token_id)

    def delete_cloud_access_policy_token(self, region: str, token_id: str) -> None:
        self._access_policies.delete_cloud_access_policy_token(region, token_id)


def new_client(settings: Settings | None = None) -> MockClient:
    return MockClient(settings)
