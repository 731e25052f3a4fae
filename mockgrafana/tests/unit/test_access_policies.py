from __future__ import annotations

from datetime import datetime, timezone

import pytest

from mockgrafana.core.errors import (
    AccessPolicyNotFoundError,
    AccessPolicyTokenNotFoundError,
    InvalidRealmError,
    RegionRequiredError,
)
from mockgrafana.domain.models import CreateCloudAccessPolicyTokenInput
from mockgrafana.services.directory import MockClient
from mockgrafana.services.fixtures import generate_cloud_access_policy_tokens, new_realm
from mockgrafana.tests.utils.policies import (
    TEST_REGION,
    create_test_policy,
    create_test_policy_token,
    policy_input,
)


def test_invalid_realm_type_creates_nothing(client: MockClient) -> None:
    with pytest.raises(InvalidRealmError):
        client.create_cloud_access_policy(TEST_REGION, policy_input(realm_type="invalid"))
    assert client.cloud_access_policy_items == []


def test_any_invalid_realm_aborts_the_whole_policy(client: MockClient) -> None:
    mixed = policy_input()
    mixed.realms.append(new_realm("tenant", "clabs"))

    with pytest.raises(InvalidRealmError):
        client.create_cloud_access_policy(TEST_REGION, mixed)
    assert client.cloud_access_policy_items == []


def test_create_policy_copies_input(client: MockClient) -> None:
    policy = create_test_policy(client)

    assert policy.id == "1"
    assert policy.name == "TestPolicyName"
    assert policy.display_name == "TestPolicyName"
    assert policy.scopes == ["testScope"]
    assert policy.realms[0].type == "org"
    assert policy.realms[0].label_policies[0].selector == '{env="dev"}'
    assert client.cloud_access_policy_items[0].name == "TestPolicyName"


def test_stack_realm_is_accepted(client: MockClient) -> None:
    policy = client.create_cloud_access_policy(TEST_REGION, policy_input(realm_type="stack"))
    assert policy.realms[0].type == "stack"


def test_list_policies(client: MockClient) -> None:
    create_test_policy(client)

    items = client.cloud_access_policies(TEST_REGION)

    assert [policy.name for policy in items.items] == ["TestPolicyName"]


def test_delete_policy_cascades_to_its_tokens(client: MockClient) -> None:
    policy = create_test_policy(client)
    other = create_test_policy(client, name="Other")
    generate_cloud_access_policy_tokens(client, 5, policy.id)
    create_test_policy_token(client, other.id, name="keep-me")
    before = len(client.cloud_access_policy_token_items)

    client.delete_cloud_access_policy(TEST_REGION, policy.id)

    assert len(client.cloud_access_policy_token_items) == before - 5
    assert [token.name for token in client.cloud_access_policy_token_items] == ["keep-me"]
    assert [item.id for item in client.cloud_access_policy_items] == [other.id]


def test_delete_unknown_policy_still_runs_cascade(client: MockClient) -> None:
    policy = create_test_policy(client)
    create_test_policy_token(client, policy.id)
    # Orphan the token's policy reference by removing the policy out from under it.
    client.cloud_access_policy_items.clear()

    with pytest.raises(AccessPolicyNotFoundError):
        client.delete_cloud_access_policy(TEST_REGION, policy.id)
    assert client.cloud_access_policy_token_items == []


def test_delete_missing_policy_raises(client: MockClient) -> None:
    with pytest.raises(AccessPolicyNotFoundError):
        client.delete_cloud_access_policy(TEST_REGION, "42")


def test_token_requires_existing_policy(client: MockClient) -> None:
    with pytest.raises(AccessPolicyNotFoundError):
        create_test_policy_token(client, "3")
    assert client.cloud_access_policy_token_items == []


def test_policy_token_uses_placeholder_value(client: MockClient) -> None:
    policy = create_test_policy(client)
    expires_at = datetime(2030, 1, 1, tzinfo=timezone.utc)

    token = client.create_cloud_access_policy_token(
        TEST_REGION,
        CreateCloudAccessPolicyTokenInput(
            access_policy_id=policy.id,
            name="ci",
            display_name="CI token",
            expires_at=expires_at,
        ),
    )

    assert token.token == "MockToken"
    assert token.expires_at == expires_at
    assert token.access_policy_id == policy.id


def test_get_token_by_id_round_trips_names(client: MockClient) -> None:
    policy = create_test_policy(client)
    token = client.create_cloud_access_policy_token(
        TEST_REGION,
        CreateCloudAccessPolicyTokenInput(access_policy_id=policy.id, name="reader", display_name="Reader Token"),
    )

    found = client.cloud_access_policy_token_by_id(TEST_REGION, token.id)

    assert found.name == "reader"
    assert found.display_name == "Reader Token"


def test_get_missing_token_raises(client: MockClient) -> None:
    with pytest.raises(AccessPolicyTokenNotFoundError):
        client.cloud_access_policy_token_by_id(TEST_REGION, "9")


def test_list_tokens_by_policy(client: MockClient) -> None:
    policy = create_test_policy(client)
    other = create_test_policy(client, name="Other")
    create_test_policy_token(client, policy.id)
    create_test_policy_token(client, other.id, name="elsewhere")

    items = client.cloud_access_policy_tokens(TEST_REGION, policy.id)

    assert [token.name for token in items.items] == ["TestTokenName"]


def test_list_tokens_with_empty_policy_id_is_empty(client: MockClient) -> None:
    policy = create_test_policy(client)
    create_test_policy_token(client, policy.id)

    assert client.cloud_access_policy_tokens(TEST_REGION, "").items == []


def test_delete_token_keeps_order_of_survivors(client: MockClient) -> None:
    policy = create_test_policy(client)
    for name in ("a", "b", "c", "d"):
        create_test_policy_token(client, policy.id, name=name)

    client.delete_cloud_access_policy_token(TEST_REGION, "2")

    assert [token.name for token in client.cloud_access_policy_token_items] == ["a", "c", "d"]


def test_delete_missing_token_raises(client: MockClient) -> None:
    policy = create_test_policy(client)
    create_test_policy_token(client, policy.id)

    with pytest.raises(AccessPolicyTokenNotFoundError):
        client.delete_cloud_access_policy_token(TEST_REGION, "77")
    assert len(client.cloud_access_policy_token_items) == 1


@pytest.mark.parametrize(
    "call",
    [
        lambda c: c.cloud_access_policies(""),
        lambda c: c.create_cloud_access_policy("", policy_input(realm_type="invalid")),
        lambda c: c.delete_cloud_access_policy("", "missing"),
        lambda c: c.create_cloud_access_policy_token(
            "", CreateCloudAccessPolicyTokenInput(access_policy_id="missing", name="t")
        ),
        lambda c: c.cloud_access_policy_tokens("", "1"),
        lambda c: c.cloud_access_policy_token_by_id("", "missing"),
        lambda c: c.delete_cloud_access_policy_token("", "missing"),
    ],
)
def test_empty_region_is_rejected_before_other_checks(client: MockClient, call) -> None:
    policy = create_test_policy(client)
    create_test_policy_token(client, policy.id)

    with pytest.raises(RegionRequiredError):
        call(client)
    assert len(client.cloud_access_policy_items) == 1
    assert len(client.cloud_access_policy_token_items) == 1
