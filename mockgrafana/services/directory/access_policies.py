from __future__ import annotations

import logging

from mockgrafana.core.config import REALM_TYPES
from mockgrafana.core.errors import (
    AccessPolicyNotFoundError,
    AccessPolicyTokenNotFoundError,
    InvalidRealmError,
    RegionRequiredError,
)
from mockgrafana.domain.models import (
    CloudAccessPolicy,
    CloudAccessPolicyItems,
    CloudAccessPolicyToken,
    CloudAccessPolicyTokenItems,
    CreateCloudAccessPolicyInput,
    CreateCloudAccessPolicyTokenInput,
)
from mockgrafana.services.directory.context import DirectoryContext
from mockgrafana.services.identity import ACCESS_POLICIES, ACCESS_POLICY_TOKENS
from mockgrafana.services.telemetry import tracked


logger = logging.getLogger(__name__)


def _require_region(region: str) -> None:
    # Region is checked ahead of every other precondition, reads included.
    if not region:
        raise RegionRequiredError()


class CloudAccessPolicyRegistry:
    """Region-scoped access policies and the tokens they own.

    Policy and token ids are strings holding a running sequence number.
    Deleting a policy cascades to its tokens; token removal is a stable
    filter, so surviving tokens keep their order.
    """

    def __init__(self, context: DirectoryContext) -> None:
        self._ctx = context
        self.policies: list[CloudAccessPolicy] = []
        self.tokens: list[CloudAccessPolicyToken] = []

    def _policy_exists(self, policy_id: str) -> bool:
        return any(policy.id == policy_id for policy in self.policies)

    @tracked("create_cloud_access_policy")
    def create_cloud_access_policy(
        self, region: str, policy_input: CreateCloudAccessPolicyInput
    ) -> CloudAccessPolicy:
        _require_region(region)
        # Validate every realm before building anything so a bad realm leaves no trace.
        for realm in policy_input.realms:
            if realm.type not in REALM_TYPES:
                raise InvalidRealmError(realm.type)

        policy = CloudAccessPolicy(
            id=str(self._ctx.ids.next_id(ACCESS_POLICIES, len(self.policies))),
            name=policy_input.name,
            display_name=policy_input.display_name,
            scopes=list(policy_input.scopes),
            realms=[realm.model_copy(deep=True) for realm in policy_input.realms],
            created_at=self._ctx.time_provider(),
        )
        self.policies.append(policy)
        logger.debug("access_policy_created id=%s region=%s name=%s", policy.id, region, policy.name)
        return policy

    @tracked("cloud_access_policies")
    def cloud_access_policies(self, region: str) -> CloudAccessPolicyItems:
        _require_region(region)
        return CloudAccessPolicyItems(items=list(self.policies))

    @tracked("delete_cloud_access_policy")
    def delete_cloud_access_policy(self, region: str, policy_id: str) -> None:
        _require_region(region)
        # Cascade runs first and is kept even when no policy matches the id.
        before = len(self.tokens)
        self.tokens[:] = [token for token in self.tokens if token.access_policy_id != policy_id]
        cascaded = before - len(self.tokens)

        remaining = [policy for policy in self.policies if policy.id != policy_id]
        if len(remaining) == len(self.policies):
            if cascaded:
                logger.warning(
                    "access_policy_missing_after_cascade id=%s cascaded_tokens=%s", policy_id, cascaded
                )
            raise AccessPolicyNotFoundError(policy_id)
        self.policies[:] = remaining
        logger.info("access_policy_deleted id=%s region=%s cascaded_tokens=%s", policy_id, region, cascaded)

    @tracked("create_cloud_access_policy_token")
    def create_cloud_access_policy_token(
        self, region: str, token_input: CreateCloudAccessPolicyTokenInput
    ) -> CloudAccessPolicyToken:
        _require_region(region)
        if not self._policy_exists(token_input.access_policy_id):
            raise AccessPolicyNotFoundError(token_input.access_policy_id)

        token = CloudAccessPolicyToken(
            id=str(self._ctx.ids.next_id(ACCESS_POLICY_TOKENS, len(self.tokens))),
            access_policy_id=token_input.access_policy_id,
            name=token_input.name,
            display_name=token_input.display_name,
            expires_at=token_input.expires_at,
            # Fixed placeholder; these tokens never carry a generated secret.
            token=self._ctx.settings.access_policy_token_placeholder,
            created_at=self._ctx.time_provider(),
        )
        self.tokens.append(token)
        logger.debug(
            "access_policy_token_created id=%s access_policy_id=%s", token.id, token.access_policy_id
        )
        return token

    @tracked("cloud_access_policy_tokens")
    def cloud_access_policy_tokens(self, region: str, access_policy_id: str) -> CloudAccessPolicyTokenItems:
        _require_region(region)
        # An empty or unknown policy id simply matches nothing.
        return CloudAccessPolicyTokenItems(
            items=[token for token in self.tokens if token.access_policy_id == access_policy_id]
        )

    @tracked("cloud_access_policy_token_by_id")
    def cloud_access_policy_token_by_id(self, region: str, token_id: str) -> CloudAccessPolicyToken:
        _require_region(region)
        for token in self.tokens:
            if token.id == token_id:
                return token
        raise AccessPolicyTokenNotFoundError(token_id)

    @tracked("delete_cloud_access_policy_token")
    def delete_cloud_access_policy_token(self, region: str, token_id: str) -> None:
        _require_region(region)
        remaining = [token for token in self.tokens if token.id != token_id]
        if len(remaining) == len(self.tokens):
            raise AccessPolicyTokenNotFoundError(token_id)
        self.tokens[:] = remaining
        logger.debug("access_policy_token_deleted id=%s region=%s", token_id, region)
