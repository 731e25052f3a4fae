from __future__ import annotations

import logging

from mockgrafana.core.errors import DuplicateNameError
from mockgrafana.domain.models import CloudAPIKey, CreateCloudAPIKeyInput, ListCloudAPIKeysOutput
from mockgrafana.services.directory.context import DirectoryContext
from mockgrafana.services.identity import CLOUD_API_KEYS, credential_for
from mockgrafana.services.telemetry import tracked


logger = logging.getLogger(__name__)


class CloudAPIKeyRegistry:
    """Flat, org-scoped legacy keys keyed by name.

    The ``org`` argument is accepted for call-surface parity with the real
    client and otherwise ignored.
    """

    def __init__(self, context: DirectoryContext) -> None:
        self._ctx = context
        self.keys: list[CloudAPIKey] = []

    @tracked("create_cloud_api_key")
    def create_cloud_api_key(self, org: str, key_input: CreateCloudAPIKeyInput) -> CloudAPIKey:
        if any(key.name == key_input.name for key in self.keys):
            raise DuplicateNameError("cloud api key", key_input.name)

        key = CloudAPIKey(
            id=self._ctx.ids.next_id(CLOUD_API_KEYS, len(self.keys)),
            name=key_input.name,
            role=key_input.role,
            token=credential_for(key_input.name, self._ctx.rng, self._ctx.settings.credential_suffix_max),
        )
        self.keys.append(key)
        logger.debug("cloud_api_key_created id=%s name=%s", key.id, key.name)
        return key

    @tracked("list_cloud_api_keys")
    def list_cloud_api_keys(self, org: str) -> ListCloudAPIKeysOutput:
        return ListCloudAPIKeysOutput(items=list(self.keys))

    @tracked("delete_cloud_api_key")
    def delete_cloud_api_key(self, org: str, key_name: str) -> None:
        # Unknown names are a silent no-op; survivors keep their relative order.
        remaining = [key for key in self.keys if key.name != key_name]
        if len(remaining) != len(self.keys):
            logger.debug("cloud_api_key_deleted name=%s", key_name)
        self.keys[:] = remaining
