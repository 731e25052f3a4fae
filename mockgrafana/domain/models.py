from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    # Serialize with the real API's camelCase keys while accepting either spelling on input.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Service accounts -------------------------------------------------------


class ServiceAccountDTO(ApiModel):
    id: int
    name: str
    login: str
    org_id: int = 0
    is_disabled: bool = False
    role: str
    # Informational only; see Settings.persist_token_counts.
    tokens: int = 0
    avatar_url: str = ""


class CreateServiceAccountRequest(ApiModel):
    name: str
    role: str = ""
    is_disabled: bool = False


class ServiceAccountToken(ApiModel):
    id: int
    name: str
    created: datetime
    key: str
    expiration: datetime | None = None
    # Owner reference stays internal, matching the real client's json:"-" tag.
    service_account_id: int = Field(exclude=True)
    seconds_to_live: int | None = None


class CreateServiceAccountTokenRequest(ApiModel):
    name: str
    # Travels in the URL path in the real API, so it is never part of the body.
    service_account_id: int = Field(exclude=True)
    seconds_to_live: int | None = None


class CreateServiceAccountTokenResponse(ApiModel):
    id: int
    name: str
    key: str


class GetServiceAccountTokensResponse(ApiModel):
    id: int
    name: str
    created: datetime
    expiration: datetime | None = None
    seconds_until_expiration: float | None = None
    has_expired: bool = False


# --- Cloud API keys ---------------------------------------------------------


class CloudAPIKey(ApiModel):
    id: int
    name: str
    role: str
    token: str
    expiration: str = ""


class CreateCloudAPIKeyInput(ApiModel):
    name: str
    role: str = ""


class ListCloudAPIKeysOutput(ApiModel):
    items: list[CloudAPIKey] = Field(default_factory=list)


# --- Cloud Access Policies --------------------------------------------------


class CloudAccessPolicyLabelPolicy(ApiModel):
    selector: str


class CloudAccessPolicyRealm(ApiModel):
    type: str
    identifier: str
    label_policies: list[CloudAccessPolicyLabelPolicy] = Field(default_factory=list)


class CloudAccessPolicy(ApiModel):
    id: str
    name: str
    display_name: str
    scopes: list[str] = Field(default_factory=list)
    realms: list[CloudAccessPolicyRealm] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime | None = None


class CreateCloudAccessPolicyInput(ApiModel):
    name: str
    display_name: str = ""
    scopes: list[str] = Field(default_factory=list)
    realms: list[CloudAccessPolicyRealm] = Field(default_factory=list)


class CloudAccessPolicyItems(ApiModel):
    items: list[CloudAccessPolicy] = Field(default_factory=list)


class CloudAccessPolicyToken(ApiModel):
    id: str
    access_policy_id: str
    name: str
    display_name: str
    expires_at: datetime | None = None
    first_used_at: datetime | None = None
    token: str = ""
    created_at: datetime
    updated_at: datetime | None = None


class CreateCloudAccessPolicyTokenInput(ApiModel):
    access_policy_id: str
    name: str
    display_name: str = ""
    expires_at: datetime | None = None


class CloudAccessPolicyTokenItems(ApiModel):
    items: list[CloudAccessPolicyToken] = Field(default_factory=list)
