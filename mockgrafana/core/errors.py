from __future__ import annotations


class MockGrafanaError(Exception):
    """Base error for mockgrafana."""


class ConfigurationError(MockGrafanaError):
    """Missing or invalid simulation configuration."""


class InvalidRequestError(MockGrafanaError):
    """Request failed validation; nothing was mutated."""


class RegionRequiredError(InvalidRequestError):
    """Region-scoped operation called without a region."""

    def __init__(self) -> None:
        super().__init__("region required")


class InvalidRealmError(InvalidRequestError):
    """Cloud Access Policy realm type is neither org nor stack."""

    def __init__(self, realm_type: str) -> None:
        super().__init__(f"invalid realm type: {realm_type!r}")
        self.realm_type = realm_type


class DuplicateNameError(MockGrafanaError):
    """Name already taken within the collection's uniqueness scope."""

    def __init__(self, resource: str, name: str) -> None:
        super().__init__(f"{resource} name must be unique: {name!r}")
        self.resource = resource
        self.name = name


class NotFoundError(MockGrafanaError):
    """Referenced record does not exist."""

    resource = "record"

    def __init__(self, identifier: object) -> None:
        super().__init__(f"{self.resource} not found: {identifier!r}")
        self.identifier = identifier


class ServiceAccountNotFoundError(NotFoundError):
    """Service account missing; raised before any token lookup."""

    resource = "service account"


class TokenNotFoundError(NotFoundError):
    """Service account token missing."""

    resource = "token"


class AccessPolicyNotFoundError(NotFoundError):
    """Cloud Access Policy missing."""

    resource = "access policy"


class AccessPolicyTokenNotFoundError(NotFoundError):
    """Cloud Access Policy token missing."""

    resource = "access policy token"
