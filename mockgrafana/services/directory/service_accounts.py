from __future__ import annotations

import logging
from datetime import datetime, timedelta

from mockgrafana.core.errors import (
    DuplicateNameError,
    ServiceAccountNotFoundError,
    TokenNotFoundError,
)
from mockgrafana.domain.models import (
    CreateServiceAccountRequest,
    CreateServiceAccountTokenRequest,
    CreateServiceAccountTokenResponse,
    GetServiceAccountTokensResponse,
    ServiceAccountDTO,
    ServiceAccountToken,
)
from mockgrafana.services.directory.context import DirectoryContext
from mockgrafana.services.identity import (
    SERVICE_ACCOUNT_TOKENS,
    SERVICE_ACCOUNTS,
    credential_for,
)
from mockgrafana.services.telemetry import tracked


logger = logging.getLogger(__name__)


def _to_summary(token: ServiceAccountToken, now: datetime) -> GetServiceAccountTokensResponse:
    # Never expose the key when listing; expiry fields are derived at read time.
    remaining = None
    has_expired = False
    if token.expiration is not None:
        remaining = (token.expiration - now).total_seconds()
        has_expired = remaining <= 0
    return GetServiceAccountTokensResponse(
        id=token.id,
        name=token.name,
        created=token.created,
        expiration=token.expiration,
        seconds_until_expiration=remaining,
        has_expired=has_expired,
    )


class ServiceAccountRegistry:
    """Service accounts and the tokens they own.

    Tokens reference their account by id only. Deleting an account leaves its
    tokens in place, and they remain listable by the stale id. Both
    collections remove entries by swapping the last element into the hole, so
    order is not preserved across deletes.
    """

    def __init__(self, context: DirectoryContext) -> None:
        self._ctx = context
        self.accounts: list[ServiceAccountDTO] = []
        self.tokens: list[ServiceAccountToken] = []

    def _find_account(self, service_account_id: int) -> ServiceAccountDTO | None:
        for account in self.accounts:
            if account.id == service_account_id:
                return account
        return None

    @tracked("create_service_account")
    def create_service_account(self, request: CreateServiceAccountRequest) -> ServiceAccountDTO:
        # Names only collide with live accounts; a delete frees the name again.
        if any(account.name == request.name for account in self.accounts):
            raise DuplicateNameError("service account", request.name)

        account = ServiceAccountDTO(
            id=self._ctx.ids.next_id(SERVICE_ACCOUNTS, len(self.accounts)),
            name=request.name,
            login=f"{self._ctx.settings.service_account_login_prefix}{request.name}",
            role=request.role,
            is_disabled=request.is_disabled,
            tokens=0,
        )
        self.accounts.append(account)
        logger.debug("service_account_created id=%s name=%s", account.id, account.name)
        return account.model_copy()

    @tracked("get_service_accounts")
    def get_service_accounts(self) -> list[ServiceAccountDTO]:
        return [account.model_copy() for account in self.accounts]

    @tracked("delete_service_account")
    def delete_service_account(self, service_account_id: int) -> None:
        for idx, account in enumerate(self.accounts):
            if account.id == service_account_id:
                # Swap-with-last then truncate; the tail entry takes the freed slot.
                self.accounts[idx] = self.accounts[-1]
                self.accounts.pop()
                logger.debug("service_account_deleted id=%s", service_account_id)
                return
        raise ServiceAccountNotFoundError(service_account_id)

    @tracked("create_service_account_token")
    def create_service_account_token(
        self, request: CreateServiceAccountTokenRequest
    ) -> CreateServiceAccountTokenResponse:
        account = self._find_account(request.service_account_id)
        if account is None:
            raise ServiceAccountNotFoundError(request.service_account_id)
        # Token names are unique across every account, not just the owner.
        if any(token.name == request.name for token in self.tokens):
            raise DuplicateNameError("token", request.name)

        settings = self._ctx.settings
        created = self._ctx.time_provider()
        expiration = None
        if request.seconds_to_live:
            expiration = created + timedelta(seconds=request.seconds_to_live)
        token = ServiceAccountToken(
            id=self._ctx.ids.next_id(SERVICE_ACCOUNT_TOKENS, len(self.tokens)),
            name=request.name,
            created=created,
            key=credential_for(request.name, self._ctx.rng, settings.credential_suffix_max),
            expiration=expiration,
            service_account_id=request.service_account_id,
            seconds_to_live=request.seconds_to_live,
        )
        self.tokens.append(token)
        if settings.persist_token_counts:
            account.tokens += 1
        logger.debug(
            "service_account_token_created id=%s service_account_id=%s",
            token.id,
            token.service_account_id,
        )
        return CreateServiceAccountTokenResponse(id=token.id, name=token.name, key=token.key)

    @tracked("get_service_account_tokens")
    def get_service_account_tokens(self, service_account_id: int) -> list[GetServiceAccountTokensResponse]:
        # Filter by owner id alone so tokens of deleted accounts stay visible.
        now = self._ctx.time_provider()
        return [
            _to_summary(token, now)
            for token in self.tokens
            if token.service_account_id == service_account_id
        ]

    @tracked("delete_service_account_token")
    def delete_service_account_token(self, service_account_id: int, token_id: int) -> None:
        account = self._find_account(service_account_id)
        if account is None:
            raise ServiceAccountNotFoundError(service_account_id)
        for idx, token in enumerate(self.tokens):
            if token.service_account_id == service_account_id and token.id == token_id:
                self.tokens[idx] = self.tokens[-1]
                self.tokens.pop()
                if self._ctx.settings.persist_token_counts:
                    account.tokens -= 1
                logger.debug(
                    "service_account_token_deleted id=%s service_account_id=%s",
                    token_id,
                    service_account_id,
                )
                return
        raise TokenNotFoundError(token_id)
