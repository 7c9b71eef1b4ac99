"""Salesforce OAuth2 client and connection orchestration.

A ``Client`` is an immutable value. One built by ``Builder`` is
unauthenticated; ``connect()`` resolves and validates credentials, runs the
configured token exchange and returns a new, authenticated ``Client``.
The original value is never modified, so a failed connection attempt leaves
nothing half-authenticated behind.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from contextlib import AsyncExitStack
from dataclasses import dataclass, field

from salesforce_core.client.models.credentials import AuthFlow, CredentialSource
from salesforce_core.client.models.errors import TokenExchangeError
from salesforce_core.client.models.tokens import TokenResult
from salesforce_core.client.services.credentials import (
    resolve_credentials,
    validate_credentials,
)
from salesforce_core.client.services.flows import exchange_for_flow
from salesforce_core.client.services.tokens import (
    OAuth2TokenExecutor,
    TokenRequestExecutor,
)

logger = logging.getLogger(__name__)

ACCESS_TOKEN_METADATA_KEY = "accesstoken"
INSTANCE_URL_METADATA_KEY = "instanceurl"
TENANT_ID_METADATA_KEY = "tenantid"


@dataclass(frozen=True)
class Client:
    """OAuth2 client for Salesforce API authentication.

    Use ``Builder`` to construct one. After ``connect()`` the returned client
    carries the token result, instance URL and tenant ID needed by
    downstream API and streaming sessions.
    """

    credentials_source: CredentialSource
    auth_flow: AuthFlow = AuthFlow.CLIENT_CREDENTIALS
    token_result: TokenResult | None = None
    instance_url: str | None = None
    tenant_id: str | None = None
    executor_factory: Callable[[], TokenRequestExecutor] = field(
        default=OAuth2TokenExecutor, repr=False, compare=False
    )

    def __post_init__(self):
        auth_fields = (self.token_result, self.instance_url, self.tenant_id)
        if any(value is None for value in auth_fields) and any(
            value is not None for value in auth_fields
        ):
            raise ValueError(
                "token_result, instance_url and tenant_id must be set together"
            )

    @property
    def is_authenticated(self) -> bool:
        return self.token_result is not None

    @property
    def access_token(self) -> str | None:
        if self.token_result is None:
            return None
        return self.token_result.access_token

    async def connect(self) -> Client:
        """Exchange credentials for an access token.

        Credentials are resolved (re-reading the file for path sources),
        validated for the configured flow, and exchanged at the instance's
        token endpoint using a request executor created for this call.

        Returns:
            Client: New authenticated client value

        Raises:
            ReadCredentialsError: If the credentials file cannot be read
            ParseCredentialsError: If the credentials JSON is invalid
            InvalidCredentialsError: If a field required by the flow is missing
            ParseUrlError: If the instance URL is malformed
            TokenExchangeError: If the token exchange fails
        """
        credentials = await resolve_credentials(self.credentials_source)
        validate_credentials(credentials, self.auth_flow)

        async with AsyncExitStack() as stack:
            try:
                executor = await stack.enter_async_context(self.executor_factory())
            except Exception as e:
                raise TokenExchangeError(e) from e

            token_result = await exchange_for_flow(
                self.auth_flow, credentials, executor
            )

        logger.info(
            f"Connected to {credentials.instance_url} "
            f"(tenant {credentials.tenant_id}) using {self.auth_flow.value}"
        )

        return dataclasses.replace(
            self,
            token_result=token_result,
            instance_url=credentials.instance_url,
            tenant_id=credentials.tenant_id,
        )

    def auth_metadata(self) -> dict[str, str]:
        """Return the headers downstream sessions attach to each call.

        Raises:
            ValueError: If the client has not been connected
        """
        if not self.is_authenticated:
            raise ValueError("Client is not authenticated; call connect() first")

        return {
            ACCESS_TOKEN_METADATA_KEY: self.token_result.access_token,
            INSTANCE_URL_METADATA_KEY: self.instance_url,
            TENANT_ID_METADATA_KEY: self.tenant_id,
        }
