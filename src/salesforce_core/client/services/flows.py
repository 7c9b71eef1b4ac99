"""Token exchange for each supported Salesforce OAuth2 flow.

Both flows derive the same endpoint pair from the instance URL and differ
only in the grant they send to the token endpoint.
"""

from __future__ import annotations

import logging

import httpx

from salesforce_core.client.models.credentials import AuthFlow, Credentials
from salesforce_core.client.models.errors import (
    ParseUrlError,
    SalesforceClientError,
    TokenExchangeError,
)
from salesforce_core.client.models.tokens import (
    ClientCredentialsTokenRequest,
    OAuth2Endpoints,
    PasswordTokenRequest,
    TokenRequest,
    TokenResult,
)
from salesforce_core.client.services.tokens import TokenRequestExecutor

logger = logging.getLogger(__name__)

DEFAULT_AUTHORIZE_PATH = "/services/oauth2/authorize"
DEFAULT_TOKEN_PATH = "/services/oauth2/token"

# Forbidden host code points; "%" catches characters httpx percent-encoded.
_FORBIDDEN_HOST_CHARS = frozenset(" \t\n\r#%/<>?@[\\]^|")


def build_endpoints(instance_url: str) -> OAuth2Endpoints:
    """Build the authorization and token endpoints for an instance.

    Raises:
        ParseUrlError: If ``instance_url`` plus the endpoint path is not an
            absolute URL
    """
    endpoints = OAuth2Endpoints(
        authorization_endpoint=_absolute_url(
            f"{instance_url}{DEFAULT_AUTHORIZE_PATH}"
        ),
        token_endpoint=_absolute_url(f"{instance_url}{DEFAULT_TOKEN_PATH}"),
    )
    logger.debug(f"Using token endpoint {endpoints.token_endpoint}")
    return endpoints


def _absolute_url(raw: str) -> str:
    candidate = raw.strip()
    try:
        url = httpx.URL(candidate)
    except httpx.InvalidURL as e:
        raise ParseUrlError(e) from e

    if not url.scheme or not url.host:
        error = httpx.InvalidURL(f"relative URL without a base: {raw!r}")
        raise ParseUrlError(error) from error

    if any(
        char in _FORBIDDEN_HOST_CHARS or not char.isprintable() for char in url.host
    ):
        error = httpx.InvalidURL(f"invalid host {url.host!r} in {candidate!r}")
        raise ParseUrlError(error) from error

    return candidate


async def _request_token(
    executor: TokenRequestExecutor, token_request: TokenRequest
) -> TokenResult:
    try:
        return await executor.request_token(token_request)
    except SalesforceClientError:
        raise
    except Exception as e:
        raise TokenExchangeError(e) from e


async def exchange_client_credentials(
    credentials: Credentials, executor: TokenRequestExecutor
) -> TokenResult:
    """Perform the client credentials grant.

    Expects credentials already validated for ``AuthFlow.CLIENT_CREDENTIALS``.
    """
    endpoints = build_endpoints(credentials.instance_url)
    token_request = ClientCredentialsTokenRequest(
        token_endpoint=endpoints.token_endpoint,
        client_id=credentials.client_id,
        client_secret=credentials.client_secret,
    )
    return await _request_token(executor, token_request)


async def exchange_password(
    credentials: Credentials, executor: TokenRequestExecutor
) -> TokenResult:
    """Perform the resource owner password credentials grant.

    Expects credentials already validated for ``AuthFlow.USERNAME_PASSWORD``.
    """
    endpoints = build_endpoints(credentials.instance_url)
    token_request = PasswordTokenRequest(
        token_endpoint=endpoints.token_endpoint,
        client_id=credentials.client_id,
        client_secret=credentials.client_secret,
        username=credentials.username,
        password=credentials.password,
    )
    return await _request_token(executor, token_request)


async def exchange_for_flow(
    auth_flow: AuthFlow, credentials: Credentials, executor: TokenRequestExecutor
) -> TokenResult:
    """Dispatch to the exchange matching ``auth_flow``."""
    if auth_flow is AuthFlow.CLIENT_CREDENTIALS:
        return await exchange_client_credentials(credentials, executor)
    if auth_flow is AuthFlow.USERNAME_PASSWORD:
        return await exchange_password(credentials, executor)
    raise ValueError(f"Unsupported auth flow: {auth_flow!r}")
