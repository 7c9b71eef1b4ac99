"""OAuth2 token request execution.

Sends grant requests to a Salesforce token endpoint and turns the response
into a ``TokenResult``. Redirects are never followed: a redirect from a
token endpoint means the instance URL is misconfigured.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Protocol, Self

import httpx
from pydantic import ValidationError

from salesforce_core.client.models.errors import TokenEndpointError, TokenExchangeError
from salesforce_core.client.models.tokens import TokenRequest, TokenResult

logger = logging.getLogger(__name__)


class TokenRequestExecutor(Protocol):
    """Executes OAuth2 token requests for a single connection attempt.

    Any exception an implementation raises while being created, entered or
    requesting a token is reported as ``TokenExchangeError``. Executors are
    used as async context managers so the underlying connection pool is
    released after the exchange.
    """

    async def request_token(self, token_request: TokenRequest) -> TokenResult: ...

    async def __aenter__(self) -> Self: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None: ...


class OAuth2TokenExecutor:
    """Default token request executor backed by ``httpx.AsyncClient``.

    Uses application/x-www-form-urlencoded encoding as required by RFC 6749
    and disables redirect following.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the token executor.

        Args:
            timeout: HTTP request timeout in seconds
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``
        """
        self.timeout = timeout
        self._http_client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=False,
            transport=transport,
        )

    async def request_token(self, token_request: TokenRequest) -> TokenResult:
        """Send a grant request to the token endpoint.

        Args:
            token_request: Grant parameters including the token endpoint

        Returns:
            TokenResult: Parsed successful token response

        Raises:
            TokenExchangeError: On network failure, timeout, non-success
                response or malformed response body
        """
        logger.debug(
            f"Requesting token at {token_request.token_endpoint}: "
            f"grant_type={token_request.grant_type}, "
            f"client_id={token_request.client_id}"
        )

        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
        }

        try:
            response = await self._http_client.post(
                token_request.token_endpoint,
                data=token_request.to_form_data(),
                headers=headers,
            )
        except (httpx.HTTPError, TimeoutError) as e:
            raise TokenExchangeError(e) from e

        return self._parse_token_response(response)

    def _parse_token_response(self, response: httpx.Response) -> TokenResult:
        """Parse token endpoint response into a TokenResult.

        Args:
            response: HTTP response from token endpoint

        Returns:
            TokenResult: Parsed successful response

        Raises:
            TokenExchangeError: If the response is an error or cannot be parsed
        """
        if not response.is_success:
            error = self._endpoint_error(response)
            logger.warning(
                f"Token exchange failed with {response.status_code}: "
                f"{error.error or 'unknown_error'} - "
                f"{error.error_description or 'No description provided'}"
            )
            raise TokenExchangeError(error) from error

        try:
            token_result = TokenResult.model_validate_json(response.content)
        except ValidationError as e:
            raise TokenExchangeError(e) from e

        logger.info("Token exchange successful")
        return token_result

    def _endpoint_error(self, response: httpx.Response) -> TokenEndpointError:
        """Build an error from an RFC 6749 Section 5.2 response, JSON or not."""
        try:
            body = response.json()
        except ValueError:
            return TokenEndpointError(response.status_code, body=response.text)

        if not isinstance(body, dict):
            return TokenEndpointError(response.status_code, body=body)

        return TokenEndpointError(
            response.status_code,
            error=body.get("error"),
            error_description=body.get("error_description"),
            body=body,
        )

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        await self._http_client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()
        return None
