"""Exception hierarchy for Salesforce client authentication errors.

Each failure mode of building and connecting a client has its own exception
type so callers can tell configuration problems apart from remote rejections.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class SalesforceClientError(Exception):
    """Base exception for all client construction and connection errors."""

    pass


class ReadCredentialsError(SalesforceClientError):
    """Raised when the credentials file cannot be read."""

    def __init__(self, path: Path, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to read credentials file at {path}: {cause}")


class ParseCredentialsError(SalesforceClientError):
    """Raised when credentials text is not valid JSON or does not match the schema.

    Malformed JSON and a well-formed document missing required fields are
    reported through this same type.
    """

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Failed to parse credentials JSON: {cause}")


class ParseUrlError(SalesforceClientError):
    """Raised when the instance URL does not form a valid absolute endpoint URL."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Invalid URL format: {cause}")


class InvalidCredentialsError(SalesforceClientError):
    """Raised when a field required by the selected auth flow is absent."""

    def __init__(self, flow: str, message: str):
        self.flow = flow
        self.message = message
        super().__init__(f"Invalid credentials for {flow}: {message}")


class MissingRequiredAttributeError(SalesforceClientError):
    """Raised when the builder is finished without a required setting."""

    def __init__(self, attribute: str):
        self.attribute = attribute
        super().__init__(f"Missing required attribute: {attribute}")


class TokenExchangeError(SalesforceClientError):
    """Raised when the OAuth2 token exchange fails.

    Covers transport failures, timeouts, redirects, rejected credentials and
    malformed token responses. The underlying failure is kept on ``cause``.
    """

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"OAuth2 token exchange failed: {cause}")


class TokenEndpointError(Exception):
    """Token endpoint answered with a non-success response (RFC 6749 Section 5.2).

    Never raised to callers directly; it is the ``cause`` of a
    ``TokenExchangeError`` so the OAuth error code stays inspectable.
    """

    def __init__(
        self,
        status_code: int,
        error: str | None = None,
        error_description: str | None = None,
        body: Any = None,
    ):
        self.status_code = status_code
        self.error = error
        self.error_description = error_description
        self.body = body

        detail = error or "unknown_error"
        if error_description:
            detail = f"{detail} - {error_description}"
        super().__init__(f"token endpoint returned {status_code}: {detail}")
