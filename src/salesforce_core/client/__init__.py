"""OAuth2 client authentication and connection management."""

from salesforce_core.client.builder import Builder
from salesforce_core.client.client import Client
from salesforce_core.client.models.credentials import (
    AuthFlow,
    Credentials,
    CredentialSource,
    CredentialsPath,
    CredentialsValue,
)
from salesforce_core.client.models.errors import (
    InvalidCredentialsError,
    MissingRequiredAttributeError,
    ParseCredentialsError,
    ParseUrlError,
    ReadCredentialsError,
    SalesforceClientError,
    TokenEndpointError,
    TokenExchangeError,
)
from salesforce_core.client.models.tokens import TokenResult
from salesforce_core.client.services.tokens import (
    OAuth2TokenExecutor,
    TokenRequestExecutor,
)

__all__ = [
    "AuthFlow",
    "Builder",
    "Client",
    "CredentialSource",
    "Credentials",
    "CredentialsPath",
    "CredentialsValue",
    "InvalidCredentialsError",
    "MissingRequiredAttributeError",
    "OAuth2TokenExecutor",
    "ParseCredentialsError",
    "ParseUrlError",
    "ReadCredentialsError",
    "SalesforceClientError",
    "TokenEndpointError",
    "TokenExchangeError",
    "TokenRequestExecutor",
    "TokenResult",
]
