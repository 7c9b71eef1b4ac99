"""Token endpoint models for Salesforce OAuth2.

Contains the endpoint pair derived from an instance URL, the grant request
parameters for each supported flow, and the token result returned by the
token endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class OAuth2Endpoints:
    """Authorization and token endpoints of a Salesforce instance."""

    authorization_endpoint: str
    token_endpoint: str


@dataclass(frozen=True)
class ClientCredentialsTokenRequest:
    """Client credentials grant parameters (RFC 6749 Section 4.4)."""

    token_endpoint: str
    client_id: str
    client_secret: str = field(repr=False)

    grant_type: str = "client_credentials"

    def to_form_data(self) -> dict[str, str]:
        """Convert to form data for application/x-www-form-urlencoded request."""
        return {
            "grant_type": self.grant_type,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
        }


@dataclass(frozen=True)
class PasswordTokenRequest:
    """Resource owner password credentials grant parameters (RFC 6749 Section 4.3)."""

    token_endpoint: str
    client_id: str
    client_secret: str = field(repr=False)
    username: str
    password: str = field(repr=False)

    grant_type: str = "password"

    def to_form_data(self) -> dict[str, str]:
        """Convert to form data for application/x-www-form-urlencoded request."""
        return {
            "grant_type": self.grant_type,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "username": self.username,
            "password": self.password,
        }


TokenRequest = ClientCredentialsTokenRequest | PasswordTokenRequest


class TokenResult(BaseModel):
    """Successful token response (RFC 6749 Section 5.1).

    Kept as returned by the token endpoint. Salesforce adds fields such as
    ``instance_url``, ``id``, ``issued_at`` and ``signature``; they are
    retained as extra attributes without interpretation.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    access_token: str = Field(repr=False)
    token_type: str
    expires_in: int | None = None
    refresh_token: str | None = Field(default=None, repr=False)
    scope: str | None = None
