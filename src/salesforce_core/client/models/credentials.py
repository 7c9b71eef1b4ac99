"""Credential models for Salesforce OAuth2 authentication.

Contains the auth flow selection, the credentials document obtained from a
Salesforce Connected App, and the two ways a client can be told where its
credentials come from.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class AuthFlow(str, Enum):
    """OAuth2 grant used to obtain an access token.

    ``CLIENT_CREDENTIALS`` is for server-to-server integration where the
    application acts on its own behalf. ``USERNAME_PASSWORD`` authenticates as
    a specific user and should only be used with a high degree of trust
    between the user and the application.
    """

    CLIENT_CREDENTIALS = "client_credentials"
    USERNAME_PASSWORD = "username_password"

    @classmethod
    def default(cls) -> AuthFlow:
        return cls.CLIENT_CREDENTIALS

    @property
    def display_name(self) -> str:
        """Variant name used in error messages, e.g. ``ClientCredentials``."""
        return "".join(part.capitalize() for part in self.value.split("_"))

    @property
    def required_fields(self) -> tuple[str, ...]:
        """Optional credential fields this flow needs, in the order they are checked."""
        if self is AuthFlow.USERNAME_PASSWORD:
            return ("client_secret", "username", "password")
        return ("client_secret",)


class Credentials(BaseModel):
    """Salesforce OAuth2 credentials from a Connected App.

    ``client_id`` is the Consumer Key and ``client_secret`` the Consumer
    Secret. ``username`` and ``password`` are only used by the
    username-password flow; if the org requires a security token it is
    appended to the password. ``instance_url`` is the org base URL, e.g.
    ``https://login.salesforce.com`` for production or
    ``https://test.salesforce.com`` for sandboxes. ``tenant_id`` is the
    15 or 18 character org ID.
    """

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str | None = Field(default=None, repr=False)
    username: str | None = None
    password: str | None = Field(default=None, repr=False)
    instance_url: str
    tenant_id: str

    @classmethod
    def from_json(cls, text: str | bytes) -> Credentials:
        """Parse a credentials JSON document.

        Raises:
            pydantic.ValidationError: On malformed JSON or a schema mismatch
        """
        return cls.model_validate_json(text)

    def to_json(self) -> str:
        """Serialize to JSON, omitting optional fields that are unset."""
        return self.model_dump_json(exclude_none=True)


@dataclass(frozen=True)
class CredentialsPath:
    """Load credentials from a JSON file each time the client connects."""

    path: Path


@dataclass(frozen=True)
class CredentialsValue:
    """Use credentials supplied directly."""

    credentials: Credentials


CredentialSource = CredentialsPath | CredentialsValue
