"""Builder for unauthenticated Salesforce clients."""

from __future__ import annotations

from collections.abc import Callable
from os import PathLike
from pathlib import Path
from typing import Self

from salesforce_core.client.client import Client
from salesforce_core.client.models.credentials import (
    AuthFlow,
    Credentials,
    CredentialSource,
    CredentialsPath,
    CredentialsValue,
)
from salesforce_core.client.models.errors import MissingRequiredAttributeError
from salesforce_core.client.services.tokens import (
    OAuth2TokenExecutor,
    TokenRequestExecutor,
)


class Builder:
    """Collects client configuration and produces a ``Client``.

    Exactly one credential source must be set, with either
    ``credentials_path`` or ``credentials``; setting one replaces the other.
    The auth flow defaults to ``AuthFlow.CLIENT_CREDENTIALS``.

    Example::

        client = await (
            Builder()
            .credentials_path("credentials.json")
            .auth_flow(AuthFlow.USERNAME_PASSWORD)
            .build()
            .connect()
        )
    """

    def __init__(self):
        self._credentials_source: CredentialSource | None = None
        self._auth_flow: AuthFlow | None = None
        self._executor_factory: Callable[[], TokenRequestExecutor] | None = None

    def credentials_path(self, path: str | PathLike[str]) -> Self:
        """Load credentials from a JSON file when the client connects.

        The file holds ``client_id``, ``client_secret``, ``instance_url`` and
        ``tenant_id``, plus ``username`` and ``password`` for the
        username-password flow.
        """
        self._credentials_source = CredentialsPath(Path(path))
        return self

    def credentials(self, credentials: Credentials) -> Self:
        """Use credentials supplied directly."""
        self._credentials_source = CredentialsValue(credentials)
        return self

    def auth_flow(self, auth_flow: AuthFlow) -> Self:
        self._auth_flow = AuthFlow(auth_flow)
        return self

    def request_executor(
        self, executor_factory: Callable[[], TokenRequestExecutor]
    ) -> Self:
        """Override how the token request executor is created for each connect."""
        self._executor_factory = executor_factory
        return self

    def build(self) -> Client:
        """Build an unauthenticated client. Performs no I/O.

        Raises:
            MissingRequiredAttributeError: If no credential source was set
        """
        if self._credentials_source is None:
            raise MissingRequiredAttributeError("credentials or credentials_path")

        return Client(
            credentials_source=self._credentials_source,
            auth_flow=self._auth_flow or AuthFlow.default(),
            executor_factory=self._executor_factory or OAuth2TokenExecutor,
        )
