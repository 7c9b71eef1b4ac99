"""Credential resolution and validation.

Resolves a configured credential source into a ``Credentials`` document and
checks that the fields required by the selected auth flow are present.
"""

from __future__ import annotations

import asyncio
import logging

from pydantic import ValidationError

from salesforce_core.client.models.credentials import (
    AuthFlow,
    Credentials,
    CredentialSource,
    CredentialsPath,
    CredentialsValue,
)
from salesforce_core.client.models.errors import (
    InvalidCredentialsError,
    ParseCredentialsError,
    ReadCredentialsError,
)

logger = logging.getLogger(__name__)


async def resolve_credentials(source: CredentialSource) -> Credentials:
    """Turn a credential source into concrete credentials.

    Path sources are read on every call; nothing is cached.

    Args:
        source: File path or directly supplied credentials

    Returns:
        Credentials: Resolved credentials document

    Raises:
        ReadCredentialsError: If the credentials file cannot be read
        ParseCredentialsError: If the file is not valid credentials JSON
    """
    if isinstance(source, CredentialsValue):
        return source.credentials.model_copy()

    if not isinstance(source, CredentialsPath):
        raise TypeError(f"Unsupported credential source: {source!r}")

    logger.debug(f"Reading credentials from {source.path}")

    try:
        text = await asyncio.to_thread(source.path.read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ReadCredentialsError(source.path, e) from e

    try:
        return Credentials.from_json(text)
    except ValidationError as e:
        raise ParseCredentialsError(e) from e


def validate_credentials(credentials: Credentials, auth_flow: AuthFlow) -> None:
    """Check that the fields required by ``auth_flow`` are present.

    Fields are checked in ``auth_flow.required_fields`` order and only the
    first missing one is reported.

    Raises:
        InvalidCredentialsError: Naming the flow and the first missing field
    """
    for field_name in auth_flow.required_fields:
        if getattr(credentials, field_name) is None:
            raise InvalidCredentialsError(
                auth_flow.display_name, f"{field_name} is required"
            )
