"""Tests for credential models, resolution and validation.

Covers:
- AuthFlow defaults, serialized form and required field order
- Credentials JSON serialization with optional fields omitted
- Resolving path and value sources, including read and parse failures
- Flow-specific validation reporting the first missing field
"""

import json

import pytest
from pydantic import ValidationError

from salesforce_core.client.models.credentials import (
    AuthFlow,
    Credentials,
    CredentialsPath,
    CredentialsValue,
)
from salesforce_core.client.models.errors import (
    InvalidCredentialsError,
    ParseCredentialsError,
    ReadCredentialsError,
)
from salesforce_core.client.services.credentials import (
    resolve_credentials,
    validate_credentials,
)


def make_credentials(**overrides) -> Credentials:
    fields = {
        "client_id": "test_client_id",
        "client_secret": "test_client_secret",
        "instance_url": "https://test.salesforce.com",
        "tenant_id": "test_tenant_id",
    }
    fields.update(overrides)
    return Credentials(**fields)


class TestAuthFlow:
    def test_default_is_client_credentials(self):
        assert AuthFlow.default() is AuthFlow.CLIENT_CREDENTIALS

    def test_serialized_values(self):
        assert AuthFlow.CLIENT_CREDENTIALS.value == "client_credentials"
        assert AuthFlow.USERNAME_PASSWORD.value == "username_password"
        assert AuthFlow("username_password") is AuthFlow.USERNAME_PASSWORD

    def test_display_name(self):
        assert AuthFlow.CLIENT_CREDENTIALS.display_name == "ClientCredentials"
        assert AuthFlow.USERNAME_PASSWORD.display_name == "UsernamePassword"

    def test_required_fields_order(self):
        assert AuthFlow.CLIENT_CREDENTIALS.required_fields == ("client_secret",)
        assert AuthFlow.USERNAME_PASSWORD.required_fields == (
            "client_secret",
            "username",
            "password",
        )


class TestCredentialsSerialization:
    def test_round_trip_with_all_fields(self):
        # Arrange
        creds = make_credentials(username="test_user", password="test_pass")

        # Act
        parsed = Credentials.from_json(creds.to_json())

        # Assert
        assert parsed == creds
        assert parsed.username == "test_user"
        assert parsed.password == "test_pass"

    def test_absent_optional_fields_are_omitted(self):
        # Arrange
        creds = make_credentials(client_secret=None)

        # Act
        data = json.loads(creds.to_json())

        # Assert
        assert data == {
            "client_id": "test_client_id",
            "instance_url": "https://test.salesforce.com",
            "tenant_id": "test_tenant_id",
        }
        assert Credentials.from_json(creds.to_json()) == creds

    def test_credentials_are_immutable(self):
        creds = make_credentials()

        with pytest.raises(ValidationError):
            creds.client_id = "other"

    def test_repr_hides_secrets(self):
        creds = make_credentials(username="test_user", password="hunter2")

        text = repr(creds)

        assert "test_client_secret" not in text
        assert "hunter2" not in text
        assert "test_user" in text


class TestResolveCredentials:
    async def test_value_source_returns_credentials(self):
        creds = make_credentials()

        resolved = await resolve_credentials(CredentialsValue(creds))

        assert resolved == creds

    async def test_path_source_reads_file(self, tmp_path):
        # Arrange
        creds = make_credentials()
        path = tmp_path / "credentials.json"
        path.write_text(creds.to_json())

        # Act
        resolved = await resolve_credentials(CredentialsPath(path))

        # Assert
        assert resolved == creds

    async def test_path_source_is_reread_on_every_call(self, tmp_path):
        # Arrange
        path = tmp_path / "credentials.json"
        path.write_text(make_credentials(tenant_id="first").to_json())
        source = CredentialsPath(path)

        # Act
        first = await resolve_credentials(source)
        path.write_text(make_credentials(tenant_id="second").to_json())
        second = await resolve_credentials(source)

        # Assert
        assert first.tenant_id == "first"
        assert second.tenant_id == "second"

    async def test_missing_file_raises_read_error(self, tmp_path):
        path = tmp_path / "nonexistent.json"

        with pytest.raises(ReadCredentialsError) as exc_info:
            await resolve_credentials(CredentialsPath(path))

        assert exc_info.value.path == path
        assert isinstance(exc_info.value.cause, FileNotFoundError)
        assert str(path) in str(exc_info.value)

    async def test_malformed_json_raises_parse_error(self, tmp_path):
        path = tmp_path / "credentials.json"
        path.write_text("{not json")

        with pytest.raises(ParseCredentialsError):
            await resolve_credentials(CredentialsPath(path))

    async def test_missing_required_json_fields_raise_parse_error(self, tmp_path):
        """Schema mismatch is a parse error, not a validation error."""
        path = tmp_path / "credentials.json"
        path.write_text('{"client_id":"client_id"}')

        with pytest.raises(ParseCredentialsError) as exc_info:
            await resolve_credentials(CredentialsPath(path))

        assert "instance_url" in str(exc_info.value)
        assert "tenant_id" in str(exc_info.value)


class TestValidateCredentials:
    def test_client_credentials_requires_secret(self):
        creds = make_credentials(client_secret=None)

        with pytest.raises(InvalidCredentialsError) as exc_info:
            validate_credentials(creds, AuthFlow.CLIENT_CREDENTIALS)

        assert exc_info.value.flow == "ClientCredentials"
        assert exc_info.value.message == "client_secret is required"
        assert str(exc_info.value) == (
            "Invalid credentials for ClientCredentials: client_secret is required"
        )

    def test_client_credentials_ignores_user_fields(self):
        validate_credentials(make_credentials(), AuthFlow.CLIENT_CREDENTIALS)

    @pytest.mark.parametrize(
        ("overrides", "missing"),
        [
            ({"client_secret": None, "username": None, "password": None}, "client_secret"),
            ({"client_secret": None, "username": None, "password": "p"}, "client_secret"),
            ({"username": None, "password": None}, "username"),
            ({"username": None, "password": "p"}, "username"),
            ({"username": "u", "password": None}, "password"),
        ],
    )
    def test_username_password_reports_first_missing_field(self, overrides, missing):
        creds = make_credentials(**overrides)

        with pytest.raises(InvalidCredentialsError) as exc_info:
            validate_credentials(creds, AuthFlow.USERNAME_PASSWORD)

        assert exc_info.value.flow == "UsernamePassword"
        assert exc_info.value.message == f"{missing} is required"

    def test_username_password_with_all_fields_passes(self):
        creds = make_credentials(username="test_user", password="test_password")

        validate_credentials(creds, AuthFlow.USERNAME_PASSWORD)
