import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

from salesforce_core.client.services.tokens import OAuth2TokenExecutor


class MockTokenEndpoint:
    """Records token requests and answers them with a fixed response."""

    def __init__(self, status_code: int = 200, body: dict[str, Any] | None = None):
        self.status_code = status_code
        self.body = body if body is not None else {
            "access_token": "access-token-xyz",
            "token_type": "Bearer",
            "instance_url": "https://test.my.salesforce.com",
        }
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)

    def executor_factory(self) -> OAuth2TokenExecutor:
        return OAuth2TokenExecutor(transport=httpx.MockTransport(self.handler))

    def form_data(self, index: int = -1) -> dict[str, str]:
        pairs = httpx.QueryParams(self.requests[index].content.decode())
        return dict(pairs.multi_items())


@pytest.fixture
def token_endpoint() -> MockTokenEndpoint:
    return MockTokenEndpoint()


@pytest.fixture
def rejecting_token_endpoint() -> MockTokenEndpoint:
    return MockTokenEndpoint(
        status_code=400,
        body={"error": "invalid_grant", "error_description": "authentication failure"},
    )


@pytest.fixture
def write_credentials(tmp_path) -> Callable[..., Path]:
    def _write(content: dict[str, Any] | str, name: str = "credentials.json") -> Path:
        path = tmp_path / name
        if isinstance(content, dict):
            content = json.dumps(content)
        path.write_text(content)
        return path

    return _write
