"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- Gateway envelope builders (tool call, free text)
- GatewayClient backed by httpx.MockTransport (no network)
- FastAPI TestClient with the generation service overridden
"""

import json
from typing import Any, Callable, Dict, Generator, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from infragen.ai.providers.gateway import GatewayClient
from infragen.ai.schemas.terraform_project import TOOL_NAME
from infragen.deps import get_generation_service
from infragen.main import app
from infragen.services.generation_service import GenerationService


GATEWAY_URL = "https://gateway.test/v1"
GATEWAY_KEY = "server-side-test-key"

Handler = Callable[[httpx.Request], httpx.Response]


# ---------------------------------------------------------------------------
# ENVELOPE BUILDERS
# ---------------------------------------------------------------------------

def make_envelope(
    content: Optional[Any] = None,
    tool_calls: Optional[List[Dict[str, Any]]] = None,
    usage: Optional[Dict[str, int]] = None,
) -> Dict[str, Any]:
    """Chat-completions response body with one choice."""
    message: Dict[str, Any] = {"role": "assistant", "content": content}
    if tool_calls is not None:
        message["tool_calls"] = tool_calls
    envelope: Dict[str, Any] = {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [{"index": 0, "message": message, "finish_reason": "stop"}],
    }
    if usage is not None:
        envelope["usage"] = usage
    return envelope


def make_tool_call(arguments: Any, name: str = TOOL_NAME) -> Dict[str, Any]:
    """A tool call entry; dict arguments are JSON-encoded like a real gateway."""
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return {
        "id": "call_1",
        "type": "function",
        "function": {"name": name, "arguments": arguments},
    }


def tool_call_envelope(arguments: Any, name: str = TOOL_NAME, content: Optional[str] = None) -> Dict[str, Any]:
    return make_envelope(content=content, tool_calls=[make_tool_call(arguments, name)])


MAIN_TF = 'resource "aws_s3_bucket" "this" {\n  bucket = "demo"\n}\n'

SAMPLE_PROJECT = {
    "files": [
        {"name": "main.tf", "content": MAIN_TF},
        {"name": "variables.tf", "content": 'variable "region" {}\n'},
    ],
    "variables": [
        {"name": "region", "type": "string", "description": "AWS region", "default": "us-east-1"},
    ],
    "diagnostics": [
        {"type": "info", "message": "Bucket blocks all public access"},
    ],
    "corrections": [
        {"original": "public bucket", "corrected": "private bucket", "reason": "secure by default"},
    ],
}


# ---------------------------------------------------------------------------
# GATEWAY FIXTURES
# ---------------------------------------------------------------------------

def respond_with(envelope: Any, status_code: int = 200) -> Handler:
    """MockTransport handler that always answers with `envelope`."""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=envelope)
    return handler


def make_gateway_client(
    handler: Handler,
    api_key: str = GATEWAY_KEY,
    timeout: float = 5.0,
) -> GatewayClient:
    return GatewayClient(
        api_key=api_key,
        base_url=GATEWAY_URL,
        timeout=timeout,
        max_completion_tokens=16000,
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def gateway_client_factory() -> Callable[..., GatewayClient]:
    return make_gateway_client


@pytest.fixture
def generation_request_body() -> Dict[str, str]:
    """Scenario A request body."""
    return {
        "model": "gpt",
        "apiKey": "user-typed-key",
        "provider": "aws",
        "description": "a private S3 bucket",
        "projectName": "demo",
        "region": "",
    }


# ---------------------------------------------------------------------------
# APP FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Test client with no overrides (for routes that never hit the gateway)."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def client_with_gateway() -> Generator[Callable[[Handler], TestClient], None, None]:
    """
    Factory: pass a MockTransport handler, get a TestClient whose
    generation service talks to it.
    """
    clients: List[TestClient] = []

    def factory(handler: Handler, api_key: str = GATEWAY_KEY) -> TestClient:
        service = GenerationService(make_gateway_client(handler, api_key=api_key))
        app.dependency_overrides[get_generation_service] = lambda: service
        test_client = TestClient(app)
        clients.append(test_client)
        return test_client

    yield factory

    for test_client in clients:
        test_client.close()
    app.dependency_overrides.clear()
