"""
Shared fixtures for Resend CLI tests.
"""

import json
from typing import Any, Callable, Dict, List, Tuple, Union

import httpx
import pytest

import resend_cli.cli.app as app_module
from resend_cli.core.client import ResendClient


ResponseBody = Union[Any, Callable[[httpx.Request], Any]]


class FakeResendAPI:
    """In-memory stand-in for the Resend API that records every request."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.routes: Dict[Tuple[str, str], Tuple[int, ResponseBody]] = {}

    def add(self, method: str, path: str, body: ResponseBody = None, status_code: int = 200) -> None:
        """Register a response; ``body`` may be a callable taking the request."""
        self.routes[(method, path)] = (status_code, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"statusCode": 404, "message": "Route not found", "name": "not_found"})

        status_code, body = route
        if callable(body):
            body = body(request)
        if isinstance(body, (str, bytes)):
            return httpx.Response(status_code, content=body)
        return httpx.Response(status_code, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, api_key: str = "re_test") -> ResendClient:
        return ResendClient(api_key, transport=self.transport)

    def json_body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


@pytest.fixture
def fake_api() -> FakeResendAPI:
    return FakeResendAPI()


@pytest.fixture
def config_dir(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Point the CLI at an empty configuration directory."""
    directory = tmp_path / "config"
    monkeypatch.setenv("RESEND_CLI_CONFIG_DIR", str(directory))
    monkeypatch.delenv("RESEND_CLI_API_KEY", raising=False)
    monkeypatch.delenv("RESEND_CLI_BASE_URL", raising=False)
    monkeypatch.chdir(tmp_path)
    return directory


@pytest.fixture
def cli_api(fake_api: FakeResendAPI, config_dir, monkeypatch: pytest.MonkeyPatch) -> FakeResendAPI:
    """Route every client the CLI creates through ``fake_api``."""

    def _create(api_key: str, **kwargs) -> ResendClient:
        return ResendClient(api_key, transport=fake_api.transport, **kwargs)

    monkeypatch.setattr(app_module, "create_resend_client", _create)
    return fake_api


def make_sent_email(index: int, **overrides) -> Dict[str, Any]:
    email = {
        "object": "email",
        "id": f"email-{index}",
        "from": "Acme <onboarding@acme.dev>",
        "to": [f"user{index}@example.com"],
        "subject": f"Subject {index}",
        "created_at": f"2024-05-0{(index % 9) + 1} 10:00:00.000000+00",
        "last_event": "delivered",
    }
    email.update(overrides)
    return email


@pytest.fixture
def email_factory() -> Callable[..., Dict[str, Any]]:
    return make_sent_email
