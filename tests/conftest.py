"""Shared test fixtures for api_client.

Provides a fake backend that serves both the token endpoint and the service
endpoints through :class:`httpx.MockTransport`, so tests can count token
requests, inspect outgoing headers, and script 401 responses without any
network traffic. These fixtures are automatically discovered by pytest and
available to all test modules without explicit imports.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

import httpx
import pytest

from api_client.models import ClientCredentials, ClientOptions


BASE_URL = "https://api.example.com/"


# ---------------------------------------------------------------------------
# Fake backend
# ---------------------------------------------------------------------------


class FakeBackend:
    """Scriptable token endpoint plus service routes.

    Every token request issues ``token-1``, ``token-2``, ... unless a fixed
    answer was scripted via :meth:`set_token_response`. Service requests are
    answered by :attr:`service_handler`, which defaults to echoing the
    ``Authorization`` header back as JSON.
    """

    def __init__(self) -> None:
        self.token_requests: list[httpx.Request] = []
        self.service_requests: list[httpx.Request] = []
        self.service_handler: Callable[[httpx.Request], httpx.Response] = self._echo_auth
        self.token_response: Optional[dict[str, Any]] = None

    @property
    def token_count(self) -> int:
        return len(self.token_requests)

    def set_token_response(self, status_code: int, **kwargs: Any) -> None:
        """Answer every following token request with this status and body kwargs."""
        self.token_response = {"status_code": status_code, **kwargs}

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/oauth2/token"):
            self.token_requests.append(request)
            if self.token_response is not None:
                return httpx.Response(**self.token_response)
            return httpx.Response(
                200,
                json={"access_token": f"token-{self.token_count}", "token_type": "Bearer"},
            )

        self.service_requests.append(request)
        return self.service_handler(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @staticmethod
    def _echo_auth(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"authorization": request.headers.get("Authorization")})


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


# ---------------------------------------------------------------------------
# Options fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_options(backend: FakeBackend) -> Callable[..., ClientOptions]:
    """Factory for ClientOptions wired to the fake backend, overridden by kwargs."""

    def _make(**kwargs: Any) -> ClientOptions:
        defaults: dict[str, Any] = {
            "auth": ClientCredentials(client_id="my-client-id", client_secret="my-client-secret"),
            "base_url": BASE_URL,
            "transport": backend.transport(),
        }
        defaults.update(kwargs)
        return ClientOptions(**defaults)

    return _make


@pytest.fixture
def options(make_options: Callable[..., ClientOptions]) -> ClientOptions:
    """Options for a client bound to ``my-service/v1`` on the fake backend."""
    return make_options(path_prefix="my-service/v1")
