"""Tests for the layered httpx client configuration."""

from __future__ import annotations

import httpx
import pytest

from api_client.client.config import (
    async_raise_on_unauthorized,
    build_auth_headers,
    build_client_config,
    is_unauthorized_error,
    normalize_path_prefix,
    raise_on_unauthorized,
    resolve_base_url,
)
from api_client.exceptions import UnauthorizedError


def _response(status_code: int) -> httpx.Response:
    return httpx.Response(
        status_code,
        request=httpx.Request("GET", "https://api.example.com/my-service/foo"),
    )


def _streamed_response(status_code: int, body: bytes) -> httpx.Response:
    """A response whose body has not been read yet, as on a network transport."""
    return httpx.Response(
        status_code,
        stream=httpx.ByteStream(body),
        request=httpx.Request("GET", "https://api.example.com/my-service/foo"),
    )


# ---------------------------------------------------------------------------
# Base URL
# ---------------------------------------------------------------------------


class TestResolveBaseUrl:
    @pytest.mark.parametrize("prefix", ["/my-service/", "my-service", "//my-service//"])
    def test_prefix_is_normalized(self, make_options, prefix: str) -> None:
        options = make_options(base_url="https://api.example.com/", path_prefix=prefix)
        assert resolve_base_url(options) == "https://api.example.com/my-service"

    def test_adds_missing_slash(self, make_options) -> None:
        options = make_options(base_url="https://api.example.com", path_prefix="orders/v1")
        assert resolve_base_url(options) == "https://api.example.com/orders/v1"

    def test_no_prefix(self, make_options) -> None:
        options = make_options(base_url="https://api.example.com")
        assert resolve_base_url(options) == "https://api.example.com/"

    def test_normalize_none(self) -> None:
        assert normalize_path_prefix(None) == ""


# ---------------------------------------------------------------------------
# Headers
# ---------------------------------------------------------------------------


class TestBuildAuthHeaders:
    def test_bearer_only(self, make_options) -> None:
        assert build_auth_headers(make_options(), "tok") == {"Authorization": "Bearer tok"}

    def test_language(self, make_options) -> None:
        headers = build_auth_headers(make_options(language="de"), "tok")
        assert headers["Accept-Language"] == "de"

    def test_empty_language_is_skipped(self, make_options) -> None:
        headers = build_auth_headers(make_options(language=""), "tok")
        assert "Accept-Language" not in headers

    def test_caller_headers_win(self, make_options) -> None:
        options = make_options(
            language="de",
            headers={"Accept-Language": "en", "X-Tenant": "acme"},
        )
        headers = build_auth_headers(options, "tok")
        assert headers == {
            "Authorization": "Bearer tok",
            "Accept-Language": "en",
            "X-Tenant": "acme",
        }


# ---------------------------------------------------------------------------
# Full config
# ---------------------------------------------------------------------------


class TestBuildClientConfig:
    def test_defaults(self, options) -> None:
        config = build_client_config(options, "tok")
        assert config["base_url"] == "https://api.example.com/my-service/v1"
        assert config["headers"] == {"Authorization": "Bearer tok"}
        assert config["event_hooks"] == {"response": [raise_on_unauthorized]}
        assert config["transport"] is options.transport
        assert "timeout" not in config

    def test_async_hook(self, options) -> None:
        config = build_client_config(options, "tok", is_async=True)
        assert config["event_hooks"] == {"response": [async_raise_on_unauthorized]}

    def test_timeout(self, make_options) -> None:
        config = build_client_config(make_options(timeout=2.5), "tok")
        assert config["timeout"] == 2.5

    def test_client_kwargs_merged_last(self, make_options) -> None:
        options = make_options(
            path_prefix="orders",
            client_kwargs={"base_url": "https://other.example.com", "follow_redirects": True},
        )
        config = build_client_config(options, "tok")
        assert config["base_url"] == "https://other.example.com"
        assert config["follow_redirects"] is True
        assert config["headers"] == {"Authorization": "Bearer tok"}


# ---------------------------------------------------------------------------
# 401 detection
# ---------------------------------------------------------------------------


class TestUnauthorized:
    def test_hook_raises_on_401(self) -> None:
        with pytest.raises(UnauthorizedError) as exc_info:
            raise_on_unauthorized(_response(401))
        assert exc_info.value.response.status_code == 401

    @pytest.mark.parametrize("status", [200, 204, 400, 403, 404, 500])
    def test_hook_passes_other_statuses(self, status: int) -> None:
        raise_on_unauthorized(_response(status))

    @pytest.mark.asyncio
    async def test_async_hook_raises_on_401(self) -> None:
        with pytest.raises(UnauthorizedError):
            await async_raise_on_unauthorized(_response(401))

    def test_hook_reads_streamed_body(self) -> None:
        response = _streamed_response(401, b'{"error": "invalid_token"}')
        with pytest.raises(UnauthorizedError) as exc_info:
            raise_on_unauthorized(response)
        assert exc_info.value.response.json() == {"error": "invalid_token"}

    @pytest.mark.asyncio
    async def test_async_hook_reads_streamed_body(self) -> None:
        response = _streamed_response(401, b'{"error": "invalid_token"}')
        with pytest.raises(UnauthorizedError) as exc_info:
            await async_raise_on_unauthorized(response)
        assert exc_info.value.response.json() == {"error": "invalid_token"}

    def test_hook_leaves_other_streamed_bodies_unread(self) -> None:
        response = _streamed_response(500, b"oops")
        raise_on_unauthorized(response)
        with pytest.raises(httpx.ResponseNotRead):
            response.content

    def test_is_unauthorized_error(self) -> None:
        response = _response(401)
        assert is_unauthorized_error(UnauthorizedError.from_response(response))
        assert is_unauthorized_error(
            httpx.HTTPStatusError("401", request=response.request, response=response)
        )

    def test_other_errors_are_not_unauthorized(self) -> None:
        response = _response(500)
        assert not is_unauthorized_error(
            httpx.HTTPStatusError("500", request=response.request, response=response)
        )
        assert not is_unauthorized_error(ValueError("boom"))
        assert not is_unauthorized_error(
            httpx.ConnectError("refused", request=response.request)
        )
