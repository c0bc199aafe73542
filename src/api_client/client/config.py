"""Keyword arguments for the authenticated :mod:`httpx` clients.

:func:`build_client_config` merges the client configuration in layers, later
layers winning:

1. defaults -- resolved base URL, the 401 response hook, transport, timeout;
2. auth headers -- ``Authorization: Bearer <token>`` and ``Accept-Language``;
3. caller headers -- :attr:`~api_client.models.ClientOptions.headers`;
4. caller overrides -- :attr:`~api_client.models.ClientOptions.client_kwargs`.

The response hook turns HTTP 401 into an
:class:`~api_client.exceptions.UnauthorizedError`; every other status is
handed back to the caller as a normal response.
"""

from __future__ import annotations

from typing import Any

import httpx

from api_client.exceptions import UnauthorizedError
from api_client.models import ClientOptions


def normalize_path_prefix(path_prefix: str | None) -> str:
    """Strip leading and trailing ``/`` from *path_prefix*."""
    return (path_prefix or "").strip("/")


def resolve_base_url(options: ClientOptions) -> str:
    """Join the base URL and the normalized path prefix.

    Example::

        base_url="https://api.example.com/", path_prefix="/my-service/"
        -> "https://api.example.com/my-service"
    """
    base_url = options.base_url
    if not base_url.endswith("/"):
        base_url += "/"
    return base_url + normalize_path_prefix(options.path_prefix)


def build_auth_headers(options: ClientOptions, access_token: str) -> dict[str, str]:
    headers = {"Authorization": f"Bearer {access_token}"}
    if options.language:
        headers["Accept-Language"] = options.language
    headers.update(options.headers or {})
    return headers


def is_unauthorized_error(error: BaseException) -> bool:
    """Return True if *error* is an httpx status error for an HTTP 401 response."""
    return isinstance(error, httpx.HTTPStatusError) and error.response.status_code == 401


def raise_on_unauthorized(response: httpx.Response) -> None:
    # Hooks run before httpx reads the body; read it so the error keeps it.
    if response.status_code == 401:
        response.read()
        raise UnauthorizedError.from_response(response)


async def async_raise_on_unauthorized(response: httpx.Response) -> None:
    if response.status_code == 401:
        await response.aread()
        raise UnauthorizedError.from_response(response)


def build_client_config(
    options: ClientOptions,
    access_token: str,
    *,
    is_async: bool = False,
) -> dict[str, Any]:
    """Return the keyword arguments for an authenticated httpx client.

    Args:
        options: The client options.
        access_token: The bearer token to send with every request.
        is_async: Build for :class:`httpx.AsyncClient`, whose event hooks
            must be coroutines.

    Returns:
        A dict suitable for ``httpx.Client(**config)`` or
        ``httpx.AsyncClient(**config)``.
    """
    hook = async_raise_on_unauthorized if is_async else raise_on_unauthorized

    config: dict[str, Any] = {
        "base_url": resolve_base_url(options),
        "event_hooks": {"response": [hook]},
    }
    if options.transport is not None:
        config["transport"] = options.transport
    if options.timeout is not None:
        config["timeout"] = options.timeout

    config["headers"] = build_auth_headers(options, access_token)

    config.update(options.client_kwargs or {})
    return config
