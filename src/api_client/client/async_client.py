"""Asynchronous API client -- mirrors :class:`~api_client.client.sync_client.ApiClient`.

This module provides :class:`AsyncApiClient`, the asyncio counterpart of
:class:`~api_client.client.sync_client.ApiClient`. It hands out an
:class:`httpx.AsyncClient` and awaits the caller's action, with the same
lazy authentication and single 401 retry.

.. note::
   Concurrent :meth:`~AsyncApiClient.with_client` calls that all find no
   cached client each request their own token; the last one to finish
   stays cached. Every call still runs with the client it obtained.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Mapping
from typing import Any, Callable, Optional, TypeVar

import httpx

from api_client.auth.token import async_fetch_token
from api_client.client.config import build_client_config, is_unauthorized_error
from api_client.models import ClientOptions

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")

AsyncWithClientAction = Callable[[httpx.AsyncClient], Awaitable[ResultT]]
"""An action for :meth:`AsyncApiClient.with_client`."""


class AsyncApiClient:
    """A generic asyncio API client.

    Args:
        options: Client options, or a mapping validated into
            :class:`~api_client.models.ClientOptions`.

    Example::

        async with AsyncApiClient(options) as api:
            response = await api.with_client(lambda client: client.get("foo"))
    """

    def __init__(self, options: ClientOptions | Mapping[str, Any]) -> None:
        if not isinstance(options, ClientOptions):
            options = ClientOptions.model_validate(options)
        self.options = options
        self._client: Optional[httpx.AsyncClient] = None
        self._superseded: list[httpx.AsyncClient] = []

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> AsyncApiClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the cached client and every client it replaced."""
        clients, self._superseded = self._superseded, []
        if self._client is not None:
            clients.append(self._client)
            self._client = None
        for client in clients:
            await client.aclose()

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    async def get_client(self) -> httpx.AsyncClient:
        """Return an authenticated :class:`httpx.AsyncClient` (no 401 retry on its requests)."""

        async def identity(client: httpx.AsyncClient) -> httpx.AsyncClient:
            return client

        return await self.with_client(identity)

    async def with_client(self, action: AsyncWithClientAction[ResultT]) -> ResultT:
        """Await *action* with an authenticated client.

        See :meth:`ApiClient.with_client
        <api_client.client.sync_client.ApiClient.with_client>` for the retry
        rules.
        """
        should_retry = True

        client = self._client
        if client is None:
            should_retry = False
            client = await self._update_with_new_client()

        try:
            return await action(client)
        except httpx.HTTPStatusError as exc:
            if not (should_retry and is_unauthorized_error(exc)):
                raise
            logger.debug("Got 401 from %s, re-authenticating", exc.request.url)

        client = await self._update_with_new_client()
        return await action(client)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    async def _create_new_client(self) -> httpx.AsyncClient:
        access_token = await async_fetch_token(self.options)
        config = build_client_config(self.options, access_token, is_async=True)
        logger.debug("Created authenticated client for %s", config["base_url"])
        return httpx.AsyncClient(**config)

    async def _update_with_new_client(self) -> httpx.AsyncClient:
        client = await self._create_new_client()
        if self._client is not None:
            self._superseded.append(self._client)
        self._client = client
        return client
