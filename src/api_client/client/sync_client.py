"""Blocking API client with lazy client-credentials auth and a single 401 retry.

This module provides :class:`ApiClient`, which hands out an
:class:`httpx.Client` that is already authenticated against the services
behind :attr:`~api_client.models.ClientOptions.base_url`:

- **Lazy auth** -- no token is requested until the first
  :meth:`~ApiClient.with_client` call.
- **Single retry** -- if an action fails with HTTP 401 on a client that was
  cached from an earlier call, a new token is fetched, a new client built,
  and the action invoked once more.
- **Replace, never mutate** -- re-authentication swaps in a brand-new
  :class:`httpx.Client`; a client already handed to an action is left
  open until :meth:`close`.

See Also:
    :class:`~api_client.client.async_client.AsyncApiClient` for the
    asyncio equivalent.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional, TypeVar

import httpx

from api_client.auth.token import fetch_token
from api_client.client.config import build_client_config, is_unauthorized_error
from api_client.models import ClientOptions

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT")

WithClientAction = Callable[[httpx.Client], ResultT]
"""An action for :meth:`ApiClient.with_client`; receives the authenticated client."""


class ApiClient:
    """A generic API client.

    Args:
        options: Client options, or a mapping validated into
            :class:`~api_client.models.ClientOptions`.

    Example::

        # base URL of all requests: https://api.example.com/my-service/v1
        api = ApiClient(ClientOptions(
            auth=ClientCredentials(client_id="my-client-id", client_secret="my-client-secret"),
            base_url="https://api.example.com/",
            path_prefix="my-service/v1",
        ))

        # GET https://api.example.com/my-service/v1/foo
        response = api.with_client(lambda client: client.get("foo"))

        # POST https://api.example.com/my-service/v1/bar
        response = api.with_client(lambda client: client.post("bar", json={"baz": 42}))
    """

    def __init__(self, options: ClientOptions | Mapping[str, Any]) -> None:
        if not isinstance(options, ClientOptions):
            options = ClientOptions.model_validate(options)
        self.options = options
        self._client: Optional[httpx.Client] = None
        self._superseded: list[httpx.Client] = []

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the cached client and every client it replaced.

        The next call authenticates again.
        """
        clients, self._superseded = self._superseded, []
        if self._client is not None:
            clients.append(self._client)
            self._client = None
        for client in clients:
            client.close()

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def get_client(self) -> httpx.Client:
        """Return an authenticated :class:`httpx.Client`.

        Requests made directly on the returned client are not retried on
        401; use :meth:`with_client` for that.
        """
        return self.with_client(lambda client: client)

    def with_client(self, action: WithClientAction[ResultT]) -> ResultT:
        """Invoke *action* with an authenticated client.

        Args:
            action: Callable receiving the :class:`httpx.Client`.

        Returns:
            Whatever *action* returns.

        Raises:
            TokenRequestError: If a token cannot be obtained.
            httpx.HTTPStatusError: If *action* raises one that is not retried.
            Exception: Anything else *action* raises, unchanged.
        """
        should_retry = True

        client = self._client
        if client is None:
            should_retry = False
            client = self._update_with_new_client()

        try:
            return action(client)
        except httpx.HTTPStatusError as exc:
            if not (should_retry and is_unauthorized_error(exc)):
                raise
            logger.debug("Got 401 from %s, re-authenticating", exc.request.url)

        client = self._update_with_new_client()
        return action(client)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _create_new_client(self) -> httpx.Client:
        access_token = fetch_token(self.options)
        config = build_client_config(self.options, access_token)
        logger.debug("Created authenticated client for %s", config["base_url"])
        return httpx.Client(**config)

    def _update_with_new_client(self) -> httpx.Client:
        """Authenticate and swap in a new client; on failure the old one stays cached."""
        client = self._create_new_client()
        if self._client is not None:
            self._superseded.append(self._client)
        self._client = client
        return client
