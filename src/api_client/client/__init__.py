"""Authenticated HTTP client wrappers.

Provides blocking and asyncio wrappers that hand out :mod:`httpx` clients
preconfigured with a bearer token, the resolved base URL, and a response
hook raising :class:`~api_client.exceptions.UnauthorizedError` on HTTP 401.

Classes:
    :class:`ApiClient` -- hands out :class:`httpx.Client` instances.
    :class:`AsyncApiClient` -- hands out :class:`httpx.AsyncClient` instances.

Example::

    from api_client.client import ApiClient

    with ApiClient(options) as api:
        response = api.with_client(lambda client: client.get("users"))
"""

from api_client.client.async_client import AsyncApiClient
from api_client.client.sync_client import ApiClient

__all__ = ["ApiClient", "AsyncApiClient"]
