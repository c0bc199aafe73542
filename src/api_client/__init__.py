"""api_client -- OAuth2 client-credentials wrapper around :mod:`httpx`.

This package hands out :mod:`httpx` clients that are already authenticated
against a family of backend services sharing one base URL. The access token
is fetched lazily on first use and, when a call is rejected with HTTP 401,
fetched again and the call retried exactly once.

Typical usage::

    from api_client import create_service_client

    api = create_service_client(
        "orders",
        {
            "auth": {"client_id": "my-id", "client_secret": "my-secret"},
            "base_url": "https://api.example.com/",
        },
    )

    # GET https://api.example.com/orders/v1/items
    response = api.with_client(lambda client: client.get("items"))

Modules:
    models: Pydantic configuration models.
    exceptions: Exception hierarchy.
    auth: Client-credentials token request and response validation.
    client: Blocking and asyncio client wrappers.
    factory: Per-service client construction.
"""

from api_client.client import ApiClient, AsyncApiClient
from api_client.exceptions import (
    ApiClientError,
    ConfigurationError,
    InvalidTokenRequestError,
    MalformedTokenResponseError,
    TokenRequestError,
    UnauthorizedError,
    UnexpectedTokenResponseStatusError,
)
from api_client.factory import (
    DEFAULT_SERVICE_VERSION,
    create_async_service_client,
    create_service_client,
)
from api_client.models import DEFAULT_OAUTH_PATH, ClientCredentials, ClientOptions

__version__ = "0.1.0"

__all__ = [
    "ApiClient",
    "AsyncApiClient",
    "ApiClientError",
    "ClientCredentials",
    "ClientOptions",
    "ConfigurationError",
    "DEFAULT_OAUTH_PATH",
    "DEFAULT_SERVICE_VERSION",
    "InvalidTokenRequestError",
    "MalformedTokenResponseError",
    "TokenRequestError",
    "UnauthorizedError",
    "UnexpectedTokenResponseStatusError",
    "create_async_service_client",
    "create_service_client",
]
