"""Factory functions for clients bound to a single service.

Services behind the shared base URL are addressed as
``{base_url}/{service}/{version}``. :func:`create_service_client` derives
that path prefix, validates its input, and returns a ready (but not yet
authenticated) :class:`~api_client.client.ApiClient`; no network I/O
happens here.

Example::

    from api_client import create_service_client

    # base URL of all requests: https://api.example.com/my-service/v2
    api = create_service_client(
        "my-service",
        {
            "auth": {"client_id": "my-client-id", "client_secret": "my-client-secret"},
            "base_url": "https://api.example.com/",
        },
        version="v2",
    )

    # GET https://api.example.com/my-service/v2/foo
    response = api.with_client(lambda client: client.get("foo"))
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import ValidationError

from api_client.client import ApiClient, AsyncApiClient
from api_client.exceptions import ConfigurationError
from api_client.models import ClientOptions

DEFAULT_SERVICE_VERSION = "v1"
"""Service version used when none is given."""


def build_service_options(
    service: Any,
    client_options: Any,
    version: Any = None,
) -> ClientOptions:
    """Validate the factory input and return options with ``path_prefix`` set.

    An existing ``path_prefix`` in *client_options* is replaced, not merged.

    Raises:
        ConfigurationError: If *service* or *version* is not a string,
            *client_options* is not an options object or mapping, or the
            base URL is not a string.
    """
    if not isinstance(service, str):
        raise ConfigurationError("service must be of type string")

    if version is None or version == "":
        version = DEFAULT_SERVICE_VERSION
    if not isinstance(version, str):
        raise ConfigurationError("version must be of type string")

    if isinstance(client_options, ClientOptions):
        options = client_options
    elif isinstance(client_options, Mapping):
        if not isinstance(client_options.get("base_url"), str):
            raise ConfigurationError("client_options.base_url must be of type string")
        try:
            options = ClientOptions.model_validate(client_options)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid client_options: {exc}") from exc
    else:
        raise ConfigurationError("client_options must be of type ClientOptions or mapping")

    return options.model_copy(update={"path_prefix": f"{service}/{version}"})


def create_service_client(
    service: str,
    client_options: ClientOptions | Mapping[str, Any],
    version: Optional[str] = None,
) -> ApiClient:
    """Create an :class:`~api_client.client.ApiClient` for one service.

    Args:
        service: The name of the service.
        client_options: Options for the client; ``path_prefix`` is ignored.
        version: The service version. Default: ``"v1"``.

    Returns:
        The new client.

    Raises:
        ConfigurationError: On invalid input, before any network call.
    """
    return ApiClient(build_service_options(service, client_options, version))


def create_async_service_client(
    service: str,
    client_options: ClientOptions | Mapping[str, Any],
    version: Optional[str] = None,
) -> AsyncApiClient:
    """Asyncio counterpart of :func:`create_service_client`."""
    return AsyncApiClient(build_service_options(service, client_options, version))
