"""Pydantic models describing how a client authenticates and where it connects.

The models are deliberately small:

* :class:`ClientCredentials` -- the OAuth2 ``client_id`` / ``client_secret``
  pair exchanged for an access token.
* :class:`ClientOptions` -- everything an
  :class:`~api_client.client.ApiClient` needs: credentials, base URL, token
  endpoint path, path prefix, extra headers, preferred language, and raw
  :class:`httpx.Client` overrides.

``ClientOptions`` is frozen. Derive a variant with
``options.model_copy(update={...})`` instead of mutating it.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_OAUTH_PATH = "/auth/v1/oauth2/token"
"""Token endpoint path used when :attr:`ClientOptions.oauth_path` is unset."""


class ClientCredentials(BaseModel):
    """OAuth2 client credentials.

    Example::

        ClientCredentials(client_id="my-client-id", client_secret="my-client-secret")
    """

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str = Field(repr=False)


class ClientOptions(BaseModel):
    """Options for :class:`~api_client.client.ApiClient` and
    :class:`~api_client.client.AsyncApiClient`.

    Example::

        ClientOptions(
            auth=ClientCredentials(client_id="id", client_secret="secret"),
            base_url="https://api.example.com/",
            path_prefix="my-service/v1",
            language="de",
        )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    auth: ClientCredentials
    base_url: str = Field(description="Shared base URL of the services and the token endpoint")
    oauth_path: Optional[str] = Field(
        default=None, description=f"Token endpoint path. Default: '{DEFAULT_OAUTH_PATH}'"
    )
    path_prefix: Optional[str] = Field(
        default=None, description="Path inserted between base_url and request paths"
    )
    headers: Optional[dict[str, str]] = Field(
        default=None, description="Additional request headers"
    )
    language: Optional[str] = Field(
        default=None, description="Default language sent as Accept-Language, like 'de' or 'en'"
    )
    client_kwargs: Optional[dict[str, Any]] = Field(
        default=None,
        description="Raw keyword arguments for the authenticated httpx client, merged last",
    )
    transport: Optional[Any] = Field(
        default=None,
        description="httpx transport used for the token request and the authenticated client",
    )
    timeout: Optional[float] = Field(
        default=None, description="Timeout in seconds; httpx's default when unset"
    )

    @property
    def effective_oauth_path(self) -> str:
        return self.oauth_path or DEFAULT_OAUTH_PATH

