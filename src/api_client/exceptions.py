"""Exception hierarchy for api_client.

Library errors inherit from :class:`ApiClientError`. Token endpoint failures
are grouped under :class:`TokenRequestError` so callers can catch every
authentication problem with one ``except`` clause, while the concrete
subclasses carry the structured details (``status_code``, ``body``).

:class:`UnauthorizedError` is the odd one out: it is raised by the
authenticated transport itself for HTTP 401 responses and therefore derives
from :class:`httpx.HTTPStatusError`, so code that already handles httpx
status errors keeps working.

Subclass hierarchy::

    ApiClientError
    +-- TokenRequestError
    |   +-- InvalidTokenRequestError            (HTTP 400)
    |   +-- UnexpectedTokenResponseStatusError  (any other non-200)
    |   +-- MalformedTokenResponseError         (200, unusable body)
    +-- ConfigurationError                      (bad factory input)

    httpx.HTTPStatusError
    +-- UnauthorizedError                       (HTTP 401 from a service)

Errors raised by caller-supplied actions are never wrapped; they reach the
caller of :meth:`~api_client.client.ApiClient.with_client` unchanged.
"""

from __future__ import annotations

from typing import Any

import httpx


class ApiClientError(Exception):
    """Base exception for all api_client errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TokenRequestError(ApiClientError):
    """Raised when no access token could be obtained from the token endpoint."""


class InvalidTokenRequestError(TokenRequestError):
    """Raised when the token endpoint answers with HTTP 400.

    Args:
        body: The serialised response body, as returned by the server.
    """

    status_code = 400

    def __init__(self, body: str):
        super().__init__(f"Invalid request: {body}")
        self.body = body


class UnexpectedTokenResponseStatusError(TokenRequestError):
    """Raised when the token endpoint answers with a status other than 200 or 400."""

    def __init__(self, status_code: int):
        super().__init__(f"Unexpected response: {status_code}")
        self.status_code = status_code


class MalformedTokenResponseError(TokenRequestError, TypeError):
    """Raised when a 200 token response is not an object or lacks a string ``access_token``."""

    def __init__(self, message: str, body: Any = None):
        super().__init__(message)
        self.body = body


class ConfigurationError(ApiClientError, TypeError):
    """Raised for invalid client configuration (e.g. a non-string service name)."""


class UnauthorizedError(httpx.HTTPStatusError):
    """Raised by an authenticated client when a service answers with HTTP 401.

    Triggers the one-shot re-authentication in
    :meth:`~api_client.client.ApiClient.with_client`.
    """

    @classmethod
    def from_response(cls, response: httpx.Response) -> UnauthorizedError:
        request = response.request
        return cls(
            f"Unauthorized: {request.method} {request.url} returned 401",
            request=request,
            response=response,
        )
