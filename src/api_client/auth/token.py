"""OAuth2 client-credentials token request (:rfc:`6749` section 4.4).

This module exchanges the ``client_id`` / ``client_secret`` pair of a
:class:`~api_client.models.ClientOptions` for an access token. The token
endpoint lives at ``base_url + oauth_path`` and is called with a throwaway
:mod:`httpx` client that does not raise on error statuses; the status is
inspected explicitly by :func:`parse_token_response`:

* 200 with a JSON object holding a string ``access_token`` -- success.
* 200 with anything else -- :class:`~api_client.exceptions.MalformedTokenResponseError`.
* 400 -- :class:`~api_client.exceptions.InvalidTokenRequestError`.
* anything else -- :class:`~api_client.exceptions.UnexpectedTokenResponseStatusError`.

Both a blocking (:func:`fetch_token`) and an asyncio
(:func:`async_fetch_token`) variant are provided; they share the request
building and response validation.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from api_client.exceptions import (
    InvalidTokenRequestError,
    MalformedTokenResponseError,
    UnexpectedTokenResponseStatusError,
)
from api_client.models import ClientOptions

logger = logging.getLogger(__name__)


def build_token_request_data(options: ClientOptions) -> dict[str, str]:
    """Return the form fields of a client-credentials token request."""
    return {
        "grant_type": "client_credentials",
        "client_id": options.auth.client_id,
        "client_secret": options.auth.client_secret,
    }


def _token_client_kwargs(options: ClientOptions) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"base_url": options.base_url}
    if options.transport is not None:
        kwargs["transport"] = options.transport
    if options.timeout is not None:
        kwargs["timeout"] = options.timeout
    return kwargs


def _read_body(response: httpx.Response) -> Any:
    """Decode a JSON body, falling back to the raw text."""
    try:
        return response.json()
    except ValueError:
        return response.text


def parse_token_response(response: httpx.Response) -> str:
    """Validate a token endpoint response and return its access token.

    Args:
        response: The token endpoint's response; must already be read.

    Returns:
        The ``access_token`` string.

    Raises:
        InvalidTokenRequestError: On HTTP 400.
        UnexpectedTokenResponseStatusError: On any other status but 200.
        MalformedTokenResponseError: If the 200 body is not a JSON object
            or its ``access_token`` is missing or not a string.
    """
    status = response.status_code
    if status != 200:
        if status == 400:
            body = _read_body(response)
            serialized = body if isinstance(body, str) else json.dumps(body)
            logger.warning("Token endpoint rejected the request: %s", serialized)
            raise InvalidTokenRequestError(serialized)

        logger.warning("Token endpoint answered with unexpected status %s", status)
        raise UnexpectedTokenResponseStatusError(status)

    data = _read_body(response)
    if not isinstance(data, dict):
        raise MalformedTokenResponseError(f"Unexpected response data: {data}", body=data)

    access_token = data.get("access_token")
    if not isinstance(access_token, str):
        # The value itself stays out of the message; it may be a credential.
        raise MalformedTokenResponseError(
            f"Unexpected type of access_token: {type(access_token).__name__}",
            body=data,
        )

    return access_token


def fetch_token(options: ClientOptions) -> str:
    """POST a client-credentials request and return the access token.

    Network errors from :mod:`httpx` propagate unchanged.
    """
    path = options.effective_oauth_path
    logger.debug("Requesting access token from %s%s", options.base_url, path)

    with httpx.Client(**_token_client_kwargs(options)) as client:
        response = client.post(
            path,
            data=build_token_request_data(options),
            headers={"Accept": "application/json"},
        )

    return parse_token_response(response)


async def async_fetch_token(options: ClientOptions) -> str:
    """Asyncio counterpart of :func:`fetch_token`."""
    path = options.effective_oauth_path
    logger.debug("Requesting access token from %s%s", options.base_url, path)

    async with httpx.AsyncClient(**_token_client_kwargs(options)) as client:
        response = await client.post(
            path,
            data=build_token_request_data(options),
            headers={"Accept": "application/json"},
        )

    return parse_token_response(response)
