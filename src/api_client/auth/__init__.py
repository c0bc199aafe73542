"""Client-credentials authentication against the shared token endpoint.

See :mod:`api_client.auth.token` for the request and the response rules.
"""

from api_client.auth.token import (
    async_fetch_token,
    build_token_request_data,
    fetch_token,
    parse_token_response,
)

__all__ = [
    "async_fetch_token",
    "build_token_request_data",
    "fetch_token",
    "parse_token_response",
]
