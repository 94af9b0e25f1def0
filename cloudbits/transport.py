"""
HTTP transport for the cloudBit API.

A transport performs exactly one authenticated HTTP call per request and
returns the decoded JSON body. Anything implementing ``call(request)`` can be
used in place of HttpTransport.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

import httpx

from .exceptions import TransportError

logger = logging.getLogger(__name__)

ACCEPT_HEADER = "application/vnd.littlebits.v2+json"


@dataclass
class ApiRequest:
    """A single HTTP request to the cloudBit API."""
    url: str
    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None


class Transport(Protocol):
    def call(self, request: ApiRequest) -> Any:
        ...


class HttpTransport:
    """
    Transport backed by an ``httpx.Client``.

    Every request carries ``Authorization: Bearer <token>`` and the cloudBit v2
    Accept header unless the request sets its own.
    """

    def __init__(
        self,
        token: str,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the transport.

        Args:
            token: cloudBit API access token
            timeout: HTTP request timeout in seconds
            client: Existing httpx.Client to use (not closed by this transport)
        """
        self.token = token
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    def close(self):
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _headers(self, request: ApiRequest) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Accept": ACCEPT_HEADER,
        }
        headers.update(request.headers)
        return headers

    def call(self, request: ApiRequest) -> Any:
        """
        Perform the request and decode the JSON response.

        Args:
            request: Request to send

        Returns:
            Decoded JSON body, or None when the response has no body

        Raises:
            TransportError: On network failure, non-2xx status, or malformed JSON
        """
        method = request.method.upper()
        logger.debug(f"{method} {request.url}")
        try:
            response = self._client.request(
                method,
                request.url,
                headers=self._headers(request),
                content=request.body,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(f"{method} {request.url} failed with HTTP {status}")
            raise TransportError(
                f"{method} {request.url} returned HTTP {status}: {e.response.text}",
                status_code=status,
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"{method} {request.url} failed: {e}")
            raise TransportError(f"{method} {request.url} failed: {e}") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"{method} {request.url} returned a malformed JSON body",
                status_code=response.status_code,
            ) from e
