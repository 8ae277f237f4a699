"""
PxPay HTTP Transport

Blocking HTTP POST of a request document to the gateway. TLS verification
and timeouts are configured here, not in the protocol code.
"""

import logging
from typing import Optional, Protocol

import httpx

from pxpay.core.exceptions import GatewayTransportError

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """What the client needs from a transport."""

    def post(self, url: str, body: str) -> str:
        ...


class HttpTransport:
    """
    httpx-backed transport.

    Example:
        with HttpTransport(timeout=10.0) as transport:
            body = transport.post(PXPAY_ENDPOINT, xml)
    """

    def __init__(
        self,
        timeout: float = 30.0,
        verify_ssl: bool = True,
        client: Optional[httpx.Client] = None,
    ):
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, verify=verify_ssl)

    def post(self, url: str, body: str) -> str:
        """
        POST body to url and return the response text.

        Raises:
            GatewayTransportError: On connection failure or an HTTP error status
        """
        logger.debug(f"POST {url} ({len(body)} bytes)")
        try:
            response = self._client.post(
                url,
                content=body.encode("utf-8"),
                headers={"Content-Type": "application/xml; charset=utf-8"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise GatewayTransportError(
                f"Gateway returned HTTP {e.response.status_code}",
                url=url,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise GatewayTransportError(f"Gateway request failed: {e}", url=url) from e

        return response.text

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
