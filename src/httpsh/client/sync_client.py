"""Synchronous HTTP transport backed by :class:`httpx.Client`.

:class:`SyncClient` turns a :class:`~httpsh.request.Request` into an
:class:`httpx.Request`, sends it, and hands the response back to the request
through :meth:`~httpsh.request.Request.set_response`.

The URL is sent without its userinfo. Credentials travel only in the
request's own ``Authorization`` header, so a non-Basic value the user set is
never replaced by httpx's implicit URL authentication.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from httpsh.exceptions import ConnectionError_
from httpsh.models import RequestConfig
from httpsh.request import Request

logger = logging.getLogger(__name__)

# Derived from the URL and body rather than the modelled headers.
_TRANSPORT_HEADERS = frozenset({"host", "content-length", "transfer-encoding"})


class SyncClient:
    """Synchronous HTTP client for sending modelled requests.

    Must be used as a context manager so that the underlying transport is
    properly opened and closed.

    Args:
        config: Transport settings (timeout, SSL verification, redirects).
        transport: Optional :class:`httpx.BaseTransport`, e.g. an
            :class:`httpx.MockTransport` in tests.

    Example::

        with SyncClient(RequestConfig(timeout=5)) as client:
            client.send(request)
    """

    def __init__(
        self,
        config: RequestConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    def __enter__(self) -> SyncClient:
        self._client = httpx.Client(
            timeout=self._config.timeout,
            verify=self._config.verify_ssl,
            follow_redirects=self._config.follow_redirects,
            transport=self._transport,
        )
        return self

    def __exit__(self, *args: object) -> None:
        if self._client:
            self._client.close()
            self._client = None

    def _require_client(self) -> httpx.Client:
        if self._client is None:
            raise RuntimeError("SyncClient must be used as a context manager")
        return self._client

    def build_request(self, request: Request) -> httpx.Request:
        """Translate *request* into an :class:`httpx.Request` without sending it.

        httpx's client-wide defaults (``Accept``, ``Accept-Encoding``,
        ``Connection``, its own ``User-Agent``) are dropped, so exactly the
        request's headers go out, plus ``Host`` and the body framing httpx
        derives from the content.
        """
        http_request = self._require_client().build_request(
            method=request.method,
            url=request.uri.to_httpx(include_userinfo=False),
            headers=request.headers.to_ordered_list(),
            content=request.body,
        )
        for name in list(http_request.headers.keys()):
            if name not in request.headers and name not in _TRANSPORT_HEADERS:
                del http_request.headers[name]
        return http_request

    def send(self, request: Request) -> httpx.Response:
        """Send *request* and attach the response to it.

        Args:
            request: The request to transmit.

        Returns:
            The :class:`httpx.Response`, fully read.

        Raises:
            ConnectionError_: On network or timeout errors. The request's
                response stays ``None``.
        """
        client = self._require_client()
        http_request = self.build_request(request)
        logger.debug("Sending %s %s", http_request.method, http_request.url)
        try:
            response = client.send(http_request)
        except httpx.TimeoutException as exc:
            raise ConnectionError_(f"Request timed out: {exc}") from exc
        except httpx.TransportError as exc:
            raise ConnectionError_(f"Connection failed: {exc}") from exc

        logger.debug("Received %s from %s", response.status_code, http_request.url)
        request.set_response(response)
        return response
