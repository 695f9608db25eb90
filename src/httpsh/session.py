"""Session -- owner of the request being built.

A :class:`Session` is what an interactive front end (a REPL dispatcher, or
the one-shot CLI in :mod:`httpsh.app`) talks to. It creates requests with
the configured ``User-Agent`` and sends them with the configured transport
settings. It keeps no history.
"""

from __future__ import annotations

from typing import Optional

import httpx

from httpsh.client import SyncClient
from httpsh.exceptions import InvalidUsageError
from httpsh.models import GlobalConfig
from httpsh.request import Request


class Session:
    """Holds the current :class:`~httpsh.request.Request` and its configuration.

    Args:
        config: Effective configuration, usually from
            :func:`~httpsh.config.resolve_config`.
        transport: Optional :class:`httpx.BaseTransport` handed to every
            :class:`~httpsh.client.SyncClient` this session opens.
    """

    def __init__(
        self,
        config: Optional[GlobalConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config or GlobalConfig()
        self._transport = transport
        self._request: Optional[Request] = None

    @property
    def config(self) -> GlobalConfig:
        return self._config

    @property
    def request(self) -> Request:
        """The current request.

        Raises:
            InvalidUsageError: If no request has been created yet.
        """
        if self._request is None:
            raise InvalidUsageError("No request yet; give an address first")
        return self._request

    def new_request(self, address: str) -> Request:
        """Replace the current request with a fresh one for *address*.

        Raises:
            InvalidURIError: If *address* is not a valid URI. The current
                request is kept.
        """
        self._request = Request(address, user_agent=self._config.effective_user_agent())
        return self._request

    def send(self) -> httpx.Response:
        """Send the current request; the response is also cached on it."""
        with SyncClient(self._config.request, transport=self._transport) as client:
            return client.send(self.request)
