"""HTTP transport for httpsh.

Provides :class:`SyncClient`, a blocking client that wraps :mod:`httpx`,
sends a :class:`~httpsh.request.Request` exactly as modelled, and attaches
the response back onto it.

Example::

    from httpsh.client import SyncClient

    with SyncClient(config.request) as client:
        response = client.send(request)
    assert request.response is response
"""

from httpsh.client.sync_client import SyncClient

__all__ = ["SyncClient"]
