"""Rendering bridge -- maps requests and :class:`httpx.Response` objects to the output system.

Status lines and header blocks go to stderr as diagnostics; the response
body is the primary data and goes to stdout through
:meth:`~httpsh.output.OutputManager.format_response`.

See Also:
    :mod:`httpsh.output` -- the output manager that renders data.
"""

from __future__ import annotations

from typing import Any

import httpx

from httpsh.output import get_output
from httpsh.request import Request


def format_request(request: Request) -> None:
    """Print the request line, headers and body of *request* to stdout.

    Used for ``--dry-run``, where the request itself is the primary data.
    """
    output = get_output()
    output.print_data(f"{request.method} {request.uri}")
    output.print_table(
        ["Header", "Value"],
        [[name, value] for name, value in request.headers],
        title="Request headers",
    )
    if request.body is not None:
        output.print_data("")
        output.print_data(request.body)


def format_api_response(response: httpx.Response) -> None:
    """Format and print a response using the global output system.

    Writes the status line and the response headers to stderr, then renders
    the body to stdout.
    """
    output = get_output()

    output.info(f"HTTP {response.status_code} {response.reason_phrase or ''}".rstrip())
    for name, value in response.headers.items():
        output.debug(f"{name}: {value}")

    content_type = response.headers.get("content-type", "application/json")

    data = extract_response_data(response)
    if data is not None:
        output.format_response(data, content_type)


def extract_response_data(response: httpx.Response) -> Any:
    """Extract the body from an HTTP response.

    Attempts to parse the body as JSON first and falls back to the raw
    text. Returns ``None`` for responses with no content.
    """
    if not response.content:
        return None

    try:
        return response.json()
    except ValueError:
        pass

    return response.text
