"""httpsh -- an HTTP request model for interactive HTTP clients.

This package models a single outgoing HTTP request as it is built up one
command at a time: its target URI, its ordered header set, and the response
cached from the last send. Basic-authentication credentials live in two
places at once -- the URI's userinfo and the ``Authorization`` header -- and
:class:`~httpsh.request.Request` keeps the two in step on every mutation.

Typical workflow::

    httpsh -u alice:secret -H "Accept: application/json" https://api.example.com/users

Modules:
    uri: URI wrapper with a mutable userinfo slot.
    headers: Ordered, case-insensitive header collection.
    credentials: Basic credential codec (userinfo <-> Authorization header).
    request: The request aggregate and its mutation API.
    session: Owner of the current request; injects the User-Agent.
    client: httpx-backed transport that attaches responses.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    app: Typer command-line entry point.
"""

__version__ = "0.1.0"
