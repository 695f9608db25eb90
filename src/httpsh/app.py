"""Typer entry point for httpsh.

``httpsh`` builds one request from its command-line options, applying each
option through the same :class:`~httpsh.request.Request` mutation API an
interactive session uses, then sends it (or prints it with ``--dry-run``).

Options are applied in a fixed order: ``--no-default-headers``, ``--user``,
``--header`` (in the order given), ``--unset-header``, ``--method``,
``--data``. A Basic ``--header "Authorization: ..."`` therefore overrides
``--user``, and the URI userinfo follows whichever came last.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Unhandled exceptions are written to a crash log under
the data directory.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from httpsh import __version__
from httpsh.exceptions import HttpshError, InvalidUsageError
from httpsh.exit_codes import EXIT_GENERIC_FAILURE
from httpsh.output import OutputFormat, OutputManager, set_output

app = typer.Typer(
    name="httpsh",
    help="Build and send a single HTTP request.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"httpsh {__version__}")
        raise typer.Exit()


def parse_header(text: str) -> tuple[str, str]:
    """Split a ``"Name: value"`` option into a name/value pair.

    Raises:
        InvalidUsageError: If there is no colon or the name is empty.
    """
    name, sep, value = text.partition(":")
    name = name.strip()
    if not sep or not name:
        raise InvalidUsageError(f"Header must look like 'Name: value', got {text!r}")
    return name, value.strip()


def parse_user(text: str) -> tuple[str, Optional[str]]:
    """Split a ``user[:password]`` option; the password is ``None`` without a colon."""
    username, sep, password = text.partition(":")
    return username, (password if sep else None)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("httpsh").setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.command()
def run(
    address: str = typer.Argument(..., help="Target URI, optionally with user:password@."),
    method: Optional[str] = typer.Option(
        None, "--method", "-X", help="HTTP method (default GET)."
    ),
    header: Optional[list[str]] = typer.Option(
        None, "--header", "-H", help="Set a header, 'Name: value'. Repeatable."
    ),
    unset_header: Optional[list[str]] = typer.Option(
        None, "--unset-header", help="Remove a header by name. Repeatable."
    ),
    no_default_headers: bool = typer.Option(
        False, "--no-default-headers", help="Start with no headers at all."
    ),
    user: Optional[str] = typer.Option(
        None, "--user", "-u", help="Basic credentials, user[:password]."
    ),
    data: Optional[str] = typer.Option(
        None, "--data", "-d", help="Request body."
    ),
    user_agent: Optional[str] = typer.Option(
        None, "--user-agent", "-A", help="Override the default User-Agent."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Timeout in seconds."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print the request instead of sending it."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Build a request for ADDRESS, then send it or print it."""
    from httpsh.client.response import format_api_response, format_request
    from httpsh.config import resolve_config
    from httpsh.session import Session

    cli_format: Optional[str] = None
    if json_output:
        cli_format = OutputFormat.JSON.value
    elif plain_output:
        cli_format = OutputFormat.PLAIN.value

    output = OutputManager(no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)
    _configure_logging(verbose)

    try:
        config = resolve_config(
            cli_user_agent=user_agent, cli_timeout=timeout, cli_format=cli_format
        )
        output = OutputManager(
            format=OutputFormat(config.output.format),
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
        set_output(output)

        session = Session(config)
        request = session.new_request(address)
        if no_default_headers:
            request.headers_unset_all()
        if user is not None:
            request.userinfo_set(*parse_user(user))
        for item in header or []:
            request.header_set(*parse_header(item))
        for name in unset_header or []:
            request.header_unset(name)
        if method is not None:
            request.method_set(method)
        if data is not None:
            request.body_set(data)

        if dry_run:
            format_request(request)
            return

        output.debug(f"{request.method} {request.uri}")
        response = session.send()
        format_api_response(response)
    except HttpshError as exc:
        output.error(str(exc))
        raise typer.Exit(code=exc.exit_code)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from httpsh.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``httpsh`` console script.

    :class:`~httpsh.exceptions.HttpshError` instances cause a clean exit
    with the error's ``exit_code``. All other exceptions produce a crash log
    and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from httpsh.output import get_output

        if isinstance(exc, HttpshError):
            get_output().error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        get_output().error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
