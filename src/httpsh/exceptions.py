"""Exception hierarchy for httpsh.

All exceptions inherit from :class:`HttpshError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`httpsh.exit_codes`.
The top-level error handler in :func:`httpsh.app.main` catches
``HttpshError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    HttpshError (exit 1)
    +-- InvalidUsageError        (exit 2)
    |   +-- InvalidURIError      (exit 2)
    +-- InvalidCredentialsError  (exit 3)
    +-- ConnectionError_         (exit 6)
    +-- ConfigError              (exit 1)
"""

from httpsh.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
)


class HttpshError(Exception):
    """Base exception for all httpsh errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`httpsh.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(HttpshError):
    """Raised for invalid arguments such as an unknown HTTP method token."""

    exit_code = EXIT_INVALID_USAGE


class InvalidURIError(InvalidUsageError):
    """Raised for malformed URI text, or a mutation that would produce one."""


class InvalidCredentialsError(HttpshError):
    """Raised when a username is absent or a Basic payload cannot be decoded."""

    exit_code = EXIT_AUTH_FAILURE


class ConnectionError_(HttpshError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ConfigError(HttpshError):
    """Raised for configuration problems (invalid JSON, bad environment values)."""

    exit_code = EXIT_GENERIC_FAILURE
