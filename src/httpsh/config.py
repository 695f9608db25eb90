"""Configuration lookup: XDG paths and precedence resolution.

httpsh reads one optional JSON file, ``config.json``, holding a
:class:`~httpsh.models.GlobalConfig` (User-Agent override, transport
settings, default output format). It lives in:

* ``$XDG_CONFIG_HOME/httpsh/`` (default ``~/.config/httpsh/``) on Linux/BSD,
* ``~/.httpsh/`` everywhere else.

Crash logs go under :func:`get_data_dir`. :func:`resolve_config` layers
environment variables and CLI flags over the file. Requests themselves are
never persisted.
"""

from __future__ import annotations

import json
import os
import platform
from pathlib import Path
from typing import Optional

from httpsh.exceptions import ConfigError
from httpsh.models import GlobalConfig

_APP_NAME = "httpsh"
_CONFIG_FILENAME = "config.json"

ENV_USER_AGENT = "HTTPSH_USER_AGENT"
ENV_TIMEOUT = "HTTPSH_TIMEOUT"


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(xdg_var: str, xdg_default: Path, fallback: Path) -> Path:
    if _is_xdg_platform():
        base = Path(os.environ[xdg_var]) if os.environ.get(xdg_var) else xdg_default
        path = base / _APP_NAME
    else:
        path = fallback
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """Return the directory holding ``config.json``, creating it if needed."""
    home = Path.home()
    return _app_dir("XDG_CONFIG_HOME", home / ".config", home / f".{_APP_NAME}")


def get_data_dir() -> Path:
    """Return the directory crash logs are written under, creating it if needed.

    ``$XDG_DATA_HOME/httpsh/`` (default ``~/.local/share/httpsh/``) on
    Linux/BSD, ``~/.httpsh/logs/`` elsewhere.
    """
    home = Path.home()
    return _app_dir(
        "XDG_DATA_HOME", home / ".local" / "share", home / f".{_APP_NAME}" / "logs"
    )


def load_global_config() -> GlobalConfig:
    """Read ``config.json``, or return defaults when there is none.

    Raises:
        ConfigError: If the file is not JSON or does not match
            :class:`~httpsh.models.GlobalConfig`.
    """
    path = get_config_dir() / _CONFIG_FILENAME
    if not path.is_file():
        return GlobalConfig()
    try:
        return GlobalConfig.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except ValueError as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc


def resolve_config(
    cli_user_agent: Optional[str] = None,
    cli_timeout: Optional[float] = None,
    cli_format: Optional[str] = None,
) -> GlobalConfig:
    """Build the effective configuration for one invocation.

    CLI flags win over ``HTTPSH_USER_AGENT`` / ``HTTPSH_TIMEOUT``, which win
    over ``config.json``, which wins over the model defaults.

    Raises:
        ConfigError: If the config file is invalid or ``HTTPSH_TIMEOUT`` is
            not a number.
    """
    config = load_global_config()

    user_agent = os.environ.get(ENV_USER_AGENT)
    if user_agent:
        config.user_agent = user_agent
    timeout = os.environ.get(ENV_TIMEOUT)
    if timeout:
        try:
            config.request.timeout = float(timeout)
        except ValueError as exc:
            raise ConfigError(
                f"{ENV_TIMEOUT} must be a number of seconds, got {timeout!r}"
            ) from exc

    if cli_user_agent is not None:
        config.user_agent = cli_user_agent
    if cli_timeout is not None:
        config.request.timeout = cli_timeout
    if cli_format is not None:
        config.output.format = cli_format
    return config
