"""Canonical Pydantic models shared across httpsh modules.

The models fall into two groups:

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`RequestConfig`, :class:`OutputConfig` and :class:`GlobalConfig`.

**Value models** -- immutable values passed between the credential codec and
the request aggregate:
    :class:`Credentials` and :class:`BasicCredentials`.

All models use Pydantic v2.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from httpsh import __version__

DEFAULT_USER_AGENT_PRODUCT = "httpsh"


# --- Config ---


class RequestConfig(BaseModel):
    """Transport settings applied whenever a request is sent."""

    timeout: float = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    follow_redirects: bool = Field(
        default=False, description="Follow 3xx responses automatically"
    )


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: Literal["auto", "json", "plain", "rich"] = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration read from ``~/.config/httpsh/config.json``.

    Loaded by :func:`~httpsh.config.load_global_config`. Fields here have the
    lowest precedence and can be overridden by environment variables or CLI
    flags. See :func:`~httpsh.config.resolve_config` for the full chain.
    """

    user_agent: Optional[str] = Field(
        default=None,
        description="Override for the default User-Agent header of new requests",
    )
    request: RequestConfig = Field(default_factory=RequestConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    def effective_user_agent(self) -> str:
        """Return the ``User-Agent`` value new requests start with.

        Returns:
            :attr:`user_agent` when configured, otherwise
            ``"httpsh/<version>"``.
        """
        if self.user_agent:
            return self.user_agent
        return f"{DEFAULT_USER_AGENT_PRODUCT}/{__version__}"


# --- Values ---


class Credentials(BaseModel):
    """A credential pair split out of URI userinfo.

    Both halves are kept as found, possibly percent-encoded. ``password`` is
    ``None`` when the userinfo had no ``:`` separator.
    """

    model_config = ConfigDict(frozen=True)

    username: str
    password: Optional[str] = None


class BasicCredentials(BaseModel):
    """The raw credential bytes carried in a Basic ``Authorization`` header."""

    model_config = ConfigDict(frozen=True)

    username: bytes
    password: bytes
