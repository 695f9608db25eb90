"""Basic credential codec.

Pure functions that translate a Basic-authentication credential pair between
its three representations:

* a ``(username, password)`` pair,
* URI userinfo text (``username[:password]``), possibly percent-encoded,
* an ``Authorization: Basic <base64>`` header value, always holding the
  fully decoded bytes.

Percent-decoding happens only on the way into the header. Userinfo text is
joined and split verbatim, so ``n%40`` stays ``n%40`` in the URI while the
header carries ``n@``. The header side works on bytes throughout, so
credentials that are not UTF-8 (``%FF``) survive in both directions.

See Also:
    :class:`~httpsh.request.Request` for the code that keeps both
    representations in step.
"""

from __future__ import annotations

import base64
import binascii
from typing import Optional
from urllib.parse import quote, unquote_to_bytes

from httpsh.exceptions import InvalidCredentialsError
from httpsh.models import BasicCredentials, Credentials

AUTHORIZATION = "Authorization"
BASIC_SCHEME = "Basic"

# Everything outside unreserved and sub-delims gets escaped, ":" included.
_USERINFO_SAFE = "!$&'()*+,;="


def build_authorization_header(
    username: Optional[str], password: Optional[str] = None
) -> tuple[str, str]:
    """Build the ``Authorization`` header for a credential pair.

    Both halves are percent-decoded before encoding, so userinfo text can be
    passed straight through.

    Args:
        username: The username. An empty string is accepted; ``None`` is not.
        password: The password, or ``None`` (encoded as an empty string).

    Returns:
        A ``("Authorization", "Basic <base64>")`` pair.

    Raises:
        InvalidCredentialsError: If *username* is ``None``.
    """
    if username is None:
        raise InvalidCredentialsError("Basic authentication requires a username")
    raw = unquote_to_bytes(username) + b":" + unquote_to_bytes(password or "")
    encoded = base64.b64encode(raw).decode("ascii")
    return AUTHORIZATION, f"{BASIC_SCHEME} {encoded}"


def decode_authorization_header(value: str) -> Optional[BasicCredentials]:
    """Decode a Basic ``Authorization`` header value.

    The scheme token is matched case-insensitively. Any scheme other than
    Basic yields ``None``, meaning there is nothing to synchronise.

    Args:
        value: The header value, e.g. ``"Basic bmpvbnNzb246MTIz"``.

    Returns:
        The decoded :class:`~httpsh.models.BasicCredentials` (password is
        ``b""`` when nothing follows the separator), or ``None`` for
        non-Basic schemes.

    Raises:
        InvalidCredentialsError: If the payload is not valid base64 or
            contains no ``:`` separator.
    """
    scheme, _, payload = value.strip().partition(" ")
    if scheme.casefold() != BASIC_SCHEME.casefold():
        return None
    try:
        raw = base64.b64decode(payload.strip(), validate=True)
    except binascii.Error as exc:
        raise InvalidCredentialsError(
            f"Malformed Basic credentials in Authorization header: {exc}"
        ) from exc
    if b":" not in raw:
        raise InvalidCredentialsError(
            "Malformed Basic credentials in Authorization header "
            "(colon separator is required)"
        )
    username, _, password = raw.partition(b":")
    return BasicCredentials(username=username, password=password)


def encode_userinfo(username: str, password: Optional[str] = None) -> str:
    """Join a credential pair into userinfo text, verbatim."""
    if password is None:
        return username
    return f"{username}:{password}"


def decode_userinfo(text: str) -> Credentials:
    """Split userinfo text on its first ``:``; halves stay percent-encoded."""
    if ":" not in text:
        return Credentials(username=text)
    username, _, password = text.partition(":")
    return Credentials(username=username, password=password)


def escape_userinfo_component(data: bytes) -> str:
    """Percent-encode a decoded username or password for use in userinfo.

    A literal ``%`` is escaped too, so the result decodes back to *data*.
    """
    return quote(data, safe=_USERINFO_SAFE)
