"""The outgoing request aggregate.

:class:`Request` owns a :class:`~httpsh.uri.URI`, a
:class:`~httpsh.headers.Headers` collection and the response cached from the
last send. It is built up one mutation at a time by an interactive session,
and every mutation:

* keeps the URI's userinfo and a Basic ``Authorization`` header in step --
  one is present if and only if the other is, and both decode to the same
  credentials modulo percent-encoding;
* discards the cached response, which only describes the exact request
  state that produced it;
* mutates in place and returns ``self`` so calls can be chained
  (``request.userinfo_set("u", "p").response``);
* validates before it changes anything, so a failed call leaves the
  request untouched.

``Authorization`` values using any scheme other than Basic are stored as
given and never touch the userinfo.

Example::

    request = Request("https://alice:pw@example.com/api", user_agent="httpsh/0.1.0")
    request.headers.to_ordered_list()
    # [('User-Agent', 'httpsh/0.1.0'), ('Authorization', 'Basic YWxpY2U6cHc=')]
    request.userinfo_unset().headers.to_ordered_list()
    # [('User-Agent', 'httpsh/0.1.0')]
"""

from __future__ import annotations

import logging
import posixpath
import re
from typing import Optional
from urllib.parse import quote

import httpx

from httpsh.credentials import (
    AUTHORIZATION,
    build_authorization_header,
    decode_authorization_header,
    decode_userinfo,
    encode_userinfo,
    escape_userinfo_component,
)
from httpsh.exceptions import InvalidCredentialsError, InvalidUsageError
from httpsh.headers import Headers, normalize_name
from httpsh.uri import URI

logger = logging.getLogger(__name__)

USER_AGENT = "User-Agent"
DEFAULT_METHOD = "GET"

_METHOD_RE = re.compile(r"^[!#$%&'*+.^_`|~0-9A-Za-z\-]+$")
_QUERY_SAFE = "!$'()*+,;:@/?%"


def _is_authorization(name: str) -> bool:
    return normalize_name(name) == normalize_name(AUTHORIZATION)


class Request:
    """A single outgoing HTTP request.

    Args:
        address: The target URI. Userinfo embedded in it is turned into an
            ``Authorization`` header straight away.
        user_agent: Value of the ``User-Agent`` header every new request
            starts with. Supplied by :class:`~httpsh.session.Session` from
            configuration.

    Raises:
        InvalidURIError: If *address* is not a valid absolute URI.
    """

    def __init__(self, address: str, user_agent: str) -> None:
        self._uri = URI.parse(address)
        self._headers = Headers([(USER_AGENT, user_agent)])
        self._method = DEFAULT_METHOD
        self._body: Optional[str] = None
        self._response: Optional[httpx.Response] = None

        if self._uri.userinfo is not None:
            credentials = decode_userinfo(self._uri.userinfo)
            self._headers.set(
                *build_authorization_header(credentials.username, credentials.password)
            )

    # ------------------------------------------------------------------ #
    # Read accessors
    # ------------------------------------------------------------------ #

    @property
    def uri(self) -> URI:
        return self._uri

    @property
    def headers(self) -> Headers:
        return self._headers

    @property
    def method(self) -> str:
        return self._method

    @property
    def body(self) -> Optional[str]:
        return self._body

    @property
    def response(self) -> Optional[httpx.Response]:
        """The response from the last send, or ``None`` once anything changed."""
        return self._response

    def set_response(self, response: Optional[httpx.Response]) -> None:
        """Attach the response produced by sending this exact request.

        Only the transport (:meth:`httpsh.client.SyncClient.send`) calls this.
        """
        self._response = response

    # ------------------------------------------------------------------ #
    # Credentials
    # ------------------------------------------------------------------ #

    def userinfo_set(self, username: Optional[str], password: Optional[str] = None) -> Request:
        """Set the URI userinfo and the matching Basic ``Authorization`` header.

        *username* and *password* go into the URI verbatim (they may carry
        percent-escapes such as ``n%40``) and into the header decoded.

        Raises:
            InvalidCredentialsError: If *username* is ``None``.
            InvalidURIError: If the pair is not valid URI userinfo.
        """
        if username is None:
            raise InvalidCredentialsError("Basic authentication requires a username")
        name, value = build_authorization_header(username, password)
        self._uri.set_userinfo(encode_userinfo(username, password))
        self._headers.set(name, value)
        logger.debug("Set userinfo for user %r", username)
        return self._invalidate()

    def userinfo_unset(self) -> Request:
        """Remove the URI userinfo and the ``Authorization`` header."""
        self._uri.set_userinfo(None)
        self._headers.unset(AUTHORIZATION)
        logger.debug("Unset userinfo")
        return self._invalidate()

    # ------------------------------------------------------------------ #
    # Headers
    # ------------------------------------------------------------------ #

    def header_set(self, name: str, value: str) -> Request:
        """Set a header, updating the userinfo when it is Basic ``Authorization``.

        A Basic value that cannot be decoded is still stored; the userinfo
        is then left as it was, as it is for any non-Basic scheme. Decoded
        bytes are percent-encoded into the userinfo whatever their encoding.
        """
        userinfo: Optional[str] = None
        sync = False
        if _is_authorization(name):
            try:
                credentials = decode_authorization_header(value)
            except InvalidCredentialsError as exc:
                logger.warning("Leaving userinfo unchanged: %s", exc)
                credentials = None
            if credentials is None:
                logger.debug("Authorization is not Basic; userinfo left unchanged")
            else:
                # An empty decoded password is written as no password at all.
                userinfo = encode_userinfo(
                    escape_userinfo_component(credentials.username),
                    escape_userinfo_component(credentials.password)
                    if credentials.password
                    else None,
                )
                sync = True

        if sync:
            self._uri.set_userinfo(userinfo)
        self._headers.set(name, value)
        logger.debug("Set header %s", name)
        return self._invalidate()

    def header_unset(self, name: str) -> Request:
        """Remove a header; removing ``Authorization`` also removes the userinfo."""
        self._headers.unset(name)
        if _is_authorization(name):
            self._uri.set_userinfo(None)
        logger.debug("Unset header %s", name)
        return self._invalidate()

    def headers_unset_all(self) -> Request:
        """Remove every header, ``User-Agent`` included, and the userinfo."""
        self._headers.unset_all()
        self._uri.set_userinfo(None)
        logger.debug("Unset all headers")
        return self._invalidate()

    # ------------------------------------------------------------------ #
    # Address
    # ------------------------------------------------------------------ #

    def path_set(self, path: str) -> Request:
        """Change the path.

        Absolute paths replace the current one. Relative paths are resolved
        against it the way ``cd`` resolves directories, so ``..`` climbs a
        segment and a trailing ``/`` is kept.
        """
        if not path.startswith("/"):
            joined = posixpath.normpath(posixpath.join(self._uri.path or "/", path))
            if path.endswith("/") and not joined.endswith("/"):
                joined += "/"
            path = joined
        self._uri.set_path(path)
        return self._invalidate()

    def query_set(self, name: str, value: Optional[str] = None) -> Request:
        """Set a query parameter, replacing the first one with the same name.

        Reserved characters in *name* and *value* are percent-encoded;
        existing escapes are kept.
        """
        key = quote(name, safe=_QUERY_SAFE)
        pair = key if value is None else f"{key}={quote(value, safe=_QUERY_SAFE)}"
        pairs = self._query_pairs()
        for i, existing in enumerate(pairs):
            if existing.partition("=")[0] == key:
                pairs[i] = pair
                break
        else:
            pairs.append(pair)
        self._uri.set_query("&".join(pairs))
        return self._invalidate()

    def query_unset(self, name: str) -> Request:
        """Remove every query parameter named *name*."""
        key = quote(name, safe=_QUERY_SAFE)
        pairs = [p for p in self._query_pairs() if p.partition("=")[0] != key]
        self._uri.set_query("&".join(pairs) if pairs else None)
        return self._invalidate()

    def query_unset_all(self) -> Request:
        self._uri.set_query(None)
        return self._invalidate()

    def fragment_set(self, fragment: str) -> Request:
        self._uri.set_fragment(fragment)
        return self._invalidate()

    def fragment_unset(self) -> Request:
        self._uri.set_fragment(None)
        return self._invalidate()

    # ------------------------------------------------------------------ #
    # Method and body
    # ------------------------------------------------------------------ #

    def method_set(self, method: str) -> Request:
        """Change the HTTP method; it is upper-cased.

        Raises:
            InvalidUsageError: If *method* is not a valid HTTP token.
        """
        if not _METHOD_RE.match(method):
            raise InvalidUsageError(f"Invalid HTTP method: {method!r}")
        self._method = method.upper()
        return self._invalidate()

    def body_set(self, body: str) -> Request:
        self._body = body
        return self._invalidate()

    def body_unset(self) -> Request:
        self._body = None
        return self._invalidate()

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _query_pairs(self) -> list[str]:
        if not self._uri.query:
            return []
        return self._uri.query.split("&")

    def _invalidate(self) -> Request:
        self._response = None
        return self

    def __repr__(self) -> str:
        return f"<Request {self._method} {self._uri}>"
