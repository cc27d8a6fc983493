"""Session cookie extraction and installation.

The backend announces the new session in its Set-Cookie header. One parser,
``parse_session_cookie``, pulls the session id (and, when present, the expiry)
out of that header; the id-only lookup used between the two login steps and
the full installation on success both go through it.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any, Protocol

from .config import SESSION_COOKIE_NAME
from .exceptions import MissingSessionCookie
from .types import SessionCookie

logger = logging.getLogger(__name__)

_SESSION_COOKIE_RE = re.compile(r"sessionid=([^;]+)(?:.*?expires=([^;]+))?")


@dataclass(frozen=True)
class ParsedSessionCookie:
    """Raw values found in a Set-Cookie header."""

    session_id: str
    expires: str | None = None


def parse_session_cookie(set_cookie_header: str | None) -> ParsedSessionCookie | None:
    """Find ``sessionid=<id>`` and a later ``expires=<date>`` in a Set-Cookie header.

    Returns None when the header is missing or has no session id. ``expires``
    is None when no expiry follows the session id.
    """
    if not set_cookie_header:
        return None
    match = _SESSION_COOKIE_RE.search(set_cookie_header)
    if not match:
        return None
    return ParsedSessionCookie(session_id=match.group(1), expires=match.group(2))


def extract_session_id(set_cookie_header: str | None) -> str:
    """Return the session id from a Set-Cookie header, or ``""`` if there is none."""
    parsed = parse_session_cookie(set_cookie_header)
    return parsed.session_id if parsed else ""


def parse_expiry(value: str) -> datetime:
    """Parse a cookie ``expires`` attribute (RFC 1123 date)."""
    try:
        return parsedate_to_datetime(value.strip())
    except (TypeError, ValueError) as e:
        raise MissingSessionCookie(f"Unparsable cookie expiry: {value!r}") from e


def read_session_cookie(set_cookie_header: str | None) -> SessionCookie:
    """Build a SessionCookie from a Set-Cookie header.

    Raises:
        MissingSessionCookie: If the header lacks a session id followed by an expiry.
    """
    parsed = parse_session_cookie(set_cookie_header)
    if parsed is None or parsed.expires is None:
        raise MissingSessionCookie("Set-Cookie header has no session id with expiry")
    return SessionCookie(session_id=parsed.session_id, expires_at=parse_expiry(parsed.expires))


class CookieSink(Protocol):
    """Anything cookies can be set on. Starlette responses qualify."""

    def set_cookie(
        self,
        key: str,
        value: str = "",
        *,
        expires: Any = None,
        path: str = "/",
        secure: bool = False,
        httponly: bool = False,
        samesite: str | None = "lax",
    ) -> None: ...


@dataclass
class OutgoingCookie:
    """A cookie queued on the outgoing response."""

    key: str
    value: str
    expires: datetime | None = None
    path: str = "/"
    secure: bool = False
    httponly: bool = False
    samesite: str | None = "lax"


class ResponseCookies:
    """Minimal cookie sink collecting cookies for the outgoing response."""

    def __init__(self) -> None:
        self._cookies: dict[str, OutgoingCookie] = {}

    def set_cookie(
        self,
        key: str,
        value: str = "",
        *,
        expires: datetime | None = None,
        path: str = "/",
        secure: bool = False,
        httponly: bool = False,
        samesite: str | None = "lax",
    ) -> None:
        self._cookies[key] = OutgoingCookie(key, value, expires, path, secure, httponly, samesite)

    def get(self, key: str) -> OutgoingCookie | None:
        return self._cookies.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._cookies

    def __len__(self) -> int:
        return len(self._cookies)

    def __iter__(self):
        return iter(self._cookies.values())


class SessionMaterializer:
    """Installs the backend session as the caller's ``sessionid`` cookie."""

    def __init__(self, cookies: CookieSink) -> None:
        self._cookies = cookies

    def install(self, set_cookie_header: str | None) -> SessionCookie | None:
        """Install the session found in ``set_cookie_header``.

        A header without a session id and expiry is a no-op: the caller is
        simply left without a session.
        """
        try:
            session = read_session_cookie(set_cookie_header)
        except MissingSessionCookie as e:
            logger.debug("No session cookie installed: %s", e)
            return None

        self._cookies.set_cookie(
            SESSION_COOKIE_NAME,
            session.session_id,
            expires=session.expires_at,
            path="/",
            secure=True,
            httponly=True,
            samesite="lax",
        )
        return session
