"""Custom exceptions raised by allauth-login."""

from __future__ import annotations


class AllauthLoginError(Exception):
    """Base exception for all package specific failures."""


class CsrfTokenError(AllauthLoginError):
    """Raised when the backend did not hand out a CSRF token."""


class MalformedBackendPayload(AllauthLoginError):
    """Raised when a backend response body is not in the expected shape.

    Always recovered inside the package by substituting a generic message.
    """


class MissingSessionCookie(AllauthLoginError):
    """Raised when a Set-Cookie header carries no usable session cookie.

    Always recovered inside the package: no session is established.
    """
