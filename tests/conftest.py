"""Test configuration for allauth-login tests."""

from __future__ import annotations

import httpx
import pytest

from allauth_login import ResponseCookies

BASE_URL = "http://auth.test"
CSRF_TOKEN = "csrf-token-123"
SESSION_HEADER = "sessionid=final-session-abc; expires=Wed, 21 Oct 2099 07:28:00 GMT; HttpOnly; Max-Age=1209600; Path=/; SameSite=Lax"
PENDING_HEADER = "sessionid=pending-789; HttpOnly; Path=/; SameSite=Lax"


def make_response(
    status_code: int,
    json: object | None = None,
    *,
    set_cookie: str | None = None,
    content: bytes | None = None,
) -> httpx.Response:
    """Build a real httpx.Response with an optional Set-Cookie header."""
    headers = {"set-cookie": set_cookie} if set_cookie else {}
    if json is not None:
        return httpx.Response(status_code, json=json, headers=headers)
    return httpx.Response(status_code, content=content or b"", headers=headers)


@pytest.fixture
def cookies():
    """Fresh outgoing cookie sink per test."""
    return ResponseCookies()


@pytest.fixture(autouse=True)
def _no_backend_env(monkeypatch):
    monkeypatch.delenv("PUBLIC_SERVER_URL", raising=False)
