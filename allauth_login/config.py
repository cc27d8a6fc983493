"""Configuration helpers for allauth-login."""

from __future__ import annotations

import os

DEFAULT_BASE_URL = "http://localhost:8000"
BASE_URL_ENV_VAR = "PUBLIC_SERVER_URL"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_REDIRECT_URL = "/"

# allauth headless "browser" client endpoints
LOGIN_PATH = "/_allauth/browser/v1/auth/login"
MFA_AUTHENTICATE_PATH = "/_allauth/browser/v1/auth/2fa/authenticate"
CSRF_PATH = "/_allauth/browser/v1/config"

CSRF_COOKIE_NAME = "csrftoken"
CSRF_HEADER_NAME = "X-CSRFToken"
SESSION_COOKIE_NAME = "sessionid"


def sanitize_base_url(url: str) -> str:
    """Ensure the base URL never ends with a trailing slash."""

    return url.rstrip("/")


def resolve_base_url(base_url: str | None = None) -> str:
    """Resolve the auth backend URL.

    Order: explicit parameter > PUBLIC_SERVER_URL env var > local default.
    """
    return sanitize_base_url(base_url or os.environ.get(BASE_URL_ENV_VAR) or DEFAULT_BASE_URL)
