"""Default CSRF token providers.

The login clients accept any callable returning a token; these read the
``csrftoken`` cookie the backend hands out on a plain GET.
"""

from __future__ import annotations

import httpx

from .config import CSRF_COOKIE_NAME, CSRF_PATH, DEFAULT_TIMEOUT_SECONDS
from .exceptions import CsrfTokenError


def _token_from(response: httpx.Response) -> str:
    response.raise_for_status()
    token = response.cookies.get(CSRF_COOKIE_NAME)
    if not token:
        raise CsrfTokenError(f"Backend did not set a {CSRF_COOKIE_NAME} cookie")
    return token


def fetch_csrf_token(base_url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> str:
    """Fetch a fresh CSRF token from the auth backend.

    Raises:
        CsrfTokenError: If the response carries no token cookie.
        httpx.HTTPError: On transport failures or error statuses.
    """
    with httpx.Client(timeout=timeout) as client:
        return _token_from(client.get(f"{base_url}{CSRF_PATH}"))


async def async_fetch_csrf_token(base_url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> str:
    """Async variant of :func:`fetch_csrf_token`."""
    async with httpx.AsyncClient(timeout=timeout) as client:
        return _token_from(await client.get(f"{base_url}{CSRF_PATH}"))
