"""Asynchronous login orchestrator."""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Awaitable, Callable, Mapping

import httpx

from ._async import AsyncCredentialExchangeClient, AsyncMfaChallengeClient
from .client import finish_login, unauthenticated_result
from .config import DEFAULT_REDIRECT_URL, DEFAULT_TIMEOUT_SECONDS, resolve_base_url
from .csrf import async_fetch_csrf_token
from .exceptions import CsrfTokenError
from .session import CookieSink, extract_session_id
from .types import MESSAGE_INVALID_CREDENTIALS, MESSAGE_LOGIN_FAILED, Credentials, LoginOutcome, LoginResult, LoginState

logger = logging.getLogger(__name__)


class AsyncLoginClient:
    """Asynchronous variant of :class:`allauth_login.LoginClient`.

    Example:
        >>> import asyncio
        >>> from allauth_login import AsyncLoginClient, ResponseCookies
        >>>
        >>> async def main():
        ...     cookies = ResponseCookies()
        ...     result = await AsyncLoginClient().login(
        ...         {"username": "ada", "password": "...", "totp": "123456"}, cookies
        ...     )
        ...     print(result.status_code)
        >>>
        >>> asyncio.run(main())

    Each step awaits the previous response in full. If the surrounding task is
    cancelled mid-flow the cancellation propagates and no session is installed.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        csrf_provider: Callable[[], Awaitable[str]] | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        redirect_to: str = DEFAULT_REDIRECT_URL,
    ) -> None:
        self._base_url = resolve_base_url(base_url)
        self._timeout = timeout
        self._redirect_to = redirect_to
        self._csrf_provider = csrf_provider or partial(async_fetch_csrf_token, self._base_url, timeout)

    async def login(self, form: Mapping[str, Any], cookies: CookieSink) -> LoginResult:
        """Run one login attempt. See :meth:`LoginClient.login`."""
        credentials = Credentials.from_form(form)
        if not credentials.username:
            return LoginResult.rejected(MESSAGE_INVALID_CREDENTIALS)

        try:
            csrf_token = await self._csrf_provider()
        except (httpx.HTTPError, CsrfTokenError) as e:
            logger.warning("Could not obtain CSRF token: %s", e)
            return LoginResult.rejected(MESSAGE_LOGIN_FAILED)

        async with httpx.AsyncClient(timeout=self._timeout) as client:
            try:
                response = await AsyncCredentialExchangeClient(client, self._base_url).submit(
                    credentials, csrf_token
                )
            except httpx.HTTPError as e:
                logger.warning("Login request failed: %s", e)
                return LoginResult.rejected(MESSAGE_LOGIN_FAILED)
            logger.debug("Login state: %s -> %s", LoginState.INIT.value, LoginState.CREDENTIALS_SUBMITTED.value)

            if response.outcome is LoginOutcome.SUCCESS:
                return finish_login(response, cookies, self._redirect_to)

            result = unauthenticated_result(credentials, response)
            if result is not None:
                return result

            try:
                mfa_response = await AsyncMfaChallengeClient(client, self._base_url).authenticate(
                    extract_session_id(response.set_cookie), csrf_token, credentials.totp
                )
            except httpx.HTTPError as e:
                logger.warning("Second factor request failed: %s", e)
                return LoginResult.mfa_rejected(MESSAGE_LOGIN_FAILED)

        if mfa_response.outcome is LoginOutcome.SUCCESS:
            return finish_login(mfa_response, cookies, self._redirect_to)

        logger.info("Second factor rejected for %s", credentials.username)
        return LoginResult.mfa_rejected(mfa_response.message)
