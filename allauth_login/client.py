"""Synchronous login orchestrator."""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Callable, Mapping

import httpx

from ._sync import CredentialExchangeClient, MfaChallengeClient
from .config import DEFAULT_REDIRECT_URL, DEFAULT_TIMEOUT_SECONDS, resolve_base_url
from .csrf import fetch_csrf_token
from .exceptions import CsrfTokenError
from .session import CookieSink, SessionMaterializer, extract_session_id
from .types import (
    MESSAGE_INVALID_CREDENTIALS,
    MESSAGE_LOGIN_FAILED,
    Credentials,
    LoginOutcome,
    LoginResponse,
    LoginResult,
    LoginState,
)

logger = logging.getLogger(__name__)


def finish_login(
    response: LoginResponse,
    cookies: CookieSink,
    location: str = DEFAULT_REDIRECT_URL,
) -> LoginResult:
    """Install the session from a fully-read success response and redirect."""
    session = SessionMaterializer(cookies).install(response.set_cookie)
    if session is None:
        logger.warning("Login succeeded but the backend sent no session cookie")
    else:
        logger.info("Login succeeded, session expires %s", session.expires_at.isoformat())
    return LoginResult.authenticated(session, location=location)


def unauthenticated_result(credentials: Credentials, response: LoginResponse) -> LoginResult | None:
    """Result for a credential exchange that did not log the user in.

    Returns None when the caller should go on with the second factor.
    """
    if response.outcome is LoginOutcome.REJECTED:
        logger.info("Login rejected for %s", credentials.username)
        return LoginResult.rejected(response.message or MESSAGE_INVALID_CREDENTIALS)

    if not credentials.totp:
        logger.info("Second factor required for %s", credentials.username)
        return LoginResult.mfa_pending()

    return None


class LoginClient:
    """Runs the allauth browser login flow, including the optional second factor.

    Example:
        >>> from allauth_login import LoginClient, ResponseCookies
        >>> cookies = ResponseCookies()
        >>> result = LoginClient().login({"username": "ada", "password": "..."}, cookies)
        >>> if result.redirect:
        ...     print(cookies.get("sessionid"))

    Every call to ``login`` opens and closes its own HTTP client, so nothing
    is shared between attempts.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        csrf_provider: Callable[[], str] | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        redirect_to: str = DEFAULT_REDIRECT_URL,
    ) -> None:
        """Initialize the login client.

        Args:
            base_url: Auth backend URL. If not provided, reads PUBLIC_SERVER_URL
                and falls back to http://localhost:8000.
            csrf_provider: Callable returning a CSRF token. Defaults to
                fetching one from the backend.
            timeout: Request timeout in seconds (default: 30).
            redirect_to: Location to redirect to after a successful login.
        """
        self._base_url = resolve_base_url(base_url)
        self._timeout = timeout
        self._redirect_to = redirect_to
        self._csrf_provider = csrf_provider or partial(fetch_csrf_token, self._base_url, timeout)

    def login(self, form: Mapping[str, Any], cookies: CookieSink) -> LoginResult:
        """Run one login attempt.

        Args:
            form: Submitted form fields ``username``, ``password`` and optional ``totp``.
            cookies: Outgoing response the session cookie is installed on.

        Returns:
            A LoginResult: a 302 redirect on success, otherwise a 400 or 401 failure.
        """
        credentials = Credentials.from_form(form)
        if not credentials.username:
            return LoginResult.rejected(MESSAGE_INVALID_CREDENTIALS)

        try:
            csrf_token = self._csrf_provider()
        except (httpx.HTTPError, CsrfTokenError) as e:
            logger.warning("Could not obtain CSRF token: %s", e)
            return LoginResult.rejected(MESSAGE_LOGIN_FAILED)

        with httpx.Client(timeout=self._timeout) as client:
            try:
                response = CredentialExchangeClient(client, self._base_url).submit(credentials, csrf_token)
            except httpx.HTTPError as e:
                logger.warning("Login request failed: %s", e)
                return LoginResult.rejected(MESSAGE_LOGIN_FAILED)
            logger.debug("Login state: %s -> %s", LoginState.INIT.value, LoginState.CREDENTIALS_SUBMITTED.value)

            if response.outcome is LoginOutcome.SUCCESS:
                return finish_login(response, cookies, self._redirect_to)

            result = unauthenticated_result(credentials, response)
            if result is not None:
                return result

            pending_session_id = extract_session_id(response.set_cookie)
            try:
                mfa_response = MfaChallengeClient(client, self._base_url).authenticate(
                    pending_session_id, csrf_token, credentials.totp
                )
            except httpx.HTTPError as e:
                logger.warning("Second factor request failed: %s", e)
                return LoginResult.mfa_rejected(MESSAGE_LOGIN_FAILED)

        if mfa_response.outcome is LoginOutcome.SUCCESS:
            return finish_login(mfa_response, cookies, self._redirect_to)

        logger.info("Second factor rejected for %s", credentials.username)
        return LoginResult.mfa_rejected(mfa_response.message)
