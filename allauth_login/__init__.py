"""allauth-login - session login against a django-allauth headless backend."""

from importlib.metadata import PackageNotFoundError, version

from .async_client import AsyncLoginClient
from .client import LoginClient
from .exceptions import AllauthLoginError, CsrfTokenError, MalformedBackendPayload, MissingSessionCookie
from .session import ResponseCookies, SessionMaterializer, extract_session_id, parse_session_cookie
from .types import Credentials, LoginOutcome, LoginResponse, LoginResult, LoginState, SessionCookie

__all__ = [
    "LoginClient",
    "AsyncLoginClient",
    "AllauthLoginError",
    "CsrfTokenError",
    "MalformedBackendPayload",
    "MissingSessionCookie",
    "ResponseCookies",
    "SessionMaterializer",
    "extract_session_id",
    "parse_session_cookie",
    "Credentials",
    "LoginOutcome",
    "LoginResponse",
    "LoginResult",
    "LoginState",
    "SessionCookie",
]

try:
    __version__ = version("allauth-login")
except PackageNotFoundError:
    __version__ = "0.1.0"
