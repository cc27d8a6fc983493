"""Typed values passed between the login components."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from .config import DEFAULT_REDIRECT_URL

MESSAGE_MFA_REQUIRED = "settings.mfa_required"
MESSAGE_INVALID_CODE = "settings.invalid_code"
MESSAGE_INVALID_CREDENTIALS = "settings.invalid_credentials"
MESSAGE_LOGIN_FAILED = "settings.login_failed"


class LoginOutcome(str, Enum):
    """Result of a single exchange with the auth backend."""

    SUCCESS = "success"
    MFA_REQUIRED = "mfa_required"
    MFA_REJECTED = "mfa_rejected"
    REJECTED = "rejected"


class LoginState(str, Enum):
    """Where a login attempt currently stands."""

    INIT = "init"
    CREDENTIALS_SUBMITTED = "credentials_submitted"
    AUTHENTICATED = "authenticated"
    MFA_PENDING = "mfa_pending"
    REJECTED = "rejected"
    MFA_REJECTED = "mfa_rejected"


@dataclass(frozen=True)
class Credentials:
    """Credentials for one login attempt. Never persisted."""

    username: str
    password: str
    totp: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "username", self.username.lower())

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password='***', totp={'***' if self.totp else None})"

    @classmethod
    def from_form(cls, form: Mapping[str, Any]) -> Credentials:
        """Build credentials from submitted form fields.

        Missing fields become empty strings; an empty ``totp`` means no code.
        """
        return cls(
            username=str(form.get("username") or ""),
            password=str(form.get("password") or ""),
            totp=str(form.get("totp")) if form.get("totp") else None,
        )


@dataclass(frozen=True)
class SessionCookie:
    """Session cookie handed to the caller after a successful login."""

    session_id: str
    expires_at: datetime


@dataclass(frozen=True)
class LoginResponse:
    """Interpreted backend response.

    ``set_cookie`` keeps the raw Set-Cookie header so later steps can pull
    the session id out of it.
    """

    outcome: LoginOutcome
    message: str | None = None
    set_cookie: str | None = None


@dataclass
class LoginResult:
    """What the web layer should answer with once an attempt is over."""

    state: LoginState
    status_code: int
    message: str | None = None
    mfa_required: bool = False
    location: str | None = None
    session: SessionCookie | None = None

    @property
    def redirect(self) -> bool:
        return self.state is LoginState.AUTHENTICATED

    def failure_payload(self) -> dict[str, Any]:
        """Body for a failed attempt: ``{message, mfa_required?}``."""
        payload: dict[str, Any] = {"message": self.message}
        if self.mfa_required:
            payload["mfa_required"] = True
        return payload

    @classmethod
    def authenticated(cls, session: SessionCookie | None, location: str = DEFAULT_REDIRECT_URL) -> LoginResult:
        return cls(state=LoginState.AUTHENTICATED, status_code=302, location=location, session=session)

    @classmethod
    def mfa_pending(cls, message: str = MESSAGE_MFA_REQUIRED) -> LoginResult:
        return cls(state=LoginState.MFA_PENDING, status_code=401, message=message, mfa_required=True)

    @classmethod
    def mfa_rejected(cls, message: str) -> LoginResult:
        return cls(state=LoginState.MFA_REJECTED, status_code=401, message=message, mfa_required=True)

    @classmethod
    def rejected(cls, message: str) -> LoginResult:
        return cls(state=LoginState.REJECTED, status_code=400, message=message)
