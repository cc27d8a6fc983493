"""Shared request building and response interpretation for sync and async clients."""

from __future__ import annotations

from typing import Any

import httpx

from .config import CSRF_COOKIE_NAME, CSRF_HEADER_NAME, SESSION_COOKIE_NAME
from .exceptions import MalformedBackendPayload
from .types import (
    MESSAGE_INVALID_CODE,
    MESSAGE_INVALID_CREDENTIALS,
    MESSAGE_MFA_REQUIRED,
    LoginOutcome,
    LoginResponse,
)


def build_headers(csrf_token: str, session_id: str | None = None) -> dict[str, str]:
    """Build headers for a mutating request (double-submit CSRF)."""
    cookie = f"{CSRF_COOKIE_NAME}={csrf_token}"
    if session_id is not None:
        cookie += f"; {SESSION_COOKIE_NAME}={session_id}"

    return {
        "Content-Type": "application/json",
        CSRF_HEADER_NAME: csrf_token,
        "Cookie": cookie,
    }


def read_json_object(response: httpx.Response) -> dict[str, Any]:
    """Decode a response body that must be a JSON object."""
    try:
        data = response.json()
    except ValueError as e:
        raise MalformedBackendPayload(f"Response body is not JSON ({response.status_code})") from e
    if not isinstance(data, dict):
        raise MalformedBackendPayload(f"Expected a JSON object, got {type(data).__name__}")
    return data


def first_field_error(response: httpx.Response) -> str:
    """Return the first message of the first field in a ``{field: [messages]}`` body."""
    data = read_json_object(response)
    if not data:
        raise MalformedBackendPayload("Error payload is empty")

    messages = next(iter(data.values()))
    if not isinstance(messages, list) or not messages:
        raise MalformedBackendPayload("First error field does not hold a list of messages")
    message = messages[0]
    if not isinstance(message, str) or not message:
        raise MalformedBackendPayload("First error message is not a string")
    return message


def interpret_login_response(response: httpx.Response) -> LoginResponse:
    """Map the credential exchange response onto a LoginResponse."""
    set_cookie = response.headers.get("set-cookie")

    if response.status_code == 200:
        return LoginResponse(LoginOutcome.SUCCESS, set_cookie=set_cookie)

    if response.status_code == 401:
        return LoginResponse(LoginOutcome.MFA_REQUIRED, message=MESSAGE_MFA_REQUIRED, set_cookie=set_cookie)

    try:
        message = first_field_error(response)
    except MalformedBackendPayload:
        message = MESSAGE_INVALID_CREDENTIALS
    return LoginResponse(LoginOutcome.REJECTED, message=message)


def interpret_mfa_response(response: httpx.Response) -> LoginResponse:
    """Map the second-factor response onto a LoginResponse."""
    if response.is_success:
        return LoginResponse(LoginOutcome.SUCCESS, set_cookie=response.headers.get("set-cookie"))

    message = MESSAGE_INVALID_CODE
    try:
        error = read_json_object(response).get("error")
    except MalformedBackendPayload:
        error = None
    if isinstance(error, str) and error:
        message = error
    return LoginResponse(LoginOutcome.MFA_REJECTED, message=message)
