"""Credential exchange client (sync)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .._http import build_headers, interpret_login_response
from ..config import LOGIN_PATH

if TYPE_CHECKING:
    import httpx

    from ..types import Credentials, LoginResponse


class CredentialExchangeClient:
    """Submits username and password to the allauth login endpoint."""

    def __init__(self, client: httpx.Client, base_url: str) -> None:
        self._client = client
        self._base_url = base_url

    def submit(self, credentials: Credentials, csrf_token: str) -> LoginResponse:
        """Send the credentials and interpret the backend's answer.

        Args:
            credentials: Username and password for this attempt.
            csrf_token: Token sent both as header and as cookie.

        Returns:
            SUCCESS on 200, MFA_REQUIRED on 401, REJECTED otherwise.
        """
        response = self._client.post(
            f"{self._base_url}{LOGIN_PATH}",
            headers=build_headers(csrf_token),
            json={"username": credentials.username, "password": credentials.password},
        )
        return interpret_login_response(response)
