"""Second-factor challenge client (async)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .._http import build_headers, interpret_mfa_response
from ..config import MFA_AUTHENTICATE_PATH

if TYPE_CHECKING:
    import httpx

    from ..types import LoginResponse


class AsyncMfaChallengeClient:
    """Completes a pending login with a one-time code."""

    def __init__(self, client: httpx.AsyncClient, base_url: str) -> None:
        self._client = client
        self._base_url = base_url

    async def authenticate(self, pending_session_id: str, csrf_token: str, code: str) -> LoginResponse:
        """Send the one-time code for the login identified by ``pending_session_id``."""
        response = await self._client.post(
            f"{self._base_url}{MFA_AUTHENTICATE_PATH}",
            headers=build_headers(csrf_token, session_id=pending_session_id),
            json={"code": code},
        )
        return interpret_mfa_response(response)
