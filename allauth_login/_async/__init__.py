"""Async backend clients for allauth-login."""

from .credentials import AsyncCredentialExchangeClient
from .mfa import AsyncMfaChallengeClient

__all__ = [
    "AsyncCredentialExchangeClient",
    "AsyncMfaChallengeClient",
]
