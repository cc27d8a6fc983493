"""Sync backend clients for allauth-login."""

from .credentials import CredentialExchangeClient
from .mfa import MfaChallengeClient

__all__ = [
    "CredentialExchangeClient",
    "MfaChallengeClient",
]
