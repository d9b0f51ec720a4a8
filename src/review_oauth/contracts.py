"""Contracts and errors shared by OAuth provider implementations."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .models import OAuthToken, OAuthUserInfo, OAuthVerifier


class ProviderError(Exception):
    """Standardized provider error with HTTP-style status information."""

    def __init__(
        self,
        error: str,
        description: str | None = None,
        status_code: int | None = None,
        *,
        body: str | None = None,
        url: str | None = None,
    ):
        super().__init__(description or error)
        self.error = error
        self.description = description
        self.status_code = status_code
        self.body = body
        self.url = url


class UnsupportedWorkflowError(RuntimeError):
    """Raised when an OAuth1-only operation is requested from an OAuth2 provider."""


class MalformedIdTokenError(ValueError):
    """The ``id_token`` is not a ``header.payload.signature`` triple."""


class ConfigurationError(ValueError):
    """The adapter cannot build a request from its configuration."""


@runtime_checkable
class OAuthServiceProvider(Protocol):
    """Interface the host server expects from every OAuth login provider."""

    def get_request_token(self) -> OAuthToken:
        """Obtain an OAuth1 request token (OAuth2 providers always raise)."""

    def get_authorization_url(self, request_token: OAuthToken | None = None) -> str:
        """Return the consent page URL the user is redirected to."""

    def get_access_token(
        self, request_token: OAuthToken | None, verifier: OAuthVerifier
    ) -> OAuthToken:
        """Exchange the verifier for an access token."""

    def get_user_info(self, token: OAuthToken) -> OAuthUserInfo:
        """Fetch the profile of the user the token was issued to."""

    def get_version(self) -> str:
        """OAuth protocol version spoken by the provider."""

    def get_name(self) -> str:
        """Human readable provider name."""


__all__ = [
    "ConfigurationError",
    "MalformedIdTokenError",
    "OAuthServiceProvider",
    "ProviderError",
    "UnsupportedWorkflowError",
]
