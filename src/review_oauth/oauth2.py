"""Minimal synchronous OAuth 2.0 authorization-code client.

``OAuth20Service`` knows how to build the consent URL, exchange a verifier for
an access token and send bearer-authenticated requests. Provider specifics
(endpoints, scopes, profile parsing) live in ``review_oauth.providers``.
"""

from __future__ import annotations

import logging
from urllib.parse import quote, urlencode

import httpx
from pydantic import ConfigDict, ValidationError

from .contracts import ProviderError
from .models import OAuthBaseModel, OAuthCredentials, OAuthToken, OAuthVerifier

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class OAuth2Api(OAuthBaseModel):
    """Endpoints of an OAuth 2.0 provider."""

    authorization_url: str
    access_token_url: str
    version: str = "2.0"


GOOGLE_API = OAuth2Api(
    authorization_url="https://accounts.google.com/o/oauth2/auth",
    access_token_url="https://accounts.google.com/o/oauth2/token",
)


class _TokenResponse(OAuthBaseModel):
    """Minimal token endpoint response (successful or error)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    access_token: str | None = None
    token_type: str | None = None
    id_token: str | None = None

    error: str | None = None
    error_description: str | None = None


def create_http_client() -> httpx.Client:
    """Create the HTTP client used for every outbound provider call."""
    return httpx.Client(timeout=DEFAULT_TIMEOUT)


class OAuth20Service:
    """Authorization-code flow against a single provider."""

    def __init__(self, api: OAuth2Api, credentials: OAuthCredentials):
        self.api = api
        self.credentials = credentials

    @property
    def version(self) -> str:
        return self.api.version

    def get_authorization_url(self) -> str:
        params = [
            ("response_type", "code"),
            ("client_id", self.credentials.client_id),
            ("redirect_uri", self.credentials.callback_url),
            ("scope", self.credentials.scope),
        ]
        return f"{self.api.authorization_url}?{urlencode(params, quote_via=quote)}"

    def get_access_token(self, verifier: OAuthVerifier) -> OAuthToken:
        payload = {
            "code": verifier.value,
            "client_id": self.credentials.client_id,
            "client_secret": self.credentials.client_secret,
            "redirect_uri": self.credentials.callback_url,
            "grant_type": "authorization_code",
        }
        url = self.api.access_token_url
        try:
            with create_http_client() as client:
                resp = client.post(
                    url,
                    data=payload,
                    headers={"Accept": "application/json"},
                )
        except httpx.HTTPError as exc:
            raise ProviderError("invalid_grant", f"Token request failed: {exc}", url=url) from exc

        if resp.status_code != 200:
            logger.warning("OAuth2: token exchange failed with status %s", resp.status_code)
            raise ProviderError(
                "invalid_grant", resp.text, status_code=resp.status_code, body=resp.text, url=url
            )

        try:
            token = _TokenResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise ProviderError(
                "invalid_grant",
                "Invalid token response payload",
                status_code=resp.status_code,
                body=resp.text,
                url=url,
            ) from exc

        if token.error is not None:
            raise ProviderError(
                token.error,
                token.error_description or "Failed to exchange code",
                status_code=resp.status_code,
                body=resp.text,
                url=url,
            )

        if not token.access_token:
            raise ProviderError(
                "invalid_grant",
                "No access_token in response",
                status_code=resp.status_code,
                body=resp.text,
                url=url,
            )

        return OAuthToken(token=token.access_token, secret="", raw=resp.text)

    def get(self, url: str, token: OAuthToken) -> httpx.Response:
        """Send a GET request signed with the bearer access token."""
        try:
            with create_http_client() as client:
                return client.get(
                    url,
                    headers={
                        "Authorization": f"Bearer {token.token}",
                        "Accept": "application/json",
                    },
                )
        except httpx.HTTPError as exc:
            raise ProviderError("request_failed", f"Request to {url} failed: {exc}", url=url) from exc
