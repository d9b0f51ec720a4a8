"""Google OAuth2 login provider for the review server."""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote_plus

from ..contracts import (
    ConfigurationError,
    OAuthServiceProvider,
    ProviderError,
    UnsupportedWorkflowError,
)
from ..id_token import json_string, lookup_claimed_identity
from ..models import (
    GoogleOAuthConfigModel,
    OAuthCredentials,
    OAuthToken,
    OAuthUserInfo,
    OAuthVerifier,
    ServerConfigModel,
)
from ..oauth2 import GOOGLE_API, OAuth2Api, OAuth20Service

logger = logging.getLogger(__name__)

PROTECTED_RESOURCE_URL = "https://www.googleapis.com/userinfo/v2/me"
SCOPE = "email profile"


class GoogleOAuthService(OAuthServiceProvider):
    """Google OAuth2 provider, optionally linking legacy OpenID 2.0 accounts."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        canonical_web_url: str,
        *,
        link_to_existing_openid_accounts: bool = False,
        api: OAuth2Api = GOOGLE_API,
    ):
        self.canonical_web_url = canonical_web_url.rstrip("/") + "/"
        self.link_to_existing_openid_accounts = link_to_existing_openid_accounts
        scope = f"openid {SCOPE}" if link_to_existing_openid_accounts else SCOPE
        self.service = OAuth20Service(
            api,
            OAuthCredentials(
                client_id=client_id,
                client_secret=client_secret,
                callback_url=self.canonical_web_url + "oauth",
                scope=scope,
            ),
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("OAuth2: canonicalWebUrl=%s", self.canonical_web_url)
            logger.debug("OAuth2: scope=%s", scope)
            logger.debug(
                "OAuth2: linkToExistingOpenIDAccounts=%s", link_to_existing_openid_accounts
            )

    @classmethod
    def from_config(
        cls, server_config: ServerConfigModel, plugin_config: GoogleOAuthConfigModel
    ) -> GoogleOAuthService:
        return cls(
            plugin_config.client_id,
            plugin_config.client_secret,
            server_config.canonical_web_url,
            link_to_existing_openid_accounts=plugin_config.link_to_existing_openid_accounts,
        )

    def get_request_token(self) -> OAuthToken:
        raise UnsupportedWorkflowError("Not supported workflow in OAuth 2.0")

    def get_authorization_url(self, request_token: OAuthToken | None = None) -> str:
        url = self.service.get_authorization_url()
        if self.link_to_existing_openid_accounts:
            try:
                url += "&openid.realm=" + quote_plus(self.canonical_web_url, encoding="utf-8")
            except UnicodeError as exc:
                raise ConfigurationError(
                    f"Cannot encode openid.realm from {self.canonical_web_url!r}"
                ) from exc
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("OAuth2: authorization URL=%s", url)
        return url

    def get_access_token(
        self, request_token: OAuthToken | None, verifier: OAuthVerifier
    ) -> OAuthToken:
        return self.service.get_access_token(verifier)

    def get_user_info(self, token: OAuthToken) -> OAuthUserInfo:
        response = self.service.get(PROTECTED_RESOURCE_URL, token)
        if response.status_code != 200:
            logger.warning("OAuth2: userinfo request failed with status %s", response.status_code)
            raise ProviderError(
                "invalid_token",
                f"Status {response.status_code} ({response.text}) "
                f"for request {PROTECTED_RESOURCE_URL}",
                status_code=response.status_code,
                body=response.text,
                url=PROTECTED_RESOURCE_URL,
            )

        profile = self._parse_profile(response.text)
        user_id = profile.get("id")
        if user_id is None or user_id == "":
            raise ProviderError(
                "invalid_token",
                "Response doesn't contain id field",
                status_code=response.status_code,
                body=response.text,
                url=PROTECTED_RESOURCE_URL,
            )

        email = profile.get("email")
        name = profile.get("name")
        try:
            external_id = json_string(user_id)
            email = None if email is None else json_string(email)
            name = None if name is None else json_string(name)
        except TypeError as exc:
            raise ProviderError(
                "invalid_token",
                f"Invalid profile field: {exc}",
                status_code=response.status_code,
                body=response.text,
                url=PROTECTED_RESOURCE_URL,
            ) from exc

        claimed_identity = None
        if self.link_to_existing_openid_accounts:
            claimed_identity = lookup_claimed_identity(token.raw)

        return OAuthUserInfo(
            external_id=external_id,
            username=None,
            email=email,
            display_name=name,
            claimed_identity=claimed_identity,
        )

    def get_version(self) -> str:
        return self.service.version

    def get_name(self) -> str:
        return "Google OAuth2"

    @staticmethod
    def _parse_profile(body: str) -> dict[str, Any]:
        try:
            profile = json.loads(body)
        except ValueError as exc:
            raise ProviderError(
                "invalid_token",
                f"Invalid JSON '{body}': not a JSON Object",
                status_code=200,
                body=body,
                url=PROTECTED_RESOURCE_URL,
            ) from exc
        if not isinstance(profile, dict):
            raise ProviderError(
                "invalid_token",
                f"Invalid JSON '{body}': not a JSON Object",
                status_code=200,
                body=body,
                url=PROTECTED_RESOURCE_URL,
            )
        return profile
