"""Pydantic models for the OAuth provider plugin.

These types cover the values exchanged with the host server (tokens, verifiers,
normalized user info) and the configuration the plugin reads at startup.

## Security-relevant configuration fields

- `client-secret`: never logged, never echoed back in errors.
- `link-to-existing-openid-accounts`: widens the requested scope with `openid`
  and makes the adapter trust the `openid_id` claim of the returned `id_token`.

Treat changes to these fields as security-sensitive and ensure they are covered by
tests and documented behavior.
"""

from pydantic import BaseModel, ConfigDict, Field


class OAuthBaseModel(BaseModel):
    """Base model for all plugin models.

    - extra="forbid": Rejects any fields not defined in the model
    - frozen=True: Makes instances immutable, so one adapter can be shared
      between concurrent requests
    """

    model_config = ConfigDict(extra="forbid", frozen=True)


class OAuthToken(OAuthBaseModel):
    """Token handed back and forth between the host and the provider.

    `secret` only exists for symmetry with OAuth1 and is empty for OAuth2.
    `raw` is the undecoded token endpoint response; it may embed an `id_token`.
    """

    token: str
    secret: str | None = None
    raw: str | None = None


class OAuthVerifier(OAuthBaseModel):
    """One-time authorization code returned by the provider after consent."""

    value: str


class OAuthUserInfo(OAuthBaseModel):
    """Normalized user information returned by providers."""

    external_id: str = Field(min_length=1)
    username: str | None = None
    email: str | None = None
    display_name: str | None = None
    claimed_identity: str | None = None  # Legacy OpenID 2.0 identifier


class OAuthCredentials(OAuthBaseModel):
    """Client credentials and callback used for every request of one adapter."""

    client_id: str
    client_secret: str
    callback_url: str
    scope: str


class ServerConfigModel(OAuthBaseModel):
    """Host server settings consumed by the plugin."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    canonical_web_url: str = Field(alias="canonicalWebUrl", min_length=1)


class GoogleOAuthConfigModel(OAuthBaseModel):
    """Google OAuth provider configuration.

    Keys are spelled the way the host's plugin sections spell them
    (``client-id``); attributes are snake_case.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    client_id: str = Field(alias="client-id")
    client_secret: str = Field(alias="client-secret")
    link_to_existing_openid_accounts: bool = Field(
        default=False, alias="link-to-existing-openid-accounts"
    )
