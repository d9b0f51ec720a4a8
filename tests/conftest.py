"""
Global pytest configuration and fixtures.
"""

import pytest

from review_oauth.providers.google import GoogleOAuthService


@pytest.fixture
def service() -> GoogleOAuthService:
    """Adapter with OpenID account linking disabled."""
    return GoogleOAuthService("cid", "secret", "https://review.example.com")


@pytest.fixture
def linking_service() -> GoogleOAuthService:
    """Adapter with OpenID account linking enabled."""
    return GoogleOAuthService(
        "cid",
        "secret",
        "https://review.example.com/",
        link_to_existing_openid_accounts=True,
    )
