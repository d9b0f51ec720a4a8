"""OAuth provider implementations.

This module contains concrete implementations of OAuth providers.
"""

from .google import GoogleOAuthService

__all__ = [
    "GoogleOAuthService",
]
