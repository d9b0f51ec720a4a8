"""OAuth2 login provider plugin for a code-review server.

## Quick Example

```python
from review_oauth.config import load_config, load_plugin_config, load_server_config
from review_oauth.models import OAuthVerifier
from review_oauth.providers import GoogleOAuthService

raw = load_config()
service = GoogleOAuthService.from_config(
    load_server_config(raw),
    load_plugin_config(raw, "gerrit-oauth-provider"),
)

url = service.get_authorization_url()
# ... user consents, provider redirects back with ?code=...
token = service.get_access_token(None, OAuthVerifier(value=code))
user = service.get_user_info(token)
```
"""

from .contracts import (
    ConfigurationError,
    MalformedIdTokenError,
    OAuthServiceProvider,
    ProviderError,
    UnsupportedWorkflowError,
)
from .models import (
    GoogleOAuthConfigModel,
    OAuthCredentials,
    OAuthToken,
    OAuthUserInfo,
    OAuthVerifier,
    ServerConfigModel,
)
from .providers import GoogleOAuthService

__all__ = [
    # Contracts
    "OAuthServiceProvider",
    # Errors
    "ConfigurationError",
    "MalformedIdTokenError",
    "ProviderError",
    "UnsupportedWorkflowError",
    # Models
    "GoogleOAuthConfigModel",
    "OAuthCredentials",
    "OAuthToken",
    "OAuthUserInfo",
    "OAuthVerifier",
    "ServerConfigModel",
    # Providers
    "GoogleOAuthService",
]
