"""
OAuth identity module.

Authorization-code exchange and identity resolution against a GitHub-style provider.

Module layout:
- config.py: provider config (OAuthProviderConfig, OAuthConfigLoader)
- models.py: wire models (AccessTokenGrant, ProviderError, User, Email) and Account
- decoder.py: response body classification
- client.py: GitHubClient (authenticate, fetch_user, fetch_emails)
"""

from identity_gate.core.oauth.client import GitHubClient
from identity_gate.core.oauth.config import (
    ConfigurationError,
    OAuthConfigLoader,
    OAuthProviderConfig,
    get_oauth_config,
    reload_oauth_config,
)
from identity_gate.core.oauth.models import Account, AccessTokenGrant, Email, ProviderError, User

__all__ = [
    "GitHubClient",
    "ConfigurationError",
    "OAuthConfigLoader",
    "OAuthProviderConfig",
    "get_oauth_config",
    "reload_oauth_config",
    "Account",
    "AccessTokenGrant",
    "Email",
    "ProviderError",
    "User",
]
