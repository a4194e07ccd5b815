"""
Core constants for the identity client.

Defaults only; every value here can be overridden through settings or provider config.
"""

# Public GitHub API
DEFAULT_GITHUB_URL = "https://api.github.com"

# Read access to the user's email addresses, including private ones
DEFAULT_REQUIRED_SCOPE = "user:email"

# GitHub rejects API requests without a User-Agent
DEFAULT_USER_AGENT = "Habitat-Builder"

DEFAULT_TIMEOUT_SECONDS = 10.0

# Public GitHub serves the token exchange from github.com, not the API host
GITHUB_WEB_TOKEN_URL = "https://github.com/login/oauth/access_token"

# Appended to the base URL unless a provider config sets an explicit token_url
TOKEN_PATH = "/login/oauth/access_token"
USER_PATH = "/user"
EMAILS_PATH = "/user/emails"
