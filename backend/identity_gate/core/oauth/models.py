"""
Identity provider wire models.

Pydantic models for the bodies returned by the token endpoint and the
`/user` and `/user/emails` resources, plus the account record a User maps to.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class _WireModel(BaseModel):
    """Immutable model that ignores fields the provider adds over time."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class AccessTokenGrant(_WireModel):
    """Successful token exchange body."""

    access_token: str
    scope: str
    token_type: str

    @property
    def scopes(self) -> List[str]:
        """Granted scopes, the raw comma-split list."""
        return self.scope.split(",")

    def has_scope(self, grant: str) -> bool:
        """Exact-token match against the granted scope list."""
        return any(p == grant for p in self.scope.split(","))


class ProviderError(_WireModel):
    """Error body returned by the token endpoint."""

    error: str
    error_description: str
    error_uri: str

    def __str__(self) -> str:
        return f"err={self.error}, desc={self.error_description}, uri={self.error_uri}"


class User(_WireModel):
    """Authenticated user's profile."""

    login: str
    id: int
    avatar_url: str = ""
    gravatar_id: str = ""
    url: str = ""
    html_url: str = ""
    followers_url: str = ""
    following_url: str = ""
    gists_url: str = ""
    starred_url: str = ""
    subscriptions_url: str = ""
    organizations_url: str = ""
    repos_url: str = ""
    events_url: str = ""
    received_events_url: str = ""
    site_admin: bool = False
    name: Optional[str] = None
    company: Optional[str] = None
    blog: Optional[str] = None
    location: Optional[str] = None
    email: Optional[str] = None
    hireable: Optional[bool] = None
    bio: Optional[str] = None
    public_repos: int = 0
    public_gists: int = 0
    followers: int = 0
    following: int = 0
    # Kept as the provider's opaque timestamp strings
    created_at: str = ""
    updated_at: str = ""

    def to_account(self) -> "Account":
        """Map the profile onto the downstream account record."""
        return Account(name=self.login, email=self.email)


class Email(_WireModel):
    """One address from `/user/emails`."""

    email: str
    primary: bool
    verified: bool


@dataclass(frozen=True)
class Account:
    """Account record handed to provisioning."""

    name: str
    email: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict."""
        return {"name": self.name, "email": self.email}
