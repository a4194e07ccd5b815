import pytest

from identity_gate.core.oauth.client import GitHubClient
from identity_gate.core.oauth.config import OAuthProviderConfig


@pytest.fixture
def provider_config() -> OAuthProviderConfig:
    return OAuthProviderConfig(
        name="github",
        base_url="https://github.test",
        client_id="client-123",
        client_secret="secret-456",
        required_scope="user:email",
        user_agent="Habitat-Builder",
    )


@pytest.fixture
def client(provider_config: OAuthProviderConfig) -> GitHubClient:
    return GitHubClient(provider_config)


@pytest.fixture
def user_payload() -> dict:
    return {
        "login": "octocat",
        "id": 583231,
        "avatar_url": "https://avatars.githubusercontent.com/u/583231?v=4",
        "gravatar_id": "",
        "url": "https://api.github.com/users/octocat",
        "html_url": "https://github.com/octocat",
        "followers_url": "https://api.github.com/users/octocat/followers",
        "following_url": "https://api.github.com/users/octocat/following{/other_user}",
        "gists_url": "https://api.github.com/users/octocat/gists{/gist_id}",
        "starred_url": "https://api.github.com/users/octocat/starred{/owner}{/repo}",
        "subscriptions_url": "https://api.github.com/users/octocat/subscriptions",
        "organizations_url": "https://api.github.com/users/octocat/orgs",
        "repos_url": "https://api.github.com/users/octocat/repos",
        "events_url": "https://api.github.com/users/octocat/events{/privacy}",
        "received_events_url": "https://api.github.com/users/octocat/received_events",
        "type": "User",
        "site_admin": False,
        "name": "The Octocat",
        "company": "@github",
        "blog": "https://github.blog",
        "location": "San Francisco",
        "email": "octocat@github.com",
        "hireable": None,
        "bio": None,
        "public_repos": 8,
        "public_gists": 8,
        "followers": 9000,
        "following": 9,
        "created_at": "2011-01-25T18:44:36Z",
        "updated_at": "2024-01-22T12:12:39Z",
    }
