"""
GitHub-style OAuth2 identity client.

Implements the post-consent half of the authorization code flow:
1. Exchange code for access_token (checking the granted scope)
2. Fetch the user profile and email addresses with that token

Every failure is raised as an `IdentityError` subclass; nothing is retried.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

import httpx
from loguru import logger

from identity_gate.common.exceptions import (
    ApiError,
    AuthProviderError,
    DecodeError,
    HttpError,
    MissingScope,
    to_transport_error,
)
from identity_gate.core.constants import EMAILS_PATH, TOKEN_PATH, USER_PATH
from identity_gate.core.oauth.config import OAuthProviderConfig
from identity_gate.core.oauth.decoder import (
    decode_api_error,
    decode_resource,
    decode_token_response,
)
from identity_gate.core.oauth.models import AccessTokenGrant, Email, ProviderError, User

LOG_PREFIX = "[GitHubClient]"

JSON_ACCEPT = "application/json"


class GitHubClient:
    """
    Identity client for a GitHub-compatible provider.

    Holds no per-call state, so one instance can serve concurrent callers.
    """

    def __init__(
        self,
        config: OAuthProviderConfig,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            config: Provider base URL, credentials and request settings
            http_client: Shared client owned by the caller; a short-lived
                client is opened per call when omitted
        """
        self.config = config
        self._http_client = http_client

    @classmethod
    def from_settings(cls, settings: Any = None, http_client: Optional[httpx.AsyncClient] = None) -> "GitHubClient":
        """Build a client from application settings (global settings when None)."""
        if settings is None:
            from identity_gate.core.settings import settings as app_settings

            settings = app_settings
        return cls(OAuthProviderConfig.from_settings(settings), http_client=http_client)

    @property
    def url(self) -> str:
        return self.config.base_url

    @property
    def token_url(self) -> str:
        return self.config.token_url or f"{self.config.base_url}{TOKEN_PATH}"

    @property
    def required_scope(self) -> str:
        return self.config.required_scope

    # ==================== Token exchange ====================

    async def authenticate(self, code: str) -> str:
        """
        Exchange an authorization code for an access token.

        Args:
            code: Authorization code from the provider callback (single use)

        Returns:
            The access token, only once the required scope is confirmed

        Raises:
            TransportError: Provider unreachable
            HttpError: Non-success status on the exchange
            AuthProviderError: Provider returned an error body
            MissingScope: Required scope not granted
            DecodeError: Body matched neither known shape
        """
        params = {
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "code": code,
        }
        response = await self._send("POST", self.token_url, params=params, headers={"Accept": JSON_ACCEPT})

        if not response.is_success:
            logger.warning(f"{LOG_PREFIX} Token exchange failed: {response.status_code}")
            raise HttpError(response.status_code)

        decoded = decode_token_response(response.content)

        if isinstance(decoded, AccessTokenGrant):
            if decoded.has_scope(self.required_scope):
                logger.info(f"{LOG_PREFIX} Token exchange successful for {self.config.name}")
                return decoded.access_token
            logger.warning(
                f"{LOG_PREFIX} Grant for {self.config.name} missing scope '{self.required_scope}' "
                f"(granted: {decoded.scopes})"
            )
            raise MissingScope(self.required_scope)

        if isinstance(decoded, ProviderError):
            logger.warning(f"{LOG_PREFIX} Provider rejected code exchange: {decoded.error}")
            raise AuthProviderError(decoded)

        logger.error(f"{LOG_PREFIX} Unrecognized token response ({decoded.reason})")
        raise DecodeError(decoded.body, expected="token response")

    # ==================== Resources ====================

    async def fetch_user(self, token: str) -> User:
        """
        Fetch the authenticated user's profile.

        Raises:
            TransportError: Provider unreachable
            ApiError: Non-OK status with a string map body
            DecodeError: Error or success body could not be decoded
        """
        response = await self._get_resource(USER_PATH, token)
        return decode_resource(response.content, User)

    async def fetch_emails(self, token: str) -> List[Email]:
        """
        Fetch every email address on the account, verified or not.

        Raises:
            TransportError: Provider unreachable
            ApiError: Non-OK status with a string map body
            DecodeError: Error or success body could not be decoded
        """
        response = await self._get_resource(EMAILS_PATH, token)
        return decode_resource(response.content, List[Email])

    async def _get_resource(self, path: str, token: str) -> httpx.Response:
        """GET an API resource; returns the response only when the status is 200."""
        headers = {
            "Accept": JSON_ACCEPT,
            "Authorization": f"Bearer {token}",
            "User-Agent": self.config.user_agent,
        }
        response = await self._send("GET", f"{self.url}{path}", headers=headers)

        if response.status_code != httpx.codes.OK:
            body = decode_api_error(response.content)
            logger.warning(f"{LOG_PREFIX} GET {path} failed: {response.status_code}")
            raise ApiError(body)

        return response

    # ==================== Transport ====================

    async def _send(
        self,
        method: str,
        url: str,
        *,
        headers: Dict[str, str],
        params: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        """Send one request and read the full body; httpx failures become TransportError."""
        try:
            async with self._client() as client:
                return await client.request(method, url, headers=headers, params=params)
        except httpx.HTTPError as e:
            logger.error(f"{LOG_PREFIX} {method} {url} failed: {type(e).__name__}")
            raise to_transport_error(e) from e

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=self.config.timeout) as client:
            yield client

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} provider={self.config.name} url={self.url}>"
