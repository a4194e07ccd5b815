"""
OAuth provider config loader.

Provider credentials come from either:
- application settings (GITHUB_URL / GITHUB_CLIENT_ID / GITHUB_CLIENT_SECRET)
- a YAML file with a `providers:` mapping, merged over built-in templates,
  with env var expansion ${VAR_NAME}
"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from loguru import logger

from identity_gate.core.constants import (
    DEFAULT_GITHUB_URL,
    DEFAULT_REQUIRED_SCOPE,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    GITHUB_WEB_TOKEN_URL,
)

LOG_PREFIX = "[OAuthConfig]"

# ==================== Built-in Provider Templates ====================
# Users only need client_id/client_secret

PROVIDER_TEMPLATES: Dict[str, Dict[str, Any]] = {
    "github": {
        "base_url": DEFAULT_GITHUB_URL,
        # Token exchange lives on the web host, not the API host
        "token_url": GITHUB_WEB_TOKEN_URL,
        "required_scope": DEFAULT_REQUIRED_SCOPE,
    },
    "github_enterprise": {
        # GHES serves both legs from one host; base_url must be set by the user
        "required_scope": DEFAULT_REQUIRED_SCOPE,
    },
}


class ConfigurationError(Exception):
    """A provider config is missing or unusable."""


@dataclass(frozen=True)
class OAuthProviderConfig:
    """Credentials and endpoint settings for a single provider."""

    name: str
    base_url: str
    client_id: str
    client_secret: str
    token_url: Optional[str] = None
    required_scope: str = DEFAULT_REQUIRED_SCOPE
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def __repr__(self) -> str:
        # Keep the secret out of logs and tracebacks
        return (
            f"OAuthProviderConfig(name={self.name!r}, base_url={self.base_url!r}, "
            f"client_id={self.client_id!r}, required_scope={self.required_scope!r})"
        )

    @classmethod
    def from_settings(cls, settings: Any, name: str = "github") -> "OAuthProviderConfig":
        """Build the config from application settings."""
        return cls(
            name=name,
            base_url=settings.github_url,
            client_id=settings.github_client_id,
            client_secret=settings.github_client_secret,
            token_url=settings.github_token_url,
            required_scope=settings.github_required_scope,
            user_agent=settings.user_agent,
            timeout=settings.oauth_timeout_seconds,
        )


class OAuthConfigLoader:
    """OAuth config loader."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the config loader.

        Args:
            config_path: Config file path; use default when None
        """
        if config_path:
            self.config_path = Path(config_path)
        else:
            # Default path: backend/config/oauth_providers.yaml
            self.config_path = Path(__file__).parent.parent.parent.parent / "config" / "oauth_providers.yaml"

        self._providers: Dict[str, OAuthProviderConfig] = {}
        self._loaded: bool = False

    def load(self, force_reload: bool = False) -> None:
        """
        Load config file.

        Args:
            force_reload: Force reload
        """
        if self._loaded and not force_reload:
            return

        self._providers.clear()

        if not self.config_path.exists():
            logger.warning(f"{LOG_PREFIX} Config file not found: {self.config_path}")
            self._loaded = True
            return

        try:
            with open(self.config_path, encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read {self.config_path}: {e}") from e

        if not raw:
            logger.warning(f"{LOG_PREFIX} Config file is empty: {self.config_path}")
            self._loaded = True
            return

        for name, config in (raw.get("providers") or {}).items():
            if not (config or {}).get("enabled", False):
                logger.debug(f"{LOG_PREFIX} Provider '{name}' is disabled, skipping")
                continue

            provider = self._parse_provider(name, config)
            if provider:
                self._providers[name] = provider
                logger.info(f"{LOG_PREFIX} Loaded provider: {name}")

        self._loaded = True
        logger.info(f"{LOG_PREFIX} Loaded {len(self._providers)} OAuth providers")

    def _parse_provider(self, name: str, config: Dict[str, Any]) -> Optional[OAuthProviderConfig]:
        """Parse a single provider config."""
        config = self._expand_env_vars(config)

        template_name = config.get("template", name)
        template = PROVIDER_TEMPLATES.get(template_name, {})

        # User overrides template
        merged = {**template, **config}

        client_id = str(merged.get("client_id") or "").strip()
        client_secret = str(merged.get("client_secret") or "").strip()
        if not client_id or not client_secret:
            logger.warning(f"{LOG_PREFIX} Provider '{name}' missing client_id or client_secret")
            return None

        base_url = str(merged.get("base_url") or "").strip()
        if not base_url:
            logger.warning(f"{LOG_PREFIX} Provider '{name}' missing base_url")
            return None

        try:
            timeout = float(merged.get("timeout", DEFAULT_TIMEOUT_SECONDS))
        except (TypeError, ValueError):
            logger.warning(f"{LOG_PREFIX} Provider '{name}' has invalid timeout, using default")
            timeout = DEFAULT_TIMEOUT_SECONDS

        return OAuthProviderConfig(
            name=name,
            base_url=base_url,
            client_id=client_id,
            client_secret=client_secret,
            token_url=merged.get("token_url") or None,
            required_scope=merged.get("required_scope", DEFAULT_REQUIRED_SCOPE),
            user_agent=merged.get("user_agent", DEFAULT_USER_AGENT),
            timeout=timeout,
        )

    def _expand_env_vars(self, obj: Any) -> Any:
        """Recursively replace ${VAR_NAME} with env var values."""
        if isinstance(obj, str):
            return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
        elif isinstance(obj, dict):
            return {k: self._expand_env_vars(v) for k, v in obj.items()}
        elif isinstance(obj, list):
            return [self._expand_env_vars(i) for i in obj]
        return obj

    def get_provider(self, name: str) -> Optional[OAuthProviderConfig]:
        """Get provider config by name."""
        self.load()
        return self._providers.get(name)

    def require(self, name: str) -> OAuthProviderConfig:
        """
        Get provider config by name.

        Raises:
            ConfigurationError: Provider not configured or not enabled
        """
        provider = self.get_provider(name)
        if provider is None:
            raise ConfigurationError(f"OAuth provider '{name}' not found or not enabled")
        return provider

    def list_providers(self) -> List[str]:
        """List enabled provider names."""
        self.load()
        return list(self._providers)


# Global config loader (lazy init)
_oauth_config: Optional[OAuthConfigLoader] = None


def get_oauth_config() -> OAuthConfigLoader:
    """Get global OAuth config loader."""
    global _oauth_config
    if _oauth_config is None:
        from identity_gate.core.settings import settings

        _oauth_config = OAuthConfigLoader(settings.oauth_config_path)
    return _oauth_config


def reload_oauth_config() -> None:
    """Reload OAuth config."""
    config = get_oauth_config()
    config.load(force_reload=True)
