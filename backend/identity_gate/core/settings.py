"""
Application settings
"""
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from identity_gate.core.constants import (
    DEFAULT_GITHUB_URL,
    DEFAULT_REQUIRED_SCOPE,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    GITHUB_WEB_TOKEN_URL,
)

# Project root (backend directory)
# From identity_gate/core/settings.py up two levels to backend/
BASE_DIR = Path(__file__).resolve().parent.parent.parent
ENV_FILE = BASE_DIR / ".env"


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # GitHub OAuth
    github_url: str = Field(
        default=DEFAULT_GITHUB_URL,
        validation_alias=AliasChoices("GITHUB_URL", "OAUTH_GITHUB_URL"),
        description="Identity provider base URL"
    )
    github_client_id: str = Field(
        default="",
        validation_alias=AliasChoices("GITHUB_CLIENT_ID", "OAUTH_GITHUB_CLIENT_ID"),
        description="OAuth client id"
    )
    github_client_secret: str = Field(
        default="",
        validation_alias=AliasChoices("GITHUB_CLIENT_SECRET", "OAUTH_GITHUB_CLIENT_SECRET"),
        description="OAuth client secret"
    )
    github_token_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GITHUB_TOKEN_URL", "OAUTH_GITHUB_TOKEN_URL"),
        description="Token endpoint override; github.com for the public API, else {github_url}/login/oauth/access_token"
    )
    github_required_scope: str = Field(
        default=DEFAULT_REQUIRED_SCOPE,
        validation_alias=AliasChoices("GITHUB_REQUIRED_SCOPE", "OAUTH_REQUIRED_SCOPE"),
        description="Scope that must be granted before a token is accepted"
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        validation_alias=AliasChoices("USER_AGENT", "OAUTH_USER_AGENT"),
        description="User-Agent sent to the provider API"
    )
    oauth_timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Transport timeout for provider requests"
    )
    oauth_config_path: Optional[str] = Field(
        default=None,
        description="Optional YAML file with provider configs"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "APP_LOG_LEVEL"),
        description="Log level"
    )

    @field_validator("github_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @model_validator(mode="after")
    def default_token_url(self) -> "Settings":
        # Only public GitHub splits the token host from the API host
        if self.github_token_url is None and self.github_url == DEFAULT_GITHUB_URL:
            self.github_token_url = GITHUB_WEB_TOKEN_URL
        return self


settings = Settings()
