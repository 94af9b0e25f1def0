"""
Configuration settings for the cloudBit notifications client.

Settings are loaded from environment variables (prefix ``CLOUDBITS_``) and an
optional ``.env`` file. Each NotificationManager works from an immutable
ClientConfig derived from these settings unless one is passed explicitly.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_API_URL = "https://api-http.littlebitscc.com"


class Settings(BaseSettings):
    """
    Process-wide configuration loaded from environment variables.
    """
    model_config = SettingsConfigDict(
        env_prefix="CLOUDBITS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Authentication
    token: str = ""

    # Endpoints
    api_url: str = DEFAULT_API_URL
    subscriptions_url: Optional[str] = None  # defaults to <api_url>/subscriptions

    # Callback used when no subscriber id is given
    callback_url: str = "http://localhost:8080/cloudbits/notifications"
    callback_auth_token: Optional[str] = None

    # HTTP
    timeout: float = 30.0

    # Optional JSON file overriding the default event mapping table
    event_mappings_file: Optional[str] = None

    @model_validator(mode="after")
    def _default_subscriptions_url(self) -> "Settings":
        if not self.subscriptions_url:
            self.subscriptions_url = f"{self.api_url.rstrip('/')}/subscriptions"
        return self

    def client_config(self, token: Optional[str] = None) -> "ClientConfig":
        """
        Build a ClientConfig from these settings.

        Args:
            token: Auth token to use instead of the configured default

        Returns:
            An immutable ClientConfig
        """
        return ClientConfig(
            auth_token=token or self.token,
            subscriptions_url=self.subscriptions_url,
            callback_url=self.callback_url,
            callback_auth_token=self.callback_auth_token,
        )


class ClientConfig(BaseModel):
    """Immutable per-client configuration."""
    model_config = ConfigDict(frozen=True)

    auth_token: str = Field(default="", description="Token sent as the Bearer credential.")
    subscriptions_url: str = Field(..., description="Full URL of the subscriptions endpoint.")
    callback_url: str = Field(..., description="Callback URL used to derive default subscriber ids.")
    callback_auth_token: Optional[str] = Field(
        default=None,
        description="Token appended to the callback URL. Falls back to auth_token when unset.",
    )

    @property
    def default_subscriber_id(self) -> str:
        """Subscriber id used when the caller does not supply one."""
        token = self.callback_auth_token or self.auth_token
        return f"{self.callback_url}?auth_token={token}"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
