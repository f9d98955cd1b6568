from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, Literal

from pydantic import AnyHttpUrl, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

SANDBOX_API_URL = "https://apitest.authorize.net/xml/v1/request.api"
PRODUCTION_API_URL = "https://api.authorize.net/xml/v1/request.api"


class Settings(BaseSettings):
    """Process configuration read once from the environment at startup."""

    model_config = SettingsConfigDict(
        env_file=(str(Path(__file__).resolve().parents[1] / ".env"), ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    app_name: str = Field(default="Accept Hosted Relay", alias="APP_NAME")
    log_level: Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"] = Field(default="INFO", alias="LOG_LEVEL")
    server_host: str = Field(default="0.0.0.0", alias="SERVER_HOST")
    server_port: int = Field(default=3000, ge=1, le=65535, alias="SERVER_PORT")
    cors_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")

    auth_net_api_login_id: str = Field(alias="AUTH_NET_API_LOGIN_ID")
    auth_net_transaction_key: SecretStr = Field(alias="AUTH_NET_TRANSACTION_KEY")
    auth_net_environment: str = Field(alias="AUTH_NET_ENVIRONMENT")
    auth_net_timeout_seconds: float = Field(default=30.0, gt=0, alias="AUTH_NET_TIMEOUT_SECONDS")

    subscription_name: str = Field(default="BigCommerce Subscription", alias="SUBSCRIPTION_NAME")
    payment_return_url: AnyHttpUrl = Field(
        default="https://yourdomain.com/payment-success",
        alias="PAYMENT_RETURN_URL",
    )
    payment_cancel_url: AnyHttpUrl = Field(
        default="https://yourdomain.com/payment-cancel",
        alias="PAYMENT_CANCEL_URL",
    )
    payment_button_text: str = Field(default="Subscribe", alias="PAYMENT_BUTTON_TEXT")

    @field_validator("auth_net_api_login_id", "auth_net_environment")
    @classmethod
    def require_non_empty(cls, value: str) -> str:
        """Blank values count as missing, same as an unset variable."""
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("auth_net_transaction_key")
    @classmethod
    def require_transaction_key(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper() if isinstance(value, str) else value

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value: str | list[str]) -> list[str]:
        """Support comma-separated CORS origins from environment variables."""
        if isinstance(value, str):
            if not value.strip():
                return []
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @property
    def is_production(self) -> bool:
        return self.auth_net_environment == "production"

    @property
    def gateway_environment(self) -> str:
        return "production" if self.is_production else "sandbox"

    @property
    def auth_net_api_url(self) -> str:
        return PRODUCTION_API_URL if self.is_production else SANDBOX_API_URL


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""
    return Settings()
