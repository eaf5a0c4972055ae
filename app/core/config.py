"""Configuration management for Requestarr."""

from pydantic import PositiveInt, SecretStr, field_validator
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from urllib.parse import urlparse


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Radarr
    radarr_hostname: str | None = None
    radarr_port: PositiveInt = 7878
    radarr_use_ssl: bool = False
    radarr_base_url: str = ""  # URL prefix when Radarr sits behind a reverse proxy
    radarr_api_key: SecretStr | None = None
    radarr_timeout: PositiveInt = 30  # Request timeout in seconds
    radarr_retries: int = 0  # Transport-level retries, 0 disables them

    # Network settings
    # Proxy configuration in the format http://host:port or socks5://host:port
    proxy: str | None = None

    # Basic auth, enabled only when both are set
    auth_username: str | None = None
    auth_password: SecretStr | None = None

    @field_validator("radarr_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            raise ValueError("Radarr base URL must start with '/'")
        return v

    @field_validator("radarr_retries")
    @classmethod
    def validate_retries(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Radarr retries must not be negative")
        return v

    @field_validator("proxy")
    @classmethod
    def validate_proxy(cls, v: str | None) -> str | None:
        if v is None:
            return v

        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https", "socks4", "socks5", "socks5h"):
            raise ValueError(
                "Proxy must be a valid URL with scheme http/https/socks4/socks5/socks5h"
            )
        if not parsed.netloc:
            raise ValueError("Proxy must have a host and port")
        return v

    @property
    def radarr_configured(self) -> bool:
        return bool(self.radarr_hostname and self.radarr_api_key)

    # App settings
    debug: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
