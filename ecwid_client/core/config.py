"""
Centralised configuration for the Ecwid client.

Settings are loaded from environment variables (or a .env file) using
Pydantic Settings so that values are validated when the client starts.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from ecwid_client.version import get_version


class Settings(BaseSettings):
    """
    Library settings backed by Pydantic Settings.

    Every value can be overridden from the environment; the defaults are
    suitable for development against the public legacy API.
    """

    # === BASIC ===
    APP_NAME: str = "ecwid-client"
    APP_VERSION: str = Field(default_factory=get_version)
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # === ECWID LEGACY API ===
    ECWID_API_URL: str = Field(default="https://app.ecwid.com/api/v1/")
    ECWID_SHOP_ID: Optional[int] = Field(default=None)
    ECWID_ORDERS_TOKEN: Optional[str] = Field(default=None)
    ECWID_PRODUCTS_TOKEN: Optional[str] = Field(default=None)
    # Server-side maximum page size for the orders endpoint
    ECWID_MAX_PAGE_SIZE: int = Field(default=200)

    # === HTTP ===
    HTTP_TIMEOUT_SECONDS: float = Field(default=30.0)
    HTTP_CONNECT_TIMEOUT_SECONDS: float = Field(default=10.0)

    # === LOGGING ===
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE_PATH: Optional[str] = Field(default=None)
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)
    LOG_FORMAT: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    @field_validator("ECWID_API_URL")
    @classmethod
    def validate_api_url(cls, v):
        """The API URL must be absolute and end with a slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("ECWID_API_URL must start with http:// or https://")
        if not v.endswith("/"):
            v = f"{v}/"
        return v

    @field_validator("ECWID_MAX_PAGE_SIZE")
    @classmethod
    def validate_max_page_size(cls, v):
        if v < 1:
            raise ValueError("ECWID_MAX_PAGE_SIZE must be positive")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate that the log level is a known one."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {valid_levels}")
        return v.upper()

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT must be one of: {valid_envs}")
        return v.lower()

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    def get_default_headers(self) -> dict:
        """
        Headers sent with every request to Ecwid.

        Returns:
            dict: Default headers
        """
        return {
            "Accept": "application/json",
            "User-Agent": f"{self.APP_NAME}/{self.APP_VERSION}",
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Return the cached settings instance.

    Returns:
        Settings: Settings instance
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Reload settings from the environment (useful in tests).

    Returns:
        Settings: Fresh settings instance
    """
    get_settings.cache_clear()
    return get_settings()
