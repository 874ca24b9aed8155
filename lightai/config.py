"""
Configuration management for LightAI.
Supports environment variables and an optional .env file.
"""
from typing import Any, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PORT = 3000

_TRUTHY = ("1", "true", "yes")


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Server settings
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT

    # OpenAI provider
    openai_api_key: Optional[str] = None
    use_openai: bool = False
    openai_model: str = "gpt-3.5-turbo"
    openai_max_tokens: int = 500
    openai_temperature: float = 0.7
    openai_base_url: str = "https://api.openai.com/v1"
    openai_timeout: float = 30.0

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @field_validator("use_openai", mode="before")
    @classmethod
    def _parse_flag(cls, value: Any) -> bool:
        # Only 1/true/yes enable remote routing; anything else means off.
        if isinstance(value, bool):
            return value
        return str(value or "").strip().lower() in _TRUTHY

    @field_validator("port", mode="before")
    @classmethod
    def _parse_port(cls, value: Any) -> int:
        try:
            port = int(value)
        except (TypeError, ValueError):
            return DEFAULT_PORT
        return port or DEFAULT_PORT

    @field_validator("openai_api_key", mode="before")
    @classmethod
    def _blank_key_is_none(cls, value: Any) -> Optional[str]:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def openai_configured(self) -> bool:
        return self.openai_api_key is not None

