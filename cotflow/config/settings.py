"""
Global settings from environment variables.
"""

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class CotflowSettings(BaseSettings):
    """
    Global configuration loaded from environment variables.

    Environment variables should be prefixed with COTFLOW_
    Example: COTFLOW_DEBUG=true, COTFLOW_MODEL_CALL_TIMEOUT=60
    """

    model_config = SettingsConfigDict(
        env_prefix="COTFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        protected_namespaces=(),
    )

    # Core settings
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Timeouts (seconds)
    agent_lookup_timeout: float = Field(default=30.0, gt=0)
    model_call_timeout: float = Field(default=30.0, gt=0)
    tool_call_timeout: float = Field(default=30.0, gt=0)

    # Reasoning loop
    default_max_iteration: int = Field(default=3, ge=1)

    # Agent definitions
    agents_dir: str | None = None

    # Model provider
    openai_api_key: SecretStr | None = None
    openai_base_url: str | None = None

    # Memory backend
    redis_url: str | None = None

    # Search backend used by SearchIndexTool
    search_base_url: str | None = None

    # HTTP API
    api_host: str = "0.0.0.0"
    api_port: int = 8900


# Global settings instance (singleton)
settings = CotflowSettings()


__all__ = ["CotflowSettings", "settings"]
