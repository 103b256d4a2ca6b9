"""
Configuration settings for the Spark service.
All sensitive values are loaded from environment variables.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "Spark"
    debug: bool = Field(default=False)
    environment: str = Field(default="production")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Database (PostgreSQL)
    database_url: str = Field(default="")
    database_echo: bool = Field(default=False)
    db_pool_size: int = Field(default=5)
    db_max_overflow: int = Field(default=10)
    db_pool_timeout: int = Field(default=30)
    db_pool_recycle: int = Field(default=1800)

    # Groq (OpenAI-compatible API)
    groq_api_key: str = Field(default="")
    groq_base_url: str = Field(default="https://api.groq.com/openai/v1")
    spark_model: str = Field(default="llama-3.3-70b-versatile")
    spark_temperature: float = Field(default=0.7)
    spark_max_tokens: int = Field(default=500)

    # Identity provider
    auth_url: str = Field(default="")
    auth_api_key: str = Field(default="")
    auth_cookie_name: str = Field(default="sb-access-token")

    # Rate limiting
    rate_limit_enabled: bool = Field(default=True)
    rate_limit_default: str = Field(default="60/minute")
    rate_limit_generate: str = Field(default="10/minute")
    redis_url: str = Field(default="")


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get the application settings."""
    return settings
