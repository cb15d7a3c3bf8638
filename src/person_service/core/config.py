"""Configuration management for the person service.

Uses Pydantic Settings for type-safe, environment-based configuration.
"""

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
load_dotenv(override=False)

DEFAULT_ENCRYPTION_KEY = "default-key-for-dev"


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # App configuration
    app_name: str = Field("person-service", alias="PERSON_SERVICE_APP_NAME")
    version: str = Field("0.0.0-dev", alias="PERSON_SERVICE_VERSION")
    environment: str = Field("development", alias="PERSON_SERVICE_ENVIRONMENT")
    debug: bool = Field(False, alias="PERSON_SERVICE_DEBUG")

    # API configuration
    api_host: str = Field("0.0.0.0", alias="HOST")
    api_port: int = Field(3000, alias="PORT")

    # Database configuration
    database_url: str = Field(alias="DATABASE_URL")
    # 25 connections at most, matching the service's historical pool ceiling
    database_pool_size: int = Field(5, alias="PERSON_SERVICE_DB_POOL_SIZE")
    database_max_overflow: int = Field(20, alias="PERSON_SERVICE_DB_MAX_OVERFLOW")
    database_pool_timeout: int = Field(30, alias="PERSON_SERVICE_DB_POOL_TIMEOUT")
    database_pool_recycle: int = Field(300, alias="PERSON_SERVICE_DB_POOL_RECYCLE")

    # API key credential slots (blue/green rotation)
    person_api_key_blue: str | None = Field(None, alias="PERSON_API_KEY_BLUE")
    person_api_key_green: str | None = Field(None, alias="PERSON_API_KEY_GREEN")

    # Attribute encryption
    encryption_key: str = Field(DEFAULT_ENCRYPTION_KEY, alias="ENCRYPTION_KEY_1")
    encryption_key_version: int = Field(1, alias="ENCRYPTION_KEY_VERSION")

    # Logging configuration
    log_level: str = Field("INFO", alias="PERSON_SERVICE_LOG_LEVEL")
    log_format: str = Field("text", alias="PERSON_SERVICE_LOG_FORMAT")  # text or json
    log_file: str | None = Field(None, alias="PERSON_SERVICE_LOG_FILE")

    @property
    def api_key_slots(self) -> list[tuple[str, str | None]]:
        """Configured API keys in evaluation order."""
        return [
            ("blue", self.person_api_key_blue),
            ("green", self.person_api_key_green),
        ]

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL format and select the asyncpg driver."""
        if not v:
            raise ValueError("DATABASE_URL must be set (DB_001_URL_NOT_SET)")
        if v.startswith("postgres://"):
            v = "postgresql://" + v[len("postgres://") :]
        if v.startswith("postgresql://"):
            v = "postgresql+asyncpg://" + v[len("postgresql://") :]
        if not v.startswith("postgresql+asyncpg://"):
            raise ValueError("Database URL must be PostgreSQL")
        return v

    @field_validator("api_port")
    @classmethod
    def validate_api_port(cls, v: int) -> int:
        """Validate listen port."""
        if not 0 < v < 65536:
            raise ValueError(f"Invalid PORT value: {v} (DB_002_INVALID_PORT)")
        return v

    @field_validator("encryption_key", mode="before")
    @classmethod
    def default_empty_encryption_key(cls, v: str | None) -> str:
        # An empty ENCRYPTION_KEY_1 behaves like an unset one
        return v or DEFAULT_ENCRYPTION_KEY

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = ["text", "json"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment setting."""
        valid_environments = ["development", "staging", "production"]
        if v.lower() not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v.lower()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        populate_by_name=True,
        extra="ignore",
    )


def get_settings() -> Settings:
    """Build a fresh settings instance from the environment."""
    return Settings()  # type: ignore[call-arg]


# Global settings instance - will be created when first accessed
settings = None


def get_settings_instance() -> Settings:
    """Get the global settings instance, creating it if necessary."""
    global settings  # noqa: PLW0603
    if settings is None:
        settings = get_settings()
    return settings
