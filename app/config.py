"""Configuration management - loads environment variables into typed settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from desk_commands.core.config import CommandConfig
from desk_commands.core.paths import resolve_app_data_dir


class Settings(BaseSettings):
    """Bridge settings loaded from DESK_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DESK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Bridge Server Configuration
    host: str = Field(default="127.0.0.1", description="Host for the command bridge to listen on")
    port: int = Field(default=8765, description="Port for the command bridge to listen on")

    # Application Data
    app_identifier: str = Field(
        default="com.desk.app",
        description="Identifier naming the per-user application data directory",
    )
    app_data_dir: Path | None = Field(
        default=None,
        description="Explicit application data directory (overrides the platform default)",
    )

    # Transcription
    upstream_timeout_s: float = Field(
        default=300.0,
        description="Total timeout for the transcription request (seconds)",
    )
    upstream_connect_timeout_s: float = Field(
        default=10.0,
        description="Connection timeout for the transcription request (seconds)",
    )
    audio_max_upload_bytes: int = Field(
        default=25_000_000,
        description="Largest audio clip accepted for transcription (bytes)",
    )

    # Security Configuration
    shell_token: str | None = Field(
        default=None,
        description="If set, /invoke/* requires the header X-Shell-Token: <token>",
    )
    allow_origins: str = Field(
        default="",
        description="CORS allowed origins (comma-separated list, empty = no CORS)",
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port is in valid range."""
        if not (1 <= v <= 65535):
            raise ValueError(f"port must be between 1 and 65535, got {v}")
        return v

    @field_validator("upstream_timeout_s", "upstream_connect_timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate timeout is positive."""
        if v <= 0:
            raise ValueError(f"Timeout must be positive, got {v}")
        return v

    @field_validator("audio_max_upload_bytes")
    @classmethod
    def validate_upload_limit(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"audio_max_upload_bytes must be positive, got {v}")
        return v

    @field_validator("app_identifier")
    @classmethod
    def validate_app_identifier(cls, v: str) -> str:
        """Validate the identifier is a single path component."""
        v = v.strip()
        if not v or "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError(f"app_identifier must be a single directory name, got {v!r}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got {v}")
        return v.upper()

    @property
    def allow_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        if not self.allow_origins:
            return []
        return [origin.strip() for origin in self.allow_origins.split(",") if origin.strip()]

    def resolve_app_data_dir(self) -> Path:
        """Return the configured data directory, or the platform default for app_identifier."""
        if self.app_data_dir is not None:
            return self.app_data_dir
        return resolve_app_data_dir(self.app_identifier)

    def command_config(self) -> CommandConfig:
        """Build the library config used by the transcription command."""
        return CommandConfig(
            timeout_s=self.upstream_timeout_s,
            connect_timeout_s=self.upstream_connect_timeout_s,
            audio_max_upload_bytes=self.audio_max_upload_bytes,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Settings are loaded from environment variables and .env file on first call.
    Subsequent calls return the cached instance.

    Raises:
        ValueError: If settings are invalid.

    Returns:
        Settings: The validated settings instance.
    """
    try:
        return Settings()
    except Exception as e:
        raise ValueError(
            f"Failed to load configuration: {e}\n"
            "Please check your .env file and DESK_* environment variables."
        ) from e
