"""Configuration management using pydantic-settings."""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Library and CLI defaults loaded from READEOF_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="READEOF_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Decoding
    encoding: str = Field(default="utf-8", description="Text encoding used to decode file content")
    decode_errors: str = Field(default="replace", description="Codec error handler for undecodable bytes")

    # Reading
    buffer_size: int = Field(default=16 * 1024, ge=1, description="Chunk size in bytes for each read")
    poll_interval: float = Field(default=1.0, gt=0, description="Seconds between polls when following a file")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_file: Optional[str] = Field(default=None, description="Optional log file path")


# Global settings instance
settings = Settings()
