"""
Console configuration using Pydantic Settings.
Loads environment variables and provides type-safe configuration.
"""

from typing import List, Optional
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


DEFAULT_PROOF_EXTENSIONS = ["pdf", "jpg", "jpeg", "png"]
DEFAULT_PROOF_MIME_TYPES = ["application/pdf", "image/jpeg", "image/jpg", "image/png"]


def _split_csv(value, default: List[str]) -> List[str]:
    if value is None:
        return list(default)
    if isinstance(value, str):
        if not value.strip():
            return list(default)
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class Settings(BaseSettings):
    """Console settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="development", description="Current environment")
    debug: bool = Field(default=False, description="Debug mode, enables request tracing")

    # Backend API
    api_base_url: str = Field(default="http://localhost:3000/api", description="REST backend root")
    request_timeout_seconds: Optional[float] = Field(
        default=None,
        description="Per-request timeout; None keeps the HTTP library default"
    )
    login_path: str = Field(default="/login", description="Login entry point after a 401")

    # Search
    search_debounce_ms: int = Field(default=300)
    search_min_length: int = Field(default=2)

    # Pagination
    default_page_size: int = Field(default=25)
    max_page_size: int = Field(default=200)
    movement_page_size: int = Field(default=15)

    # Payment proof upload
    max_upload_size_mb: int = Field(default=5)
    allowed_proof_extensions: str | List[str] = Field(
        default=",".join(DEFAULT_PROOF_EXTENSIONS), validate_default=True
    )
    allowed_proof_mime_types: str | List[str] = Field(
        default=",".join(DEFAULT_PROOF_MIME_TYPES), validate_default=True
    )

    @field_validator("allowed_proof_extensions", mode="before")
    @classmethod
    def parse_proof_extensions(cls, v):
        """Parse proof extensions from comma-separated string or list."""
        return [ext.lower().lstrip(".") for ext in _split_csv(v, DEFAULT_PROOF_EXTENSIONS)]

    @field_validator("allowed_proof_mime_types", mode="before")
    @classmethod
    def parse_proof_mime_types(cls, v):
        """Parse proof MIME types from comma-separated string or list."""
        return [mime.lower() for mime in _split_csv(v, DEFAULT_PROOF_MIME_TYPES)]

    @field_validator("search_debounce_ms")
    @classmethod
    def check_debounce_window(cls, v: int) -> int:
        if not 300 <= v <= 500:
            raise ValueError("search_debounce_ms must be between 300 and 500")
        return v

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def max_upload_size_bytes(self) -> int:
        """Get max upload size in bytes."""
        return self.max_upload_size_mb * 1024 * 1024

    @property
    def search_debounce_seconds(self) -> float:
        return self.search_debounce_ms / 1000


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Use this function to get settings throughout the console.
    """
    return Settings()
