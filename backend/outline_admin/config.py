"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pathlib import Path
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict

# Project root: outline-admin/
PROJECT_ROOT = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Log at DEBUG regardless of log_level")
    log_level: str = Field(default="INFO", description="Logging level")

    # === Access ===
    admin_password: Optional[str] = Field(
        default=None,
        description="Shared secret that unlocks the console"
    )

    # === Document store ===
    database_url: str = Field(
        default="sqlite:///./outline.db",
        description="Database connection URL for the document store"
    )
    courses_collection: str = Field(default="allGPSArtCourses")
    categories_collection: str = Field(default="artCategories")

    # === Blob store ===
    blob_dir: Path = Field(
        default=Path("./blobs"),
        description="Directory holding uploaded thumbnails"
    )
    blob_public_base_url: Optional[str] = Field(
        default=None,
        description="Public URL prefix for uploaded blobs (defaults to file:// of blob_dir)"
    )

    # === Geocoding API ===
    geocoding_api_url: str = Field(
        default="https://maps.googleapis.com/maps/api/geocode/json",
        description="Reverse geocoding endpoint"
    )
    geocoding_api_key: Optional[str] = Field(default=None)
    geocoding_language: Optional[str] = Field(
        default=None,
        description="Preferred language for place names (e.g. 'ko')"
    )
    geocoding_timeout: float = Field(default=10.0)

    @field_validator('database_url')
    @classmethod
    def fix_postgres_url(cls, v: str) -> str:
        """Fix Render/Railway postgres:// URL to postgresql://"""
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    @field_validator('blob_public_base_url')
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        return v.rstrip("/") if v else v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
