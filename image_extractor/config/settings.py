"""
Configuration management using Pydantic Settings.

Environment variables:
- MAX_IMAGE_SIZE: Maximum payload size in bytes (default 50MB)
- ALLOWED_DOMAINS: Comma-separated URL host allow-list (empty = unrestricted)
- DEFAULT_MAX_WIDTH / DEFAULT_MAX_HEIGHT: Output image bounds in pixels
- COMPRESSION_QUALITY: Lossy quality, 1-100
- PNG_COMPRESSION_LEVEL: Lossless compression level, 0-9
- PDF_DPI: Default rendering resolution for PDF pages
- PDF_DETECTION_POLICY: 'hints' (magic bytes, then MIME/extension) or 'magic'
- HTTP_TIMEOUT: Timeout for URL downloads in seconds
- LOG_LEVEL: Logging level
"""
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.constants import (
    DEFAULT_COMPRESSION_QUALITY,
    DEFAULT_MAX_HEIGHT,
    DEFAULT_MAX_IMAGE_SIZE,
    DEFAULT_MAX_WIDTH,
    DEFAULT_PDF_DPI,
    DEFAULT_PNG_COMPRESSION_LEVEL,
    MAX_PDF_DPI,
    MIN_PDF_DPI
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Payload limits
    max_image_size: int = Field(default=DEFAULT_MAX_IMAGE_SIZE, gt=0)
    allowed_domains: str = Field(default="")

    # Output bounds
    default_max_width: int = Field(default=DEFAULT_MAX_WIDTH, gt=0)
    default_max_height: int = Field(default=DEFAULT_MAX_HEIGHT, gt=0)

    # Compression
    compression_quality: int = Field(default=DEFAULT_COMPRESSION_QUALITY, ge=1, le=100)
    png_compression_level: int = Field(default=DEFAULT_PNG_COMPRESSION_LEVEL, ge=0, le=9)

    # PDF rendering
    pdf_dpi: int = Field(default=DEFAULT_PDF_DPI, ge=MIN_PDF_DPI, le=MAX_PDF_DPI)
    pdf_detection_policy: str = Field(default="hints", pattern="^(hints|magic)$")

    # Network
    http_timeout: float = Field(default=30.0, gt=0)

    # API Configuration
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8003)

    log_level: str = Field(default="INFO")

    def get_allowed_domains(self) -> List[str]:
        """Get the domain allow-list as a list."""
        return [d.strip().lower() for d in self.allowed_domains.split(',') if d.strip()]

    def get_compression_params(self) -> dict:
        """Get compression settings as dictionary."""
        return {
            'quality': self.compression_quality,
            'compression_level': self.png_compression_level,
        }


# Global settings instance
settings = Settings()
