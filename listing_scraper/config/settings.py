"""Configuration settings for the listing scraper."""

from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class ScraperSettings(BaseSettings):
    """Scraper configuration."""

    # Only these hosts may be fetched
    allowed_hosts: List[str] = Field(
        default=["markrestelli.com", "www.markrestelli.com"]
    )
    user_agent: str = Field(default="Mozilla/5.0 (compatible; PropertyScraper/1.0)")

    # Timeouts in seconds
    page_timeout: float = Field(default=15.0)
    probe_timeout: float = Field(default=5.0)

    # Photo gallery CDN conventions
    gallery_cdn_host: str = Field(default="moxi.onl")
    gallery_server_count: int = Field(default=10)
    max_gallery_images: int = Field(default=50)
    gallery_size_marker: str = Field(default="_2_")
    gallery_image_suffix: str = Field(default="2_full.jpg")

    # Length of the short description shown on listing cards
    summary_length: int = Field(default=300)

    model_config = {"extra": "ignore", "env_prefix": "SCRAPER_"}


class APISettings(BaseSettings):
    """API configuration."""

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)
    debug: bool = Field(default=False)

    # Bearer token the admin console sends with scrape requests; unset disables the endpoint
    admin_token: str = Field(default="")
    cors_origins: List[str] = Field(default=["*"])

    model_config = {"extra": "ignore", "env_prefix": "API_"}


class Settings(BaseSettings):
    """Main application settings."""

    # Environment
    environment: str = Field(default="development")

    # Logging
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)

    # Component settings
    scraper: ScraperSettings = ScraperSettings()
    api: APISettings = APISettings()

    model_config = {"extra": "ignore", "env_file": ".env", "env_file_encoding": "utf-8"}


# Global settings instance
settings = Settings()
