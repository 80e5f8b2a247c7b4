"""Logging configuration and setup."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import List, Optional
import structlog

from ..config import settings


def setup_logging(log_file: Optional[str] = None, log_level: Optional[str] = None) -> None:
    """Set up structured logging for the application.

    Args:
        log_file: Optional log file path
        log_level: Logging level
    """
    # Use settings if parameters not provided
    if log_file is None:
        log_file = settings.log_file
    if log_level is None:
        log_level = settings.log_level

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, log_level.upper())
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(
            '{"timestamp": "%(asctime)s", "logger": "%(name)s", "level": "%(levelname)s", "message": "%(message)s"}'
        ))
        root_logger.addHandler(file_handler)

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("fastapi").setLevel(logging.INFO)
    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logging.info(f"Logging configured - Level: {log_level}, File: {log_file}")


class ScrapingLogger:
    """Specialized logger for a single listing scrape."""

    def __init__(self, scraper_name: str, url: Optional[str] = None):
        """Initialize scraping logger.

        Args:
            scraper_name: Name of the scraper
            url: Listing URL being scraped, bound to every event
        """
        self.scraper_name = scraper_name
        self.logger = structlog.get_logger(f"scraper.{scraper_name}")

        if url:
            self.logger = self.logger.bind(url=url)

    def log_scrape_start(self):
        """Log start of a listing scrape."""
        self.logger.info("Scraping started", scraper=self.scraper_name)

    def log_gallery_discovered(self, base_image_url: str, image_count: int):
        """Log the outcome of gallery probing.

        Args:
            base_image_url: Representative image the gallery was derived from
            image_count: Number of images in the gallery
        """
        self.logger.info(
            "Gallery discovered",
            base_image_url=base_image_url,
            image_count=image_count,
            scraper=self.scraper_name
        )

    def log_scrape_complete(self, defaulted_fields: List[str], image_count: int,
                            processing_time: float):
        """Log completion of a listing scrape.

        Args:
            defaulted_fields: Fields left at their "not found" sentinel
            image_count: Number of gallery images
            processing_time: Total processing time in seconds
        """
        self.logger.info(
            "Scraping completed",
            defaulted_fields=defaulted_fields,
            image_count=image_count,
            processing_time=processing_time,
            scraper=self.scraper_name
        )

    def log_error(self, error: Exception, context: dict = None):
        """Log an error with context.

        Args:
            error: Exception that occurred
            context: Additional context information
        """
        self.logger.error(
            "Scraping error",
            error=str(error),
            error_type=type(error).__name__,
            context=context or {},
            scraper=self.scraper_name,
            exc_info=True
        )
