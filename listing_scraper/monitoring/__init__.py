"""Monitoring package."""

from .logger import ScrapingLogger, setup_logging

__all__ = ["ScrapingLogger", "setup_logging"]
