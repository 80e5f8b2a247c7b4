"""Listing scraper for the agent site's admin console."""

from .models import ScrapedListing
from .scrapers import ScrapingError, scrape_listing, slugify

__version__ = "1.0.0"

__all__ = ["ScrapedListing", "ScrapingError", "scrape_listing", "slugify"]
