"""Scrapers package."""

from .base_scraper import BaseScraper, InvalidListingUrlError, ListingFetchError, ScrapingError
from .field_rules import ListingFieldExtractor, parse_address, slugify
from .gallery import GalleryDiscoverer, find_representative_image
from .listing_scraper import ListingScraper, scrape_listing, validate_listing_url

__all__ = [
    "BaseScraper",
    "GalleryDiscoverer",
    "InvalidListingUrlError",
    "ListingFetchError",
    "ListingFieldExtractor",
    "ListingScraper",
    "ScrapingError",
    "find_representative_image",
    "parse_address",
    "scrape_listing",
    "slugify",
    "validate_listing_url"
]
