"""Scraper for single listing pages on the agent's site."""

import time
from typing import Optional
from urllib.parse import urlparse
import requests

from ..config import settings
from ..models.listing_models import ListingStatus, ScrapedListing
from ..monitoring.logger import ScrapingLogger
from .base_scraper import BaseScraper, InvalidListingUrlError, ScrapingError
from .field_rules import ListingFieldExtractor, slugify
from .gallery import GalleryDiscoverer, find_representative_image


def validate_listing_url(url: str) -> str:
    """Check that ``url`` points at an allowed listing host.

    Raises:
        InvalidListingUrlError: If the URL cannot be parsed or its host is not allowed
    """
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError:
        raise InvalidListingUrlError(f"Invalid listing URL: {url}")

    if parsed.scheme not in ("http", "https") or not hostname:
        raise InvalidListingUrlError(f"Invalid listing URL: {url}")

    if hostname not in settings.scraper.allowed_hosts:
        hosts = " or ".join(sorted(settings.scraper.allowed_hosts))
        raise InvalidListingUrlError(f"Only {hosts} URLs are supported")

    return url


class ListingScraper(BaseScraper):
    """Turns a listing page into a ScrapedListing draft for the admin console."""

    def __init__(self, session: Optional[requests.Session] = None):
        super().__init__("listing", session=session)
        self.extractor = ListingFieldExtractor()
        self.gallery = GalleryDiscoverer(self)

    def fetch_page(self, url: str) -> requests.Response:
        """Download the listing page.

        Raises:
            ListingFetchError: On timeouts, connection errors and non-2xx responses
        """
        response = self.make_request(
            url,
            timeout=settings.scraper.page_timeout,
            headers={'User-Agent': settings.scraper.user_agent},
        )
        return response

    def scrape_listing(self, url: str) -> ScrapedListing:
        """Scrape a listing page into a draft record.

        The host is validated before any request is made. Fields missing from
        the page are left at their sentinel values; only invalid input and
        transport failures raise.

        Args:
            url: Listing page URL

        Returns:
            ScrapedListing: Fully populated draft

        Raises:
            ScrapingError: If the URL is rejected or the page cannot be scraped
        """
        validate_listing_url(url)

        scrape_log = ScrapingLogger(self.name, url=url)
        scrape_log.log_scrape_start()
        start_time = time.time()

        try:
            soup = self.parse_response(self.fetch_page(url))
            fields = self.extractor.extract(soup)

            images = []
            base_image_url = find_representative_image(soup)
            if base_image_url:
                images = self.gallery.discover(base_image_url)
                scrape_log.log_gallery_discovered(base_image_url, len(images))
        except ScrapingError as e:
            scrape_log.log_error(e)
            raise
        except Exception as e:
            scrape_log.log_error(e)
            raise ScrapingError(f"Failed to scrape listing: {e}") from e

        full_description = fields.pop("full_description")
        listing = ScrapedListing(
            slug=slugify(fields["title"]),
            image_url=images[0] if images else "",
            images=images,
            description=full_description[:settings.scraper.summary_length],
            full_description=full_description,
            status=ListingStatus.ACTIVE,
            **fields,
        )

        scrape_log.log_scrape_complete(
            defaulted_fields=self.extractor.defaulted_fields(fields),
            image_count=len(images),
            processing_time=time.time() - start_time,
        )
        return listing


def scrape_listing(url: str) -> ScrapedListing:
    """Scrape ``url`` with a fresh scraper and session."""
    with ListingScraper() as scraper:
        return scraper.scrape_listing(url)
