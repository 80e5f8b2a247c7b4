"""Base scraper class with session handling and common functionality."""

import logging
from typing import Optional
import requests
from bs4 import BeautifulSoup

from ..config import settings


class ScrapingError(Exception):
    """Custom exception for scraping errors."""
    pass


class InvalidListingUrlError(ScrapingError):
    """Exception raised when a URL is not an allowed listing URL."""
    pass


class ListingFetchError(ScrapingError):
    """Exception raised when the listing page cannot be fetched."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BaseScraper:
    """Base scraper owning the HTTP session used for every request."""

    def __init__(self, name: str, session: Optional[requests.Session] = None):
        """Initialize the base scraper.

        Args:
            name: Name used for the scraper's logger
            session: Optional pre-built session, mainly for tests
        """
        self.name = name
        self.logger = logging.getLogger(f"{__name__}.{name}")
        self.session = session

    def _setup_session(self) -> requests.Session:
        """Set up a requests session with headers."""
        session = requests.Session()
        session.headers.update({
            'User-Agent': settings.scraper.user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.5',
        })
        return session

    def get_session(self) -> requests.Session:
        """Get or create a requests session."""
        if not self.session:
            self.session = self._setup_session()
        return self.session

    def make_request(self, url: str, timeout: float, **kwargs) -> requests.Response:
        """Make a GET request, failing on transport errors and non-2xx responses.

        Args:
            url: The URL to request
            timeout: Timeout in seconds
            **kwargs: Additional arguments for requests

        Returns:
            requests.Response: The response object

        Raises:
            ListingFetchError: If the request fails or returns a non-2xx status
        """
        session = self.get_session()

        try:
            response = session.get(url, timeout=timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Request failed for {url}: {e}")
            raise ListingFetchError(f"Failed to fetch listing: {e}")

        if not 200 <= response.status_code < 300:
            self.logger.warning(f"Fetching {url} returned status {response.status_code}")
            raise ListingFetchError(
                f"Failed to fetch listing: {response.status_code}",
                status_code=response.status_code
            )

        return response

    def make_head_request(self, url: str, timeout: float) -> bool:
        """Issue a HEAD request and report whether it succeeded with a 2xx.

        Transport errors and timeouts count as a failed probe, not an error.
        """
        session = self.get_session()

        try:
            response = session.head(url, timeout=timeout, allow_redirects=True)
        except requests.exceptions.RequestException as e:
            self.logger.debug(f"HEAD {url} failed: {e}")
            return False

        return 200 <= response.status_code < 300

    def parse_html(self, html, from_encoding: Optional[str] = None) -> BeautifulSoup:
        """Parse HTML content with BeautifulSoup.

        Args:
            html: HTML content to parse, as text or raw bytes
            from_encoding: Encoding of ``html`` when it is bytes, if known

        Returns:
            BeautifulSoup: Parsed HTML object
        """
        if isinstance(html, bytes):
            return BeautifulSoup(html, 'html.parser', from_encoding=from_encoding)
        return BeautifulSoup(html, 'html.parser')

    def parse_response(self, response: requests.Response) -> BeautifulSoup:
        """Parse a fetched page from its raw bytes.

        The charset from the Content-Type header is used only when the server
        actually sent one. Otherwise BeautifulSoup picks the encoding from a
        <meta charset> or the bytes themselves, instead of the ISO-8859-1
        that requests assumes for any text/* response.
        """
        content_type = response.headers.get('Content-Type', '')
        declared = response.encoding if 'charset=' in content_type.lower() else None
        return self.parse_html(response.content, from_encoding=declared)

    def cleanup(self):
        """Clean up resources."""
        if self.session:
            try:
                self.session.close()
            except Exception as e:
                self.logger.error(f"Error closing session: {e}")
            finally:
                self.session = None

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.cleanup()
