"""Photo gallery discovery for listings hosted on the image CDN.

The CDN has no listing API. Gallery photos follow a sequential naming scheme
(``https://i<server>.<cdn>/<account>/<listing>/<hash>/<index>_<size>_<variant>.<ext>``)
with indexes spread round-robin over numbered edge servers, so the gallery is
reconstructed by probing indexes in order until the first one that is missing.
"""

import logging
import re
from typing import List, Optional
from bs4 import BeautifulSoup

from ..config import ScraperSettings, settings
from .base_scraper import BaseScraper

logger = logging.getLogger(__name__)

IMAGE_ATTRIBUTES = ("src", "srcset", "data-srcset", "style")


def _cdn_host(config: ScraperSettings) -> str:
    return re.escape(config.gallery_cdn_host)


def gallery_path(image_url: str, config: Optional[ScraperSettings] = None) -> Optional[str]:
    """Return the stable ``account/listing/hash`` part of a gallery image URL.

    Returns None when the URL does not follow the CDN's naming scheme.
    """
    config = config or settings.scraper
    pattern = re.compile(
        rf"https://i\d+\.{_cdn_host(config)}/([^/]+/[^/]+/[^/]+)/\d+_\d+_\w+\.\w+"
    )
    match = pattern.match(image_url)
    return match.group(1) if match else None


def server_for_index(index: int, config: Optional[ScraperSettings] = None) -> int:
    """Edge server hosting the 1-based gallery ``index``."""
    config = config or settings.scraper
    return ((index - 1) % config.gallery_server_count) + 1


def candidate_url(path: str, index: int, config: Optional[ScraperSettings] = None) -> str:
    """Build the full-size image URL for ``index`` within a gallery ``path``."""
    config = config or settings.scraper
    server = server_for_index(index, config)
    return (
        f"https://i{server}.{config.gallery_cdn_host}/{path}/"
        f"{index}_{config.gallery_image_suffix}"
    )


def find_representative_image(soup: BeautifulSoup, config: Optional[ScraperSettings] = None) -> str:
    """Return the first medium-size CDN image referenced by the page, or "".

    Elements are visited in document order and, for each one, its ``src``,
    ``srcset``, ``data-srcset`` and inline ``background-image`` URLs.
    """
    config = config or settings.scraper
    cdn_url = re.compile(rf"https://i\d+\.{_cdn_host(config)}/[^\s,'\")]+")
    style_url = re.compile(
        rf"url\(\s*['\"]?(https://i\d+\.{_cdn_host(config)}/[^'\")\s]+)"
    )

    for element in soup.find_all(True):
        for attribute in IMAGE_ATTRIBUTES:
            value = element.get(attribute)
            if not value or not isinstance(value, str):
                continue
            pattern = style_url if attribute == "style" else cdn_url
            for url in pattern.findall(value):
                if config.gallery_size_marker in url:
                    return url

    return ""


class GalleryDiscoverer:
    """Enumerates a listing's gallery by probing sequential image URLs."""

    def __init__(self, scraper: BaseScraper, config: Optional[ScraperSettings] = None):
        """Initialize the discoverer.

        Args:
            scraper: Scraper whose session issues the HEAD probes
            config: Scraper settings, defaults to the global settings
        """
        self.scraper = scraper
        self.config = config or settings.scraper

    def discover(self, base_image_url: str) -> List[str]:
        """Return every gallery image for the listing ``base_image_url`` belongs to.

        Probes run strictly in index order and the first failed probe ends the
        gallery, so the result is always a contiguous run starting at index 1.
        Falls back to ``[base_image_url]`` when the URL is not a gallery image
        or no probe succeeds.
        """
        path = gallery_path(base_image_url, self.config)
        if path is None:
            logger.debug(f"Not a gallery image URL: {base_image_url}")
            return [base_image_url]

        images: List[str] = []
        for index in range(1, self.config.max_gallery_images + 1):
            url = candidate_url(path, index, self.config)
            if not self.scraper.make_head_request(url, timeout=self.config.probe_timeout):
                break
            images.append(url)

        logger.info(f"Discovered {len(images)} gallery images under {path}")
        return images or [base_image_url]
