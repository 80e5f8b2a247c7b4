"""Admin scraping routes."""

import logging
from typing import Optional
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...models.listing_models import ScrapedListing
from ...scrapers import ScrapingError, scrape_listing
from ..auth import require_admin

logger = logging.getLogger(__name__)

router = APIRouter()


class ScrapeRequest(BaseModel):
    """Scrape request model."""
    url: Optional[str] = None


@router.post(
    "/scrape",
    response_model=ScrapedListing,
    responses={400: {"description": "Missing URL or failed scrape"}},
    dependencies=[Depends(require_admin)],
)
def scrape(scrape_request: ScrapeRequest):
    """Scrape a listing page into a draft for the admin form.

    Args:
        scrape_request: Request carrying the listing URL

    Returns:
        ScrapedListing: Draft listing, or a 400 with a ``message`` on failure
    """
    url = (scrape_request.url or "").strip()
    if not url:
        return JSONResponse(status_code=400, content={"message": "URL is required"})

    try:
        return scrape_listing(url)
    except ScrapingError as e:
        logger.warning(f"Scrape of {url} failed: {e}")
        return JSONResponse(status_code=400, content={"message": str(e)})
