"""Run the API server with ``python -m listing_scraper``."""

import uvicorn

from .config import settings


def main():
    uvicorn.run(
        "listing_scraper.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )


if __name__ == "__main__":
    main()
