"""Data models package."""

from .listing_models import AddressParts, ListingStatus, PropertyType, ScrapedListing

__all__ = [
    "AddressParts",
    "ListingStatus",
    "PropertyType",
    "ScrapedListing"
]
