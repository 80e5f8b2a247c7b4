"""Listing data models for the scraper."""

from enum import Enum
from typing import List, NamedTuple
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class ListingStatus(str, Enum):
    """Listing status enumeration."""
    ACTIVE = "active"
    PENDING = "pending"
    SOLD = "sold"
    OFF_MARKET = "off_market"


class PropertyType(str, Enum):
    """Property types recognised on the listing page."""
    SINGLE_FAMILY = "Single-Family Home"
    CONDO = "Condo"
    TOWNHOUSE = "Townhouse"
    MULTI_FAMILY = "Multi-Family"
    LAND = "Land"


class AddressParts(NamedTuple):
    """Components parsed out of a listing heading."""
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


class ScrapedListing(BaseModel):
    """Draft listing produced by a single scrape.

    Every field carries a sentinel default ("" for text, 0 for counts, "0" for
    price) so the record is always complete, even when the page lacked the
    corresponding data. The admin console is expected to review and correct
    the draft before it is saved.
    """

    title: str = ""
    slug: str = ""
    address: str = ""
    price: str = "0"
    bedrooms: int = 0
    bathrooms: int = 0
    sqft: int = 0
    image_url: str = ""
    images: List[str] = Field(default_factory=list)
    description: str = ""
    full_description: str = ""
    mls_number: str = ""
    taxes: str = ""
    lot_size: str = ""
    property_type: str = ""
    year_built: str = ""
    style: str = ""
    school_district: str = ""
    county: str = ""
    status: ListingStatus = ListingStatus.ACTIVE

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "use_enum_values": True,
    }
