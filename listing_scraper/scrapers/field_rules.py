"""Field extraction rules for listing detail pages.

The listing pages are not semantically marked up, so each field is recovered
by an independent text heuristic over either leaf-element text or the visible
page text. Every rule returns its field's "not found" sentinel instead of
raising, and ``ListingFieldExtractor`` isolates rules from one another so that
markup drift degrades a single field rather than the whole scrape.
"""

import logging
import re
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Pattern
from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString

from ..models.listing_models import AddressParts, PropertyType, ScrapedListing

logger = logging.getLogger(__name__)

INVISIBLE_TAGS = {"script", "style", "template", "noscript"}

STATE_TOKEN = re.compile(r"[A-Z]{2}")
PRICE_PATTERN = re.compile(r"\$(\d[\d,]*)")
BEDROOMS_PATTERN = re.compile(r"(\d+)\s*BED", re.IGNORECASE)
BATHROOMS_PATTERN = re.compile(r"(\d+)\s*BATH", re.IGNORECASE)
SQFT_PATTERN = re.compile(r"(\d[\d,]*)\s*SQFT", re.IGNORECASE)

DESCRIPTION_LABEL = "Description"
NEAR_LABEL_MIN_LENGTH = 100
FALLBACK_MIN_LENGTH = 200
NEAR_LABEL_EXCLUDES = ("Copyright", "Disclaimer")
FALLBACK_EXCLUDES = ("Copyright", "Disclaimer", "reCAPTCHA")


def slugify(text: str) -> str:
    """Convert text to a URL slug, e.g. "809 Mount Pleasant Rd" -> "809-mount-pleasant-rd"."""
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def _is_visible(node: NavigableString) -> bool:
    if isinstance(node, PreformattedString):
        return False
    parent = node.parent
    return parent is None or parent.name not in INVISIBLE_TAGS


def _contains_any(text: str, needles) -> bool:
    return any(needle in text for needle in needles)


def page_text(soup: BeautifulSoup) -> str:
    """Return the visible text of the document, one text node per line."""
    return "\n".join(
        str(node) for node in soup.find_all(string=True) if _is_visible(node)
    )


def extract_heading(soup: BeautifulSoup) -> str:
    """Return the stripped text of the first <h1>, or ""."""
    heading = soup.find("h1")
    return heading.get_text().strip() if heading else ""


def parse_address(heading: str) -> AddressParts:
    """Split a listing heading such as "809 Mount Pleasant Rd, Pine Twp, PA 16046".

    The first whitespace token made of exactly two uppercase letters is taken
    as the state and the token after it as the zip code. The street is the
    tokens before the first comma-terminated token; that token and the rest
    up to the state form the city. Without a state token, the street is
    whatever precedes the first comma.

    Two limitations of the heuristic are known. Any other two-letter all-caps
    token (a unit designator, say) is mistaken for the state. The word that
    carries the comma is dropped from the street, so
    "809 Mount Pleasant Rd, Pine Twp, PA 16046" gives the street
    "809 Mount Pleasant" and the city "Rd, Pine Twp".
    """
    tokens = heading.split()
    state_idx = next(
        (i for i, token in enumerate(tokens) if STATE_TOKEN.fullmatch(token)), -1
    )

    if state_idx <= 0:
        return AddressParts(street=heading.split(",")[0].strip())

    before_state = tokens[:state_idx]
    comma_idx = next(
        (i for i, token in enumerate(before_state) if token.endswith(",")), -1
    )
    if comma_idx >= 0:
        street = " ".join(before_state[:comma_idx])
        city = " ".join(before_state[comma_idx:]).rstrip(",")
    else:
        street = " ".join(before_state)
        city = ""

    zip_code = tokens[state_idx + 1] if state_idx + 1 < len(tokens) else ""
    return AddressParts(street=street, city=city, state=tokens[state_idx], zip_code=zip_code)


def extract_title(heading: str) -> str:
    """Derive a listing title (the street line) from its heading."""
    return parse_address(heading).street or heading.split(",")[0].strip() or heading


def extract_price(soup: BeautifulSoup) -> str:
    """Return the first "$1,234,567" found in a leaf element, without separators.

    Only elements without child elements are considered so that a price nested
    in wrapper elements is not picked up from an ancestor's combined text.
    """
    for element in soup.find_all(True):
        if element.name in INVISIBLE_TAGS or element.find(True) is not None:
            continue
        match = PRICE_PATTERN.search(element.get_text())
        if match:
            return match.group(1).replace(",", "")
    return "0"


def _first_int(pattern: Pattern, text: str) -> int:
    match = pattern.search(text)
    if not match:
        return 0
    return int(match.group(1).replace(",", ""))


def extract_bedrooms(text: str) -> int:
    return _first_int(BEDROOMS_PATTERN, text)


def extract_bathrooms(text: str) -> int:
    return _first_int(BATHROOMS_PATTERN, text)


def extract_sqft(text: str) -> int:
    return _first_int(SQFT_PATTERN, text)


def extract_description(soup: BeautifulSoup) -> str:
    """Find the listing's long-form description.

    Blocks next to a "Description" label win; otherwise the first long block
    on the page is used. Blocks carrying legal boilerplate are skipped.
    """
    for label in soup.find_all(string=re.compile(DESCRIPTION_LABEL)):
        if not _is_visible(label) or label.parent is None:
            continue
        container = label.parent.parent
        if container is None:
            continue
        for block in container.find_all(["p", "div"]):
            text = block.get_text().strip()
            if len(text) > NEAR_LABEL_MIN_LENGTH and not _contains_any(text, NEAR_LABEL_EXCLUDES):
                return text

    for block in soup.find_all(["p", "div"]):
        text = block.get_text().strip()
        if len(text) > FALLBACK_MIN_LENGTH and not _contains_any(text, FALLBACK_EXCLUDES):
            return text

    return ""


class TextRule:
    """A label-anchored regular expression applied to the page text."""

    def __init__(self, pattern: str, template: str = "{}",
                 normalize: Optional[Callable[[str], str]] = None):
        self.pattern = re.compile(pattern, re.IGNORECASE)
        self.template = template
        self.normalize = normalize

    def apply(self, text: str) -> str:
        match = self.pattern.search(text)
        if not match:
            return ""
        value = match.group(1).strip()
        if self.normalize:
            value = self.normalize(value)
        return self.template.format(value)


def _canonical_property_type(value: str) -> str:
    for property_type in PropertyType:
        if property_type.value.lower() == value.lower():
            return property_type.value
    return value


PROPERTY_TYPE_CHOICES = "|".join(re.escape(t.value) for t in PropertyType)

TEXT_RULES: Dict[str, TextRule] = {
    "mls_number": TextRule(r"MLS\s*#[:\s]*(\w+)"),
    "taxes": TextRule(r"Taxes[:\s]*\$?(\d[\d,]*)", template="${}"),
    "lot_size": TextRule(r"Lot\s*Size[:\s]*([\d.]+\s*acres?)"),
    "property_type": TextRule(
        rf"Type[:\s]*({PROPERTY_TYPE_CHOICES})", normalize=_canonical_property_type
    ),
    "year_built": TextRule(r"Year\s*Built[:\s]*(\d{4})"),
    "style": TextRule(r"Style[:\s]*([\w\s-]+?)(?:\n|$)"),
    "school_district": TextRule(r"School\s*District[:\s]*([\w\s/-]+?)(?:\n|$)"),
    "county": TextRule(r"County[:\s]*([\w\s]+County)"),
}


class ListingDocument(NamedTuple):
    """A parsed listing page with the views the rules read from."""
    soup: BeautifulSoup
    heading: str
    text: str


FieldRule = Callable[[ListingDocument], Any]

FIELD_RULES: Dict[str, FieldRule] = {
    "title": lambda doc: extract_title(doc.heading),
    "address": lambda doc: doc.heading,
    "price": lambda doc: extract_price(doc.soup),
    "bedrooms": lambda doc: extract_bedrooms(doc.text),
    "bathrooms": lambda doc: extract_bathrooms(doc.text),
    "sqft": lambda doc: extract_sqft(doc.text),
    "full_description": lambda doc: extract_description(doc.soup),
}
FIELD_RULES.update({
    name: (lambda doc, rule=rule: rule.apply(doc.text))
    for name, rule in TEXT_RULES.items()
})


def field_default(name: str) -> Any:
    """Return the "not found" sentinel of a ScrapedListing field."""
    return ScrapedListing.model_fields[name].get_default(call_default_factory=True)


class ListingFieldExtractor:
    """Runs every field rule against a listing page."""

    def __init__(self, rules: Optional[Dict[str, FieldRule]] = None):
        self.rules = rules if rules is not None else FIELD_RULES

    def extract(self, soup: BeautifulSoup) -> Dict[str, Any]:
        """Extract all fields; a failing rule leaves its field at the sentinel."""
        doc = ListingDocument(soup=soup, heading=extract_heading(soup), text=page_text(soup))
        fields: Dict[str, Any] = {}

        for name, rule in self.rules.items():
            try:
                fields[name] = rule(doc)
            except Exception as e:
                logger.warning(f"Field rule '{name}' failed, using default: {e}")
                fields[name] = field_default(name)

        return fields

    @staticmethod
    def defaulted_fields(fields: Dict[str, Any]) -> List[str]:
        """List the fields that were left at their sentinel value."""
        return [name for name, value in fields.items() if value == field_default(name)]
