from __future__ import annotations

import pytest
from bs4 import BeautifulSoup

from conftest import DESCRIPTION, LISTING_HTML
from listing_scraper.models import AddressParts
from listing_scraper.scrapers.field_rules import (
    FIELD_RULES,
    ListingFieldExtractor,
    TEXT_RULES,
    extract_bathrooms,
    extract_bedrooms,
    extract_description,
    extract_heading,
    extract_price,
    extract_sqft,
    extract_title,
    page_text,
    parse_address,
    slugify,
)


def soup_of(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("809 Mount Pleasant Rd", "809-mount-pleasant-rd"),
        ("  Silver Oak Dr. #4 ", "silver-oak-dr-4"),
        ("--Already--Slugged--", "already-slugged"),
        ("", ""),
    ],
)
def test_slugify(text: str, expected: str) -> None:
    assert slugify(text) == expected


def test_slugify_is_idempotent() -> None:
    for text in ["809 Mount Pleasant Rd", "Ünïcode & Co., PA", "a  b--c"]:
        assert slugify(slugify(text)) == slugify(text)


def test_parse_address_with_state_and_zip() -> None:
    # The comma-carrying word belongs to the city, not the street.
    parts = parse_address("809 Mount Pleasant Rd, Pine Twp, PA 16046")
    assert parts == AddressParts(
        street="809 Mount Pleasant", city="Rd, Pine Twp", state="PA", zip_code="16046"
    )


def test_parse_address_single_word_street() -> None:
    parts = parse_address("12 Elm St, Mars, PA 16046")
    assert parts.street == "12 Elm"
    assert parts.city == "St, Mars"


def test_title_falls_back_when_street_is_empty() -> None:
    assert parse_address("Main, Mars, PA 16046").street == ""
    assert extract_title("Main, Mars, PA 16046") == "Main"
    assert extract_title(", Mars, PA 16046") == ", Mars, PA 16046"


def test_parse_address_without_comma_uses_all_tokens_as_street() -> None:
    parts = parse_address("100 Main St PA 15001")
    assert parts.street == "100 Main St"
    assert parts.city == ""
    assert parts.state == "PA"
    assert parts.zip_code == "15001"


def test_parse_address_without_state_keeps_text_before_first_comma() -> None:
    assert parse_address("Lot 7 Carrier Rd, Cranberry").street == "Lot 7 Carrier Rd"
    assert extract_title("Lot 7 Carrier Rd, Cranberry") == "Lot 7 Carrier Rd"
    assert extract_title("Lakeside Retreat") == "Lakeside Retreat"


def test_parse_address_ignores_state_token_at_start() -> None:
    parts = parse_address("PA Route 8, Gibsonia")
    assert parts.street == "PA Route 8"
    assert parts.state == ""


def test_parse_address_takes_unit_designator_for_state() -> None:
    # Known heuristic limitation: any two-letter all-caps token reads as the state.
    parts = parse_address("12 Oak Ct UN 5, Wexford, PA 15090")
    assert parts.state == "UN"
    assert parts.street == "12 Oak Ct"


def test_extract_heading_uses_first_h1() -> None:
    soup = soup_of("<h1> First </h1><h1>Second</h1>")
    assert extract_heading(soup) == "First"
    assert extract_heading(soup_of("<p>No heading</p>")) == ""


def test_extract_price_reads_first_leaf_element() -> None:
    soup = soup_of(
        "<div>Was $999 <span>$1,250,000</span></div><p>Taxes: $8,000</p>"
    )
    assert extract_price(soup) == "1250000"


def test_extract_price_defaults_to_zero() -> None:
    assert extract_price(soup_of("<p>Price upon request</p>")) == "0"


def test_extract_price_ignores_scripts() -> None:
    soup = soup_of("<script>var p = '$5';</script><span>$310,000</span>")
    assert extract_price(soup) == "310000"


def test_counts_from_page_text() -> None:
    text = "Features: 4 BED | 3 bath | 2,400 SQFT"
    assert extract_bedrooms(text) == 4
    assert extract_bathrooms(text) == 3
    assert extract_sqft(text) == 2400


def test_counts_default_to_zero() -> None:
    assert extract_bedrooms("studio") == 0
    assert extract_bathrooms("") == 0
    assert extract_sqft("SQFT unknown") == 0


def test_page_text_skips_scripts_and_styles() -> None:
    soup = soup_of(
        "<style>.x{}</style><script>var MLS = 1;</script><p>Visible</p><!-- hidden -->"
    )
    assert page_text(soup) == "Visible"


def test_description_prefers_block_near_label() -> None:
    long_text = "A" * 150
    html = f"""
    <div><p>{"B" * 250}</p></div>
    <section><h3>Description</h3><p>{long_text}</p></section>
    """
    assert extract_description(soup_of(html)) == long_text


def test_description_skips_boilerplate_near_label() -> None:
    html = f"""
    <section>
      <h3>Description</h3>
      <p>Copyright {"x" * 150}</p>
    </section>
    <article><p>{"C" * 210}</p></article>
    """
    assert extract_description(soup_of(html)) == "C" * 210


def test_description_fallback_excludes_recaptcha() -> None:
    html = f"""
    <p>This site is protected by reCAPTCHA {"y" * 200}</p>
    <p>{"D" * 201}</p>
    """
    assert extract_description(soup_of(html)) == "D" * 201


def test_description_defaults_to_empty() -> None:
    assert extract_description(soup_of("<p>Short</p>")) == ""


@pytest.mark.parametrize(
    "field, text, expected",
    [
        ("mls_number", "MLS #: 1636459", "1636459"),
        ("mls_number", "mls#A12B", "A12B"),
        ("taxes", "Taxes: $38,000", "$38,000"),
        ("taxes", "Taxes 4200", "$4200"),
        ("lot_size", "Lot Size: 10.5 acres", "10.5 acres"),
        ("lot_size", "Lot Size: 1 acre", "1 acre"),
        ("property_type", "Type: Condo", "Condo"),
        ("property_type", "Property Type: single-family home", "Single-Family Home"),
        ("year_built", "Year Built: 1998", "1998"),
        ("style", "Style: Colonial\nYear Built: 1998", "Colonial"),
        ("school_district", "School District: North Allegheny\n", "North Allegheny"),
        ("county", "County: Allegheny County", "Allegheny County"),
    ],
)
def test_text_rules(field: str, text: str, expected: str) -> None:
    assert TEXT_RULES[field].apply(text) == expected


def test_text_rules_default_to_empty() -> None:
    for rule in TEXT_RULES.values():
        assert rule.apply("nothing to see here") == ""


def test_property_type_outside_enum_is_ignored() -> None:
    assert TEXT_RULES["property_type"].apply("Type: Houseboat") == ""


def test_extractor_on_listing_page() -> None:
    fields = ListingFieldExtractor().extract(soup_of(LISTING_HTML))

    assert fields["title"] == "809 Mount Pleasant"
    assert fields["address"] == "809 Mount Pleasant Rd, Pine Twp, PA 16046"
    assert fields["price"] == "4600000"
    assert fields["bedrooms"] == 4
    assert fields["bathrooms"] == 6
    assert fields["sqft"] == 7310
    assert fields["full_description"] == DESCRIPTION
    assert fields["mls_number"] == "1636459"
    assert fields["taxes"] == "$38,000"
    assert fields["lot_size"] == "10.5 acres"
    assert fields["property_type"] == "Single-Family Home"
    assert fields["year_built"] == "2002"
    assert fields["style"] == "Colonial"
    assert fields["school_district"] == "Pine-Richland"
    assert fields["county"] == "Butler County"


def test_extractor_defaults_every_field_on_empty_page() -> None:
    extractor = ListingFieldExtractor()
    fields = extractor.extract(soup_of("<html><body></body></html>"))

    assert set(fields) == set(FIELD_RULES)
    assert fields["price"] == "0"
    assert fields["bedrooms"] == 0
    assert fields["sqft"] == 0
    assert fields["title"] == ""
    assert fields["county"] == ""
    assert sorted(extractor.defaulted_fields(fields)) == sorted(FIELD_RULES)


def test_failing_rule_only_defaults_its_own_field() -> None:
    def broken(doc: object) -> str:
        raise RuntimeError("markup changed")

    rules = dict(FIELD_RULES, price=broken)
    fields = ListingFieldExtractor(rules).extract(soup_of(LISTING_HTML))

    assert fields["price"] == "0"
    assert fields["bedrooms"] == 4
    assert fields["title"] == "809 Mount Pleasant"
