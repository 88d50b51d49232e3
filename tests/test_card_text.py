"""Unit tests for :mod:`lead_capture.card_text`."""

from __future__ import annotations

import pytest

from lead_capture.card_text import (
    extract_card_fields,
    find_emails,
    find_phones,
    find_websites,
    has_url_marker,
    is_company_line,
    is_title_line,
    looks_like_person_name,
    normalize_phone,
    pick_company,
    scan_card_text,
    split_lines,
)
from lead_capture.models import ExtractedCardFields

SAMPLE_CARD = "Acme Corp\nJohn Smith\nOperations Manager\njohn@acme.com\n(512) 555-0100"


def test_extracts_all_fields_from_simple_card() -> None:
    fields = extract_card_fields(SAMPLE_CARD)

    assert fields.company == "Acme Corp"
    assert fields.contact_name == "John Smith"
    assert fields.contact_title == "Operations Manager"
    assert fields.email == "john@acme.com"
    assert fields.phone == "(512) 555-0100"


@pytest.mark.parametrize("raw", ["", "   \n\t \r\n", None])
def test_blank_input_yields_empty_fields(raw) -> None:
    assert extract_card_fields(raw) == ExtractedCardFields()


def test_name_on_first_line_is_not_reused_as_company() -> None:
    fields = extract_card_fields("Jane Doe\nBright Horizons Staffing\njane@bright.example")

    assert fields.contact_name == "Jane Doe"
    assert fields.company == "Bright Horizons Staffing"
    assert fields.company != fields.contact_name


def test_single_name_like_line_is_never_both_company_and_contact() -> None:
    fields = extract_card_fields("Maria Lopez\n512-555-0199")

    assert fields.contact_name == "Maria Lopez"
    assert fields.company == ""


def test_dotted_phone_is_normalised() -> None:
    assert extract_card_fields("Call 512.555.0100 today").phone == "(512) 555-0100"


def test_country_code_phone_keeps_matched_text() -> None:
    assert extract_card_fields("Cell: 1-512-555-0100").phone == "1-512-555-0100"
    assert normalize_phone("+1 512 555 0100") == "+1 512 555 0100"


def test_phones_and_emails_are_deduplicated_in_order() -> None:
    text = "a@x.com b@y.org a@x.com\n512-555-0100 (512) 555-0100 713 555 0101"

    assert find_emails(text) == ["a@x.com", "b@y.org"]
    assert find_phones(text) == ["(512) 555-0100", "(713) 555-0101"]


def test_email_match_is_case_insensitive() -> None:
    assert find_emails("Reach me: Pat.Jones@Example.COM") == ["Pat.Jones@Example.COM"]


def test_title_falls_back_to_keyword_scan_when_line_after_name_is_contact_data() -> None:
    text = "Globex Staffing\nPat Jones\npat@globex.com\nRegional Sales Director"

    fields = extract_card_fields(text)

    assert fields.contact_name == "Pat Jones"
    assert fields.contact_title == "Regional Sales Director"


def test_title_keyword_scan_without_contact_name() -> None:
    fields = extract_card_fields("GLOBEX\nHR Coordinator\nhr@globex.com")

    assert fields.contact_name == ""
    assert fields.company == "GLOBEX"
    assert fields.contact_title == "HR Coordinator"


def test_line_after_name_with_url_is_not_a_title() -> None:
    fields = extract_card_fields("Pat Jones\nlinkedin.com/in/patjones")

    assert fields.contact_title == ""


def test_carriage_returns_and_tabs_are_normalised() -> None:
    result = scan_card_text("Initech\r\nBill\tLumbergh\rVP Operations\r\n")

    assert result.raw_text == "Initech\n\nBill Lumbergh\nVP Operations"
    assert result.fields.company == "Initech"
    assert result.fields.contact_name == "Bill Lumbergh"
    assert result.fields.contact_title == "VP Operations"


def test_scan_result_lists_every_candidate() -> None:
    text = "Jo Ann\njo@one.com\njo@two.com\n(512) 555-0100\n(713) 555-0101"

    result = scan_card_text(text, source="card.txt")

    assert result.emails == ["jo@one.com", "jo@two.com"]
    assert result.phones == ["(512) 555-0100", "(713) 555-0101"]
    assert result.fields.email == "jo@one.com"
    assert result.source == "card.txt"


def test_website_ignores_email_domains_and_adds_scheme() -> None:
    assert find_websites("sam@acme.com\nwww.acme.com") == ["http://www.acme.com"]
    assert find_websites("https://acme.io/careers") == ["https://acme.io/careers"]
    assert find_websites("sam.lee@acme.com") == []


def test_split_lines_drops_blank_lines() -> None:
    assert split_lines("  one \n\n two\r\nthree\r  \n") == ["one", "two", "three"]


@pytest.mark.parametrize(
    "line, expected",
    [
        ("John Smith", True),
        ("Mary-Kate O'Neil", True),
        ("Anna B. Cole", True),
        ("john smith", False),
        ("Smith", False),
        ("John  Smith", False),
        ("One Two Three Four", False),
    ],
)
def test_looks_like_person_name(line: str, expected: bool) -> None:
    assert looks_like_person_name(line) is expected


def test_title_keywords_match_whole_words_only() -> None:
    assert is_title_line("Branch manager")
    assert is_title_line("VP, Talent")
    assert not is_title_line("Leadership Partners")
    assert not is_title_line("Salesforce Admin")


def test_company_suffix_detection() -> None:
    assert is_company_line("Acme Corp")
    assert is_company_line("Northwind Staffing LLC")
    assert not is_company_line("John Smith")


def test_url_marker_detection() -> None:
    assert has_url_marker("WWW.EXAMPLE.COM")
    assert has_url_marker("LinkedIn: jsmith")
    assert not has_url_marker("Operations Manager")


def test_pick_company_skips_excluded_short_and_numeric_lines() -> None:
    lines = ["J", "Jane Doe", "Suite 200", "Sales Lead", "Contoso"]

    assert pick_company(lines, exclude=["Jane Doe"]) == "Contoso"


def test_name_line_length_limit() -> None:
    forty = "Bartholomew Christophers Montgomeryville"
    forty_one = forty + "e"
    assert (len(forty), len(forty_one)) == (40, 41)

    assert extract_card_fields(forty).contact_name == forty
    assert extract_card_fields(forty_one).contact_name == ""


def test_title_after_name_must_be_shorter_than_forty_characters() -> None:
    thirty_nine = "Talent " + "a" * 32
    forty = thirty_nine + "a"
    assert (len(thirty_nine), len(forty)) == (39, 40)

    assert extract_card_fields(f"Jane Doe\n{thirty_nine}").contact_title == thirty_nine
    assert extract_card_fields(f"Jane Doe\n{forty}").contact_title == ""


def test_fallback_title_must_be_shorter_than_sixty_characters() -> None:
    fifty_nine = "Manager " + "x" * 51
    sixty = fifty_nine + "x"
    assert (len(fifty_nine), len(sixty)) == (59, 60)

    assert extract_card_fields(f"GLOBEX\n{fifty_nine}").contact_title == fifty_nine
    assert extract_card_fields(f"GLOBEX\n{sixty}").contact_title == ""


def test_single_character_line_is_not_a_company() -> None:
    assert extract_card_fields("X\nContoso").company == "Contoso"
