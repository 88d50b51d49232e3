"""Heuristic field extraction from business card OCR text.

The parser is intentionally forgiving: every field is a best guess and an
empty string means nothing on the card looked like that field. Each pattern
is exposed as its own predicate or finder so it can be tuned in isolation.
"""
from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional, Sequence, Set

from .models import CardScanResult, ExtractedCardFields

LOGGER = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)
PHONE_RE = re.compile(r"(?:\+?1[\s\-.]?)?(?:\(\d{3}\)|\d{3})[\s\-.]?\d{3}[\s\-.]?\d{4}")
WEBSITE_RE = re.compile(
    r"\b((?:https?://)?(?:www\.)?[A-Z0-9.-]+\.[A-Z]{2,}(?:/\S*)?)\b", re.IGNORECASE
)
PERSON_NAME_RE = re.compile(
    r"^[A-Z][a-zA-Z'’.-]+ [A-Z][a-zA-Z'’.-]+(?: [A-Z][a-zA-Z'’.-]+)?$"
)
TITLE_KEYWORD_RE = re.compile(
    r"\b(Manager|Director|Owner|President|CEO|CFO|HR|Recruiter|Sales|Consultant|"
    r"Engineer|Coordinator|Lead|Supervisor|VP)\b",
    re.IGNORECASE,
)
COMPANY_SUFFIX_RE = re.compile(
    r"\b(Inc|LLC|Ltd|Corp|Corporation|Co|Company|Group|Holdings|Staffing|Services|"
    r"Solutions|Partners|Associates|Industries|Enterprises)\b",
    re.IGNORECASE,
)
URL_MARKER_RE = re.compile(r"www|http|linkedin|@", re.IGNORECASE)
_DIGIT_OR_AT_RE = re.compile(r"[0-9@]")
_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)

MAX_NAME_LENGTH = 40
MAX_TITLE_AFTER_NAME_LENGTH = 40
MAX_TITLE_LENGTH = 60
MIN_COMPANY_LENGTH = 2


def _unique(values: Iterable[str]) -> List[str]:
    seen: Set[str] = set()
    ordered: List[str] = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


def normalize_text(raw_text: Optional[str]) -> str:
    """Turn carriage returns into newlines, tabs into spaces, and trim."""

    text = str(raw_text or "")
    return text.replace("\r", "\n").replace("\t", " ").strip()


def split_lines(text: str) -> List[str]:
    """Return the non-empty, trimmed lines of ``text`` in order."""

    return [line.strip() for line in re.split(r"\r\n|\r|\n", text) if line.strip()]


def find_emails(text: str) -> List[str]:
    return _unique(EMAIL_RE.findall(text))


def normalize_phone(phone: str) -> str:
    """Format ten-digit numbers as ``(XXX) XXX-XXXX``; leave anything else as matched."""

    digits = re.sub(r"[^\d+]", "", phone)
    if len(digits) == 10:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    return phone


def find_phones(text: str) -> List[str]:
    return _unique(normalize_phone(match) for match in PHONE_RE.findall(text))


def find_websites(text: str) -> List[str]:
    """Return website-looking tokens, ignoring the parts of email addresses."""

    email_spans = [match.span() for match in EMAIL_RE.finditer(text)]
    sites: List[str] = []
    for match in WEBSITE_RE.finditer(text):
        start, end = match.span(1)
        if any(start < email_end and end > email_start for email_start, email_end in email_spans):
            continue
        site = match.group(1)
        if not _SCHEME_RE.match(site):
            site = "http://" + site
        sites.append(site)
    return _unique(sites)


def is_email_line(line: str) -> bool:
    return EMAIL_RE.search(line) is not None


def is_phone_line(line: str) -> bool:
    return PHONE_RE.search(line) is not None


def is_title_line(line: str) -> bool:
    return TITLE_KEYWORD_RE.search(line) is not None


def is_company_line(line: str) -> bool:
    """True when the line carries a business suffix such as ``Inc`` or ``Staffing``."""

    return COMPANY_SUFFIX_RE.search(line) is not None


def has_url_marker(line: str) -> bool:
    return URL_MARKER_RE.search(line) is not None


def looks_like_person_name(line: str) -> bool:
    """Two or three capitalised words separated by single spaces."""

    return PERSON_NAME_RE.match(line) is not None


def pick_contact_name(lines: Sequence[str]) -> str:
    for line in lines:
        if len(line) > MAX_NAME_LENGTH:
            continue
        if _DIGIT_OR_AT_RE.search(line):
            continue
        if is_title_line(line) or is_company_line(line):
            continue
        if looks_like_person_name(line):
            return line
    return ""


def pick_company(lines: Sequence[str], exclude: Iterable[str] = ()) -> str:
    """Return the first line that is not excluded, contact data, or a job title."""

    excluded = {value for value in exclude if value}
    for line in lines:
        if line in excluded:
            continue
        if _DIGIT_OR_AT_RE.search(line):
            continue
        if len(line) < MIN_COMPANY_LENGTH:
            continue
        if is_title_line(line):
            continue
        return line
    return ""


def pick_contact_title(lines: Sequence[str], contact_name: str) -> str:
    if contact_name and contact_name in lines:
        index = lines.index(contact_name)
        if index + 1 < len(lines):
            after = lines[index + 1]
            if (
                not is_email_line(after)
                and not is_phone_line(after)
                and not has_url_marker(after)
                and len(after) < MAX_TITLE_AFTER_NAME_LENGTH
            ):
                return after

    for line in lines:
        if is_title_line(line) and len(line) < MAX_TITLE_LENGTH:
            return line
    return ""


def scan_card_text(raw_text: Optional[str], *, source: Optional[str] = None) -> CardScanResult:
    """Parse OCR text into fields plus every email and phone candidate."""

    text = normalize_text(raw_text)
    lines = split_lines(text)

    emails = find_emails(text)
    phones = find_phones(text)
    websites = find_websites(text)

    # The company step must not reuse the line already taken as the contact name.
    contact_name = pick_contact_name(lines)
    company = pick_company(lines, exclude=[contact_name])
    contact_title = pick_contact_title(lines, contact_name)

    fields = ExtractedCardFields(
        company=company,
        contact_name=contact_name,
        contact_title=contact_title,
        email=emails[0] if emails else "",
        phone=phones[0] if phones else "",
        website=websites[0] if websites else "",
    )
    if not fields.non_empty():
        LOGGER.info("No identifiable fields in card text%s", f" from {source}" if source else "")
    return CardScanResult(fields=fields, emails=emails, phones=phones, raw_text=text, source=source)


def extract_card_fields(raw_text: Optional[str]) -> ExtractedCardFields:
    """Return the best-guess contact fields for a business card's OCR text."""

    return scan_card_text(raw_text).fields


__all__ = [
    "extract_card_fields",
    "find_emails",
    "find_phones",
    "find_websites",
    "has_url_marker",
    "is_company_line",
    "is_email_line",
    "is_phone_line",
    "is_title_line",
    "looks_like_person_name",
    "normalize_phone",
    "normalize_text",
    "pick_company",
    "pick_contact_name",
    "pick_contact_title",
    "scan_card_text",
    "split_lines",
]
