"""Top-level package for the lead capture toolkit."""

from . import models  # noqa: F401
from .card_text import extract_card_fields, scan_card_text
from .merge import merge_card_fields, merge_nearby_selection
from .models import (
    CallHistoryEntry,
    CardScanResult,
    Coordinate,
    ExtractedCardFields,
    LeadLocationRecord,
    NearbyMatch,
)
from .proximity import InvalidArgument, find_nearby, last_call_summary
from .search import search_leads

__all__ = [
    "CallHistoryEntry",
    "CardScanResult",
    "Coordinate",
    "ExtractedCardFields",
    "InvalidArgument",
    "LeadLocationRecord",
    "NearbyMatch",
    "extract_card_fields",
    "find_nearby",
    "last_call_summary",
    "merge_card_fields",
    "merge_nearby_selection",
    "scan_card_text",
    "search_leads",
    "ingestion",
]
