"""Spreadsheet ingestion and export helpers built on pandas."""

from .exporters import (
    card_results_to_dataframe,
    export_card_results,
    export_nearby_matches,
    nearby_matches_to_dataframe,
)
from .loaders import UnsupportedFileTypeError, load_card_texts, load_lead_records, parse_call_history

__all__ = [
    "UnsupportedFileTypeError",
    "card_results_to_dataframe",
    "export_card_results",
    "export_nearby_matches",
    "load_card_texts",
    "load_lead_records",
    "nearby_matches_to_dataframe",
    "parse_call_history",
]
