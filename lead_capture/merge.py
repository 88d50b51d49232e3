"""Utility helpers for merging scanned or matched lead data into form state."""
from __future__ import annotations

from typing import Any, Dict, Mapping

from .models import ExtractedCardFields, NearbyMatch

# Card field name -> lead form key.
CARD_FIELD_TO_FORM_KEY: Mapping[str, str] = {
    "company": "company",
    "contact_name": "contact_name",
    "contact_title": "contact_title",
    "email": "contact_email",
    "phone": "contact_phone",
    "website": "website",
}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def merge_card_fields(
    form: Mapping[str, Any], fields: ExtractedCardFields
) -> Dict[str, Any]:
    """Return a copy of ``form`` updated with every non-empty extracted field.

    Empty extracted values never clear what the user already typed.
    """

    merged = dict(form)
    for field_name, value in fields.non_empty().items():
        merged[CARD_FIELD_TO_FORM_KEY[field_name]] = value
    return merged


def merge_nearby_selection(form: Mapping[str, Any], match: NearbyMatch) -> Dict[str, Any]:
    """Prefill ``form`` from a previously logged lead the user picked.

    Every stored field replaces the form value; blank stored values clear it so
    nothing is left over from an earlier selection.
    """

    merged = dict(form)
    for key, value in match.record.display_fields.items():
        merged[key] = "" if _is_blank(value) else value
    merged["lead_id"] = match.record.id
    return merged


__all__ = ["CARD_FIELD_TO_FORM_KEY", "merge_card_fields", "merge_nearby_selection"]
