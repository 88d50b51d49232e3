"""Look up stored leads by name, email, or phone."""
from __future__ import annotations

import logging
from typing import List, Sequence

from .models import LeadLocationRecord

LOGGER = logging.getLogger(__name__)

SEARCH_FIELDS: Sequence[str] = ("company", "contact_name", "contact_email", "contact_phone")
DEFAULT_SEARCH_LIMIT = 25


def search_leads(
    records: Sequence[LeadLocationRecord],
    term: str,
    limit: int = DEFAULT_SEARCH_LIMIT,
) -> List[LeadLocationRecord]:
    """Return leads whose company, contact name, email, or phone contains ``term``.

    Matching is a case-insensitive substring test. A blank term returns no
    results, and input order is preserved up to ``limit`` records.
    """

    needle = (term or "").strip().lower()
    if not needle or limit <= 0:
        return []

    results: List[LeadLocationRecord] = []
    for record in records:
        for field in SEARCH_FIELDS:
            value = record.display_fields.get(field)
            if value and needle in value.lower():
                results.append(record)
                break
        if len(results) >= limit:
            break

    LOGGER.debug("Search for %r matched %s of %s leads", needle, len(results), len(records))
    return results


__all__ = ["DEFAULT_SEARCH_LIMIT", "SEARCH_FIELDS", "search_leads"]
