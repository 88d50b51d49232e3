"""Unified data models for proximity matching, card scanning, and export."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

FEET_PER_METER = 3.28084


# --- Location Models ---

@dataclass(frozen=True, slots=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(slots=True)
class CallHistoryEntry:
    """A single logged call against a lead."""

    timestamp: str = ""
    status: Optional[str] = None
    rating: Optional[str] = None
    call_type: Optional[str] = None
    note: str = ""

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "CallHistoryEntry":
        """Build an entry from a stored call-history object.

        Older rows used ``date``/``ts``/``created_at`` for the timestamp and
        ``call_status``/``call_type`` naming, so several keys are accepted.
        """

        def first(*keys: str) -> Optional[str]:
            for key in keys:
                value = data.get(key)
                if value not in (None, ""):
                    return str(value)
            return None

        return cls(
            timestamp=first("date", "timestamp", "ts", "created_at") or "",
            status=first("status", "call_status"),
            rating=first("rating"),
            call_type=first("call_type", "callType", "type"),
            note=first("note") or "",
        )


@dataclass(slots=True)
class LeadLocationRecord:
    """Snapshot of a stored lead with the fields needed for proximity matching."""

    id: str
    display_fields: Dict[str, Optional[str]] = field(default_factory=dict)
    coordinate: Optional[Coordinate] = None
    call_history: List[CallHistoryEntry] = field(default_factory=list)

    @property
    def company(self) -> Optional[str]:
        return self.display_fields.get("company")

    @property
    def contact_name(self) -> Optional[str]:
        return self.display_fields.get("contact_name")

    def display_name(self) -> str:
        """Return a readable label for CLI output or logs."""
        return self.company or self.contact_name or f"(Lead {self.id})"


def last_call_summary(history: Sequence[CallHistoryEntry]) -> str:
    """Summarise the most recent call as ``date • status • (rating)``."""

    if not history:
        return ""
    last = history[-1]
    parts: List[str] = []
    if last.timestamp:
        parts.append(last.timestamp)
    status = last.status or last.call_type
    if status:
        parts.append(status)
    if last.rating:
        parts.append(f"({last.rating})")
    return " • ".join(parts)


@dataclass(slots=True)
class NearbyMatch:
    """A lead found within the geofence radius of the observer."""

    record: LeadLocationRecord
    distance_meters: float

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def distance_feet(self) -> float:
        return self.distance_meters * FEET_PER_METER

    def as_row(self) -> Dict[str, Any]:
        """Return a serialisable representation of the match."""
        row: Dict[str, Any] = {"id": self.record.id}
        row.update({key: value or "" for key, value in self.record.display_fields.items()})
        coordinate = self.record.coordinate
        row["latitude"] = coordinate.latitude if coordinate else None
        row["longitude"] = coordinate.longitude if coordinate else None
        row["distance_meters"] = round(self.distance_meters, 2)
        row["distance_feet"] = round(self.distance_feet, 1)
        row["last_call"] = last_call_summary(self.record.call_history)
        return row


# --- Card Scanning Models ---

@dataclass(slots=True)
class ExtractedCardFields:
    """Best-guess contact fields parsed from business card OCR text."""

    company: str = ""
    contact_name: str = ""
    contact_title: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""

    def non_empty(self) -> Dict[str, str]:
        """Return only the fields that were confidently identified."""
        return {
            key: value
            for key, value in {
                "company": self.company,
                "contact_name": self.contact_name,
                "contact_title": self.contact_title,
                "email": self.email,
                "phone": self.phone,
                "website": self.website,
            }.items()
            if value
        }


@dataclass(slots=True)
class CardScanResult:
    """Full outcome of scanning one card, including every candidate found."""

    fields: ExtractedCardFields
    emails: List[str] = field(default_factory=list)
    phones: List[str] = field(default_factory=list)
    raw_text: str = ""
    source: Optional[str] = None

    def as_row(self) -> Dict[str, Any]:
        row: Dict[str, Any] = {"source": self.source or ""}
        row.update(
            {
                "company": self.fields.company,
                "contact_name": self.fields.contact_name,
                "contact_title": self.fields.contact_title,
                "email": self.fields.email,
                "phone": self.fields.phone,
                "website": self.fields.website,
                "all_emails": "; ".join(self.emails),
                "all_phones": "; ".join(self.phones),
            }
        )
        return row
