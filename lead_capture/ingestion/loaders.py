"""Utilities for loading lead snapshots and card text from files."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, MutableMapping, Optional, Sequence, Union

import pandas as pd

from ..geo import coerce_coordinate
from ..models import CallHistoryEntry, LeadLocationRecord

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]

DISPLAY_FIELDS: Sequence[str] = (
    "company",
    "contact_name",
    "contact_title",
    "contact_email",
    "contact_phone",
    "website",
    "industry",
    "status",
    "rating",
)

_FIELD_SYNONYMS: Mapping[str, Sequence[str]] = {
    "id": ("id", "lead_id", "record_id"),
    "company": ("company", "business", "business_name", "organization", "organisation"),
    "contact_name": ("contact_name", "contact", "name"),
    "contact_title": ("contact_title", "title", "job_title"),
    "contact_email": ("contact_email", "email"),
    "contact_phone": ("contact_phone", "phone"),
    "website": ("website", "url"),
    "industry": ("industry",),
    "status": ("status", "call_status"),
    "rating": ("rating",),
    "latitude": ("latitude", "lat"),
    "longitude": ("longitude", "lng", "lon", "long"),
    "call_history": ("call_history", "calls"),
}


class UnsupportedFileTypeError(ValueError):
    """Raised when an unsupported file format is passed to a loader or exporter."""


def load_lead_records(
    path: PathLike,
    *,
    column_mapping: Optional[Mapping[str, str]] = None,
    sheet_name: Union[str, int, None] = 0,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> List[LeadLocationRecord]:
    """Load stored leads from a spreadsheet export.

    Parameters
    ----------
    path:
        Path to the CSV/TSV/XLSX file to be loaded.
    column_mapping:
        Optional mapping of record field names (``id``, ``company``,
        ``latitude`` ...) to column names, overriding synonym detection.
    sheet_name:
        Sheet selector passed to :func:`pandas.read_excel`. Ignored for CSV.
    loader_kwargs:
        Extra keyword arguments forwarded to :func:`pandas.read_csv` or
        :func:`pandas.read_excel`.

    Rows without a usable latitude/longitude are still returned with
    ``coordinate=None``; the matcher decides what to do with them.
    """

    dataframe = _read_dataframe(path, sheet_name=sheet_name, loader_kwargs=loader_kwargs)
    mapping = dict(column_mapping or {})
    resolved = {field: _resolve_column(field, dataframe.columns, mapping) for field in _FIELD_SYNONYMS}

    records: List[LeadLocationRecord] = []
    for position, (_, row) in enumerate(dataframe.iterrows(), start=1):
        if _row_is_empty(row):
            continue
        records.append(_row_to_record(row, resolved, position))

    located = sum(1 for record in records if record.coordinate is not None)
    LOGGER.info("Loaded %s leads from %s (%s with a location)", len(records), path, located)
    return records


def load_card_texts(paths: Iterable[PathLike]) -> Dict[str, str]:
    """Read OCR text files, keyed by the path they came from.

    Files that cannot be read or are not valid UTF-8 are logged and skipped so
    the rest of the batch is still scanned.
    """

    texts: Dict[str, str] = {}
    for path in paths:
        file_path = Path(path)
        try:
            texts[str(file_path)] = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.warning("Skipping card text %s: %s", file_path, exc)
    return texts


def _read_dataframe(
    path: PathLike,
    *,
    sheet_name: Union[str, int, None] = 0,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> pd.DataFrame:
    loader_kwargs = dict(loader_kwargs or {})
    path_obj = Path(path)
    suffix = path_obj.suffix.lower()

    # Keep identifiers and phone numbers as written.
    loader_kwargs.setdefault("dtype", str)

    if suffix in {".csv", ".tsv"}:
        if suffix == ".tsv":
            loader_kwargs.setdefault("sep", "\t")
        return pd.read_csv(path_obj, **loader_kwargs)

    if suffix in {".xlsx", ".xlsm"}:
        return pd.read_excel(path_obj, sheet_name=sheet_name, engine=loader_kwargs.pop("engine", None) or "openpyxl", **loader_kwargs)

    raise UnsupportedFileTypeError(f"Unsupported file extension: {path_obj.suffix}")


def _row_is_empty(row: pd.Series) -> bool:
    return all(pd.isna(value) or (isinstance(value, str) and not value.strip()) for value in row.values)


def _resolve_column(field: str, available_columns: Iterable[str], mapping: Mapping[str, str]) -> Optional[str]:
    if field in mapping:
        return mapping[field]

    by_normalised = {str(column).strip().lower().replace(" ", "_"): column for column in available_columns}
    for synonym in _FIELD_SYNONYMS.get(field, (field,)):
        if synonym in by_normalised:
            return by_normalised[synonym]
    return None


def _row_to_record(row: pd.Series, resolved: Mapping[str, Optional[str]], position: int) -> LeadLocationRecord:
    record_id = _extract_scalar(row, resolved["id"]) or str(position)
    display_fields = {field: _extract_scalar(row, resolved[field]) for field in DISPLAY_FIELDS}

    latitude = _extract_scalar(row, resolved["latitude"])
    longitude = _extract_scalar(row, resolved["longitude"])
    coordinate = coerce_coordinate(latitude, longitude)
    if coordinate is None and (latitude or longitude):
        LOGGER.debug("Lead %s has an unusable location (%r, %r)", record_id, latitude, longitude)

    history = parse_call_history(_extract_scalar(row, resolved["call_history"]), record_id=record_id)
    return LeadLocationRecord(
        id=record_id,
        display_fields=display_fields,
        coordinate=coordinate,
        call_history=history,
    )


def parse_call_history(value: Optional[str], *, record_id: str = "?") -> List[CallHistoryEntry]:
    """Decode a JSON array of call objects; malformed cells give an empty history."""

    if not value:
        return []
    try:
        payload = json.loads(value)
    except json.JSONDecodeError:
        LOGGER.warning("Ignoring malformed call history for lead %s", record_id)
        return []
    if not isinstance(payload, list):
        LOGGER.warning("Call history for lead %s is not a list", record_id)
        return []
    return [CallHistoryEntry.from_mapping(item) for item in payload if isinstance(item, dict)]


def _extract_scalar(row: pd.Series, column: Optional[str]) -> Optional[str]:
    if column is None or column not in row:
        return None
    return _clean_text(row[column])


def _clean_text(value: Any) -> Optional[str]:
    if pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


__all__ = ["load_lead_records", "load_card_texts", "parse_call_history", "UnsupportedFileTypeError"]
