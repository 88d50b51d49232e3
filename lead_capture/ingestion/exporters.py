"""Export utilities for nearby matches and card scan results."""
from __future__ import annotations

from pathlib import Path
from typing import MutableMapping, Optional, Sequence, Union

import pandas as pd

from ..models import CardScanResult, NearbyMatch
from .loaders import UnsupportedFileTypeError

PathLike = Union[str, Path]

_NEARBY_COLUMNS = [
    "id",
    "company",
    "contact_name",
    "contact_title",
    "contact_email",
    "contact_phone",
    "website",
    "latitude",
    "longitude",
    "distance_meters",
    "distance_feet",
    "last_call",
]

_CARD_COLUMNS = [
    "source",
    "company",
    "contact_name",
    "contact_title",
    "email",
    "phone",
    "website",
    "all_emails",
    "all_phones",
]


def nearby_matches_to_dataframe(matches: Sequence[NearbyMatch]) -> pd.DataFrame:
    """Convert matches into a :class:`pandas.DataFrame`, nearest first."""

    frame = pd.DataFrame([match.as_row() for match in matches])
    return _with_leading_columns(frame, _NEARBY_COLUMNS)


def card_results_to_dataframe(results: Sequence[CardScanResult]) -> pd.DataFrame:
    frame = pd.DataFrame([result.as_row() for result in results])
    return _with_leading_columns(frame, _CARD_COLUMNS)


def export_nearby_matches(
    matches: Sequence[NearbyMatch],
    path: PathLike,
    *,
    sheet_name: str = "Nearby",
    exporter_kwargs: Optional[MutableMapping[str, object]] = None,
) -> Path:
    """Write nearby matches to a CSV, TSV, or Excel file."""

    output_path = Path(path)
    _write_dataframe(nearby_matches_to_dataframe(matches), output_path, sheet_name=sheet_name, exporter_kwargs=exporter_kwargs)
    return output_path


def export_card_results(
    results: Sequence[CardScanResult],
    path: PathLike,
    *,
    sheet_name: str = "Cards",
    exporter_kwargs: Optional[MutableMapping[str, object]] = None,
) -> Path:
    """Write card scan results to a CSV, TSV, or Excel file."""

    output_path = Path(path)
    _write_dataframe(card_results_to_dataframe(results), output_path, sheet_name=sheet_name, exporter_kwargs=exporter_kwargs)
    return output_path


def _with_leading_columns(frame: pd.DataFrame, leading: Sequence[str]) -> pd.DataFrame:
    # Empty inputs still get a header row.
    for column in leading:
        if column not in frame.columns:
            frame[column] = pd.Series(dtype=object)
    extra = [column for column in frame.columns if column not in leading]
    return frame[list(leading) + extra]


def _write_dataframe(
    dataframe: pd.DataFrame,
    path: Path,
    *,
    sheet_name: str,
    exporter_kwargs: Optional[MutableMapping[str, object]],
) -> None:
    exporter_kwargs = dict(exporter_kwargs or {})
    suffix = path.suffix.lower()
    path.parent.mkdir(parents=True, exist_ok=True)

    if suffix in {".csv", ".tsv"}:
        if suffix == ".tsv":
            exporter_kwargs.setdefault("sep", "\t")
        dataframe.to_csv(path, index=False, **exporter_kwargs)
        return

    if suffix in {".xlsx", ".xlsm"}:
        engine = exporter_kwargs.pop("engine", None) or "openpyxl"
        dataframe.to_excel(path, index=False, sheet_name=sheet_name, engine=engine, **exporter_kwargs)
        return

    raise UnsupportedFileTypeError(f"Unsupported export file extension: {suffix}")


__all__ = [
    "card_results_to_dataframe",
    "export_card_results",
    "export_nearby_matches",
    "nearby_matches_to_dataframe",
]
