"""Configuration helpers for proximity matching and card scanning."""
from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .geo import feet_to_meters
from .proximity import DEFAULT_MAX_RESULTS, DEFAULT_RADIUS_METERS

LOGGER = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when configuration files are missing or malformed."""


_SUPPORTED_EXTENSIONS = {".json", ".yaml", ".yml"}


@dataclass(frozen=True)
class MatcherSettings:
    """Geofence settings used when looking for previous calls nearby."""

    radius_meters: float = DEFAULT_RADIUS_METERS
    max_results: int = DEFAULT_MAX_RESULTS

    def with_overrides(
        self,
        *,
        radius_meters: Optional[float] = None,
        radius_feet: Optional[float] = None,
        max_results: Optional[int] = None,
    ) -> "MatcherSettings":
        """Return a copy with any supplied values replacing the current ones."""

        updated = self
        if radius_feet is not None:
            updated = replace(updated, radius_meters=feet_to_meters(float(radius_feet)))
        if radius_meters is not None:
            updated = replace(updated, radius_meters=float(radius_meters))
        if max_results is not None:
            updated = replace(updated, max_results=int(max_results))
        updated.validate()
        return updated

    def validate(self) -> None:
        if not math.isfinite(self.radius_meters) or self.radius_meters <= 0:
            raise ConfigurationError(f"radius must be a positive number of meters, got {self.radius_meters!r}")
        if self.max_results < 0:
            raise ConfigurationError(f"max_results must not be negative, got {self.max_results!r}")


def load_configuration(path: str | Path) -> Dict[str, Any]:
    """Load configuration data from a JSON or YAML file."""

    file_path = Path(path)
    if not file_path.exists():
        raise ConfigurationError(f"Configuration file '{file_path}' was not found")

    if file_path.suffix.lower() not in _SUPPORTED_EXTENSIONS:
        raise ConfigurationError(
            f"Unsupported configuration format '{file_path.suffix}'. Supported extensions: {sorted(_SUPPORTED_EXTENSIONS)}"
        )

    text = file_path.read_text(encoding="utf-8")
    try:
        if file_path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Configuration file '{file_path}' could not be parsed: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file '{file_path}' must contain a mapping at the top level")
    return data


def matcher_settings_from_config(config: Dict[str, Any]) -> MatcherSettings:
    """Read the ``proximity`` section of a configuration mapping."""

    section = config.get("proximity") or {}
    if not isinstance(section, dict):
        raise ConfigurationError("The 'proximity' configuration section must be a mapping")

    try:
        settings = MatcherSettings().with_overrides(
            radius_meters=section.get("radius_meters"),
            radius_feet=section.get("radius_feet"),
            max_results=section.get("max_results"),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid proximity configuration: {exc}") from exc
    LOGGER.debug("Using geofence radius %.2f m, max %s results", settings.radius_meters, settings.max_results)
    return settings


__all__ = [
    "ConfigurationError",
    "MatcherSettings",
    "load_configuration",
    "matcher_settings_from_config",
]
