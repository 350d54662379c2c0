"""
Value types flowing between tasks.

Tool outputs and argument payloads are limited to a closed set of shapes:
text, numbers, a Coordinates record, a generic JSON record, or None.
"""

import json
import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union


@dataclass(frozen=True)
class Coordinates:
    """A latitude/longitude pair, optionally labelled with a place name."""
    latitude: float
    longitude: float
    label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data: Dict[str, Any] = {
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
        if self.label:
            data["label"] = self.label
        return data

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Optional["Coordinates"]:
        """
        Build coordinates from a mapping with latitude/longitude keys.

        Accepts ``latitude``/``longitude`` or the short ``lat``/``lon`` forms.
        Returns None when the mapping does not have that shape.
        """
        lat = data.get("latitude", data.get("lat"))
        lon = data.get("longitude", data.get("lon"))
        if not _is_number(lat) or not _is_number(lon):
            return None
        label = data.get("label") or data.get("name")
        return cls(
            latitude=float(lat),
            longitude=float(lon),
            label=str(label) if label else None,
        )

    def __str__(self) -> str:
        place = f"{self.label} " if self.label else ""
        return f"{place}({self.latitude:.4f}, {self.longitude:.4f})"


ToolValue = Union[str, int, float, Coordinates, Dict[str, Any], None]


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def match_coordinates(value: Any) -> Optional[Coordinates]:
    """Return ``value`` as Coordinates if it structurally is a coordinate pair."""
    if isinstance(value, Coordinates):
        return value
    if isinstance(value, Mapping):
        return Coordinates.from_mapping(value)
    return None


def _json_default(value: Any) -> Any:
    if isinstance(value, Coordinates):
        return value.to_dict()
    return str(value)


def to_json_text(value: ToolValue) -> str:
    """Serialize a value as JSON, the form used for placeholder substitution."""
    return json.dumps(value, ensure_ascii=False, default=_json_default)


def to_display_text(value: ToolValue) -> str:
    """Text shown for a task result: strings as-is, everything else as JSON."""
    if isinstance(value, str):
        return value
    return to_json_text(value)
