from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from .values import (
    as_rational_pair,
    classify_value,
    decode_text,
    parse_number,
    resolve_number,
)

Hemisphere = Literal["N", "S", "E", "W"]

_HEMISPHERES: frozenset[str] = frozenset({"N", "S", "E", "W"})
_NEGATIVE_HEMISPHERES: frozenset[str] = frozenset({"S", "W"})


@dataclass(frozen=True, slots=True)
class GeoPoint:
    latitude: float
    longitude: float

    def format(self, precision: int = 6) -> str:
        return f"{self.latitude:.{precision}f}, {self.longitude:.{precision}f}"


def normalize_hemisphere(ref: Any) -> Hemisphere | None:
    """Return the hemisphere letter carried by ``ref``.

    piexif hands references out as ``b"N\\x00"``, exifread as ``"N"`` and
    some writers spell the whole word, so only the first letter counts.
    """

    if isinstance(ref, (bytes, bytearray)):
        ref = decode_text(ref)
    if not isinstance(ref, str):
        return None
    text = ref.strip().strip("\x00").strip().upper()
    if not text or text[0] not in _HEMISPHERES:
        return None
    return text[0]  # type: ignore[return-value]


def _resolve_component(component: Any) -> float | None:
    pair = as_rational_pair(component)
    if pair is not None:
        return pair.value
    return resolve_number(component)


def convert_coordinate(raw: Any, ref: Any = None) -> float | None:
    """Convert a raw GPS coordinate to signed decimal degrees.

    ``raw`` is a degrees/minutes/seconds triple, a plain number or a
    numeric string. ``S`` and ``W`` references flip the sign; a missing
    reference leaves it positive. Returns ``None`` instead of raising for
    anything it cannot interpret.
    """

    kind = classify_value(raw)
    if kind == "triple":
        parts: list[float] = []
        for component in raw:
            number = _resolve_component(component)
            if number is None:
                return None
            parts.append(number)
        degrees, minutes, seconds = parts
        decimal = degrees + minutes / 60.0 + seconds / 3600.0
    elif kind == "number":
        try:
            decimal = float(raw)
        except OverflowError:
            return None
    elif kind == "text":
        parsed = parse_number(raw)
        if parsed is None:
            return None
        decimal = parsed
    else:
        return None

    if not math.isfinite(decimal):
        return None
    if normalize_hemisphere(ref) in _NEGATIVE_HEMISPHERES:
        decimal = -decimal
    return decimal


def extract_location(tags: Mapping[str, Any]) -> GeoPoint | None:
    latitude_raw = tags.get("GPSLatitude")
    longitude_raw = tags.get("GPSLongitude")
    if latitude_raw is None or longitude_raw is None:
        return None
    latitude = convert_coordinate(latitude_raw, tags.get("GPSLatitudeRef"))
    longitude = convert_coordinate(longitude_raw, tags.get("GPSLongitudeRef"))
    if latitude is None or longitude is None:
        return None
    return GeoPoint(latitude, longitude)


def _altitude_below_sea_level(ref: Any) -> bool:
    if isinstance(ref, (bytes, bytearray)):
        return bool(ref) and ref[0] == 1
    if isinstance(ref, str):
        # A raw BYTE tag decoded as text arrives as "\x01".
        return ref.strip().strip("\x00") in {"1", "\x01"}
    if isinstance(ref, int) and not isinstance(ref, bool):
        return ref == 1
    return False


def extract_altitude(tags: Mapping[str, Any]) -> float | None:
    """Altitude in metres, negative below sea level."""

    raw = tags.get("GPSAltitude")
    pair = as_rational_pair(raw)
    if pair is not None:
        raw = pair
    value = resolve_number(raw)
    if value is None:
        return None
    if _altitude_below_sea_level(tags.get("GPSAltitudeRef")):
        value = -value
    return value


__all__ = [
    "GeoPoint",
    "Hemisphere",
    "convert_coordinate",
    "extract_altitude",
    "extract_location",
    "normalize_hemisphere",
]
