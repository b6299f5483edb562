from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Any

from .dates import DATE_PRIORITY, parse_camera_date, select_best_date
from .diagnostics import DiagnosticEvent, EventSink
from .fields import select_important_fields
from .formatting import DEFAULT_DATE_FORMAT, format_tags, format_value
from .gps import GeoPoint, convert_coordinate, extract_altitude, extract_location, normalize_hemisphere
from .merge import RawTagMap, merge_tags
from .values import decode_text


@dataclass(frozen=True, slots=True)
class CanonicalMetadata:
    tags: Mapping[str, Any]
    location: GeoPoint | None = None
    captured_at: datetime | None = None
    altitude: float | None = None
    image_id: str | None = None

    @property
    def camera(self) -> str | None:
        parts: list[str] = []
        for field in ("Make", "Model"):
            value = self.tags.get(field)
            if isinstance(value, (bytes, bytearray)):
                value = decode_text(value)
            if isinstance(value, str) and value.strip():
                parts.append(value.strip())
        return " ".join(parts) or None

    def important_fields(self) -> list[tuple[str, Any]]:
        return select_important_fields(self.tags)

    def formatted_fields(
        self, *, date_format: str = DEFAULT_DATE_FORMAT, everything: bool = False
    ) -> dict[str, str]:
        if everything:
            return format_tags(dict(sorted(self.tags.items())), date_format=date_format)
        return format_tags(dict(self.important_fields()), date_format=date_format)

    def summary_lines(
        self, *, date_format: str = DEFAULT_DATE_FORMAT, precision: int = 6
    ) -> list[str]:
        """Human-readable lines for sharing a short description of the photo."""

        lines = [
            f"{key}: {format_value(key, value, date_format=date_format)}"
            for key, value in self.important_fields()
        ]
        if self.location is not None:
            lines.append(f"Location: {self.location.format(precision)}")
        return lines

    def as_dict(self, *, date_format: str = DEFAULT_DATE_FORMAT) -> dict[str, Any]:
        return {
            "image_id": self.image_id,
            "camera": self.camera,
            "captured_at": self.captured_at.isoformat() if self.captured_at else None,
            "latitude": self.location.latitude if self.location else None,
            "longitude": self.location.longitude if self.location else None,
            "altitude": self.altitude,
            "tags": format_tags(self.tags, date_format=date_format),
        }


def _report_gps(tags: Mapping[str, Any], emit: EventSink) -> None:
    for axis in ("GPSLatitude", "GPSLongitude"):
        raw = tags.get(axis)
        if raw is None:
            continue
        ref_field = f"{axis}Ref"
        if convert_coordinate(raw, tags.get(ref_field)) is None:
            emit(DiagnosticEvent("gps.unconvertible", axis, "coordinate could not be resolved", raw))
        elif normalize_hemisphere(tags.get(ref_field)) is None:
            emit(
                DiagnosticEvent(
                    "gps.missing_reference",
                    ref_field,
                    "no hemisphere reference, coordinate assumed positive",
                    tags.get(ref_field),
                )
            )


def _report_dates(tags: Mapping[str, Any], emit: EventSink) -> None:
    for field in DATE_PRIORITY:
        if field in tags and parse_camera_date(tags[field]) is None:
            emit(DiagnosticEvent("date.unparseable", field, "not a camera date", tags[field]))


def normalize_metadata(
    primary: RawTagMap | None,
    secondary: RawTagMap | None = None,
    *,
    image_id: str | None = None,
    on_event: EventSink | None = None,
) -> CanonicalMetadata:
    """Merge both tag sources and derive location, altitude and photo date.

    Tags supplied by ``secondary`` override the primary extraction. Malformed
    tag values never raise; derivations that fail are simply absent and, when
    ``on_event`` is given, reported to it.
    """

    merged = merge_tags(primary, secondary)
    if on_event is not None:
        _report_gps(merged, on_event)
        _report_dates(merged, on_event)

    return CanonicalMetadata(
        tags=MappingProxyType(merged),
        location=extract_location(merged),
        captured_at=select_best_date(merged),
        altitude=extract_altitude(merged),
        image_id=image_id,
    )


__all__ = ["CanonicalMetadata", "normalize_metadata"]
