from __future__ import annotations

from collections.abc import Mapping
from typing import Any

IMPORTANT_FIELDS: tuple[str, ...] = (
    "DateTime",
    "DateTimeOriginal",
    "Make",
    "Model",
    "Software",
    "FNumber",
    "ExposureTime",
    "ISOSpeedRatings",
    "FocalLength",
    "GPSLatitude",
    "GPSLatitudeRef",
    "GPSLongitude",
    "GPSLongitudeRef",
    "GPSAltitude",
    "ImageWidth",
    "ImageHeight",
    "Orientation",
)


def select_important_fields(tags: Mapping[str, Any]) -> list[tuple[str, Any]]:
    """Key fields in display order; fields the image lacks are left out."""

    return [(field, tags[field]) for field in IMPORTANT_FIELDS if field in tags]


__all__ = ["IMPORTANT_FIELDS", "select_important_fields"]
