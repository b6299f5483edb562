"""Normalize camera EXIF tags into a canonical metadata record."""

from .dates import parse_camera_date, select_best_date
from .fields import IMPORTANT_FIELDS, select_important_fields
from .formatting import NOT_AVAILABLE, format_value
from .gps import GeoPoint, convert_coordinate, extract_location
from .merge import merge_tags
from .normalize import CanonicalMetadata, normalize_metadata
from .values import Rational

__all__ = [
    "CanonicalMetadata",
    "GeoPoint",
    "IMPORTANT_FIELDS",
    "NOT_AVAILABLE",
    "Rational",
    "convert_coordinate",
    "extract_location",
    "format_value",
    "merge_tags",
    "normalize_metadata",
    "parse_camera_date",
    "select_best_date",
    "select_important_fields",
]
