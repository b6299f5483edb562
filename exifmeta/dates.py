from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

DATE_FIELDS: tuple[str, ...] = ("DateTime", "DateTimeOriginal", "DateTimeDigitized")
# Order in which fields are trusted as the moment the photo was taken.
DATE_PRIORITY: tuple[str, ...] = ("DateTimeOriginal", "DateTime", "DateTimeDigitized")

_CAMERA_FORMAT = "%Y:%m:%d %H:%M:%S"
_CAMERA_PATTERN = re.compile(r"[0-9]{4}:[0-9]{2}:[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")
# Display form, so already formatted dates read back to the same instant.
_DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"
_DISPLAY_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}[ T][0-9]{2}:[0-9]{2}:[0-9]{2}")


def parse_camera_date(value: Any) -> datetime | None:
    """Parse an EXIF ``YYYY:MM:DD HH:MM:SS`` string into a naive datetime.

    Cameras record local time without an offset, so no timezone is attached.
    Malformed strings, impossible calendar fields and non-string values all
    yield ``None``. The ``YYYY-MM-DD HH:MM:SS`` display form is read too.
    """

    if not isinstance(value, str):
        return None
    text = value.strip().strip("\x00").strip()
    if _CAMERA_PATTERN.fullmatch(text):
        date_format = _CAMERA_FORMAT
    elif _DISPLAY_PATTERN.fullmatch(text):
        date_format = _DISPLAY_FORMAT
        text = text.replace("T", " ")
    else:
        return None
    try:
        return datetime.strptime(text, date_format)
    except ValueError:
        return None


def select_best_date(tags: Mapping[str, Any]) -> datetime | None:
    for field in DATE_PRIORITY:
        if field not in tags:
            continue
        parsed = parse_camera_date(tags[field])
        if parsed is not None:
            return parsed
    return None


__all__ = ["DATE_FIELDS", "DATE_PRIORITY", "parse_camera_date", "select_best_date"]
