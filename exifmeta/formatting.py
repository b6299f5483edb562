from __future__ import annotations

import json
import math
from collections.abc import Callable, Mapping
from typing import Any

from .dates import DATE_FIELDS, parse_camera_date
from .values import (
    as_rational,
    as_rational_pair,
    classify_value,
    decode_text,
    is_sequence,
    resolve_number,
)

NOT_AVAILABLE = "Not available"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_DMS_FIELDS = frozenset({"GPSLatitude", "GPSLongitude"})


def format_number(value: float | int) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    try:
        return str(value)
    except ValueError:
        # Past the interpreter's int-to-decimal digit limit.
        return f"{value:#x}"


def _scalar_text(value: Any) -> str:
    kind = classify_value(value)
    if kind == "number":
        return format_number(value)
    if kind == "rational":
        rational = as_rational(value)
        number = rational.value  # type: ignore[union-attr]
        if number is not None:
            return format_number(number)
        return "/".join(format_number(part) for part in (rational.numerator, rational.denominator))  # type: ignore[union-attr]
    if kind == "text":
        return value
    if isinstance(value, (bytes, bytearray)):
        return decode_text(value)
    if kind in {"triple", "sequence"}:
        return ", ".join(_scalar_text(item) for item in value)
    return _serialize(value)


def _json_default(value: Any) -> Any:
    rational = as_rational(value)
    if rational is not None:
        return {"numerator": rational.numerator, "denominator": rational.denominator}
    if isinstance(value, (bytes, bytearray)):
        return decode_text(value)
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    return str(value)


def _serialize(value: Any) -> str:
    if isinstance(value, Mapping):
        value = {str(key): item for key, item in value.items()}
    try:
        return json.dumps(value, default=_json_default, sort_keys=True, ensure_ascii=False)
    except (TypeError, ValueError):
        pass
    try:
        return repr(value)
    except ValueError:
        return f"<{type(value).__name__}>"


def _generic(value: Any) -> str:
    kind = classify_value(value)
    if kind in {"triple", "sequence"}:
        return ", ".join(_scalar_text(item) for item in value)
    if kind in {"rational", "mapping", "other"} and not isinstance(value, (bytes, bytearray)):
        return _serialize(value)
    return _scalar_text(value)


def _number_or_text(value: Any) -> str | None:
    """Text used inside a unit template, or ``None`` when the rule cannot apply."""

    if is_sequence(value):
        return ", ".join(_scalar_text(item) for item in value) if value else None
    if classify_value(value) in {"number", "text", "rational"}:
        return _scalar_text(value)
    return None


def _format_date(value: Any, date_format: str) -> str | None:
    parsed = parse_camera_date(value)
    if parsed is None:
        return None if not isinstance(value, str) else value
    return parsed.strftime(date_format)


def _format_dms(value: Any) -> str | None:
    if classify_value(value) != "triple":
        return None
    degrees, minutes, seconds = (
        _scalar_text(as_rational_pair(item) or item) for item in value
    )
    return f"{degrees}° {minutes}' {seconds}\""


def _format_exposure(value: Any) -> str | None:
    seconds = resolve_number(value)
    if seconds is None:
        return None
    if 0 < seconds < 1:
        reciprocal = 1 / seconds
        if not math.isfinite(reciprocal):
            return None
        # Math.round semantics, .5 goes up.
        return f"1/{math.floor(reciprocal + 0.5)}s"
    return f"{format_number(seconds)}s"


def _template(pattern: str) -> Callable[[Any], str | None]:
    def render(value: Any) -> str | None:
        text = _number_or_text(value)
        return None if text is None else pattern.format(text)

    return render


_FIELD_RULES: dict[str, Callable[[Any], str | None]] = {
    "FNumber": _template("f/{}"),
    "ExposureTime": _format_exposure,
    "ISOSpeedRatings": _template("ISO {}"),
    "FocalLength": _template("{}mm"),
}


def format_value(key: str, value: Any, *, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """Render one tag value for display.

    Field-specific rules cover dates, DMS coordinates and the usual camera
    settings; everything else, including values a rule cannot interpret,
    goes through the generic rendering. Never raises on tag data.
    """

    if value is None:
        return NOT_AVAILABLE

    rendered: str | None = None
    if key in DATE_FIELDS:
        rendered = _format_date(value, date_format)
    elif key in _DMS_FIELDS:
        rendered = _format_dms(value)
    else:
        rule = _FIELD_RULES.get(key)
        if rule is not None:
            rendered = rule(value)

    if rendered is not None:
        return rendered
    return _generic(value)


def format_tags(
    tags: Mapping[str, Any], *, date_format: str = DEFAULT_DATE_FORMAT
) -> dict[str, str]:
    return {key: format_value(key, value, date_format=date_format) for key, value in tags.items()}


__all__ = [
    "DEFAULT_DATE_FORMAT",
    "NOT_AVAILABLE",
    "format_number",
    "format_tags",
    "format_value",
]
