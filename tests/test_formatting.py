from __future__ import annotations

from fractions import Fraction

import pytest

from exifmeta.formatting import NOT_AVAILABLE, format_tags, format_value
from exifmeta.values import Rational


@pytest.mark.parametrize(
    ("key", "value", "expected"),
    [
        ("FNumber", 2.8, "f/2.8"),
        ("FNumber", Rational(28, 10), "f/2.8"),
        ("ExposureTime", 0.004, "1/250s"),
        ("ExposureTime", Rational(1, 125), "1/125s"),
        ("ExposureTime", 2, "2s"),
        ("ExposureTime", 2.0, "2s"),
        ("ExposureTime", 1, "1s"),
        ("ExposureTime", 0.3, "1/3s"),
        ("ISOSpeedRatings", 400, "ISO 400"),
        ("ISOSpeedRatings", (100, 200), "ISO 100, 200"),
        ("FocalLength", 50, "50mm"),
        ("FocalLength", Fraction(87, 2), "43.5mm"),
        ("Unknown", None, NOT_AVAILABLE),
        ("FNumber", None, NOT_AVAILABLE),
    ],
)
def test_field_rules(key: str, value: object, expected: str) -> None:
    assert format_value(key, value) == expected


def test_exposure_rounds_half_up() -> None:
    assert format_value("ExposureTime", 1 / 2.5) == "1/3s"


def test_date_fields_render_locale_independent() -> None:
    assert format_value("DateTimeOriginal", "2023:07:04 10:15:30") == "2023-07-04 10:15:30"
    assert format_value("DateTime", "2023:07:04 10:15:30", date_format="%d.%m.%Y") == "04.07.2023"


def test_unparseable_date_falls_back_to_raw_string() -> None:
    assert format_value("DateTimeDigitized", "sometime in July") == "sometime in July"


def test_dms_rendering() -> None:
    assert format_value("GPSLatitude", [40, 26, 46]) == "40° 26' 46\""
    dms = (Rational(40, 1), Rational(26, 1), Rational(4665, 100))
    assert format_value("GPSLongitude", dms) == "40° 26' 46.65\""
    pairs = ((40, 1), (26, 1), (46, 1))
    assert format_value("GPSLatitude", pairs) == "40° 26' 46\""


def test_dms_rule_falls_through_for_decimal_values() -> None:
    assert format_value("GPSLatitude", 40.446) == "40.446"
    assert format_value("GPSLongitude", [1, 2]) == "1, 2"


def test_generic_rendering() -> None:
    assert format_value("Make", "Canon") == "Canon"
    assert format_value("Orientation", 1) == "1"
    assert format_value("XResolution", 72.0) == "72"
    assert format_value("GPSVersionID", (2, 2, 0, 0)) == "2, 2, 0, 0"
    assert format_value("Unknown", Rational(1, 3)) == '{"denominator": 3, "numerator": 1}'
    assert format_value("Unknown", {"b": 1, "a": [1, 2]}) == '{"a": [1, 2], "b": 1}'
    assert format_value("MakerNote", b"ABC\x00") == "ABC"


def test_rules_fall_back_to_generic_for_uninterpretable_values() -> None:
    assert format_value("ExposureTime", "1/250") == "1/250"
    assert format_value("FNumber", {"value": 2.8}) == '{"value": 2.8}'
    assert format_value("ExposureTime", Rational(1, 0)) == '{"denominator": 0, "numerator": 1}'


def test_formatting_is_deterministic(camera_tags: dict) -> None:
    first = format_tags(camera_tags)
    second = format_tags(camera_tags)

    assert first == second
    assert all(isinstance(text, str) for text in first.values())


def test_formatted_date_formats_again_to_itself() -> None:
    once = format_value("DateTime", "2023:07:04 10:15:30")

    assert format_value("DateTime", once) == once


def test_extreme_numbers_never_raise() -> None:
    assert format_value("ExposureTime", 1e-310) == "1e-310"
    assert format_value("FNumber", 10**5000).startswith("f/0x")
    assert format_value("Unknown", 10**5000).startswith("0x")
    huge = Rational(10**400, 1)
    assert format_value("Unknown", huge) == f'{{"denominator": 1, "numerator": {10**400}}}'
    assert format_value("GPSLatitude", (huge, 0, 0)).endswith("° 0' 0\"")
