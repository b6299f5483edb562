from __future__ import annotations

from fractions import Fraction

import pytest

from exifmeta.gps import (
    GeoPoint,
    convert_coordinate,
    extract_altitude,
    extract_location,
    normalize_hemisphere,
)
from exifmeta.values import Rational


def test_dms_triple_to_decimal() -> None:
    assert convert_coordinate([40, 26, 46], "N") == pytest.approx(40.446111, abs=1e-5)
    assert convert_coordinate([40, 26, 46], "S") == pytest.approx(-40.446111, abs=1e-5)


def test_triple_components_accept_rationals_pairs_and_strings() -> None:
    expected = pytest.approx(55.5, rel=1e-7)
    assert convert_coordinate((Rational(55, 1), Rational(30, 1), Rational(0, 1)), "N") == expected
    assert convert_coordinate([(55, 1), (30, 1), (0, 1)], "N") == expected
    assert convert_coordinate(["55", "30", "0"], "N") == expected
    assert convert_coordinate([Fraction(111, 2), 0, 0.0], "N") == expected


def test_plain_decimal_and_numeric_string() -> None:
    assert convert_coordinate(3.14, "W") == -3.14
    assert convert_coordinate(3.14, None) == 3.14
    assert convert_coordinate(3.14) == 3.14
    assert convert_coordinate(" 12.5 ", "S") == -12.5


def test_invalid_shapes_yield_none() -> None:
    assert convert_coordinate("not a number", "N") is None
    assert convert_coordinate([1, 2, "bad"], "N") is None
    assert convert_coordinate([1, 2], "N") is None
    assert convert_coordinate([1, 2, 3, 4], "N") is None
    assert convert_coordinate({"degrees": 1}, "N") is None
    assert convert_coordinate(Rational(1, 2), "N") is None
    assert convert_coordinate(True, "N") is None
    assert convert_coordinate(None, "N") is None


def test_degenerate_components_invalidate_the_triple() -> None:
    assert convert_coordinate([Rational(40, 0), 26, 46], "N") is None
    assert convert_coordinate([(40, 1), (26, 0), (46, 1)], "N") is None
    assert convert_coordinate([40, float("nan"), 46], "N") is None
    assert convert_coordinate(["40", "inf", "46"], "N") is None
    assert convert_coordinate("nan", "N") is None


def test_values_too_large_for_a_float_yield_none() -> None:
    assert convert_coordinate(10**400, "N") is None
    assert convert_coordinate([(10**400, 1), 0, 0], "N") is None
    assert convert_coordinate([Rational(10**400, 1), 0, 0], "N") is None
    assert convert_coordinate([10**400, 0, 0], "S") is None
    assert extract_location({"GPSLatitude": 10**400, "GPSLongitude": 1.0}) is None
    assert extract_altitude({"GPSAltitude": (10**400, 3)}) is None


def test_unrecognized_reference_keeps_sign() -> None:
    assert convert_coordinate(10.0, "Q") == 10.0
    assert convert_coordinate(10.0, "") == 10.0
    assert convert_coordinate(10.0, 7) == 10.0


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("N", "N"),
        ("s", "S"),
        (" West ", "W"),
        (b"E\x00", "E"),
        ("Q", None),
        (None, None),
        ("", None),
    ],
)
def test_normalize_hemisphere(raw: object, expected: str | None) -> None:
    assert normalize_hemisphere(raw) == expected


def test_extract_location_requires_both_axes(camera_tags: dict) -> None:
    point = extract_location(camera_tags)

    assert isinstance(point, GeoPoint)
    assert point.latitude == pytest.approx(40.446111, abs=1e-5)
    assert point.longitude == pytest.approx(-79.982222, abs=1e-5)

    latitude_only = {key: value for key, value in camera_tags.items() if key != "GPSLongitude"}
    assert extract_location(latitude_only) is None

    broken = dict(camera_tags, GPSLongitude="somewhere")
    assert extract_location(broken) is None


def test_geo_point_format() -> None:
    assert GeoPoint(40.4461111, -79.9822222).format() == "40.446111, -79.982222"
    assert GeoPoint(1.0, 2.0).format(2) == "1.00, 2.00"


def test_extract_altitude() -> None:
    assert extract_altitude({"GPSAltitude": Rational(1234, 100)}) == pytest.approx(12.34)
    assert extract_altitude({"GPSAltitude": (1234, 100), "GPSAltitudeRef": 1}) == pytest.approx(-12.34)
    assert extract_altitude({"GPSAltitude": 50, "GPSAltitudeRef": b"\x01"}) == -50
    assert extract_altitude({"GPSAltitude": "50", "GPSAltitudeRef": "0"}) == 50
    assert extract_altitude({"GPSAltitude": Rational(1, 0)}) is None
    assert extract_altitude({}) is None
