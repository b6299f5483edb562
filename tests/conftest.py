import os
import sys

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from exifmeta.values import Rational


@pytest.fixture
def camera_tags():
    """Tags as an EXIF reader hands them over for a typical phone photo."""

    return {
        "Make": "Apple",
        "Model": "iPhone 15",
        "Software": "17.1",
        "DateTime": "2023:07:05 09:00:00",
        "DateTimeOriginal": "2023:07:04 10:15:30",
        "FNumber": Rational(16, 10),
        "ExposureTime": Rational(1, 120),
        "ISOSpeedRatings": 50,
        "FocalLength": Rational(26, 1),
        "GPSLatitude": (Rational(40, 1), Rational(26, 1), Rational(46, 1)),
        "GPSLatitudeRef": "N",
        "GPSLongitude": (Rational(79, 1), Rational(58, 1), Rational(56, 1)),
        "GPSLongitudeRef": "W",
        "GPSAltitude": Rational(3200, 100),
        "Orientation": 1,
        "ColorSpace": 1,
    }
