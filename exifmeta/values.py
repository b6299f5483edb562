from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal

TagKind = Literal[
    "missing",
    "number",
    "text",
    "rational",
    "triple",
    "sequence",
    "mapping",
    "other",
]


@dataclass(frozen=True, slots=True)
class Rational:
    """EXIF fraction kept as its two integer halves."""

    numerator: int
    denominator: int

    @property
    def value(self) -> float | None:
        if self.denominator == 0:
            return None
        try:
            return self.numerator / self.denominator
        except OverflowError:
            return None

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


def as_rational(value: Any) -> Rational | None:
    """Return ``value`` as a :class:`Rational` when it looks like one.

    ``Fraction``, Pillow's ``IFDRational`` and exifread's ``Ratio`` all expose
    integer ``numerator``/``denominator`` attributes. Plain ints expose them
    too, so numbers are excluded explicitly.
    """

    if isinstance(value, Rational):
        return value
    if value is None or isinstance(value, (bool, int, float, str, bytes)):
        return None
    numerator = getattr(value, "numerator", None)
    denominator = getattr(value, "denominator", None)
    if isinstance(numerator, int) and isinstance(denominator, int):
        return Rational(numerator, denominator)
    return None


def as_rational_pair(value: Any) -> Rational | None:
    """Return a ``(numerator, denominator)`` tuple as a :class:`Rational`."""

    if isinstance(value, tuple) and len(value) == 2:
        numerator, denominator = value
        if _is_int(numerator) and _is_int(denominator):
            return Rational(numerator, denominator)
    return None


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def classify_value(value: Any) -> TagKind:
    if value is None:
        return "missing"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "text"
    if as_rational(value) is not None:
        return "rational"
    if is_sequence(value):
        return "triple" if len(value) == 3 else "sequence"
    if isinstance(value, Mapping):
        return "mapping"
    return "other"


def parse_number(text: str) -> float | None:
    try:
        number = float(text.strip().strip("\x00"))
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def resolve_number(value: Any) -> float | None:
    """Resolve a scalar tag value to a finite float.

    Accepts plain numbers, numeric strings and rationals. Anything else,
    including zero-denominator rationals and NaN, resolves to ``None``.
    """

    kind = classify_value(value)
    number: float | None
    if kind == "number":
        try:
            number = float(value)
        except OverflowError:
            return None
    elif kind == "text":
        return parse_number(value)
    elif kind == "rational":
        number = as_rational(value).value  # type: ignore[union-attr]
    else:
        return None
    if number is None or not math.isfinite(number):
        return None
    return number


def decode_text(value: bytes | bytearray) -> str:
    for encoding in ("utf-8", "latin-1"):
        try:
            decoded = bytes(value).decode(encoding).strip("\x00").strip()
        except UnicodeDecodeError:
            continue
        return decoded
    return bytes(value).hex()  # pragma: no cover - latin-1 always decodes


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


__all__ = [
    "Rational",
    "TagKind",
    "as_rational",
    "as_rational_pair",
    "classify_value",
    "decode_text",
    "is_number",
    "is_sequence",
    "parse_number",
    "resolve_number",
]
