"""Read EXIF tags out of image bytes.

This is the image source that feeds :func:`exifmeta.normalize_metadata`.
It is the only module of the package that touches files or decodes images.
"""

from __future__ import annotations

import io
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, BinaryIO

import piexif
from PIL import ExifTags, Image, UnidentifiedImageError

from .values import Rational, as_rational, decode_text

try:  # pragma: no cover - optional dependency
    import exifread  # type: ignore
except Exception:  # pragma: no cover - dependency may be missing in some environments
    exifread = None  # type: ignore[assignment]

_HEIF_REGISTERED = False
_HEIF_IMPORT_FAILED = False

_RATIONAL_TYPES = {piexif.TYPES.Rational, piexif.TYPES.SRational}
_EXIFREAD_PREFIXES = ("GPS ", "EXIF ", "Image ")
# The GPS IFD pointer is dereferenced into the flattened GPS tags.
_POINTER_TAGS = frozenset({"GPSInfo", "GPSTag", "ExifTag", "ExifOffset", "InteroperabilityTag"})

Source = str | os.PathLike[str] | bytes | bytearray | memoryview | BinaryIO


class ImageSourceError(Exception):
    """Raised when an image cannot be read at all."""


def read_exif_tags(path_or_bytes: Source, *, use_exifread: bool = True) -> dict[str, Any]:
    """Return a flat ``{tag name: value}`` map for an image.

    piexif is tried first, then Pillow's own EXIF reader, then exifread.
    Images without EXIF yield a map holding only their pixel size.
    """

    data, origin = _read_source_bytes(path_or_bytes)
    if not data:
        raise ImageSourceError(f"Empty image source: {origin or '<bytes>'}")

    if _detect_image_format(data) == "HEIC":
        _ensure_heif_registered()

    try:
        with Image.open(io.BytesIO(data)) as image:
            size = image.size
            exif_bytes = getattr(image, "info", {}).get("exif")
            pil_exif = image.getexif() if hasattr(image, "getexif") else None
            pil_gps = pil_exif.get_ifd(ExifTags.IFD.GPSInfo) if pil_exif else None
            pil_sub = pil_exif.get_ifd(ExifTags.IFD.Exif) if pil_exif else None
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageSourceError(f"Unable to open image {origin or '<bytes>'}: {exc}") from exc

    tags: dict[str, Any] = {}
    source = "none"

    exif_dict = _load_piexif(exif_bytes, data)
    if exif_dict:
        tags = _tags_from_piexif(exif_dict)
        if tags:
            source = "piexif"

    if not tags and pil_exif:
        tags = _tags_from_pillow(pil_exif, pil_sub or {}, pil_gps or {})
        if tags:
            source = "pillow"

    if not tags and use_exifread and exifread is not None:
        try:
            tags = _tags_from_exifread(data)
        except Exception:
            logging.debug("exifread failed", exc_info=True)
            tags = {}
        if tags:
            source = "exifread"

    width, height = size
    tags.setdefault("ImageWidth", width)
    tags.setdefault("ImageHeight", height)
    logging.debug(
        "Read %d EXIF tags", len(tags), extra={"source": source, "image_id": origin}
    )
    return tags


def _read_source_bytes(path_or_bytes: Source) -> tuple[bytes, str | None]:
    if isinstance(path_or_bytes, (bytes, bytearray, memoryview)):
        return (bytes(path_or_bytes), None)
    if isinstance(path_or_bytes, (str, os.PathLike)):
        path = Path(path_or_bytes)
        try:
            return (path.read_bytes(), str(path))
        except OSError as exc:
            raise ImageSourceError(f"Unable to read image {path}: {exc}") from exc
    if hasattr(path_or_bytes, "read"):
        data = path_or_bytes.read()
        if isinstance(data, str):
            data = data.encode("utf-8")
        return (data or b"", getattr(path_or_bytes, "name", None))
    raise TypeError(f"Unsupported input type: {type(path_or_bytes)!r}")


def _detect_image_format(data: bytes) -> str | None:
    if len(data) >= 4 and data[:3] == b"\xff\xd8\xff":
        return "JPEG"
    if len(data) >= 4 and data[:4] in {b"II*\x00", b"MM\x00*"}:
        return "TIFF"
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "WEBP"
    if len(data) >= 12 and data[4:8] == b"ftyp":
        brand = data[8:12]
        if brand in {b"heic", b"heix", b"hevc", b"hevx", b"mif1", b"msf1"}:
            return "HEIC"
    return None


def _ensure_heif_registered() -> None:
    global _HEIF_REGISTERED, _HEIF_IMPORT_FAILED
    if _HEIF_REGISTERED or _HEIF_IMPORT_FAILED:
        return
    try:
        from pillow_heif import register_heif_opener  # type: ignore

        register_heif_opener()
        _HEIF_REGISTERED = True
    except Exception:
        logging.debug("Unable to register pillow_heif", exc_info=True)
        _HEIF_IMPORT_FAILED = True


def _load_piexif(exif_bytes: bytes | None, data: bytes) -> dict[str, Any] | None:
    if exif_bytes:
        try:
            return piexif.load(exif_bytes)
        except Exception:
            logging.debug("piexif failed on embedded bytes", exc_info=True)
    if _detect_image_format(data) in {"JPEG", "TIFF", "WEBP"}:
        try:
            return piexif.load(data)
        except Exception:
            logging.debug("piexif failed on full image", exc_info=True)
    return None


def _tags_from_piexif(exif_dict: Mapping[str, Any]) -> dict[str, Any]:
    tags: dict[str, Any] = {}
    for ifd_name in ("0th", "Exif", "GPS"):
        source_ifd = exif_dict.get(ifd_name)
        if not isinstance(source_ifd, Mapping):
            continue
        tag_map = piexif.TAGS.get(ifd_name, {})
        for tag_id, raw_value in source_ifd.items():
            tag_info = tag_map.get(tag_id) or {}
            if ifd_name == "GPS":
                tag_name = ExifTags.GPSTAGS.get(tag_id, str(tag_id))
            else:
                tag_name = tag_info.get("name") or ExifTags.TAGS.get(tag_id, str(tag_id))
            if tag_name in _POINTER_TAGS:
                continue
            is_rational = tag_info.get("type") in _RATIONAL_TYPES
            tags[tag_name] = _piexif_value(raw_value, is_rational)
    return tags


def _piexif_value(value: Any, is_rational: bool) -> Any:
    if isinstance(value, bytes):
        return decode_text(value)
    if is_rational and isinstance(value, tuple):
        # piexif gives a single rational as (num, den), arrays as ((num, den), ...).
        if len(value) == 2 and all(isinstance(part, int) for part in value):
            return Rational(*value)
        return tuple(Rational(*part) for part in value)
    if isinstance(value, tuple) and len(value) == 1:
        return value[0]
    return value


def _tags_from_pillow(
    exif: Mapping[int, Any], sub_ifd: Mapping[int, Any], gps_ifd: Mapping[int, Any]
) -> dict[str, Any]:
    tags: dict[str, Any] = {}
    for tag_id, raw_value in list(exif.items()) + list(sub_ifd.items()):
        tag_name = ExifTags.TAGS.get(tag_id, str(tag_id))
        if tag_name in _POINTER_TAGS:
            continue
        tags[tag_name] = _plain_value(raw_value)
    for tag_id, raw_value in gps_ifd.items():
        tags[ExifTags.GPSTAGS.get(tag_id, str(tag_id))] = _plain_value(raw_value)
    return tags


def _tags_from_exifread(data: bytes) -> dict[str, Any]:
    fields = exifread.process_file(io.BytesIO(data), details=False)
    tags: dict[str, Any] = {}
    for tag_name, field in fields.items():
        for prefix in _EXIFREAD_PREFIXES:
            if tag_name.startswith(prefix):
                key = tag_name[len(prefix):]
                break
        else:
            continue
        if key in _POINTER_TAGS:
            continue
        values = getattr(field, "values", field)
        printable = getattr(field, "printable", None)
        if isinstance(values, str) or (isinstance(printable, str) and _is_ascii_field(field)):
            text = values if isinstance(values, str) else printable
            tags[key] = text.replace("\x00", "").strip()
            continue
        tags[key] = _plain_value(values)
    return tags


def _is_ascii_field(field: Any) -> bool:
    field_type = getattr(field, "field_type", None)
    name = getattr(field_type, "name", field_type)
    if isinstance(name, str):
        return name.upper() == "ASCII"
    return field_type == 2


def _plain_value(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return decode_text(value)
    rational = as_rational(value)
    if rational is not None:
        return rational
    if isinstance(value, (list, tuple)):
        items = tuple(_plain_value(item) for item in value)
        return items[0] if len(items) == 1 else items
    return value


__all__ = ["ImageSourceError", "read_exif_tags"]
