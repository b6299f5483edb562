from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from .formatting import DEFAULT_DATE_FORMAT


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off", ""}:
        return False
    logging.warning("Invalid %s=%s, using %s", name, raw, default)
    return default


def _env_int(name: str, default: int, *, minimum: int = 0) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logging.warning("Invalid %s=%s, using %s", name, raw, default)
        return default
    return max(minimum, value)


@dataclass(frozen=True, slots=True)
class Settings:
    date_format: str = DEFAULT_DATE_FORMAT
    coordinate_precision: int = 6
    use_exifread: bool = True


def load_settings() -> Settings:
    date_format = (os.getenv("EXIFMETA_DATE_FORMAT") or "").strip() or DEFAULT_DATE_FORMAT
    return Settings(
        date_format=date_format,
        coordinate_precision=_env_int("EXIFMETA_COORD_PRECISION", 6),
        use_exifread=_env_flag("EXIFMETA_USE_EXIFREAD", True),
    )


__all__ = ["Settings", "load_settings"]
