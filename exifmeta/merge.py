from __future__ import annotations

from collections.abc import Mapping
from typing import Any

RawTagMap = Mapping[str, Any]


def merge_tags(primary: RawTagMap | None, secondary: RawTagMap | None) -> dict[str, Any]:
    """Combine two tag maps; values from ``secondary`` win on shared keys.

    Neither input is modified. Primary keys keep their order, keys that only
    the secondary source carries are appended after them.
    """

    merged: dict[str, Any] = {}
    for name, source in (("primary", primary), ("secondary", secondary)):
        if source is None:
            continue
        if not isinstance(source, Mapping):
            raise TypeError(f"{name} tags must be a mapping, got {type(source)!r}")
        merged.update(source)
    return merged


__all__ = ["RawTagMap", "merge_tags"]
