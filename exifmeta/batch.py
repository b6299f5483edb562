from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from .diagnostics import EventSink
from .merge import RawTagMap
from .normalize import CanonicalMetadata, normalize_metadata
from .observability import context

BATCH_ITEM_ERROR = "Failed to analyze this image"

TagLoader = Callable[[str], tuple[RawTagMap, RawTagMap | None]]


@dataclass(slots=True)
class BatchItem:
    image_id: str
    metadata: CanonicalMetadata | None = None
    error: str | None = None

    @property
    def has_location(self) -> bool:
        return self.metadata is not None and self.metadata.location is not None

    @property
    def has_date(self) -> bool:
        return self.metadata is not None and self.metadata.captured_at is not None

    @property
    def camera(self) -> str | None:
        return self.metadata.camera if self.metadata is not None else None


@dataclass(slots=True)
class BatchReport:
    items: list[BatchItem] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def analyzed(self) -> int:
        return sum(1 for item in self.items if item.error is None)

    @property
    def with_location(self) -> int:
        return sum(1 for item in self.items if item.has_location)

    @property
    def with_date(self) -> int:
        return sum(1 for item in self.items if item.has_date)

    def summary(self) -> dict[str, int]:
        return {
            "total": self.total,
            "analyzed": self.analyzed,
            "with_location": self.with_location,
            "with_date": self.with_date,
        }


def analyze_batch(
    image_ids: Iterable[str],
    load: TagLoader,
    *,
    on_event: EventSink | None = None,
) -> BatchReport:
    """Normalize every image in turn; one unreadable image does not stop the rest."""

    report = BatchReport()
    for image_id in image_ids:
        with context(image_id=image_id):
            try:
                primary, secondary = load(image_id)
                metadata = normalize_metadata(
                    primary, secondary, image_id=image_id, on_event=on_event
                )
            except Exception:
                logging.exception("Error processing image %s", image_id)
                report.items.append(BatchItem(image_id, error=BATCH_ITEM_ERROR))
                continue
        report.items.append(BatchItem(image_id, metadata=metadata))
    return report


__all__ = ["BATCH_ITEM_ERROR", "BatchItem", "BatchReport", "TagLoader", "analyze_batch"]
