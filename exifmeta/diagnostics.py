from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Literal

EventKind = Literal["gps.unconvertible", "gps.missing_reference", "date.unparseable"]


@dataclass(frozen=True, slots=True)
class DiagnosticEvent:
    kind: EventKind
    field: str
    detail: str = ""
    value: Any = None


EventSink = Callable[[DiagnosticEvent], None]


def log_event(event: DiagnosticEvent) -> None:
    logging.debug(
        "exif diagnostic %s on %s",
        event.kind,
        event.field,
        extra={"event": event.kind, "field": event.field, "detail": event.detail},
    )


class EventCollector:
    """Sink that keeps every event it receives, in order."""

    def __init__(self) -> None:
        self.events: list[DiagnosticEvent] = []

    def __call__(self, event: DiagnosticEvent) -> None:
        self.events.append(event)

    def kinds(self) -> list[str]:
        return [event.kind for event in self.events]


__all__ = ["DiagnosticEvent", "EventCollector", "EventKind", "EventSink", "log_event"]
