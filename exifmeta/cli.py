"""Print normalized EXIF metadata for one or more images."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any, TextIO

from .batch import analyze_batch
from .config import Settings, load_settings
from .diagnostics import log_event
from .merge import RawTagMap
from .normalize import CanonicalMetadata
from .observability import log_exc, setup_logging
from .source import read_exif_tags


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="exifmeta",
        description="Extract and normalize camera metadata from images.",
    )
    parser.add_argument("images", nargs="+", type=Path, help="Image files to analyze")
    parser.add_argument(
        "--extra",
        type=Path,
        help="JSON object of tags that override the ones read from every image",
    )
    parser.add_argument("--all", action="store_true", help="Show every tag, not only key fields")
    parser.add_argument("--json", action="store_true", help="Emit one JSON document")
    parser.add_argument("--batch", action="store_true", help="Only print batch counts")
    return parser.parse_args(argv)


def _load_extra(path: Path | None) -> RawTagMap | None:
    if path is None:
        return None
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return payload


def _render_text(metadata: CanonicalMetadata, settings: Settings, *, everything: bool) -> list[str]:
    lines = [f"== {metadata.image_id}"]
    if everything:
        formatted = metadata.formatted_fields(date_format=settings.date_format, everything=True)
        lines.extend(f"{key}: {value}" for key, value in formatted.items())
        if metadata.location is not None:
            lines.append(f"Location: {metadata.location.format(settings.coordinate_precision)}")
    else:
        lines.extend(
            metadata.summary_lines(
                date_format=settings.date_format, precision=settings.coordinate_precision
            )
        )
    if metadata.captured_at is None:
        lines.append("Photo date: Not available")
    return lines


def main(argv: Sequence[str] | None = None, *, out: TextIO | None = None) -> int:
    args = _parse_args(argv)
    out = out or sys.stdout
    setup_logging(stream=sys.stderr)
    settings = load_settings()

    try:
        extra = _load_extra(args.extra)
    except (OSError, ValueError) as exc:
        log_exc("Unable to load extra tags", exc)
        return 1

    def load(image_id: str) -> tuple[RawTagMap, RawTagMap | None]:
        return read_exif_tags(image_id, use_exifread=settings.use_exifread), extra

    report = analyze_batch([str(path) for path in args.images], load, on_event=log_event)

    if args.batch:
        print(json.dumps(report.summary()) if args.json else _batch_text(report.summary()), file=out)
    elif args.json:
        documents: list[dict[str, Any]] = []
        for item in report.items:
            if item.metadata is None:
                documents.append({"image_id": item.image_id, "error": item.error})
            else:
                documents.append(item.metadata.as_dict(date_format=settings.date_format))
        print(json.dumps(documents, ensure_ascii=False, indent=2), file=out)
    else:
        for item in report.items:
            if item.metadata is None:
                print(f"== {item.image_id}\n{item.error}", file=out)
                continue
            print("\n".join(_render_text(item.metadata, settings, everything=args.all)), file=out)

    return 0 if report.analyzed == report.total else 1


def _batch_text(summary: dict[str, int]) -> str:
    return (
        f"Analyzed {summary['analyzed']} of {summary['total']} images; "
        f"{summary['with_location']} with location, {summary['with_date']} with date"
    )


__all__ = ["main"]
