"""Command-line entry point.

Usage:
    tour-toolkit load [--query QS] [--dataset FILE] [--overlay FILE]
    tour-toolkit validate FILE
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from tour_toolkit import __version__
from tour_toolkit.config import TourConfig
from tour_toolkit.ingestion import (
    DiagnosticsCollector,
    JsonFileDatasetProvider,
    SessionParams,
    TourLoader,
    UploadError,
    read_upload_file,
)
from tour_toolkit.utils.logging_utils import configure_logging

logger = logging.getLogger(__name__)


def _print_diagnostics(diagnostics: DiagnosticsCollector) -> None:
    summary = diagnostics.summary()
    if not summary:
        print("No ingestion issues.", file=sys.stderr)
        return
    print("Ingestion issues:", file=sys.stderr)
    for kind, count in sorted(summary.items()):
        print(f"  {kind}: {count}", file=sys.stderr)
    for issue in diagnostics.issues:
        print(f"  - [{issue.source}] {issue.message}", file=sys.stderr)


def cmd_load(args: argparse.Namespace, config: TourConfig) -> int:
    if args.overlay:
        config = replace(config, overlay_path=args.overlay)

    diagnostics = DiagnosticsCollector()
    loader = TourLoader(
        config,
        params=SessionParams.from_query_string(args.query or ""),
        dataset_provider=JsonFileDatasetProvider(args.dataset) if args.dataset else None,
        diagnostics=diagnostics,
    )
    tour = loader.load()
    print(json.dumps(tour.to_list(), indent=2, ensure_ascii=False))
    _print_diagnostics(diagnostics)
    return 0


def cmd_validate(args: argparse.Namespace, config: TourConfig) -> int:
    diagnostics = DiagnosticsCollector()
    try:
        landmarks = read_upload_file(args.file, config=config, diagnostics=diagnostics)
    except UploadError as e:
        print(f"Rejected ({e.kind.value}): {e}", file=sys.stderr)
        _print_diagnostics(diagnostics)
        return 1

    print(f"{len(landmarks)} valid landmarks:")
    for landmark in landmarks:
        quiz = f", {len(landmark.quiz)} quiz questions" if landmark.quiz else ""
        print(f"  {landmark.id}: {landmark.name} {landmark.coords}{quiz}")
    _print_diagnostics(diagnostics)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tour-toolkit", description="Landmark tour loader and validator")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    load = sub.add_parser("load", help="Load the tour and print it as JSON")
    load.add_argument("--query", help="Session query string (token, artifact_id, base_url)")
    load.add_argument("--dataset", type=Path, help="JSON file serving the dataset collaborator")
    load.add_argument("--overlay", type=Path, help="Custom landmark store (overrides TOUR_OVERLAY_PATH)")
    load.set_defaults(func=cmd_load)

    validate = sub.add_parser("validate", help="Check an upload file")
    validate.add_argument("file", type=Path, help="Upload JSON file")
    validate.set_defaults(func=cmd_validate)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    return args.func(args, TourConfig.from_env())


if __name__ == "__main__":
    sys.exit(main())
