"""
Module: ingestion.upload

Purpose:
    Turn the text of a user-uploaded tour file into landmarks. The upload is
    the one source where the batch as a whole can fail: if no record
    survives, the upload is rejected with an actionable message and the
    caller keeps its current tour.

Key Functions:
    - parse_upload(): JSON text → non-empty list of Landmarks

Key Classes:
    - UploadError: User-visible rejection (carries the issue kind)
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from tour_toolkit.config import TourConfig
from tour_toolkit.core.models import Landmark

from .coercers import Clock, coerce_upload_records, dedupe_ids
from .diagnostics import DiagnosticsCollector, IssueKind, report
from .fallback import INTRO_LANDMARK

logger = logging.getLogger(__name__)


NOT_AN_ARRAY_MESSAGE = "Invalid data format. The JSON file must contain an array of landmarks."
NO_VALID_LANDMARKS_MESSAGE = (
    "The uploaded JSON file contains no valid landmarks. Please ensure each landmark "
    "has a 'name', 'city', or 'title', and valid 'coordinates'."
)


class UploadError(Exception):
    """Uploaded file was rejected as a whole."""

    def __init__(self, message: str, kind: IssueKind):
        super().__init__(message)
        self.kind = kind


def parse_upload(
    text: str,
    *,
    config: Optional[TourConfig] = None,
    diagnostics: Optional[DiagnosticsCollector] = None,
    clock: Optional[Clock] = None,
) -> List[Landmark]:
    """
    Parse an uploaded tour file.

    Args:
        text: File contents
        config: Placeholder settings
        diagnostics: Sink for per-record rejections
        clock: Millisecond clock for minted ids

    Returns:
        Non-empty list of landmarks (duplicate ids dropped)

    Raises:
        UploadError: MALFORMED_PAYLOAD if the text is not a JSON array,
            BATCH_EMPTY if no record is usable
    """
    if not text or not text.strip():
        raise UploadError("File could not be read.", IssueKind.MALFORMED_PAYLOAD)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        report(diagnostics, IssueKind.MALFORMED_PAYLOAD, "upload", f"Upload is not valid JSON: {e}")
        raise UploadError(
            f"Could not load landmarks. Please check if the file is a valid JSON.\nError: {e}",
            IssueKind.MALFORMED_PAYLOAD,
        ) from e

    if not isinstance(data, list):
        report(diagnostics, IssueKind.MALFORMED_PAYLOAD, "upload", NOT_AN_ARRAY_MESSAGE)
        raise UploadError(NOT_AN_ARRAY_MESSAGE, IssueKind.MALFORMED_PAYLOAD)

    landmarks = coerce_upload_records(data, config=config, diagnostics=diagnostics, clock=clock)
    landmarks = dedupe_ids(landmarks, taken=(INTRO_LANDMARK.id,), source="upload", diagnostics=diagnostics)

    if not landmarks:
        report(diagnostics, IssueKind.BATCH_EMPTY, "upload", f"None of {len(data)} uploaded records is usable")
        raise UploadError(NO_VALID_LANDMARKS_MESSAGE, IssueKind.BATCH_EMPTY)

    logger.info(f"Upload accepted: {len(landmarks)} of {len(data)} records")
    return landmarks


def read_upload_file(path: Path, **kwargs) -> List[Landmark]:
    """parse_upload() over a file on disk."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise UploadError(f"An error occurred while reading the file: {e}", IssueKind.MALFORMED_PAYLOAD) from e
    return parse_upload(text, **kwargs)
