"""
Module: ingestion.coercers

Purpose:
    Convert raw records from each tour source into validated Landmark
    objects. One coercer per source format; format detection stays with the
    caller (the loader knows which source it is reading).

Key Functions:
    - coerce_artifact_records(): Location-builder records from the remote API
    - coerce_dataset_rows(): Rows from the external dataset collaborator
    - coerce_overlay_records(): Persisted custom landmarks
    - coerce_upload_records(): Records from a user-uploaded JSON file
    - mint_landmark_id(): Wall-clock id for custom/uploaded landmarks

Key Classes:
    - RecordRejected: Raised by the per-record coercers

Policy (all formats):
    - Reject per record, never the whole batch
    - Coordinates must be two finite numbers (NaN/Infinity/None rejected)
    - Unknown extra fields are ignored
    - Alternate field names are consulted in the priority order given by the
      *_FIELDS tuples below

Dependencies:
    - tour_toolkit.core.models: Landmark, parse_coords
    - ingestion.quiz_parser: Builder and legacy quiz parsing

Used By:
    - ingestion.loader
    - ingestion.overlay
    - ingestion.upload
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, List, Optional, Sequence

from tour_toolkit.config import TourConfig
from tour_toolkit.core.models import IconType, Landmark, parse_coords

from .diagnostics import DiagnosticsCollector, IssueKind, report
from .quiz_parser import parse_builder_quiz, parse_legacy_quiz

logger = logging.getLogger(__name__)


Clock = Callable[[], int]

# Candidate field names, highest priority first
DATASET_QUIZ_FIELDS = ("quiz", "Quiz", "questions")
UPLOAD_NAME_FIELDS = ("name", "city", "title")
UPLOAD_COORD_FIELDS = ("coords", "coordinates")
UPLOAD_IMAGE_FIELDS = ("imageUrl", "image")
UPLOAD_VIDEO_FIELDS = ("videoUrl", "video")
UPLOAD_AUDIO_FIELDS = ("audioUrl", "audio")
UPLOAD_BUILDER_QUIZ_FIELDS = ("questions",)
UPLOAD_LEGACY_QUIZ_FIELDS = ("quiz", "Quiz")


class RecordRejected(Exception):
    """A single raw record could not be turned into a Landmark."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


def _now_ms() -> int:
    return int(time.time() * 1000)


def mint_landmark_id(offset: int = 0, clock: Optional[Clock] = None) -> int:
    """
    Mint an id from the wall clock (milliseconds).

    Ids minted in the same millisecond, or across sessions, can collide;
    the tour assembly drops later duplicates with a warning.
    """
    return (clock or _now_ms)() + offset


def first_present(record: dict, fields: Sequence[str]) -> Any:
    """Value of the first candidate field that is present and truthy, else None."""
    for name in fields:
        value = record.get(name)
        if value:
            return value
    return None


def _optional_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _require_name(value: Any, what: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise RecordRejected(f"missing or blank {what}")
    return value


def _require_coords(value: Any) -> tuple[float, float]:
    coords = parse_coords(value)
    if coords is None:
        raise RecordRejected(f"invalid coordinates: {value!r}")
    return coords


def _require_mapping(record: Any) -> dict:
    if not isinstance(record, dict):
        raise RecordRejected(f"record is not an object: {type(record).__name__}")
    return record


def _numeric_id(value: Any) -> Optional[int]:
    """Integer id from an int or an integral float such as 1700000000000.0."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _aliases(value: Any) -> Optional[tuple[str, ...]]:
    if isinstance(value, list):
        items = tuple(v for v in value if isinstance(v, str))
        return items or None
    return None


def _coerce_batch(
    records: Iterable[Any],
    coerce_one: Callable[[Any, int], Landmark],
    source: str,
    diagnostics: Optional[DiagnosticsCollector],
) -> List[Landmark]:
    """Apply a per-record coercer, skipping and reporting rejected records."""
    landmarks: List[Landmark] = []
    rejected = 0
    for index, record in enumerate(records):
        try:
            landmarks.append(coerce_one(record, index))
        except RecordRejected as e:
            rejected += 1
            report(
                diagnostics, IssueKind.RECORD_INVALID, source,
                f"Skipping record {index}: {e.reason}",
                index=index, raw=record,
            )
        except ValueError as e:
            # Landmark.__post_init__ caught something the coercer let through
            rejected += 1
            report(
                diagnostics, IssueKind.RECORD_INVALID, source,
                f"Skipping record {index}: {e}",
                index=index, raw=record,
            )
    logger.debug(f"[{source}] Coerced {len(landmarks)} records ({rejected} rejected)")
    return landmarks


# ─────────────────────────────────────────────────────────────────────────────
# 1. Remote artifact (location-builder records)
# ─────────────────────────────────────────────────────────────────────────────

def coerce_artifact_record(
    record: Any,
    index: int,
    *,
    config: Optional[TourConfig] = None,
    diagnostics: Optional[DiagnosticsCollector] = None,
) -> Landmark:
    """
    Coerce one location-builder record.

    Expected keys: id, title, country, description, image, coordinates,
    video, audio, questions, block_navigation.

    Args:
        record: Raw record
        index: Zero-based position; the landmark id is index + 1

    Raises:
        RecordRejected: If title or coordinates are unusable
    """
    config = config or TourConfig()
    record = _require_mapping(record)
    title = _require_name(record.get("title"), "title")
    coords = _require_coords(record.get("coordinates"))
    country = _optional_str(record.get("country"))

    return Landmark(
        id=index + 1,
        name=title,
        title=title,
        description=_text(record.get("description")),
        image_url=_optional_str(record.get("image")) or config.placeholder_image_url,
        coords=coords,
        aliases=(country,) if country else None,
        icon_type=IconType.MONUMENT,
        video_url=_optional_str(record.get("video")),
        audio_url=_optional_str(record.get("audio")),
        quiz=parse_builder_quiz(record.get("questions"), diagnostics=diagnostics, source="artifact"),
        block_navigation=bool(record.get("block_navigation")),
    )


def coerce_artifact_records(
    records: Iterable[Any],
    *,
    config: Optional[TourConfig] = None,
    diagnostics: Optional[DiagnosticsCollector] = None,
) -> List[Landmark]:
    """Coerce location-builder records, skipping unusable ones."""
    return _coerce_batch(
        records,
        lambda r, i: coerce_artifact_record(r, i, config=config, diagnostics=diagnostics),
        "artifact",
        diagnostics,
    )


# ─────────────────────────────────────────────────────────────────────────────
# 2. Dataset rows
# ─────────────────────────────────────────────────────────────────────────────

def coerce_dataset_row(
    row: Any,
    index: int,
    *,
    config: Optional[TourConfig] = None,
    diagnostics: Optional[DiagnosticsCollector] = None,
) -> Landmark:
    """
    Coerce one dataset row.

    Expected keys: city, description, image, coordinates, video, audio,
    quiz | Quiz | questions, block_navigation.

    Args:
        row: Raw row
        index: Zero-based position; the landmark id is index + 1

    Raises:
        RecordRejected: If city or coordinates are unusable
    """
    config = config or TourConfig()
    row = _require_mapping(row)
    coords = _require_coords(row.get("coordinates"))
    city = _require_name(row.get("city"), "city")

    quiz = parse_legacy_quiz(
        first_present(row, DATASET_QUIZ_FIELDS),
        diagnostics=diagnostics,
        source="dataset",
        index=index,
    )

    return Landmark(
        id=index + 1,
        name=city,
        title=city.upper(),
        description=_text(row.get("description")),
        image_url=_optional_str(row.get("image")) or config.placeholder_image_url,
        coords=coords,
        icon_type=IconType.MONUMENT,
        video_url=_optional_str(row.get("video")),
        audio_url=_optional_str(row.get("audio")),
        quiz=quiz,
        block_navigation=bool(row.get("block_navigation")),
    )


def coerce_dataset_rows(
    rows: Iterable[Any],
    *,
    config: Optional[TourConfig] = None,
    diagnostics: Optional[DiagnosticsCollector] = None,
) -> List[Landmark]:
    """Coerce dataset rows, skipping unusable ones."""
    return _coerce_batch(
        rows,
        lambda r, i: coerce_dataset_row(r, i, config=config, diagnostics=diagnostics),
        "dataset",
        diagnostics,
    )


# ─────────────────────────────────────────────────────────────────────────────
# 3. Persisted overlay (previously saved custom landmarks)
# ─────────────────────────────────────────────────────────────────────────────

def coerce_overlay_record(
    record: Any,
    index: int,
    *,
    config: Optional[TourConfig] = None,
    diagnostics: Optional[DiagnosticsCollector] = None,
    clock: Optional[Clock] = None,
) -> Landmark:
    """
    Re-validate one persisted custom landmark.

    The record is already close to the canonical shape; the id is kept when
    numeric so custom landmarks stay stable across reloads.

    Raises:
        RecordRejected: If name or coords are unusable
    """
    config = config or TourConfig()
    record = _require_mapping(record)
    coords = _require_coords(record.get("coords"))
    name = _require_name(record.get("name"), "name")

    persisted_id = _numeric_id(record.get("id"))
    landmark_id = persisted_id if persisted_id is not None else mint_landmark_id(clock=clock)

    return Landmark(
        id=landmark_id,
        name=name,
        title=_optional_str(record.get("title")) or name.upper(),
        description=_text(record.get("description")),
        image_url=_optional_str(record.get("imageUrl")) or config.seeded_image(persisted_id or name),
        coords=coords,
        aliases=_aliases(record.get("aliases")),
        icon_type=IconType.parse(record.get("iconType")),
        video_url=_optional_str(record.get("videoUrl")),
        audio_url=_optional_str(record.get("audioUrl")),
        quiz=parse_legacy_quiz(record.get("quiz"), diagnostics=diagnostics, source="overlay", index=index),
        block_navigation=bool(record.get("block_navigation")),
    )


def coerce_overlay_records(
    records: Iterable[Any],
    *,
    config: Optional[TourConfig] = None,
    diagnostics: Optional[DiagnosticsCollector] = None,
    clock: Optional[Clock] = None,
) -> List[Landmark]:
    """Re-validate persisted custom landmarks, skipping unusable ones."""
    return _coerce_batch(
        records,
        lambda r, i: coerce_overlay_record(r, i, config=config, diagnostics=diagnostics, clock=clock),
        "overlay",
        diagnostics,
    )


# ─────────────────────────────────────────────────────────────────────────────
# 4. Upload (most permissive)
# ─────────────────────────────────────────────────────────────────────────────

def coerce_upload_record(
    record: Any,
    index: int,
    *,
    config: Optional[TourConfig] = None,
    diagnostics: Optional[DiagnosticsCollector] = None,
    clock: Optional[Clock] = None,
) -> Landmark:
    """
    Coerce one record from an uploaded tour file.

    Field alternatives (first present wins):
        name:   name | city | title
        coords: coords | coordinates
        image:  imageUrl | image
        video:  videoUrl | video
        audio:  audioUrl | audio

    Quiz: builder format under "questions" first; if that yields nothing,
    legacy format under quiz | Quiz.

    Raises:
        RecordRejected: If name or coordinates are unusable
    """
    config = config or TourConfig()
    record = _require_mapping(record)
    name = _require_name(first_present(record, UPLOAD_NAME_FIELDS), "name/city/title")
    coords = _require_coords(first_present(record, UPLOAD_COORD_FIELDS))

    quiz = parse_builder_quiz(
        first_present(record, UPLOAD_BUILDER_QUIZ_FIELDS),
        diagnostics=diagnostics,
        source="upload",
    )
    if not quiz:
        quiz = parse_legacy_quiz(
            first_present(record, UPLOAD_LEGACY_QUIZ_FIELDS),
            diagnostics=diagnostics,
            source="upload",
            index=index,
        )

    landmark_id = _numeric_id(record.get("id"))
    if not landmark_id:
        landmark_id = mint_landmark_id(offset=index, clock=clock)

    return Landmark(
        id=landmark_id,
        name=name,
        title=_optional_str(record.get("title")) or name.upper(),
        description=_text(record.get("description")),
        image_url=(
            _optional_str(first_present(record, UPLOAD_IMAGE_FIELDS))
            or config.seeded_image(landmark_id)
        ),
        coords=coords,
        aliases=_aliases(record.get("aliases")),
        icon_type=IconType.parse(record.get("iconType")),
        video_url=_optional_str(first_present(record, UPLOAD_VIDEO_FIELDS)),
        audio_url=_optional_str(first_present(record, UPLOAD_AUDIO_FIELDS)),
        quiz=quiz,
        block_navigation=bool(record.get("block_navigation")),
    )


def coerce_upload_records(
    records: Iterable[Any],
    *,
    config: Optional[TourConfig] = None,
    diagnostics: Optional[DiagnosticsCollector] = None,
    clock: Optional[Clock] = None,
) -> List[Landmark]:
    """Coerce uploaded records, skipping unusable ones (may return [])."""
    return _coerce_batch(
        records,
        lambda r, i: coerce_upload_record(r, i, config=config, diagnostics=diagnostics, clock=clock),
        "upload",
        diagnostics,
    )


def dedupe_ids(
    landmarks: Iterable[Landmark],
    *,
    taken: Iterable[int] = (),
    source: str,
    diagnostics: Optional[DiagnosticsCollector] = None,
) -> List[Landmark]:
    """
    Drop landmarks whose id is already taken (by the intro, the base tour
    or an earlier record), keeping the first occurrence.
    """
    seen = set(taken)
    unique: List[Landmark] = []
    for landmark in landmarks:
        if landmark.id in seen:
            report(
                diagnostics, IssueKind.RECORD_INVALID, source,
                f"Skipping landmark {landmark.name!r}: duplicate id {landmark.id}",
            )
            continue
        seen.add(landmark.id)
        unique.append(landmark)
    return unique
