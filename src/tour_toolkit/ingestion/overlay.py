"""
Module: ingestion.overlay

Purpose:
    Persisted store of user-created landmarks, appended to every loaded tour.
    A single JSON document with one keyed slot ("locations") holding an array
    of landmark records; read once at load, fully rewritten on every append.

Key Functions:
    - OverlayStore.read_records(): Raw records (corrupt store → empty)
    - OverlayStore.load(): Coerced landmarks
    - OverlayStore.append(): Add one landmark (locked, atomic replace)
    - new_custom_landmark(): Build a custom landmark from form input

Dependencies:
    - portalocker: Cross-platform exclusive lock serializing writers

Used By:
    - ingestion.loader: Overlay step
    - navigation.navigator: insert_and_focus()
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, List, Optional

import portalocker

from tour_toolkit.config import TourConfig
from tour_toolkit.core.models import IconType, Landmark

from .coercers import Clock, coerce_overlay_records, mint_landmark_id
from .diagnostics import DiagnosticsCollector, IssueKind, report

logger = logging.getLogger(__name__)


OVERLAY_KEY = "locations"


@contextmanager
def locked_file(path: Path, lock_type: int = portalocker.LOCK_EX) -> Generator:
    """
    Hold an exclusive lock on a sidecar lock file for the duration.

    Args:
        path: Path of the lock file (created if missing).
        lock_type: LOCK_EX for exclusive, LOCK_SH for shared.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a", encoding="utf-8") as f:
        portalocker.lock(f, lock_type)
        try:
            yield f
        finally:
            portalocker.unlock(f)


class OverlayStore:
    """
    JSON-backed store of custom landmarks.

    Example:
        >>> store = OverlayStore(Path("workspace/custom_locations.json"))
        >>> store.append(landmark)
        True
        >>> [l.name for l in store.load()]
        ['My Favourite Cafe']
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.lock_path = path.with_name(path.name + ".lock")

    def _read_document(self) -> Any:
        if not self.path.exists():
            return {}
        text = self.path.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        return json.loads(text)

    def read_records(self, diagnostics: Optional[DiagnosticsCollector] = None) -> List[Any]:
        """
        Read raw records from the store.

        A missing store is empty. An unparsable store, or one whose slot is
        not an array, is reported as PERSISTENCE_CORRUPT and treated as empty.
        """
        try:
            document = self._read_document()
        except (OSError, ValueError) as e:
            report(diagnostics, IssueKind.PERSISTENCE_CORRUPT, "overlay", f"Unreadable overlay store {self.path}: {e}")
            return []

        if not isinstance(document, dict):
            report(diagnostics, IssueKind.PERSISTENCE_CORRUPT, "overlay", "Overlay store is not a JSON object", raw=document)
            return []

        records = document.get(OVERLAY_KEY, [])
        if not isinstance(records, list):
            report(diagnostics, IssueKind.PERSISTENCE_CORRUPT, "overlay", f"Overlay slot {OVERLAY_KEY!r} is not an array", raw=records)
            return []
        return records

    def load(
        self,
        *,
        config: Optional[TourConfig] = None,
        diagnostics: Optional[DiagnosticsCollector] = None,
        clock: Optional[Clock] = None,
    ) -> List[Landmark]:
        """Read and re-validate every persisted custom landmark."""
        records = self.read_records(diagnostics)
        landmarks = coerce_overlay_records(records, config=config, diagnostics=diagnostics, clock=clock)
        logger.debug(f"Loaded {len(landmarks)} custom landmarks from {self.path}")
        return landmarks

    def append(self, landmark: Landmark) -> bool:
        """
        Persist one more landmark.

        Read-modify-write under an exclusive lock, written through a temp
        file and an atomic rename. A corrupt store is left untouched.

        Returns:
            True if the landmark was written
        """
        with locked_file(self.lock_path):
            try:
                document = self._read_document()
            except (OSError, ValueError) as e:
                logger.error(f"Failed to save custom landmark, overlay store unreadable: {e}")
                return False

            if not isinstance(document, dict) or not isinstance(document.get(OVERLAY_KEY, []), list):
                logger.error(f"Failed to save custom landmark, overlay store {self.path} is malformed")
                return False

            records = list(document.get(OVERLAY_KEY, []))
            records.append(landmark.to_dict())
            document[OVERLAY_KEY] = records

            temp_path = self.path.with_suffix(".tmp")
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                temp_path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
                temp_path.replace(self.path)
            except OSError as e:
                logger.error(f"Failed to save custom landmark: {e}")
                if temp_path.exists():
                    temp_path.unlink()
                return False

        logger.info(f"Saved custom landmark {landmark.name!r} (id {landmark.id})")
        return True


def new_custom_landmark(
    name: str,
    description: str,
    coords: tuple[float, float],
    *,
    image_url: str = "",
    video_url: str = "",
    audio_url: str = "",
    icon_type: IconType = IconType.MONUMENT,
    config: Optional[TourConfig] = None,
    clock: Optional[Clock] = None,
) -> Landmark:
    """
    Build a user-created landmark.

    Raises:
        ValueError: If name or description is blank, or coords are invalid
    """
    if not name.strip() or not description.strip():
        raise ValueError("Please fill out the name and description.")
    config = config or TourConfig()
    landmark_id = mint_landmark_id(clock=clock)
    return Landmark(
        id=landmark_id,
        name=name,
        title=name.upper(),
        description=description,
        image_url=image_url.strip() or config.seeded_image(landmark_id),
        coords=coords,
        icon_type=icon_type,
        video_url=video_url.strip() or None,
        audio_url=audio_url.strip() or None,
    )
