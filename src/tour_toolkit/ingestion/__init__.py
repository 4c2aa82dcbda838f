"""
Tour ingestion: sources, coercion and assembly.

Exports the loader, the per-source coercers and the upload/overlay entry
points used by the navigator.
"""

from .coercers import (
    RecordRejected,
    coerce_artifact_records,
    coerce_dataset_rows,
    coerce_overlay_records,
    coerce_upload_records,
    dedupe_ids,
    mint_landmark_id,
)
from .dataset import DatasetNotFound, DatasetProvider, JsonFileDatasetProvider, StaticDatasetProvider
from .diagnostics import DiagnosticsCollector, IngestionIssue, IssueKind
from .fallback import FALLBACK_LANDMARKS, INTRO_LANDMARK, fallback_tour
from .loader import TourLoader
from .overlay import OverlayStore, new_custom_landmark
from .quiz_parser import parse_builder_quiz, parse_legacy_quiz
from .remote import ArtifactClient, ArtifactError, SessionParams
from .upload import UploadError, parse_upload, read_upload_file

__all__ = [
    "ArtifactClient",
    "ArtifactError",
    "DatasetNotFound",
    "DatasetProvider",
    "DiagnosticsCollector",
    "FALLBACK_LANDMARKS",
    "INTRO_LANDMARK",
    "IngestionIssue",
    "IssueKind",
    "JsonFileDatasetProvider",
    "OverlayStore",
    "RecordRejected",
    "SessionParams",
    "StaticDatasetProvider",
    "TourLoader",
    "UploadError",
    "coerce_artifact_records",
    "coerce_dataset_rows",
    "coerce_overlay_records",
    "coerce_upload_records",
    "dedupe_ids",
    "fallback_tour",
    "mint_landmark_id",
    "new_custom_landmark",
    "parse_builder_quiz",
    "parse_legacy_quiz",
    "parse_upload",
    "read_upload_file",
]
