"""
Module: ingestion.diagnostics

Captures ingestion issues (unavailable sources, malformed payloads, rejected
records) so callers and tests can inspect what was skipped and why, instead
of scraping log output.

Every reported issue is also logged at WARNING level.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


class IssueKind(str, Enum):
    """Error taxonomy for the ingestion pipeline."""
    SOURCE_UNAVAILABLE = "source_unavailable"    # network/transport failure
    MALFORMED_PAYLOAD = "malformed_payload"      # JSON parse failure, wrong top-level shape
    RECORD_INVALID = "record_invalid"            # one landmark or quiz failed validation
    BATCH_EMPTY = "batch_empty"                  # upload yielded zero valid records
    PERSISTENCE_CORRUPT = "persistence_corrupt"  # overlay store unparsable

    def __str__(self) -> str:
        return self.value


def _preview(value: Any, limit: int = 500) -> str:
    try:
        text = json.dumps(value, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        text = repr(value)
    return text if len(text) <= limit else text[:limit] + "..."


@dataclass
class IngestionIssue:
    """
    A single ingestion issue with diagnostic context.

    Fields:
    - source: which path raised it ("artifact", "dataset", "overlay", "upload")
    - raw: the record or payload as received
    - normalized: the key-normalized form, when normalization happened
    """
    kind: IssueKind
    source: str
    message: str
    index: Optional[int] = None
    raw: Any = None
    normalized: Any = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "kind": self.kind.value,
            "source": self.source,
            "message": self.message,
        }
        if self.index is not None:
            d["index"] = self.index
        if self.raw is not None:
            d["raw"] = _preview(self.raw)
        if self.normalized is not None:
            d["normalized"] = _preview(self.normalized)
        return d


class DiagnosticsCollector:
    """
    Thread-safe collector for ingestion issues.

    Inject one into the loader, coercers or quiz parsers; pass None (the
    default everywhere) to log only.
    """

    def __init__(self) -> None:
        self._issues: List[IngestionIssue] = []
        self._lock = threading.Lock()

    def add(self, issue: IngestionIssue) -> None:
        with self._lock:
            self._issues.append(issue)

    @property
    def issues(self) -> List[IngestionIssue]:
        with self._lock:
            return list(self._issues)

    def of_kind(self, kind: IssueKind) -> List[IngestionIssue]:
        return [i for i in self.issues if i.kind == kind]

    def summary(self) -> Dict[str, int]:
        """Issue counts keyed by kind."""
        counts: Dict[str, int] = {}
        for issue in self.issues:
            counts[issue.kind.value] = counts.get(issue.kind.value, 0) + 1
        return counts

    def clear(self) -> None:
        with self._lock:
            self._issues.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._issues)


def report(
    diagnostics: Optional[DiagnosticsCollector],
    kind: IssueKind,
    source: str,
    message: str,
    *,
    index: Optional[int] = None,
    raw: Any = None,
    normalized: Any = None,
) -> IngestionIssue:
    """
    Log an issue at WARNING and record it in the collector if one is given.

    Returns:
        The created issue
    """
    issue = IngestionIssue(
        kind=kind,
        source=source,
        message=message,
        index=index,
        raw=raw,
        normalized=normalized,
    )
    details = ""
    if raw is not None:
        details += f" | raw={_preview(raw, 200)}"
    if normalized is not None:
        details += f" | normalized={_preview(normalized, 200)}"
    logger.warning(f"[{source}] {kind.value}: {message}{details}")

    if diagnostics is not None:
        diagnostics.add(issue)
    return issue
