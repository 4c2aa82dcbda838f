"""
Module: ingestion.loader

Purpose:
    Assemble the tour from the first source that yields data, then append
    the persisted custom landmarks.

    Source order (short-circuits on first success):
        1. Remote artifact (needs token, artifact_id and base_url)
        2. Dataset collaborator
        3. Built-in fallback

Key Classes:
    - TourLoader: load() → Tour, never raises

Dependencies:
    - ingestion.remote, ingestion.dataset, ingestion.overlay
    - ingestion.coercers: One coercer per source

Used By:
    - navigation.navigator: Initial load and reload()
    - cli: "load" command
"""

from __future__ import annotations

import logging
from typing import List, Optional

from tour_toolkit.config import TourConfig
from tour_toolkit.core.models import Landmark, Tour

from .coercers import Clock, coerce_artifact_records, coerce_dataset_rows, dedupe_ids
from .dataset import DatasetProvider
from .diagnostics import DiagnosticsCollector, IssueKind, report
from .fallback import INTRO_LANDMARK, fallback_tour
from .overlay import OverlayStore
from .remote import ArtifactClient, ArtifactError, SessionParams

logger = logging.getLogger(__name__)


class TourLoader:
    """
    Loads the tour from the configured sources.

    Attributes:
        base_tour: Last base tour selected by load(), before the overlay

    Example:
        >>> loader = TourLoader(TourConfig(), dataset_provider=provider)
        >>> tour = loader.load()
        >>> tour[0].title
        'WELCOME TO THE JOURNEY'
    """

    def __init__(
        self,
        config: Optional[TourConfig] = None,
        *,
        params: Optional[SessionParams] = None,
        dataset_provider: Optional[DatasetProvider] = None,
        overlay_store: Optional[OverlayStore] = None,
        diagnostics: Optional[DiagnosticsCollector] = None,
        client: Optional[ArtifactClient] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.config = config or TourConfig()
        self.params = params or SessionParams()
        self.dataset_provider = dataset_provider
        self.overlay_store = overlay_store if overlay_store is not None else OverlayStore(self.config.overlay_path)
        self.diagnostics = diagnostics
        self.clock = clock
        self._client = client
        self.base_tour: Optional[Tour] = None

    @property
    def client(self) -> ArtifactClient:
        if self._client is None:
            self._client = ArtifactClient(self.params, timeout=self.config.request_timeout)
        return self._client

    def load(self) -> Tour:
        """
        Build the tour.

        Returns:
            Intro-headed tour; at worst intro + built-in fallback + overlay
        """
        base = self._load_remote() or self._load_dataset()
        if base is None:
            logger.info("Using built-in fallback tour")
            base = fallback_tour()
        self.base_tour = base

        custom = self._load_overlay(base)
        tour = Tour.from_parts(base.intro, (*base.body, *custom))
        logger.info(f"Tour loaded: {len(base) - 1} base landmarks, {len(custom)} custom")
        return tour

    def _load_remote(self) -> Optional[Tour]:
        if not self.params.has_required:
            logger.debug("No session parameters, skipping remote artifact")
            return None

        try:
            records = self.client.fetch_records()
        except ArtifactError as e:
            report(self.diagnostics, e.kind, "artifact", str(e))
            return None
        except Exception as e:
            report(self.diagnostics, IssueKind.SOURCE_UNAVAILABLE, "artifact", f"Artifact fetch failed: {e!r}")
            return None

        landmarks = coerce_artifact_records(records, config=self.config, diagnostics=self.diagnostics)
        return self._assemble(landmarks, "artifact")

    def _load_dataset(self) -> Optional[Tour]:
        if self.dataset_provider is None:
            logger.debug("No dataset provider configured")
            return None

        try:
            rows = self.dataset_provider.get_dataset(self.config.dataset_name).read_all()
        except Exception as e:
            # Providers are injected; lookup, IO, HTTP or a None dataset all land here
            report(self.diagnostics, IssueKind.SOURCE_UNAVAILABLE, "dataset", f"Dataset query failed: {e!r}")
            return None

        if not isinstance(rows, list):
            report(self.diagnostics, IssueKind.MALFORMED_PAYLOAD, "dataset", "Dataset rows are not a list", raw=rows)
            return None
        if not rows:
            logger.info(f"Dataset {self.config.dataset_name!r} is empty")
            return None

        landmarks = coerce_dataset_rows(rows, config=self.config, diagnostics=self.diagnostics)
        return self._assemble(landmarks, "dataset")

    def _assemble(self, landmarks: List[Landmark], source: str) -> Tour:
        landmarks = dedupe_ids(landmarks, taken=(INTRO_LANDMARK.id,), source=source, diagnostics=self.diagnostics)
        logger.info(f"Loaded {len(landmarks)} landmarks from {source}")
        return Tour.from_parts(INTRO_LANDMARK, landmarks)

    def _load_overlay(self, base: Tour) -> List[Landmark]:
        landmarks = self.overlay_store.load(config=self.config, diagnostics=self.diagnostics, clock=self.clock)
        return dedupe_ids(landmarks, taken=base.ids, source="overlay", diagnostics=self.diagnostics)
