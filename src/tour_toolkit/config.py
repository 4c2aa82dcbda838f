"""
Module: config

Purpose:
    Configuration dataclass for loading and navigating a tour. Immutable
    configuration with validation on construction.

Key Classes:
    - TourConfig: Placeholders, dataset name, overlay location, timings

Dependencies:
    - dataclasses (std)
    - os (std)

Used By:
    - ingestion.loader: Source selection and coercion defaults
    - navigation.navigator: Transition timings
    - cli: Environment-driven configuration
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from tour_toolkit.utils.paths import get_overlay_path

logger = logging.getLogger(__name__)


PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/800x600?text=No+Image"
SEEDED_IMAGE_TEMPLATE = "https://picsum.photos/seed/{seed}/1200/800"


@dataclass(frozen=True)
class TourConfig:
    """
    Configuration for a tour session (immutable).

    Attributes:
        placeholder_image_url: Image for artifact records with a blank image
        seeded_image_template: Image for custom/uploaded records without one;
            "{seed}" is replaced by the landmark id or name
        dataset_name: Name passed to the dataset collaborator
        overlay_path: JSON file holding persisted custom landmarks
        request_timeout: Seconds before an HTTP call is abandoned
        slide_ms: Duration of each half of a next/previous slide
        fade_ms: Duration of each half of a jump fade

    Example:
        >>> config = TourConfig(slide_ms=10, fade_ms=10)
        >>> config.seeded_image("petra")
        'https://picsum.photos/seed/petra/1200/800'
    """

    placeholder_image_url: str = PLACEHOLDER_IMAGE_URL
    seeded_image_template: str = SEEDED_IMAGE_TEMPLATE
    dataset_name: str = "locations"
    overlay_path: Path = field(default_factory=get_overlay_path)
    request_timeout: float = 15.0

    # Timings
    slide_ms: int = 400
    fade_ms: int = 300

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive: {self.request_timeout}")
        if self.slide_ms < 0:
            raise ValueError(f"slide_ms must be non-negative: {self.slide_ms}")
        if self.fade_ms < 0:
            raise ValueError(f"fade_ms must be non-negative: {self.fade_ms}")
        if "{seed}" not in self.seeded_image_template:
            raise ValueError(f"seeded_image_template needs a {{seed}} field: {self.seeded_image_template!r}")
        if not self.dataset_name:
            raise ValueError("dataset_name must not be empty")

    def seeded_image(self, seed: object) -> str:
        return self.seeded_image_template.format(seed=seed)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> TourConfig:
        """
        Build a config from TOUR_* environment variables.

        Unparsable values are ignored with a warning and the default is kept.

        Variables:
            TOUR_OVERLAY_PATH, TOUR_REQUEST_TIMEOUT, TOUR_SLIDE_MS, TOUR_FADE_MS
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, object] = {}

        if env.get("TOUR_OVERLAY_PATH"):
            kwargs["overlay_path"] = Path(env["TOUR_OVERLAY_PATH"])

        for name, key, cast in (
            ("TOUR_REQUEST_TIMEOUT", "request_timeout", float),
            ("TOUR_SLIDE_MS", "slide_ms", int),
            ("TOUR_FADE_MS", "fade_ms", int),
        ):
            raw = env.get(name)
            if raw is None:
                continue
            try:
                kwargs[key] = cast(raw)
            except ValueError:
                logger.warning(f"Ignoring invalid {name}={raw!r}")

        return cls(**kwargs)
