"""
Module: ingestion.dataset

Purpose:
    Boundary to the external dataset collaborator. The host provides an
    object exposing get_dataset(name) → dataset with read_all() → rows; rows
    are raw, untyped records handled by coerce_dataset_rows().

Key Classes:
    - DatasetProvider / Dataset: Structural protocols of the collaborator
    - StaticDatasetProvider: In-memory provider (tests, CLI)
    - JsonFileDatasetProvider: Provider backed by a JSON file of named datasets
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Protocol, Sequence

logger = logging.getLogger(__name__)


class Dataset(Protocol):
    def read_all(self) -> List[Dict[str, Any]]: ...


class DatasetProvider(Protocol):
    def get_dataset(self, name: str) -> Dataset: ...


class DatasetNotFound(LookupError):
    """Requested dataset does not exist in the provider."""


class _StaticDataset:
    def __init__(self, rows: Sequence[Dict[str, Any]]) -> None:
        self._rows = list(rows)

    def read_all(self) -> List[Dict[str, Any]]:
        return list(self._rows)


class StaticDatasetProvider:
    """
    Provider over in-memory rows.

    Example:
        >>> provider = StaticDatasetProvider({"locations": [{"city": "Petra"}]})
        >>> provider.get_dataset("locations").read_all()
        [{'city': 'Petra'}]
    """

    def __init__(self, datasets: Mapping[str, Sequence[Dict[str, Any]]]) -> None:
        self._datasets = dict(datasets)

    def get_dataset(self, name: str) -> Dataset:
        if name not in self._datasets:
            raise DatasetNotFound(f"Dataset not found: {name}")
        return _StaticDataset(self._datasets[name])


class JsonFileDatasetProvider:
    """
    Provider reading a JSON file on every get_dataset() call.

    The file holds either an object of {dataset_name: [rows]} or a bare
    array, which is served under every name.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def get_dataset(self, name: str) -> Dataset:
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if isinstance(data, list):
            rows = data
        elif isinstance(data, dict) and name in data:
            rows = data[name]
        else:
            raise DatasetNotFound(f"Dataset {name!r} not found in {self.path}")

        if not isinstance(rows, list):
            raise ValueError(f"Dataset {name!r} in {self.path} is not an array")
        logger.debug(f"Read {len(rows)} rows for dataset {name!r} from {self.path}")
        return _StaticDataset(rows)
