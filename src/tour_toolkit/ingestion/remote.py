"""
Module: ingestion.remote

Purpose:
    HTTP boundary to the hosting platform: session parameters from the
    hosting page's query string, fetching the location-builder artifact and
    posting quiz results.

Key Functions:
    - SessionParams.from_query_string(): Parse token / artifact_id / base_url
    - ArtifactClient.fetch_records(): GET the artifact, decode artifact_data
    - ArtifactClient.submit_quiz_results(): POST a quiz submission summary

Key Classes:
    - ArtifactError: Transport or payload failure while fetching

Dependencies:
    - requests: HTTP client
    - json (std)
    - urllib.parse (std)

Used By:
    - ingestion.loader: Remote-artifact source
    - navigation.navigator: Quiz result reporting
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional
from urllib.parse import parse_qs, urlsplit

import requests

from .diagnostics import IssueKind

logger = logging.getLogger(__name__)


ARTIFACT_INFO_PATH = "/organization/space/series/artifact/info/{artifact_id}/"
SUBMISSION_PATH = "/organization/results/artifact/submission/{artifact_id}/submission/"


class ArtifactError(Exception):
    """Remote artifact could not be fetched or decoded."""

    def __init__(self, message: str, kind: IssueKind = IssueKind.SOURCE_UNAVAILABLE):
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class SessionParams:
    """
    External-session parameters read from the hosting page.

    Attributes:
        token: Bearer token
        artifact_id: Artifact identifier (numeric string)
        base_url: API root without trailing slash
    """
    token: Optional[str] = None
    artifact_id: Optional[str] = None
    base_url: Optional[str] = None

    @classmethod
    def from_query_string(cls, query: str) -> SessionParams:
        """
        Parse "?token=..&artifact_id=..&base_url=.." (a full URL also works).

        Example:
            >>> p = SessionParams.from_query_string("?token=t&artifact_id=7&base_url=https://x.io/")
            >>> p.base_url
            'https://x.io'
        """
        if query.startswith(("http://", "https://")):
            query = urlsplit(query).query
        values = parse_qs(query.lstrip("?"))

        def first(name: str) -> Optional[str]:
            items = values.get(name)
            return items[0] if items else None

        base_url = first("base_url")
        if base_url and base_url.endswith("/"):
            base_url = base_url[:-1]

        return cls(
            token=first("token"),
            artifact_id=first("artifact_id"),
            base_url=base_url,
        )

    @property
    def has_required(self) -> bool:
        """All three parameters are present and non-empty."""
        return bool(self.token and self.artifact_id and self.base_url)


class ArtifactClient:
    """
    Client for the artifact and results endpoints.

    Example:
        >>> client = ArtifactClient(SessionParams("tok", "42", "https://api.example"))
        >>> records = client.fetch_records()
    """

    def __init__(
        self,
        params: SessionParams,
        *,
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.params = params
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json, text/plain, */*",
            "Authorization": f"Bearer {self.params.token}",
        }

    def artifact_url(self) -> str:
        return f"{self.params.base_url}{ARTIFACT_INFO_PATH.format(artifact_id=self.params.artifact_id)}"

    def submission_url(self) -> str:
        return f"{self.params.base_url}{SUBMISSION_PATH.format(artifact_id=self.params.artifact_id)}"

    def fetch_records(self) -> List[Any]:
        """
        Fetch the artifact and decode its location records.

        Returns:
            Non-empty list of raw location-builder records

        Raises:
            ArtifactError: SOURCE_UNAVAILABLE for transport/HTTP failures,
                MALFORMED_PAYLOAD for bad JSON or an empty/non-array payload
        """
        if not self.params.has_required:
            raise ArtifactError("Missing token, artifact_id or base_url")

        try:
            response = self.session.get(self.artifact_url(), headers=self._headers(), timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ArtifactError(f"Artifact request failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ArtifactError(f"Artifact response is not JSON: {e}", IssueKind.MALFORMED_PAYLOAD) from e

        if not isinstance(data, dict) or not data.get("artifact_data"):
            raise ArtifactError("Artifact response has no artifact_data", IssueKind.MALFORMED_PAYLOAD)

        payload = data["artifact_data"]
        if isinstance(payload, str):
            try:
                payload = json.loads(payload)
            except json.JSONDecodeError as e:
                raise ArtifactError(f"Failed to parse artifact_data: {e}", IssueKind.MALFORMED_PAYLOAD) from e

        if not isinstance(payload, list) or not payload:
            raise ArtifactError("artifact_data is not a non-empty array", IssueKind.MALFORMED_PAYLOAD)

        logger.info(f"Fetched {len(payload)} artifact records from {self.params.base_url}")
        return payload

    def submit_quiz_results(self, summary: Mapping[str, Any]) -> bool:
        """
        POST a quiz submission summary.

        Body: {"artifacts": int(artifact_id), "content": json(summary),
        "status": "submitted"}.

        Returns:
            True on a 2xx response; False otherwise (never raises)
        """
        if not self.params.has_required:
            logger.warning("Missing required session parameters for quiz submission")
            return False

        try:
            artifact = int(self.params.artifact_id)  # type: ignore[arg-type]
        except ValueError:
            logger.warning(f"Artifact id is not numeric: {self.params.artifact_id!r}")
            return False

        body = {
            "artifacts": artifact,
            "content": json.dumps(dict(summary)),
            "status": "submitted",
        }
        try:
            response = self.session.post(
                self.submission_url(),
                headers=self._headers(),
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"Failed to submit quiz results: {e}")
            return False

        if not response.ok:
            logger.warning(f"Quiz submission rejected: HTTP {response.status_code}")
            return False

        logger.info("Quiz results submitted successfully")
        return True
