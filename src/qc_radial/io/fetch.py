"""Client for the stagewise QC report endpoint.

The backend answers ``GET /qc_reports_stagewise/{project_id}?type=...&year=...``
with ``{"data": [{"stage": ..., "status": ..., "count": ...}, ...]}``. Any
payload without a ``data`` list is treated as "no observations" so the chart
always receives a list. Transport and HTTP status failures raise
``ObservationSourceError`` for the caller to report. Hosts that refetch when
the date filter changes pass a ``LatestRequestGate`` so an older response that
arrives late never replaces newer data.
"""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

import httpx

from qc_radial.chart.normalize import Observation
from qc_radial.config import SourceConfig
from qc_radial.io.read import format_stage_label

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class ObservationSourceError(RuntimeError):
    """Raised when QC observations cannot be retrieved from the backend."""


def _coerce_count(value: Any) -> float:
    try:
        return float(0 if value is None else value)
    except (TypeError, ValueError):
        return math.nan


def _key(value: Any) -> str:
    return "" if value is None else str(value)


def parse_stagewise_payload(payload: Any) -> list[Observation]:
    rows = payload.get("data") if isinstance(payload, Mapping) else None
    if not isinstance(rows, list):
        return []
    observations: list[Observation] = []
    for row in rows:
        if not isinstance(row, Mapping):
            continue
        observations.append(
            Observation(
                category=format_stage_label(_key(row.get("stage"))),
                series=_key(row.get("status")),
                value=_coerce_count(row.get("count")),
            )
        )
    return observations


class QcReportClient:
    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = token
        self._client = httpx.Client(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> QcReportClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def fetch_stagewise(self, project_id: str, query: str = "") -> list[Observation]:
        path = f"/qc_reports_stagewise/{project_id}"
        url = f"{path}?{query}" if query else path
        LOGGER.info("Fetching QC stagewise observations from %s", url)
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ObservationSourceError(f"Failed to load QC observations from {url}: {exc}") from exc

        try:
            payload = response.json()
        except ValueError:
            LOGGER.warning("QC stagewise response from %s is not JSON; using no observations", url)
            return []
        return parse_stagewise_payload(payload)


def fetch_observations(
    source: SourceConfig,
    *,
    transport: httpx.BaseTransport | None = None,
    gate: LatestRequestGate[list[Observation]] | None = None,
) -> list[Observation]:
    """Fetch observations for ``source``.

    With a ``gate``, the result is only published to it when no newer fetch
    has begun in the meantime; ``gate.value`` always holds the newest data.
    """
    if not source.base_url:
        raise ValueError("source.base_url must be set when source.mode is 'http'")
    if not source.project_id:
        raise ValueError("source.project_id must be set when source.mode is 'http'")
    with QcReportClient(
        source.base_url,
        token=source.token,
        timeout=source.timeout_seconds,
        transport=transport,
    ) as client:
        token = gate.begin() if gate is not None else 0
        observations = client.fetch_stagewise(source.project_id, source.date_filter.to_query_params())
    if gate is not None:
        gate.publish(token, observations)
    return observations


class LatestRequestGate(Generic[T]):
    """Lets only the most recently started request publish its result.

    A response for a request that has since been superseded is discarded, so a
    slow older fetch can never overwrite newer data.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._latest = 0
        self._value: T | None = None

    def begin(self) -> int:
        with self._lock:
            self._latest += 1
            return self._latest

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._latest

    def publish(self, token: int, value: T) -> bool:
        with self._lock:
            if token != self._latest:
                LOGGER.debug("Discarding stale result for request %d (latest %d)", token, self._latest)
                return False
            self._value = value
            return True

    @property
    def value(self) -> T | None:
        with self._lock:
            return self._value
