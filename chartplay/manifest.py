"""Chart manifest model and the loader that fetches it from the data store.

Record values are rendered the way the chart announces them: integral
numbers without a decimal part and booleans in lower case.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import requests

logger = logging.getLogger(__name__)


class ManifestError(Exception):
    """Raised when a manifest cannot be fetched or parsed."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to load manifest {url}: {reason}")
        self.url = url
        self.reason = reason


@dataclass(slots=True)
class Record:
    x: str
    y: str

    @property
    def label(self) -> str:
        return f"{self.x}, {self.y}"


@dataclass(slots=True)
class Series:
    key: str
    records: List[Record]


@dataclass(slots=True)
class Dataset:
    title: str
    series: List[Series] = field(default_factory=list)


@dataclass(slots=True)
class Manifest:
    datasets: List[Dataset] = field(default_factory=list)
    raw: Dict[str, object] = field(default_factory=dict, repr=False)

    @classmethod
    def empty(cls) -> "Manifest":
        return cls()

    @classmethod
    def from_dict(cls, raw: Dict[str, object]) -> "Manifest":
        """Parse a manifest payload.

        Raises ``TypeError`` when the payload is not an object and
        ``ValueError`` when a dataset has no title or a series has no
        ``records`` list.
        """

        if not isinstance(raw, dict):
            raise TypeError("manifest must be a JSON object")
        datasets: List[Dataset] = []
        for index, dataset_raw in enumerate(raw.get("datasets") or []):
            title = dataset_raw.get("title")
            if title is None:
                raise ValueError(f"dataset {index} has no title")
            series: List[Series] = []
            for series_index, series_raw in enumerate(dataset_raw.get("series") or []):
                records_raw = series_raw.get("records")
                if not isinstance(records_raw, list):
                    raise ValueError(f"dataset {index} series {series_index} has no records")
                series.append(
                    Series(
                        key=str(series_raw.get("key", "")),
                        records=[
                            Record(x=_as_text(record.get("x")), y=_as_text(record.get("y")))
                            for record in records_raw
                        ],
                    )
                )
            datasets.append(Dataset(title=_as_text(title), series=series))
        return cls(datasets=datasets, raw=raw)

    @property
    def title(self) -> str:
        # Raises IndexError on an empty manifest; callers load one first.
        return self.datasets[0].title

    def first_series_records(self) -> List[Record]:
        return self.datasets[0].series[0].records


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class ManifestLoader:
    """Fetches manifests relative to a fixed data-store root."""

    def __init__(
        self,
        data_root: str,
        *,
        session: Optional[requests.Session] = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        self.data_root = data_root if data_root.endswith("/") else data_root + "/"
        self.session = session or requests.Session()
        self.timeout_seconds = timeout_seconds

    def url_for(self, path: str) -> str:
        return self.data_root + path.lstrip("/")

    def fetch(self, path: str) -> Manifest:
        url = self.url_for(path)
        try:
            response = self.session.get(url, timeout=self.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ManifestError(url, str(exc)) from exc
        try:
            payload = response.json()
        except ValueError as exc:
            # requests.JSONDecodeError and json.JSONDecodeError both land here.
            raise ManifestError(url, f"invalid JSON: {exc}") from exc
        manifest = self.parse(url, payload)
        logger.info("manifest loaded from %s (%d datasets)", url, len(manifest.datasets))
        return manifest

    def parse(self, url: str, payload: object) -> Manifest:
        try:
            return Manifest.from_dict(payload)
        except (TypeError, ValueError, AttributeError) as exc:
            raise ManifestError(url, f"unexpected manifest shape: {exc}") from exc

    async def load(self, path: str) -> Manifest:
        return await asyncio.to_thread(self.fetch, path)


__all__ = ["Manifest", "Dataset", "Series", "Record", "ManifestLoader", "ManifestError"]
