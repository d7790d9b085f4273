"""Profile stores: the resolver seam between profile identifiers and BirthCharts.

A store only returns raw records; `resolve_chart` turns a record into a
validated chart (full record, or nakshatra/pada seed that is derived).
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Protocol, Union

import yaml

from jyotish_core.chart import BirthChart, chart_from_record
from jyotish_core.errors import MissingChartData

logger = logging.getLogger(__name__)


class ProfileStore(Protocol):
    def get(self, profile_id: str) -> Optional[Mapping[str, Any]]:
        ...


def normalize_profile_id(profile_id: Any) -> str:
    if profile_id is None or isinstance(profile_id, bool):
        raise MissingChartData("Profile id is required", field="profileId")
    pid = str(profile_id).strip()
    if not pid:
        raise MissingChartData("Profile id is required", field="profileId")
    return pid


class InMemoryProfileStore:
    """Dict-backed store, used by tests and as the parsed form of the YAML file."""

    def __init__(self, profiles: Optional[Mapping[Any, Mapping[str, Any]]] = None):
        self._profiles: Dict[str, Dict[str, Any]] = {}
        for pid, record in (profiles or {}).items():
            self.put(pid, record)

    def put(self, profile_id: Any, record: Mapping[str, Any]) -> None:
        self._profiles[normalize_profile_id(profile_id)] = dict(record)

    def get(self, profile_id: str) -> Optional[Mapping[str, Any]]:
        return self._profiles.get(normalize_profile_id(profile_id))

    def ids(self) -> Iterable[str]:
        return tuple(self._profiles)

    def __len__(self) -> int:
        return len(self._profiles)


class YamlProfileStore(InMemoryProfileStore):
    """Profiles loaded once from a YAML file.

    Accepted layouts::

        profiles:
          p1: {nakshatra: Rohini, pada: 2, isManglik: false}

    or a list of records each carrying an ``id`` key.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        with self.path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        super().__init__(_records_from(data, self.path))
        logger.info("Loaded %d profiles from %s", len(self), self.path)


def _records_from(data: Any, source: Path) -> Dict[Any, Mapping[str, Any]]:
    if isinstance(data, Mapping) and "profiles" in data:
        data = data["profiles"]
    if isinstance(data, list):
        records: Dict[Any, Mapping[str, Any]] = {}
        for item in data:
            if not isinstance(item, Mapping) or item.get("id") is None:
                raise ValueError(f"{source}: every profile in a list needs an 'id'")
            records[item["id"]] = {k: v for k, v in item.items() if k != "id"}
        return records
    if isinstance(data, Mapping):
        for pid, record in data.items():
            if not isinstance(record, Mapping):
                raise ValueError(f"{source}: profile {pid!r} must be a mapping")
        return dict(data)
    raise ValueError(f"{source}: expected a 'profiles' mapping or list")


def resolve_chart(store: ProfileStore, profile_id: Any) -> BirthChart:
    pid = normalize_profile_id(profile_id)
    return chart_from_record(store.get(pid), profile_id=pid)


def load_profile_store(path: Optional[Union[str, Path]]) -> InMemoryProfileStore:
    """YAML store when a path is configured, otherwise an empty in-memory store."""
    if not path:
        return InMemoryProfileStore()
    return YamlProfileStore(path)
