"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class BenchmarkType(str, Enum):
    CONTROL_POINT = "ControlPoint"
    VERTICAL = "Vertical"
    CORS = "CORS"
    TRIANGULATION = "Triangulation"
    PRIMARY_AIRPORT_CONTROL = "PrimaryAirportControl"


BENCHMARK_FIELDS = (
    "id",
    "name",
    "type",
    "latitude",
    "longitude",
    "elevation",
    "state",
    "description",
    "source_reference",
)


@dataclass(frozen=True)
class Benchmark:
    """One datasheet point record.

    Instances are immutable; the segmenter derives updated copies with
    ``dataclasses.replace`` as field lines are read.
    """

    id: str | None = None
    name: str | None = None
    type: BenchmarkType = BenchmarkType.CONTROL_POINT
    latitude: float | None = None
    longitude: float | None = None
    elevation: float | None = None
    state: str | None = None
    description: str | None = None
    source_reference: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["type"] = self.type.value
        return {key: payload[key] for key in BENCHMARK_FIELDS}


@dataclass(frozen=True)
class RegionOutcome:
    region: str
    status: str
    file: str | None = None
    records: int = 0
    capped: bool = False
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BatchResult:
    benchmarks: list[Benchmark] = field(default_factory=list)
    regions: list[RegionOutcome] = field(default_factory=list)

    @property
    def failed_regions(self) -> list[str]:
        return [outcome.region for outcome in self.regions if outcome.status == "error"]
