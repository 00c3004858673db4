"""Line classifiers that fill in datasheet record fields.

Each rule pairs a cheap substring predicate with a setter that returns an
updated copy of the record, or the record unchanged when the line does not
carry a usable value. Rules target different datasheet tags, so every rule
is tried against every line.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Callable

from ngs_datasheets.common.models import Benchmark, BenchmarkType
from ngs_datasheets.parse.coordinates import parse_dms

PID_RE = re.compile(r"PID\s*-\s*([A-Z0-9]{6})(?![A-Z0-9])")
DESIGNATION_RE = re.compile(r"DESIGNATION\s*-\s*(.+)")
ELEVATION_RE = re.compile(r"(?:ELLIP HT-|ORTHO HEIGHT\s*-)\s*([-+\d.]+)\s*\(meters\)")
POSITION_RE = re.compile(
    r"(\d+)\s+(\d+)\s+([\d.]+)\(([NS])\)\s+(\d+)\s+(\d+)\s+([\d.]+)\(([EW])\)"
)

# Checked in this order within one line; across lines the last hit wins.
TYPE_KEYWORDS = (
    ("PACS", BenchmarkType.PRIMARY_AIRPORT_CONTROL),
    ("CORS", BenchmarkType.CORS),
    ("TRIANGULATION", BenchmarkType.TRIANGULATION),
    ("VERTICAL", BenchmarkType.VERTICAL),
)


@dataclass(frozen=True)
class FieldRule:
    name: str
    matches: Callable[[str], bool]
    apply: Callable[[Benchmark, str], Benchmark]


def _set_id(record: Benchmark, line: str) -> Benchmark:
    match = PID_RE.search(line)
    if match is None:
        return record
    return replace(record, id=match.group(1))


def _set_name(record: Benchmark, line: str) -> Benchmark:
    match = DESIGNATION_RE.search(line)
    if match is None:
        return record
    name = match.group(1).strip()
    if not name:
        return record
    return replace(record, name=name)


def _set_elevation(record: Benchmark, line: str) -> Benchmark:
    # Ellipsoidal and orthometric lines both write here; the later line wins.
    match = ELEVATION_RE.search(line)
    if match is None:
        return record
    try:
        elevation = float(match.group(1))
    except ValueError:
        return record
    return replace(record, elevation=elevation)


def _set_position(record: Benchmark, line: str) -> Benchmark:
    if record.latitude is not None and record.longitude is not None:
        return record
    match = POSITION_RE.search(line)
    if match is None:
        return record
    latitude = parse_dms(*match.group(1, 2, 3, 4))
    longitude = parse_dms(*match.group(5, 6, 7, 8))
    if latitude is None or longitude is None:
        return record
    return replace(record, latitude=latitude, longitude=longitude)


def _keyword_type(line: str) -> BenchmarkType | None:
    for keyword, benchmark_type in TYPE_KEYWORDS:
        if keyword in line:
            return benchmark_type
    return None


def _set_type(record: Benchmark, line: str) -> Benchmark:
    benchmark_type = _keyword_type(line)
    if benchmark_type is None:
        return record
    return replace(record, type=benchmark_type)


FIELD_RULES = (
    FieldRule("id", lambda line: "PID" in line and "-" in line, _set_id),
    FieldRule("name", lambda line: "DESIGNATION" in line and "-" in line, _set_name),
    FieldRule("elevation", lambda line: "ELLIP HT-" in line or "ORTHO HEIGHT" in line, _set_elevation),
    FieldRule("position", lambda line: "POSITION-" in line, _set_position),
    FieldRule("type", lambda line: _keyword_type(line) is not None, _set_type),
)


def extract_fields(record: Benchmark, line: str) -> Benchmark:
    for rule in FIELD_RULES:
        if rule.matches(line):
            record = rule.apply(record, line)
    return record
