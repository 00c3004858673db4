"""Benchmark collection export (JSON, optional CSV)."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from ngs_datasheets.common.fs import write_csv, write_json
from ngs_datasheets.common.models import BENCHMARK_FIELDS, Benchmark


def default_description(benchmark: Benchmark) -> str:
    return f"NGS {benchmark.type.value} control point in {benchmark.state}"


def backfill_descriptions(benchmarks: list[Benchmark]) -> list[Benchmark]:
    return [
        benchmark if benchmark.description is not None else replace(benchmark, description=default_description(benchmark))
        for benchmark in benchmarks
    ]


def _serialize_csv_row(row: dict) -> dict:
    return {key: "" if row.get(key) is None else row[key] for key in BENCHMARK_FIELDS}


def write_benchmarks(cfg: dict, benchmarks: list[Benchmark]) -> list[Path]:
    """Write the ordered collection; returns the paths written."""
    output_dir = Path(cfg["output"]["output_dir"])
    rows = [benchmark.to_dict() for benchmark in backfill_descriptions(benchmarks)]

    json_path = output_dir / cfg["output"]["benchmarks_filename"]
    write_json(json_path, rows, sort_keys=False)
    written = [json_path]

    csv_filename = cfg["output"]["csv_filename"]
    if csv_filename:
        csv_path = output_dir / csv_filename
        write_csv(csv_path, list(BENCHMARK_FIELDS), [_serialize_csv_row(row) for row in rows])
        written.append(csv_path)

    return written
