"""Run summary aggregation."""

from __future__ import annotations

from collections import Counter
from pathlib import Path

from ngs_datasheets.common.fs import write_json
from ngs_datasheets.common.models import BatchResult, Benchmark
from ngs_datasheets.common.time_utils import utc_timestamp_iso


def count_by_type(benchmarks: list[Benchmark]) -> dict[str, int]:
    return dict(sorted(Counter(benchmark.type.value for benchmark in benchmarks).items()))


def count_by_state(benchmarks: list[Benchmark]) -> dict[str, int]:
    return dict(sorted(Counter(benchmark.state for benchmark in benchmarks).items()))


def summarise(result: BatchResult) -> dict:
    outcomes = result.regions
    processed = sum(1 for outcome in outcomes if outcome.status == "ok")
    skipped = sum(1 for outcome in outcomes if outcome.status == "skipped")
    failed = len(result.failed_regions)

    status = "success"
    if failed and not processed:
        status = "error"
    elif failed or any(outcome.capped for outcome in outcomes):
        status = "partial"

    return {
        "status": status,
        "totals": {
            "benchmarks": len(result.benchmarks),
            "regions_processed": processed,
            "regions_skipped": skipped,
            "regions_failed": failed,
        },
        "by_type": count_by_type(result.benchmarks),
        "by_state": count_by_state(result.benchmarks),
    }


def write_run_summary(output_dir: Path, filename: str, *, run_id: str, result: BatchResult) -> Path:
    summary_path = output_dir / filename
    payload = {
        "run_id": run_id,
        "generated": utc_timestamp_iso(),
        "source": "NGS datasheets",
        **summarise(result),
        "regions": [outcome.to_dict() for outcome in result.regions],
    }
    write_json(summary_path, payload)
    return summary_path
