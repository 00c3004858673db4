"""Batch parsing over a directory of per-region datasheets with fail-soft semantics."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from ngs_datasheets.common.errors import DatasheetRootError, PipelineError, RegionReadError
from ngs_datasheets.common.logging import log_event
from ngs_datasheets.common.models import Benchmark, BatchResult, RegionOutcome
from ngs_datasheets.common.time_utils import elapsed_ms
from ngs_datasheets.parse.segmenter import build_source_reference, parse_datasheet_file

STAGE = "parse"

_default_logger = logging.getLogger(__name__)


def discover_regions(
    datasheet_dir: Path,
    *,
    exclude_dirs: list[str] | tuple[str, ...] = (),
    selected: list[str] | None = None,
) -> list[str]:
    """List region directories in sorted name order.

    An unreadable or missing root is the only fatal condition of a batch run.
    """
    if not datasheet_dir.is_dir():
        raise DatasheetRootError(f"Datasheet directory not found: {datasheet_dir}")
    try:
        names = sorted(entry.name for entry in datasheet_dir.iterdir() if entry.is_dir())
    except OSError as exc:
        raise DatasheetRootError(f"Cannot list datasheet directory {datasheet_dir}: {exc}") from exc

    excluded = set(exclude_dirs)
    regions = [name for name in names if name not in excluded]
    if selected:
        wanted = set(selected)
        regions = [name for name in regions if name in wanted]
    return regions


def find_region_file(region_dir: Path, extensions: list[str] | tuple[str, ...]) -> Path | None:
    suffixes = tuple(ext.lower() for ext in extensions)
    try:
        candidates = sorted(path for path in region_dir.iterdir() if path.is_file())
    except OSError as exc:
        raise RegionReadError(f"Cannot list region directory {region_dir}: {exc}") from exc
    for path in candidates:
        if path.name.lower().endswith(suffixes):
            return path
    return None


def parse_region(
    region: str,
    datasheet_dir: Path,
    cfg: dict,
    *,
    logger: logging.Logger | None = None,
    run_id: str | None = None,
) -> tuple[list[Benchmark], RegionOutcome]:
    """Parse one region; every failure is reported in the outcome instead of raised."""
    logger = logger or _default_logger
    started = time.monotonic()
    try:
        region_file = find_region_file(datasheet_dir / region, cfg["input"]["extensions"])
    except PipelineError as exc:
        return _region_failed(logger, region, None, exc.error_code, started, run_id)

    if region_file is None:
        log_event(
            logger,
            f"no datasheet file for region {region}",
            run_id=run_id,
            stage=STAGE,
            region=region,
            event="REGION_SKIPPED",
            status="skipped",
            rows_out=0,
        )
        return [], RegionOutcome(region=region, status="skipped")

    log_event(
        logger,
        f"parsing {region_file.name}",
        run_id=run_id,
        stage=STAGE,
        region=region,
        source=str(region_file),
        event="REGION_START",
        status="ok",
    )

    max_records = cfg["limits"]["max_records_per_region"]
    try:
        records, capped = parse_datasheet_file(
            region_file,
            region,
            encoding=cfg["input"]["encoding"],
            source_reference=build_source_reference(cfg["output"]["source_reference_prefix"], region, region_file),
            max_records=max_records,
        )
    except PipelineError as exc:
        error_code = exc.error_code
    except Exception:
        error_code = "UNEXPECTED_ERROR"
    else:
        if capped:
            log_event(
                logger,
                f"record cap of {max_records} reached for region {region}",
                level=logging.WARNING,
                run_id=run_id,
                stage=STAGE,
                region=region,
                source=str(region_file),
                event="REGION_CAPPED",
                status="partial",
                rows_out=len(records),
            )
        log_event(
            logger,
            f"extracted {len(records)} benchmarks from region {region}",
            run_id=run_id,
            stage=STAGE,
            region=region,
            source=str(region_file),
            event="REGION_END",
            status="ok",
            duration_ms=elapsed_ms(started),
            rows_out=len(records),
        )
        outcome = RegionOutcome(
            region=region,
            status="ok",
            file=str(region_file),
            records=len(records),
            capped=capped,
        )
        return records, outcome

    return _region_failed(logger, region, region_file, error_code, started, run_id)


def _region_failed(
    logger: logging.Logger,
    region: str,
    region_file: Path | None,
    error_code: str,
    started: float,
    run_id: str | None,
) -> tuple[list[Benchmark], RegionOutcome]:
    source = str(region_file) if region_file is not None else None
    log_event(
        logger,
        f"failed to parse region {region}",
        level=logging.ERROR,
        run_id=run_id,
        stage=STAGE,
        region=region,
        source=source,
        event="REGION_FAIL",
        status="error",
        duration_ms=elapsed_ms(started),
        rows_out=0,
        error_code=error_code,
    )
    return [], RegionOutcome(region=region, status="error", file=source, error_code=error_code)


def run_batch(
    cfg: dict,
    *,
    regions: list[str] | None = None,
    logger: logging.Logger | None = None,
    run_id: str | None = None,
) -> BatchResult:
    """Parse every region under ``cfg["input"]["datasheet_dir"]``.

    With ``limits.workers`` above 1 regions are parsed on a thread pool.
    Each worker returns its own record list and the lists are joined in
    sorted region order, so the result matches a sequential run.
    """
    datasheet_dir = Path(cfg["input"]["datasheet_dir"])
    region_names = discover_regions(
        datasheet_dir,
        exclude_dirs=cfg["input"]["exclude_dirs"],
        selected=regions,
    )
    max_regions = cfg["limits"]["max_regions"]
    if max_regions is not None:
        region_names = region_names[:max_regions]

    def _parse(region: str) -> tuple[list[Benchmark], RegionOutcome]:
        return parse_region(region, datasheet_dir, cfg, logger=logger, run_id=run_id)

    workers = cfg["limits"]["workers"]
    if workers > 1 and len(region_names) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            per_region = list(pool.map(_parse, region_names))
    else:
        per_region = [_parse(region) for region in region_names]

    benchmarks: list[Benchmark] = []
    outcomes: list[RegionOutcome] = []
    for records, outcome in per_region:
        benchmarks.extend(records)
        outcomes.append(outcome)
    return BatchResult(benchmarks=benchmarks, regions=outcomes)
