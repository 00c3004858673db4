"""CLI entrypoint for the NGS datasheet benchmark extractor."""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path

from ngs_datasheets.batch.runner import discover_regions, find_region_file, run_batch
from ngs_datasheets.common.config_loader import apply_overrides, load_config
from ngs_datasheets.common.constants import COMMANDS, EXIT_HARD_FAIL, EXIT_PARTIAL, EXIT_SUCCESS
from ngs_datasheets.common.errors import PipelineError
from ngs_datasheets.common.ids import generate_run_id
from ngs_datasheets.common.logging import build_logger, close_logger, log_event
from ngs_datasheets.common.time_utils import elapsed_ms
from ngs_datasheets.parse.scan import scan_datasheet
from ngs_datasheets.pipeline.export import write_benchmarks
from ngs_datasheets.pipeline.reports import summarise, write_run_summary


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=COMMANDS)
    parser.add_argument("--region", action="append", default=None, help="Region code; repeat to select several.")
    parser.add_argument("--datasheet-dir", default=None)
    parser.add_argument("--output-dir", default=None)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--max-records-per-region", type=int, default=None)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--strict", action="store_true")
    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> dict:
    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None
    cfg = load_config(Path(args.config_dir), overlay_config_dir=overlay_config_dir)
    return apply_overrides(
        cfg,
        {
            "input": {"datasheet_dir": args.datasheet_dir},
            "limits": {"workers": args.workers, "max_records_per_region": args.max_records_per_region},
            "output": {"output_dir": args.output_dir},
        },
    )


def run_parse(args: argparse.Namespace, cfg: dict, run_id: str) -> int:
    output_dir = Path(cfg["output"]["output_dir"])
    logger = build_logger(run_id, output_dir=output_dir, level=args.log_level)
    started = time.monotonic()
    try:
        log_event(logger, "run start", run_id=run_id, stage="parse", event="RUN_START", status="ok")
        result = run_batch(cfg, regions=args.region, logger=logger, run_id=run_id)

        for path in write_benchmarks(cfg, result.benchmarks):
            log_event(
                logger,
                f"wrote {path.name}",
                run_id=run_id,
                stage="export",
                source=str(path),
                event="EXPORT_WRITTEN",
                status="ok",
                rows_out=len(result.benchmarks),
            )

        summary_path = write_run_summary(output_dir, cfg["output"]["summary_filename"], run_id=run_id, result=result)
        summary = summarise(result)
        log_event(
            logger,
            f"by type {json.dumps(summary['by_type'])}; by state {json.dumps(summary['by_state'])}",
            run_id=run_id,
            stage="report",
            source=str(summary_path),
            event="SUMMARY_WRITTEN",
            status=summary["status"],
            rows_out=len(result.benchmarks),
        )
        log_event(
            logger,
            "run end",
            run_id=run_id,
            stage="parse",
            event="RUN_END",
            status=summary["status"],
            duration_ms=elapsed_ms(started),
            rows_out=len(result.benchmarks),
        )
    finally:
        close_logger(logger)

    if result.failed_regions:
        return EXIT_HARD_FAIL if args.strict else EXIT_PARTIAL
    return EXIT_SUCCESS


def run_scan(args: argparse.Namespace, cfg: dict) -> int:
    datasheet_dir = Path(cfg["input"]["datasheet_dir"])
    exit_code = EXIT_SUCCESS
    results = []
    for region in discover_regions(datasheet_dir, exclude_dirs=cfg["input"]["exclude_dirs"], selected=args.region):
        try:
            region_file = find_region_file(datasheet_dir / region, cfg["input"]["extensions"])
            if region_file is None:
                results.append({"region": region, "status": "skipped"})
                continue
            report = scan_datasheet(region_file, encoding=cfg["input"]["encoding"])
        except PipelineError as exc:
            results.append({"region": region, "status": "error", "error_code": exc.error_code})
            exit_code = EXIT_HARD_FAIL if args.strict else EXIT_PARTIAL
            continue
        results.append({"region": region, "status": "ok", **report})
    print(json.dumps(results, indent=2, ensure_ascii=False))
    return exit_code


def run_command(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id()
    cfg = resolve_config(args)
    if args.command == "scan":
        return run_scan(args, cfg)
    return run_parse(args, cfg, run_id)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        return run_command(args)
    except PipelineError as exc:
        print(f"{exc.error_code}: {exc}", file=sys.stderr)
        return EXIT_HARD_FAIL
    except Exception as exc:
        print(f"UNEXPECTED_ERROR: {exc!r}", file=sys.stderr)
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
