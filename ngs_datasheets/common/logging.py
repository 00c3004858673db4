"""JSON-lines run logging with a fixed field set."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ngs_datasheets.common.constants import JSON_LOG_FIELDS
from ngs_datasheets.common.fs import ensure_dir
from ngs_datasheets.common.time_utils import utc_timestamp_iso


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {"timestamp": utc_timestamp_iso(), "message": record.getMessage()}
        for field in JSON_LOG_FIELDS:
            if field not in payload:
                payload[field] = getattr(record, field, None)
        payload["level"] = record.levelname
        return json.dumps(payload, ensure_ascii=False)


def build_logger(run_id: str, output_dir: Path | None = None, level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger(f"ngs_datasheets.{run_id}")
    logger.setLevel(level.upper())
    logger.propagate = False
    logger.handlers.clear()

    stream = logging.StreamHandler()
    stream.setFormatter(JsonLineFormatter())
    logger.addHandler(stream)

    if output_dir is not None:
        log_path = output_dir / "run_meta" / f"{run_id}.log.jsonl"
        ensure_dir(log_path.parent)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(JsonLineFormatter())
        logger.addHandler(file_handler)

    return logger


def log_event(logger: logging.Logger, message: str, *, level: int = logging.INFO, **event_fields: Any) -> None:
    logger.log(level, message, extra=event_fields)


def close_logger(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
