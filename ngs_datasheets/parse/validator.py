"""Retention check applied when a record is finalized."""

from __future__ import annotations

from ngs_datasheets.common.models import Benchmark


def is_retainable(record: Benchmark) -> bool:
    return record.id is not None and record.latitude is not None and record.longitude is not None
