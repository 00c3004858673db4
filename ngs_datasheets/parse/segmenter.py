"""Split a datasheet line stream into benchmark records.

A record opens at every boundary line (the NGS retrieval-date banner) and
closes at the next banner or at end of input. The open record is passed
explicitly through :func:`step`, so the state machine has no hidden state:

    state = None
    for line in lines:
        state, emitted = step(state, line, region="CA")
    emitted = finish(state)

Lines seen before the first banner are ignored.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator

from ngs_datasheets.common.constants import BOUNDARY_MARKER
from ngs_datasheets.common.errors import RegionReadError
from ngs_datasheets.common.fs import iter_text_lines
from ngs_datasheets.common.models import Benchmark
from ngs_datasheets.parse.fields import extract_fields
from ngs_datasheets.parse.validator import is_retainable


def is_boundary(line: str) -> bool:
    return BOUNDARY_MARKER in line


def new_record(region: str, source_reference: str | None = None) -> Benchmark:
    return Benchmark(state=region, source_reference=source_reference)


def finish(state: Benchmark | None) -> Benchmark | None:
    if state is not None and is_retainable(state):
        return state
    return None


def step(
    state: Benchmark | None,
    line: str,
    *,
    region: str,
    source_reference: str | None = None,
) -> tuple[Benchmark | None, Benchmark | None]:
    """Advance the segmenter by one line.

    Returns the new open record and the record finalized by this line, if
    any. Only boundary lines finalize.
    """
    if is_boundary(line):
        return new_record(region, source_reference), finish(state)
    if state is None:
        return None, None
    return extract_fields(state, line), None


def segment_lines(
    lines: Iterable[str],
    region: str,
    source_reference: str | None = None,
) -> Iterator[Benchmark]:
    state: Benchmark | None = None
    for line in lines:
        state, emitted = step(state, line, region=region, source_reference=source_reference)
        if emitted is not None:
            yield emitted
    last = finish(state)
    if last is not None:
        yield last


def build_source_reference(prefix: str | None, region: str, path: Path) -> str:
    if not prefix:
        return path.as_posix()
    return f"{prefix.rstrip('/')}/{region}/{path.name}"


def parse_datasheet_file(
    path: Path,
    region: str,
    *,
    encoding: str = "latin-1",
    source_reference: str | None = None,
    max_records: int | None = None,
) -> tuple[list[Benchmark], bool]:
    """Parse one region file.

    Returns the retained records in file order and whether ``max_records``
    was reached, which stops reading. Open and decode failures surface as
    :class:`RegionReadError`.
    """
    records: list[Benchmark] = []
    capped = False
    try:
        for record in segment_lines(iter_text_lines(path, encoding=encoding), region, source_reference):
            records.append(record)
            if max_records is not None and len(records) >= max_records:
                capped = True
                break
    except (OSError, UnicodeDecodeError) as exc:
        raise RegionReadError(f"Cannot read datasheet {path}: {exc}") from exc
    return records, capped
