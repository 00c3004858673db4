"""Tag counts for a raw datasheet, used to sanity-check a dump before parsing."""

from __future__ import annotations

from pathlib import Path

from ngs_datasheets.common.errors import RegionReadError
from ngs_datasheets.common.fs import iter_text_lines
from ngs_datasheets.parse.segmenter import is_boundary

SAMPLE_LIMIT = 3

LINE_TAGS = {
    "boundary": is_boundary,
    "pid": lambda line: "PID" in line and "-" in line,
    "position": lambda line: "POSITION-" in line,
}


def scan_datasheet(path: Path, *, encoding: str = "latin-1") -> dict:
    counts = {tag: 0 for tag in LINE_TAGS}
    samples: dict[str, list[str]] = {tag: [] for tag in LINE_TAGS}
    line_count = 0

    try:
        for line in iter_text_lines(path, encoding=encoding):
            line_count += 1
            for tag, matches in LINE_TAGS.items():
                if not matches(line):
                    continue
                counts[tag] += 1
                if len(samples[tag]) < SAMPLE_LIMIT:
                    samples[tag].append(line)
    except (OSError, UnicodeDecodeError) as exc:
        raise RegionReadError(f"Cannot read datasheet {path}: {exc}") from exc

    return {
        "path": str(path),
        "line_count": line_count,
        "counts": counts,
        "samples": samples,
    }
