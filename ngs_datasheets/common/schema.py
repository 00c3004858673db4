"""Minimal strict schema for the parser YAML config."""

from __future__ import annotations

import codecs

from ngs_datasheets.common.errors import ConfigError

SECTION_KEYS = {
    "input": {"datasheet_dir", "extensions", "exclude_dirs", "encoding"},
    "limits": {"max_records_per_region", "max_regions", "workers"},
    "output": {
        "output_dir",
        "benchmarks_filename",
        "csv_filename",
        "summary_filename",
        "source_reference_prefix",
    },
}


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_mapping(obj: object, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


def _assert_optional_positive_int(value: object, ctx: str) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"{ctx} must be a positive integer or null")


def _assert_string_list(value: object, ctx: str) -> None:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{ctx} must be a list of strings")


def validate_parser_config(cfg: object, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "parser config")
    _assert_required_keys(cfg, set(SECTION_KEYS), "parser config")
    _assert_no_unknown_keys(cfg, set(SECTION_KEYS), "parser config", allow_unknown)

    for section, keys in SECTION_KEYS.items():
        _assert_mapping(cfg[section], section)
        _assert_required_keys(cfg[section], keys, section)
        _assert_no_unknown_keys(cfg[section], keys, section, allow_unknown)

    input_cfg = cfg["input"]
    _assert_string_list(input_cfg["extensions"], "input.extensions")
    if not input_cfg["extensions"]:
        raise ConfigError("input.extensions must not be empty")
    _assert_string_list(input_cfg["exclude_dirs"], "input.exclude_dirs")
    try:
        codecs.lookup(input_cfg["encoding"])
    except (LookupError, TypeError) as exc:
        raise ConfigError(f"input.encoding is not a known codec: {input_cfg['encoding']!r}") from exc

    limits = cfg["limits"]
    _assert_optional_positive_int(limits["max_records_per_region"], "limits.max_records_per_region")
    _assert_optional_positive_int(limits["max_regions"], "limits.max_regions")
    if limits["workers"] is None:
        raise ConfigError("limits.workers must be a positive integer")
    _assert_optional_positive_int(limits["workers"], "limits.workers")

    for key in ("benchmarks_filename", "summary_filename"):
        if not isinstance(cfg["output"][key], str) or not cfg["output"][key]:
            raise ConfigError(f"output.{key} must be a non-empty string")

    return cfg
