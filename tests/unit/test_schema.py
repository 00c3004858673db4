import copy

import pytest

from ngs_datasheets.common.errors import ConfigError
from ngs_datasheets.common.schema import validate_parser_config


BASE_CONFIG = {
    "input": {
        "datasheet_dir": "data/datasheets",
        "extensions": [".txt"],
        "exclude_dirs": ["Zips"],
        "encoding": "latin-1",
    },
    "limits": {"max_records_per_region": None, "max_regions": None, "workers": 1},
    "output": {
        "output_dir": "data/processed",
        "benchmarks_filename": "parsed_benchmarks.json",
        "csv_filename": None,
        "summary_filename": "run_summary.json",
        "source_reference_prefix": "/data/datasheets",
    },
}


def _config(**section_updates):
    cfg = copy.deepcopy(BASE_CONFIG)
    for section, values in section_updates.items():
        cfg[section].update(values)
    return cfg


def test_validate_parser_config_accepts_valid_shape():
    validated = validate_parser_config(_config())
    assert validated["input"]["encoding"] == "latin-1"


def test_validate_parser_config_rejects_unknown_key_by_default():
    bad = _config()
    bad["unexpected"] = True
    with pytest.raises(ConfigError):
        validate_parser_config(bad)


def test_validate_parser_config_allows_unknown_when_enabled():
    okay = _config(limits={"extra": 1})
    validate_parser_config(okay, allow_unknown=True)


def test_validate_parser_config_rejects_missing_section_key():
    bad = _config()
    del bad["output"]["summary_filename"]
    with pytest.raises(ConfigError):
        validate_parser_config(bad)


@pytest.mark.parametrize(
    "limits",
    [
        {"workers": 0},
        {"workers": None},
        {"max_records_per_region": -1},
        {"max_regions": "ten"},
        {"max_regions": True},
    ],
)
def test_validate_parser_config_rejects_bad_limits(limits):
    with pytest.raises(ConfigError):
        validate_parser_config(_config(limits=limits))


def test_validate_parser_config_rejects_unknown_encoding():
    with pytest.raises(ConfigError):
        validate_parser_config(_config(input={"encoding": "not-a-codec"}))


def test_validate_parser_config_rejects_empty_extensions():
    with pytest.raises(ConfigError):
        validate_parser_config(_config(input={"extensions": []}))


def test_validate_parser_config_rejects_non_mapping():
    with pytest.raises(ConfigError):
        validate_parser_config(["input"])
