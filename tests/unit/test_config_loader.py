from pathlib import Path

import pytest

from ngs_datasheets.common.config_loader import apply_overrides, load_config
from ngs_datasheets.common.errors import ConfigError

REPO_CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"

BASE_YAML = """input:
  datasheet_dir: ./data/datasheets
  extensions: [".txt"]
  exclude_dirs: ["Zips"]
  encoding: latin-1
limits:
  max_records_per_region: null
  max_regions: null
  workers: 1
output:
  output_dir: ./data/processed
  benchmarks_filename: parsed_benchmarks.json
  csv_filename: null
  summary_filename: run_summary.json
  source_reference_prefix: /data/datasheets
"""


def _write_base(tmp_path: Path) -> Path:
    base = tmp_path / "base"
    base.mkdir()
    (base / "parser.yml").write_text(BASE_YAML, encoding="utf-8")
    return base


def test_load_config_from_repo_config_dir():
    cfg = load_config(REPO_CONFIG_DIR)
    assert cfg["input"]["extensions"] == [".txt"]
    assert cfg["limits"]["workers"] == 1
    assert cfg["output"]["benchmarks_filename"] == "parsed_benchmarks.json"


def test_load_config_applies_overlay_values(tmp_path: Path):
    base = _write_base(tmp_path)
    overlay = tmp_path / "overlay"
    overlay.mkdir()
    (overlay / "parser.yml").write_text(
        """input:
  extensions: [".txt", ".dat"]
limits:
  workers: 4
""",
        encoding="utf-8",
    )

    cfg = load_config(base, overlay_config_dir=overlay)

    assert cfg["input"]["extensions"] == [".txt", ".dat"]
    assert cfg["input"]["encoding"] == "latin-1"
    assert cfg["limits"]["workers"] == 4


def test_load_config_ignores_empty_overlay_file(tmp_path: Path):
    base = _write_base(tmp_path)
    overlay = tmp_path / "overlay"
    overlay.mkdir()
    (overlay / "parser.yml").write_text("", encoding="utf-8")

    cfg = load_config(base, overlay_config_dir=overlay)
    assert cfg["limits"]["workers"] == 1


def test_load_config_rejects_non_mapping_overlay(tmp_path: Path):
    base = _write_base(tmp_path)
    overlay = tmp_path / "overlay"
    overlay.mkdir()
    (overlay / "parser.yml").write_text("- not\n- a\n- mapping\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(base, overlay_config_dir=overlay)


def test_load_config_missing_file_is_config_error(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_apply_overrides_skips_unset_values(tmp_path: Path):
    cfg = load_config(_write_base(tmp_path))

    merged = apply_overrides(
        cfg,
        {
            "input": {"datasheet_dir": "/srv/datasheets"},
            "limits": {"workers": None, "max_records_per_region": 50},
        },
    )

    assert merged["input"]["datasheet_dir"] == "/srv/datasheets"
    assert merged["limits"]["workers"] == 1
    assert merged["limits"]["max_records_per_region"] == 50


def test_apply_overrides_validates_result(tmp_path: Path):
    cfg = load_config(_write_base(tmp_path))
    with pytest.raises(ConfigError):
        apply_overrides(cfg, {"limits": {"workers": 0}})
