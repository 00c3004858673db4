import json
from pathlib import Path

from ngs_datasheets.common.fs import iter_text_lines
from ngs_datasheets.common.ids import generate_run_id
from ngs_datasheets.common.logging import build_logger, close_logger, log_event
from ngs_datasheets.common.models import Benchmark, BenchmarkType


def test_generate_run_id_prefix():
    assert generate_run_id().startswith("run-")


def test_iter_text_lines_strips_terminators(tmp_path: Path):
    path = tmp_path / "mixed.txt"
    path.write_bytes(b"one\r\ntwo\rthree\nfour")
    assert list(iter_text_lines(path)) == ["one", "two", "three", "four"]


def test_iter_text_lines_decodes_latin1(tmp_path: Path):
    path = tmp_path / "latin.txt"
    path.write_bytes("ESPA\xd1OLA\n".encode("latin-1"))
    assert list(iter_text_lines(path)) == ["ESPA\xd1OLA"]


def test_benchmark_to_dict_uses_type_name_and_field_order():
    payload = Benchmark(id="AB1234", type=BenchmarkType.CORS, latitude=1.0, longitude=2.0, state="CA").to_dict()
    assert list(payload) == [
        "id",
        "name",
        "type",
        "latitude",
        "longitude",
        "elevation",
        "state",
        "description",
        "source_reference",
    ]
    assert payload["type"] == "CORS"


def test_log_event_writes_json_lines(tmp_path: Path):
    logger = build_logger("run-test", output_dir=tmp_path, level="INFO")
    log_event(logger, "region done", run_id="run-test", region="CA", event="REGION_END", status="ok", rows_out=3)
    close_logger(logger)

    lines = (tmp_path / "run_meta" / "run-test.log.jsonl").read_text(encoding="utf-8").splitlines()
    payload = json.loads(lines[-1])
    assert payload["region"] == "CA"
    assert payload["event"] == "REGION_END"
    assert payload["rows_out"] == 3
    assert payload["error_code"] is None
    assert payload["message"] == "region done"
