from ngs_datasheets.cli import parse_args


def test_parse_args_defaults():
    args = parse_args(["parse"])
    assert args.command == "parse"
    assert args.region is None
    assert args.overlay_config_dir is None
    assert args.workers is None
    assert args.strict is False


def test_parse_args_collects_repeated_regions():
    args = parse_args(["scan", "--region", "CA", "--region", "NV", "--workers", "3"])
    assert args.command == "scan"
    assert args.region == ["CA", "NV"]
    assert args.workers == 3


def test_parse_args_accepts_overlay_config_dir():
    args = parse_args(["parse", "--overlay-config-dir", "config/live"])
    assert args.overlay_config_dir == "config/live"
