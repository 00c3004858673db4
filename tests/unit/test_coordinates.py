import pytest

from ngs_datasheets.parse.coordinates import dms_to_decimal, parse_dms


def test_dms_to_decimal_north_and_west():
    assert dms_to_decimal(45, 30, 0.0, "N") == pytest.approx(45.5)
    assert dms_to_decimal(122, 30, 0.0, "W") == pytest.approx(-122.5)


def test_dms_to_decimal_south_and_east():
    assert dms_to_decimal(33, 52, 4.8, "S") == pytest.approx(-(33 + 52 / 60 + 4.8 / 3600))
    assert dms_to_decimal(151, 12, 36.0, "E") == pytest.approx(151.21)


def test_dms_to_decimal_does_not_range_check():
    assert dms_to_decimal(200, 0, 0.0, "N") == 200.0
    assert dms_to_decimal(0, 90, 0.0, "W") == -1.5


def test_dms_to_decimal_rejects_unknown_hemisphere():
    with pytest.raises(ValueError):
        dms_to_decimal(1, 2, 3.0, "Q")


def test_parse_dms_from_captures():
    assert parse_dms("61", "57", "42.22481", "N") == pytest.approx(61 + 57 / 60 + 42.22481 / 3600)
    assert parse_dms("162", "56", "16.72477", "W") == pytest.approx(-(162 + 56 / 60 + 16.72477 / 3600))


def test_parse_dms_returns_none_for_garbled_captures():
    assert parse_dms("61", "57", "42.2.1", "N") is None
    assert parse_dms("x", "57", "42.0", "N") is None
