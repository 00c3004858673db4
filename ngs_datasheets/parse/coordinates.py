"""Degrees-minutes-seconds to signed decimal degree conversion."""

from __future__ import annotations

HEMISPHERE_SIGNS = {
    "N": 1,
    "E": 1,
    "S": -1,
    "W": -1,
}


def dms_to_decimal(degrees: float, minutes: float, seconds: float, hemisphere: str) -> float:
    """Convert a DMS angle to decimal degrees, negative for S and W.

    No range check and no rounding: ``deg + min/60 + sec/3600`` at native
    float precision.
    """
    try:
        sign = HEMISPHERE_SIGNS[hemisphere.upper()]
    except KeyError:
        raise ValueError(f"Unknown hemisphere: {hemisphere!r}") from None
    return sign * (degrees + minutes / 60 + seconds / 3600)


def parse_dms(degrees: str, minutes: str, seconds: str, hemisphere: str) -> float | None:
    """Like :func:`dms_to_decimal` for raw text captures; ``None`` when they do not parse."""
    try:
        return dms_to_decimal(int(degrees), int(minutes), float(seconds), hemisphere)
    except (TypeError, ValueError):
        return None
