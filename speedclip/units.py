"""Map speedscope value units to a nanosecond scale."""
from __future__ import annotations

import logging

from .durations import MICROSECOND, MILLISECOND, NANOSECOND, SECOND

__all__ = ["UNIT_SCALES", "VALUE_UNITS", "DEFAULT_FALLBACK_UNIT", "unit_scale", "is_time_unit"]

LOG = logging.getLogger(__name__)

# Every unit a speedscope profile may declare; only the time units have a scale.
VALUE_UNITS = ("none", "nanoseconds", "microseconds", "milliseconds", "seconds", "bytes")

UNIT_SCALES = {
    "nanoseconds": NANOSECOND,
    "microseconds": MICROSECOND,
    "milliseconds": MILLISECOND,
    "seconds": SECOND,
}

DEFAULT_FALLBACK_UNIT = "seconds"


def is_time_unit(unit: str) -> bool:
    return unit in UNIT_SCALES


def unit_scale(unit: str, fallback: str = DEFAULT_FALLBACK_UNIT) -> int:
    """Return nanoseconds per ``unit``.

    Units without a time meaning (``bytes``, ``none``, unknown strings) use the
    scale of ``fallback`` instead of failing, so one odd profile does not abort
    the whole document.
    """
    scale = UNIT_SCALES.get(unit)
    if scale is not None:
        return scale
    if fallback not in UNIT_SCALES:
        raise ValueError(f"fallback unit must be one of {sorted(UNIT_SCALES)}, got {fallback!r}")
    LOG.warning("Unit %r is not a time unit; treating values as %s", unit, fallback)
    return UNIT_SCALES[fallback]
