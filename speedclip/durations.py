"""Parse and format signed durations such as ``33s``, ``1m30s`` or ``-250ms``.

Durations are integer nanoseconds throughout the package.
"""
from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

__all__ = ["NANOSECOND", "MICROSECOND", "MILLISECOND", "SECOND", "MINUTE", "HOUR", "parse_duration", "format_duration"]

NANOSECOND = 1
MICROSECOND = 1_000 * NANOSECOND
MILLISECOND = 1_000 * MICROSECOND
SECOND = 1_000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE

_UNITS = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # micro sign
    "μs": MICROSECOND,  # greek mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

_COMPONENT = re.compile(r"(\d+\.?\d*|\.\d+)([^\d.]+)")


def parse_duration(text: str) -> int:
    """Return the duration in ``text`` as integer nanoseconds.

    The format is a possibly signed sequence of decimal numbers, each with a
    unit suffix (``ns``, ``us``/``µs``, ``ms``, ``s``, ``m``, ``h``), e.g.
    ``1h15m``, ``-1.5s`` or ``300ms``. A bare ``0`` is also accepted.
    Fractional nanoseconds are rounded to the nearest integer.
    """
    raw = text.strip()
    if not raw:
        raise ValueError("empty duration")

    sign = 1
    body = raw
    if body[0] in "+-":
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body == "0":
        return 0
    if not body:
        raise ValueError(f"invalid duration {text!r}")

    total = Decimal(0)
    pos = 0
    while pos < len(body):
        match = _COMPONENT.match(body, pos)
        if match is None:
            raise ValueError(f"invalid duration {text!r}")
        number, unit = match.groups()
        scale = _UNITS.get(unit)
        if scale is None:
            raise ValueError(f"unknown unit {unit!r} in duration {text!r}")
        try:
            total += Decimal(number) * scale
        except InvalidOperation as exc:
            raise ValueError(f"invalid duration {text!r}") from exc
        pos = match.end()

    return sign * int(total.to_integral_value())


def format_duration(ns: int) -> str:
    """Format nanoseconds like ``1h20m0s``, ``33.5s`` or ``250ms``."""
    value = int(ns)
    if value == 0:
        return "0s"
    sign = "-" if value < 0 else ""
    magnitude = abs(value)
    if magnitude < SECOND:
        for suffix, scale in (("ms", MILLISECOND), ("us", MICROSECOND), ("ns", NANOSECOND)):
            if magnitude >= scale:
                return f"{sign}{_decimal_text(magnitude, scale)}{suffix}"

    hours, rem = divmod(magnitude, HOUR)
    minutes, rem = divmod(rem, MINUTE)
    out = sign
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return out + f"{_decimal_text(rem, SECOND)}s"


def _decimal_text(value: int, scale: int) -> str:
    whole, frac = divmod(value, scale)
    if not frac:
        return str(whole)
    digits = len(str(scale)) - 1
    return f"{whole}.{frac:0{digits}d}".rstrip("0")
