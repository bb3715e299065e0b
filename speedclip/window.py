"""Resolve a requested clip window against one profile's duration."""
from __future__ import annotations

from dataclasses import dataclass

from .durations import format_duration
from .errors import InvalidWindowError

__all__ = ["ResolvedWindow", "resolve_window"]


@dataclass(frozen=True)
class ResolvedWindow:
    """Offsets in nanoseconds from the profile's own start.

    ``end_ns`` is ``None`` when the window is open at the back.
    """

    start_ns: int
    end_ns: int | None

    @property
    def bounded_start(self) -> bool:
        return self.start_ns > 0

    @property
    def bounded_end(self) -> bool:
        return self.end_ns is not None

    def __str__(self) -> str:
        end = "end" if self.end_ns is None else format_duration(self.end_ns)
        return f"[{format_duration(self.start_ns)}, {end}]"


def _from_end(offset_ns: int, total_ns: int) -> int:
    if offset_ns < 0:
        return max(0, total_ns + offset_ns)
    return offset_ns


def resolve_window(start_ns: int, end_ns: int, total_ns: int) -> ResolvedWindow:
    """Turn requested offsets into a :class:`ResolvedWindow`.

    - negative offsets count back from ``total_ns`` and clamp at 0;
    - an ``end_ns`` that is 0, or resolves to 0, leaves the window open at the back;
    - a resolved end before the resolved start raises :class:`InvalidWindowError`;
    - the start clamps to ``total_ns`` and an end at or past it is open.
    """
    if total_ns < 0:
        raise ValueError("total_ns must be non-negative")

    start = _from_end(int(start_ns), total_ns)
    end = _from_end(int(end_ns), total_ns)
    if end == 0:
        return ResolvedWindow(min(start, total_ns), None)

    if end < start:
        raise InvalidWindowError(
            f"end {format_duration(end)} < start {format_duration(start)}"
        )
    return ResolvedWindow(min(start, total_ns), end if end < total_ns else None)
