"""Locate the samples of a weighted sequence that fall inside a window."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .window import ResolvedWindow

__all__ = ["CropResult", "elapsed_ns", "crop_samples"]

# headroom below the int64 maximum for float rounding of the running total
_INT64_SAFE = float(np.iinfo(np.int64).max) / 2


@dataclass(frozen=True)
class CropResult:
    start_index: int
    end_index: int  # exclusive
    start_ns: int   # new absolute start
    end_ns: int     # new absolute end
    original_length: int
    trims_start: bool
    trims_end: bool
    scale_ns: int = 1

    @property
    def kept(self) -> int:
        return self.end_index - self.start_index

    def as_slice(self) -> slice:
        return slice(self.start_index, self.end_index)


def elapsed_ns(weights: Sequence[float] | np.ndarray, scale_ns: int, start_ns: int = 0) -> np.ndarray:
    """Absolute time (ns) at which each sample ends.

    The result is int64 unless the total would overflow it, in which case it
    is an object array of Python ints.

    Weights are converted per sample and rounded before accumulating so the
    running total matches an integer-duration scan exactly.
    """
    w = np.asarray(weights, dtype=np.float64)
    if w.size == 0:
        return np.zeros(0, dtype=np.int64)
    scaled = np.rint(w * float(scale_ns))
    if float(scaled.sum()) + abs(start_ns) < _INT64_SAFE:
        return np.cumsum(scaled.astype(np.int64)) + np.int64(start_ns)
    # totals past int64 (large fallback-unit values) accumulate as Python ints
    steps = np.array([int(s) for s in scaled], dtype=object)
    return np.cumsum(steps) + int(start_ns)


def crop_samples(
    weights: Sequence[float] | np.ndarray,
    *,
    scale_ns: int,
    start_ns: int,
    end_ns: int,
    window: ResolvedWindow,
) -> CropResult:
    """Return index bounds and new boundaries for ``window``.

    Parameters
    ----------
    weights : sequence of float
        Per-sample durations in the profile's native unit, non-negative.
    scale_ns : int
        Nanoseconds per native unit.
    start_ns, end_ns : int
        The profile's absolute start and end.
    window : ResolvedWindow
        Offsets from ``start_ns``.

    Returns
    -------
    CropResult
        ``start_index`` is the first sample whose running total strictly
        exceeds the window start and ``start_ns`` that running total.
        The first sample whose running total strictly exceeds the window end
        is the last one kept; ``end_ns`` is its running total. Open sides keep
        the profile's own boundary.
    """
    elapsed = elapsed_ns(weights, scale_ns, start_ns)
    if elapsed.dtype != object and max(abs(start_ns), abs(end_ns)) >= _INT64_SAFE:
        elapsed = elapsed.astype(object)
    n = int(elapsed.size)

    # elapsed is non-decreasing, so searchsorted(side="right") finds the
    # first index whose running total strictly exceeds the bound.
    start_i = 0
    new_start = int(start_ns)
    if window.bounded_start:
        start_i = int(np.searchsorted(elapsed, start_ns + window.start_ns, side="right"))
        new_start = int(elapsed[start_i]) if start_i < n else int(end_ns)

    end_i = n
    new_end = int(end_ns)
    trims_end = False
    if window.bounded_end:
        last = int(np.searchsorted(elapsed, start_ns + window.end_ns, side="right"))
        if last < n:
            end_i = last + 1
            new_end = int(elapsed[last])
            trims_end = True

    end_i = max(end_i, start_i)
    return CropResult(
        start_index=start_i,
        end_index=end_i,
        start_ns=new_start,
        end_ns=new_end,
        original_length=n,
        trims_start=window.bounded_start,
        trims_end=trims_end,
        scale_ns=scale_ns,
    )
