#!/usr/bin/env python3
"""Time the prefix-sum cropper against a plain forward scan on synthetic profiles."""
from __future__ import annotations

import argparse
import time

import numpy as np

from speedclip.cropper import crop_samples
from speedclip.durations import MICROSECOND
from speedclip.window import resolve_window


def make_weights(n: int, seed: int = 0) -> list[float]:
    rng = np.random.default_rng(seed)
    return rng.integers(50, 5000, size=n).astype(float).tolist()


def forward_scan(weights, scale, start_ns, window):
    current = start_ns
    start_i = 0
    end_i = len(weights)
    reached = not window.bounded_start
    for i, w in enumerate(weights):
        current += int(round(w * scale))
        if not reached and current > start_ns + window.start_ns:
            start_i = i
            reached = True
        if window.bounded_end and current > start_ns + window.end_ns:
            end_i = i + 1
            break
    if not reached:
        start_i = len(weights)
    return start_i, max(start_i, end_i)


def run(sizes, repeats: int):
    results = []
    for n in sizes:
        weights = make_weights(n)
        total = int(sum(weights)) * MICROSECOND
        window = resolve_window(total // 3, (2 * total) // 3, total)

        t0 = time.perf_counter()
        for _ in range(repeats):
            crop = crop_samples(weights, scale_ns=MICROSECOND, start_ns=0, end_ns=total, window=window)
        prefix_s = (time.perf_counter() - t0) / repeats

        t0 = time.perf_counter()
        for _ in range(repeats):
            scanned = forward_scan(weights, MICROSECOND, 0, window)
        scan_s = (time.perf_counter() - t0) / repeats

        results.append((n, prefix_s, scan_s, (crop.start_index, crop.end_index) == scanned))
    return results


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--sizes", type=int, nargs="+", default=[1_000, 100_000, 1_000_000])
    parser.add_argument("--repeats", type=int, default=5)
    args = parser.parse_args()

    for n, prefix_s, scan_s, agree in run(args.sizes, args.repeats):
        print(
            "samples={:>9d} prefix={:0.4f}s scan={:0.4f}s speedup={:5.1f}x agree={}".format(
                n,
                prefix_s,
                scan_s,
                scan_s / prefix_s if prefix_s > 0 else float("inf"),
                agree,
            )
        )


if __name__ == "__main__":
    main()
