"""Typed speedscope documents and sampled profiles, validated on load."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, List

from .errors import MalformedDocumentError, MisalignedArraysError, UnsupportedProfileError

__all__ = ["SAMPLED", "SampledProfile", "SpeedscopeDocument"]

SAMPLED = "sampled"


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _require(raw: Dict[str, Any], key: str, kind: type | tuple, label: str, name: str | None) -> Any:
    if key not in raw:
        raise MalformedDocumentError(f"{label} field missing", field=key, profile=name)
    value = raw[key]
    if not isinstance(value, kind) or isinstance(value, bool):
        raise MalformedDocumentError(
            f"{label} field has wrong type {type(value).__name__}", field=key, profile=name
        )
    return value


def _require_number(raw: Dict[str, Any], key: str, name: str | None) -> float:
    value = _require(raw, key, Real, f"'{key}'", name)
    if not math.isfinite(value):
        raise MalformedDocumentError(f"'{key}' must be finite, got {value!r}", field=key, profile=name)
    return value


@dataclass
class SampledProfile:
    """
    One ``"sampled"`` speedscope profile, validated once at parse time.
    - ``samples`` are opaque stacks, kept verbatim and only sliced.
    - ``weights`` are per-sample durations in ``unit``.
    - ``raw`` is the original JSON object; :meth:`apply` writes edits back
      into it so unknown keys pass through.
    """
    name: str
    unit: str
    start_value: float
    end_value: float
    samples: List[Any]
    weights: List[float]
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, raw: Any, *, index: int | None = None) -> "SampledProfile":
        if not isinstance(raw, dict):
            where = f"profiles[{index}]" if index is not None else "profile"
            raise MalformedDocumentError(f"{where} is not an object", field="profiles")

        name = raw.get("name")
        if name is not None and not isinstance(name, str):
            name = str(name)
        label = name if name is not None else (f"#{index}" if index is not None else None)

        kind = raw.get("type", SAMPLED)
        if kind != SAMPLED:
            raise UnsupportedProfileError(
                f"unsupported profile type {kind!r}; only {SAMPLED!r} profiles can be clipped",
                field="type",
                profile=label,
            )

        unit = _require(raw, "unit", str, "'unit'", label)
        start_value = _require_number(raw, "startValue", label)
        end_value = _require_number(raw, "endValue", label)
        if end_value < start_value:
            raise MalformedDocumentError(
                f"'endValue' {end_value} < 'startValue' {start_value}", field="endValue", profile=label
            )
        samples = _require(raw, "samples", list, "'samples'", label)
        weights = _require(raw, "weights", list, "'weights'", label)
        if len(samples) != len(weights):
            raise MisalignedArraysError(len(samples), len(weights), profile=label)
        for i, w in enumerate(weights):
            if not _is_number(w):
                raise MalformedDocumentError(
                    f"'weights'[{i}] has wrong type {type(w).__name__}", field="weights", profile=label
                )
            if not math.isfinite(w) or w < 0:
                raise MalformedDocumentError(
                    f"'weights'[{i}] must be finite and non-negative, got {w!r}", field="weights", profile=label
                )

        return cls(
            name=label or "",
            unit=unit,
            start_value=start_value,
            end_value=end_value,
            samples=samples,
            weights=weights,
            raw=raw,
        )

    def __len__(self) -> int:
        return len(self.weights)

    def apply(self) -> Dict[str, Any]:
        """Write the current fields back into ``raw`` and return it."""
        self.raw["startValue"] = self.start_value
        self.raw["endValue"] = self.end_value
        self.raw["samples"] = self.samples
        self.raw["weights"] = self.weights
        return self.raw


@dataclass
class SpeedscopeDocument:
    """A speedscope file: the raw top-level object plus its parsed profiles."""
    raw: Dict[str, Any]
    profiles: List[SampledProfile]

    @classmethod
    def from_dict(cls, raw: Any) -> "SpeedscopeDocument":
        if not isinstance(raw, dict):
            raise MalformedDocumentError("document root is not an object")
        entries = raw.get("profiles")
        if not isinstance(entries, list):
            raise MalformedDocumentError("'profiles' field missing or wrong type", field="profiles")
        profiles = [SampledProfile.from_dict(entry, index=i) for i, entry in enumerate(entries)]
        return cls(raw=raw, profiles=profiles)

    def to_dict(self) -> Dict[str, Any]:
        self.raw["profiles"] = [profile.apply() for profile in self.profiles]
        return self.raw
