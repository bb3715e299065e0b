"""Apply a clip window to profiles, documents and files."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, TYPE_CHECKING

from .cropper import CropResult, crop_samples
from .document import load_document, save_document
from .durations import format_duration
from .errors import ClipError, MisalignedArraysError
from .profile import SampledProfile, SpeedscopeDocument
from .units import DEFAULT_FALLBACK_UNIT, unit_scale
from .window import resolve_window

if TYPE_CHECKING:  # pragma: no cover
    from config import ClipConfig

__all__ = ["crop_profile", "apply_crop", "clip_profile", "clip_document", "clip_file"]

LOG = logging.getLogger(__name__)


def _to_ns(value: float, scale: int) -> int:
    return int(round(value * scale))


def crop_profile(
    profile: SampledProfile,
    start_ns: int,
    end_ns: int,
    *,
    fallback_unit: str = DEFAULT_FALLBACK_UNIT,
) -> CropResult:
    """Compute the bounds of the requested window without touching ``profile``.

    ``start_ns``/``end_ns`` are requested offsets from the profile start; see
    :func:`speedclip.window.resolve_window` for negative and zero values.
    """
    if len(profile.samples) != len(profile.weights):
        # fields may have been edited since parsing
        raise MisalignedArraysError(len(profile.samples), len(profile.weights), profile=profile.name)

    scale = unit_scale(profile.unit, fallback=fallback_unit)
    abs_start = _to_ns(profile.start_value, scale)
    abs_end = _to_ns(profile.end_value, scale)
    try:
        window = resolve_window(start_ns, end_ns, abs_end - abs_start)
    except ClipError as exc:
        exc.with_profile(profile.name)
        raise
    LOG.debug("%s: window %s of %s", profile.name, window, format_duration(abs_end - abs_start))

    return crop_samples(
        profile.weights,
        scale_ns=scale,
        start_ns=abs_start,
        end_ns=abs_end,
        window=window,
    )


def apply_crop(profile: SampledProfile, result: CropResult) -> None:
    """Slice ``profile`` to ``result`` and rewrite its trimmed boundaries."""
    LOG.info(
        "%s kept %d/%d: %d -> %d",
        profile.name,
        result.kept,
        result.original_length,
        result.start_index,
        result.end_index,
    )

    span = result.as_slice()
    profile.samples = profile.samples[span]
    profile.weights = profile.weights[span]
    if result.trims_start:
        profile.start_value = result.start_ns / result.scale_ns
    if result.trims_end:
        profile.end_value = result.end_ns / result.scale_ns
    profile.apply()


def clip_profile(
    profile: SampledProfile,
    start_ns: int,
    end_ns: int,
    *,
    fallback_unit: str = DEFAULT_FALLBACK_UNIT,
) -> CropResult:
    """Crop ``profile`` in place to the requested window and return the bounds."""
    result = crop_profile(profile, start_ns, end_ns, fallback_unit=fallback_unit)
    apply_crop(profile, result)
    return result


def clip_document(
    document: SpeedscopeDocument,
    start_ns: int,
    end_ns: int,
    *,
    fallback_unit: str = DEFAULT_FALLBACK_UNIT,
) -> List[CropResult]:
    """Clip every profile of ``document`` in order.

    Every window is resolved and cropped before any profile is modified, so a
    failure leaves the document untouched.
    """
    results = [
        crop_profile(profile, start_ns, end_ns, fallback_unit=fallback_unit)
        for profile in document.profiles
    ]
    for profile, result in zip(document.profiles, results):
        apply_crop(profile, result)
    return results


def clip_file(
    path: str | Path,
    out: str | Path,
    start_ns: int,
    end_ns: int,
    config: "ClipConfig | None" = None,
) -> List[CropResult]:
    """Load ``path``, clip all profiles and write the result to ``out`` once."""
    fallback_unit = config.fallback_unit if config is not None else DEFAULT_FALLBACK_UNIT
    indent = config.json_indent if config is not None else None
    ensure_ascii = config.ensure_ascii if config is not None else False

    document = load_document(path)
    results = clip_document(document, start_ns, end_ns, fallback_unit=fallback_unit)
    save_document(document, out, indent=indent, ensure_ascii=ensure_ascii)
    return results
