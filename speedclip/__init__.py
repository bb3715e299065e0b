"""Crop speedscope sampled profiles to a time window."""

# Re-export commonly used modules for convenience.
from . import clip, cropper, document, durations, errors, profile, units, window

__all__ = [
    "clip",
    "cropper",
    "document",
    "durations",
    "errors",
    "profile",
    "units",
    "window",
]
