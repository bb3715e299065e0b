"""Exceptions raised while clipping speedscope documents."""
from __future__ import annotations

__all__ = [
    "ClipError",
    "MalformedDocumentError",
    "UnsupportedProfileError",
    "MisalignedArraysError",
    "InvalidWindowError",
]


class ClipError(Exception):
    """Base class for every failure that aborts a clip."""

    def __init__(self, message: str, *, profile: str | None = None) -> None:
        self.message = message
        self.profile = profile
        super().__init__(message)

    def with_profile(self, profile: str | None) -> "ClipError":
        self.profile = profile
        return self

    def __str__(self) -> str:
        if self.profile is None:
            return self.message
        return f"profile {self.profile!r}: {self.message}"


class MalformedDocumentError(ClipError, ValueError):
    """A required field is missing, has the wrong type or an invalid value."""

    def __init__(self, message: str, *, field: str | None = None, profile: str | None = None) -> None:
        self.field = field
        super().__init__(message, profile=profile)


class UnsupportedProfileError(MalformedDocumentError):
    """The profile is not a sampled profile."""


class MisalignedArraysError(MalformedDocumentError):
    """``samples`` and ``weights`` have different lengths."""

    def __init__(self, n_samples: int, n_weights: int, *, profile: str | None = None) -> None:
        self.n_samples = n_samples
        self.n_weights = n_weights
        super().__init__(
            f"'samples' and 'weights' have different lengths: {n_samples}, {n_weights}",
            field="weights",
            profile=profile,
        )


class InvalidWindowError(ClipError, ValueError):
    """The resolved end of the window precedes its start."""
