"""Central error types used across the application."""

from __future__ import annotations


class TripSummaryError(RuntimeError):
    """Base error for trip reconstruction failures."""


class MissingDataError(TripSummaryError):
    """Raised when a day has no usable fixes or filtering leaves no trip."""


class MalformedPayloadError(TripSummaryError, ValueError):
    """Raised when a fix payload cannot be decoded or lacks a position."""


class DegenerateTripError(MissingDataError):
    """Raised when a derived quantity is undefined, e.g. the center of zero points."""


__all__ = [
    "TripSummaryError",
    "MissingDataError",
    "MalformedPayloadError",
    "DegenerateTripError",
]
