"""GPS trip summary builder package."""

from .builder import SummaryBuilder, SummaryBuilderConfig
from .config import PipelineThresholds, RouteLabels
from .errors import (
    DegenerateTripError,
    MalformedPayloadError,
    MissingDataError,
    TripSummaryError,
)
from .main import main
from .models import Record, TripSummary
from .storage import TripStore

__all__ = [
    "main",
    "DegenerateTripError",
    "MalformedPayloadError",
    "MissingDataError",
    "PipelineThresholds",
    "Record",
    "RouteLabels",
    "SummaryBuilder",
    "SummaryBuilderConfig",
    "TripStore",
    "TripSummary",
    "TripSummaryError",
]
