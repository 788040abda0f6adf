"""Day summary build service.

Encapsulates loading one day's fixes from the store, running the pure
reconstruction pipeline and persisting the resulting artefacts. A day with no
usable data is skipped with a diagnostic so batch runs continue.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from .catalog import collect_catalog
from .config import PipelineThresholds, RouteLabels
from .errors import MissingDataError
from .loader import load_records
from .models import DailyIndexEntry, Record, TripSummary
from .storage import TripStore
from .summary import assemble_summary, reconstruct_trip
from .utils import iso_date

RecordLoader = Callable[[TripStore, str], Sequence[Record]]


def _default_record_loader(store: TripStore, date: str) -> Sequence[Record]:
    return load_records(store.source_dir(date))


@dataclass(slots=True)
class SummaryBuilderConfig:
    thresholds: PipelineThresholds = field(default_factory=PipelineThresholds.from_config)
    labels: RouteLabels = field(default_factory=RouteLabels.from_config)
    loader: RecordLoader = _default_record_loader
    logger: logging.Logger | None = None


class SummaryBuilder:
    def __init__(
        self,
        store: TripStore | None = None,
        config: SummaryBuilderConfig | None = None,
    ):
        self.store = store or TripStore()
        self.config = config or SummaryBuilderConfig()
        self._log = self.config.logger or logging.getLogger(self.__class__.__name__)

    def summarize(self, date: str) -> TripSummary:
        """Build the summary for ``YYYYMMDD`` without writing it.

        Raises:
            MissingDataError: If the day folder is missing, holds no usable
                fixes or no continuous trip survives filtering.
        """

        source_dir = self.store.source_dir(date)
        if not source_dir.is_dir():
            raise MissingDataError("Directory not found")
        records = self.config.loader(self.store, date)
        merged, annotation = reconstruct_trip(
            records, self.config.thresholds, self.config.labels
        )
        return assemble_summary(iso_date(date), merged, annotation)

    def build(self, date: str) -> Optional[TripSummary]:
        """Build and persist the summary for ``YYYYMMDD``; ``None`` when skipped."""

        try:
            summary = self.summarize(date)
        except MissingDataError as exc:
            self._log.info("Skipping %s: %s", iso_date(date), exc)
            return None
        path = self.store.write_summary(summary)
        self._log.info(
            "Generated: %s (records=%d, distance=%dm, rests=%d, anomalies=%d)",
            path,
            len(summary.timeline),
            summary.total_distance,
            summary.rest_count,
            summary.anomaly_count,
        )
        return summary

    def build_all(self) -> List[str]:
        """Build every available date, then rebuild the catalog.

        Returns the dates (``YYYYMMDD``) that produced a summary.
        """

        built: List[str] = []
        dates = self.store.available_dates()
        self._log.info("Building %d dates ...", len(dates))
        for date in dates:
            if self.build(date) is not None:
                built.append(date)
        self.build_index()
        return built

    def build_index(self) -> List[DailyIndexEntry]:
        entries = collect_catalog(self.store)
        self.store.write_index(entries)
        self._log.info("Generated index with %d dates", len(entries))
        return entries


__all__ = ["SummaryBuilder", "SummaryBuilderConfig"]
