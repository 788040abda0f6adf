"""Filesystem layout for raw fixes, per-day summaries and the catalog.

Layout below the docs directory::

    2024-01-01/083000.json   raw snapshots, one per capture time
    data/2024-01-01.json     per-day TripSummary
    data/index.json          catalog of all summaries, newest first
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .config import DOCS_DIR, INDEX_FILENAME, SUMMARY_SUBDIR
from .models import DailyIndexEntry, TripSummary
from .utils import compact_date, iso_date, json_dumps_pretty

_LOG = logging.getLogger(__name__)
_DAY_DIR = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class TripStore:
    """Read/write access to the artefacts of the docs directory."""

    def __init__(self, docs_dir: str | Path | None = None) -> None:
        base = Path(docs_dir if docs_dir is not None else DOCS_DIR)
        self._docs_dir = base if base.is_absolute() else Path.cwd() / base
        self._data_dir = self._docs_dir / SUMMARY_SUBDIR

    @property
    def docs_dir(self) -> Path:
        return self._docs_dir

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def source_dir(self, date: str) -> Path:
        """Raw snapshot folder for ``YYYYMMDD``."""

        return self._docs_dir / iso_date(date)

    def summary_path(self, date: str) -> Path:
        """Summary file for ``YYYYMMDD``."""

        return self._data_dir / f"{iso_date(date)}.json"

    @property
    def index_path(self) -> Path:
        return self._data_dir / INDEX_FILENAME

    def available_dates(self) -> List[str]:
        """Return ``YYYYMMDD`` for every raw day folder, oldest first."""

        if not self._docs_dir.is_dir():
            return []
        dates = [
            compact_date(path.name)
            for path in self._docs_dir.glob("20*-*-*")
            if path.is_dir() and _DAY_DIR.match(path.name)
        ]
        return sorted(dates)

    def _write_file(self, path: Path, payload: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = path.with_suffix(".tmp")
        with temp_path.open("w", encoding="utf-8", newline="\n") as handle:
            handle.write(json_dumps_pretty(payload))
        temp_path.replace(path)

    def _read_file(self, path: Path) -> Optional[Any]:
        try:
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            _LOG.error("Failed reading %s: %s", path, exc)
            return None

    def write_summary(self, summary: TripSummary) -> Path:
        path = self.summary_path(compact_date(summary.date))
        self._write_file(path, summary.to_dict())
        return path

    def read_summary(self, date: str) -> Optional[Dict[str, Any]]:
        """Return the stored summary for ``YYYYMMDD`` or ``None``."""

        payload = self._read_file(self.summary_path(date))
        return payload if isinstance(payload, dict) else None

    def write_index(self, entries: Iterable[DailyIndexEntry]) -> Path:
        self._write_file(self.index_path, [entry.to_dict() for entry in entries])
        return self.index_path

    def read_index(self) -> List[Dict[str, Any]]:
        payload = self._read_file(self.index_path)
        return payload if isinstance(payload, list) else []


__all__ = ["TripStore"]
