"""Load a day's raw fix snapshots into ordered records.

Each snapshot is stored as ``HHMMSS.json`` inside the day folder; the file
stem is the capture time and sorts chronologically. Snapshots that cannot be
decoded or carry no position are dropped with a warning rather than failing
the whole day.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping

from .errors import MalformedPayloadError
from .geo import format_clock
from .models import FixPayload, Record

_LOG = logging.getLogger(__name__)
_TIMESTAMP = re.compile(r"^\d{6}$")


def records_from_payloads(payloads: Mapping[str, Any]) -> List[Record]:
    """Wrap decoded snapshots keyed by ``HHMMSS`` into records, oldest first."""

    records: List[Record] = []
    for timestamp in sorted(payloads):
        if not _TIMESTAMP.match(timestamp):
            _LOG.warning("Dropping snapshot with unexpected key %r", timestamp)
            continue
        try:
            fix = FixPayload.from_payload(payloads[timestamp])
        except MalformedPayloadError as exc:
            _LOG.warning("Dropping snapshot %s: %s", timestamp, exc)
            continue
        records.append(
            Record(time=format_clock(timestamp), timestamp=timestamp, fix=fix)
        )
    return records


def read_day_payloads(source_dir: str | Path) -> Dict[str, Any]:
    """Read every snapshot file of a day folder.

    Undecodable files map to ``None`` so the loader reports and drops them.
    """

    payloads: Dict[str, Any] = {}
    for path in sorted(Path(source_dir).glob("*.json")):
        try:
            with path.open("r", encoding="utf-8") as handle:
                payloads[path.stem] = json.load(handle)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            _LOG.warning("Failed reading snapshot %s: %s", path, exc)
            payloads[path.stem] = None
    return payloads


def load_records(source_dir: str | Path) -> List[Record]:
    """Return the ordered records of one day folder (possibly empty)."""

    records = records_from_payloads(read_day_payloads(source_dir))
    _LOG.debug("Loaded %d records from %s", len(records), source_dir)
    return records


__all__ = ["load_records", "read_day_payloads", "records_from_payloads"]
