"""General utility helpers shared across modules."""

from __future__ import annotations

import json
import re
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

_COMPACT_DATE = re.compile(r"^\d{8}$")


def round_half_away(value: float, ndigits: int = 0) -> float:
    """Round halves away from zero instead of Python's banker's rounding."""

    quantum = Decimal(1).scaleb(-ndigits)
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)


def is_compact_date(value: str) -> bool:
    """Return True for ``YYYYMMDD`` strings."""

    return bool(_COMPACT_DATE.match(value))


def iso_date(compact: str) -> str:
    """Convert ``YYYYMMDD`` into ``YYYY-MM-DD``."""

    return f"{compact[0:4]}-{compact[4:6]}-{compact[6:8]}"


def compact_date(iso: str) -> str:
    """Convert ``YYYY-MM-DD`` into ``YYYYMMDD``."""

    return iso.replace("-", "")


def today_compact(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime("%Y%m%d")


def json_dumps_pretty(value: Any) -> str:
    """Return stable, human-readable JSON with non-ASCII text left unescaped."""

    return json.dumps(value, ensure_ascii=False, indent=2) + "\n"
