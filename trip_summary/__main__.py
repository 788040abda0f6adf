"""Module entry point: python -m trip_summary ..."""

from __future__ import annotations

from trip_summary.main import main


if __name__ == "__main__":
    raise SystemExit(main())
