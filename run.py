#!/usr/bin/env python3
"""Convenience runner for the trip summary builder.

Usage:
    python run.py [YYYYMMDD | --all | --index]
"""
import logging
from trip_summary.main import main

if __name__ == "__main__":
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    raise SystemExit(main())
