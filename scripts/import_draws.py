#!/usr/bin/env python3
"""
Import Numbers4 draws from a CSV file into the SQLite database.

Usage (from repo root):
    python scripts/import_draws.py data/draws.csv

CSV columns: draw_number, draw_date (YYYY-MM-DD), winning_number.
Winning numbers are zero-padded to 4 characters.
"""

import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pandas as pd
from loguru import logger

from numbers4.database import bulk_insert_draws, get_db_path, get_latest_draw, initialize_database
from numbers4.exceptions import MalformedDrawError


def import_draws(csv_path: str) -> int:
    df = pd.read_csv(csv_path, dtype={'winning_number': str})
    df['winning_number'] = df['winning_number'].str.strip().str.zfill(4)
    logger.info(f"Read {len(df)} rows from {csv_path}")

    initialize_database()
    return bulk_insert_draws(df)


def main() -> int:
    parser = argparse.ArgumentParser(description="Import Numbers4 draws from CSV")
    parser.add_argument("csv_path", help="CSV file with draw_number, draw_date, winning_number")
    args = parser.parse_args()

    logger.info(f"Database path: {get_db_path()}")
    try:
        count = import_draws(args.csv_path)
    except MalformedDrawError as e:
        logger.error(f"Corrupt draw data, nothing imported: {e}")
        return 1
    except (OSError, KeyError) as e:
        logger.error(f"Could not read {args.csv_path}: {e}")
        return 1

    latest = get_latest_draw()
    logger.info(f"Imported {count} draws. Latest: {latest}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
