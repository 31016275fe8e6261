#!/usr/bin/env python3
"""
Backtest prediction algorithms over the stored draws.

Usage:
    python scripts/run_backtest.py 2025-01-01 2025-06-30 --algorithms kako hybrid --seed 42
"""

import argparse
import os
import sys
from datetime import datetime

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from loguru import logger

from numbers4.draw_history import DrawHistory
from numbers4.exceptions import Numbers4Error
from numbers4.predictor import Predictor


def _parse_date(value: str):
    return datetime.strptime(value, "%Y-%m-%d").date()


def main() -> int:
    parser = argparse.ArgumentParser(description="Run a Numbers4 backtest")
    parser.add_argument("start_date", type=_parse_date, help="First draw date under test (YYYY-MM-DD)")
    parser.add_argument("end_date", type=_parse_date, help="Last draw date under test (YYYY-MM-DD)")
    parser.add_argument("--algorithms", nargs="+", default=["kako"],
                        help="kako, transition, correlation, pattern, hybrid, ai_random")
    parser.add_argument("--window", type=int, default=None, help="History window size")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the sampling models")
    parser.add_argument("--workers", type=int, default=1, help="Threads used to score draws")
    parser.add_argument("--details", action="store_true", help="Print every winning prediction")
    args = parser.parse_args()

    history = DrawHistory.from_database()
    logger.info(f"Loaded {len(history)} draws")

    try:
        results = Predictor().run_backtest(
            history, args.start_date, args.end_date, args.algorithms,
            window_size=args.window, seed=args.seed, workers=args.workers,
        )
    except (Numbers4Error, ValueError) as e:
        logger.error(f"Backtest failed: {e}")
        return 1

    print(f"\n{'='*78}")
    print(f"BACKTEST {args.start_date} - {args.end_date}")
    print(f"{'='*78}")
    print(f"{'algorithm':<12}{'draws':>7}{'tickets':>9}{'straight':>10}{'box':>6}"
          f"{'win %':>8}{'cost':>12}{'return':>12}{'ROI %':>10}")
    for r in results:
        print(f"{r.algorithm:<12}{r.scored_draws:>7}{r.total_predictions:>9}{r.straight_wins:>10}"
              f"{r.box_wins:>6}{r.win_rate:>8.2f}{r.total_cost:>12,}{r.total_return:>12,}{r.roi:>10.2f}")
        if args.details:
            for d in r.details:
                print(f"    #{d.draw_number} {d.draw_date} {d.winning_number} <- {d.prediction} "
                      f"{d.win_type} {d.win_amount:,}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
