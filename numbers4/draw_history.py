"""
Numbers4 Draw History
=====================

Read-only access to recorded draws. The engine only ever asks two questions:
"the N most recent draws strictly before draw X" and "the draws between two
dates".
"""

import bisect
from datetime import date
from typing import Iterable, List, Optional

import pandas as pd
from loguru import logger

from numbers4.draws import Draw, HistoryWindow


class DrawHistory:
    """Draws ordered by draw number (oldest first)"""

    def __init__(self, draws: Iterable[Draw]):
        ordered = sorted(draws, key=lambda d: d.draw_number)
        numbers = [d.draw_number for d in ordered]
        if len(set(numbers)) != len(numbers):
            raise ValueError("Draw numbers must be unique")
        self._draws = tuple(ordered)
        self._numbers = numbers

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> 'DrawHistory':
        """
        Build a history from a DataFrame with columns
        [draw_number, draw_date, winning_number].
        """
        if df.empty:
            logger.warning("DrawHistory created from an empty DataFrame")
            return cls([])
        draws = [
            Draw(
                draw_number=int(row.draw_number),
                draw_date=row.draw_date,
                winning_number=row.winning_number if isinstance(row.winning_number, str) else int(row.winning_number),
            )
            for row in df.itertuples(index=False)
        ]
        return cls(draws)

    @classmethod
    def from_csv(cls, path: str) -> 'DrawHistory':
        """Load draws from a CSV file; winning numbers are read as text to keep leading zeros"""
        df = pd.read_csv(path, dtype={'winning_number': str})
        df['winning_number'] = df['winning_number'].str.zfill(4)
        logger.info(f"Loaded {len(df)} draws from {path}")
        return cls.from_dataframe(df)

    @classmethod
    def from_database(cls, max_draw_number: Optional[int] = None) -> 'DrawHistory':
        from numbers4.database import get_all_draws
        return cls.from_dataframe(get_all_draws(max_draw_number=max_draw_number))

    def __len__(self) -> int:
        return len(self._draws)

    def __iter__(self):
        return iter(self._draws)

    @property
    def draws(self) -> List[Draw]:
        return list(self._draws)

    def latest(self) -> Optional[Draw]:
        return self._draws[-1] if self._draws else None

    def get(self, draw_number: int) -> Optional[Draw]:
        index = bisect.bisect_left(self._numbers, draw_number)
        if index < len(self._numbers) and self._numbers[index] == draw_number:
            return self._draws[index]
        return None

    def recent_before(self, draw_number: int, n: int) -> HistoryWindow:
        """The `n` most recent draws strictly before `draw_number`, most recent first"""
        end = bisect.bisect_left(self._numbers, draw_number)
        return HistoryWindow.from_chronological(self._draws[max(0, end - n):end])

    def latest_window(self, n: int) -> HistoryWindow:
        """The `n` most recent draws, most recent first"""
        return HistoryWindow.from_chronological(self._draws[-n:] if n > 0 else ())

    def between(self, start_date: date, end_date: date) -> List[Draw]:
        """Draws with start_date <= draw_date <= end_date, oldest first"""
        return [d for d in self._draws if start_date <= d.draw_date <= end_date]

    def with_lookback(self, start_date: date, end_date: date, lookback: int) -> List[Draw]:
        """
        Draws between the two dates preceded by up to `lookback` earlier draws,
        oldest first. The extra draws only feed history windows.
        """
        in_range = self.between(start_date, end_date)
        if not in_range:
            return []
        first = bisect.bisect_left(self._numbers, in_range[0].draw_number)
        return list(self._draws[max(0, first - lookback):first]) + in_range
