"""
Numbers4 - Pattern Conformity Model
===================================

Summarises the shape of recent draws (digit sum, number of distinct digits,
odd digits, consecutive runs) and samples candidates that look like them.

Sampling is bounded: after `max_attempts` rejected candidates the model
returns a uniformly random ticket. That fallback is a termination policy,
so it is logged at debug level and never reported as a failure.
"""

from dataclasses import dataclass
from typing import List, Optional

import numpy as np
from loguru import logger

from numbers4.draws import DIGITS, WindowLike, from_digits, require_non_empty


@dataclass
class PatternStats:
    """Window-wide averages per draw"""
    avg_sum: float
    avg_unique: float
    avg_odd: float
    avg_consecutive: float
    sample_size: int

    @property
    def target_unique(self) -> int:
        # Half rounds up
        return int(np.floor(self.avg_unique + 0.5))

    def to_dict(self) -> dict:
        return {
            'avgSum': self.avg_sum,
            'avgUniqueCount': self.avg_unique,
            'avgOddCount': self.avg_odd,
            'avgConsecutiveCount': self.avg_consecutive,
            'sampleSize': self.sample_size,
        }


class PatternModel:
    """Samples tickets matching the window's average sum and distinct-digit count"""

    name = "pattern"

    def __init__(self, max_attempts: int = 100, sum_tolerance: float = 5.0):
        self.max_attempts = max_attempts
        self.sum_tolerance = sum_tolerance

    def analyze(self, window: WindowLike) -> PatternStats:
        """
        Compute pattern averages over the window.

        Raises:
            InsufficientDataError: If the window is empty
        """
        matrix = require_non_empty(window, self.name)

        sums = matrix.sum(axis=1)
        unique_counts = np.array([len(set(row.tolist())) for row in matrix])
        odd_counts = (matrix % 2 == 1).sum(axis=1)
        sorted_rows = np.sort(matrix, axis=1)
        consecutive_counts = (np.diff(sorted_rows, axis=1) == 1).sum(axis=1)

        return PatternStats(
            avg_sum=float(sums.mean()),
            avg_unique=float(unique_counts.mean()),
            avg_odd=float(odd_counts.mean()),
            avg_consecutive=float(consecutive_counts.mean()),
            sample_size=int(matrix.shape[0]),
        )

    def _sample_candidate(self, target_unique: int, rng: np.random.Generator) -> List[int]:
        """Fresh digits until target_unique distinct ones exist, then reuse chosen digits"""
        candidate: List[int] = []
        used: List[int] = []
        for i in range(DIGITS):
            if len(used) < target_unique and i < target_unique:
                digit = int(rng.choice([d for d in range(10) if d not in used]))
            elif used:
                digit = int(rng.choice(used))
            else:
                digit = 0
            candidate.append(digit)
            if digit not in used:
                used.append(digit)
        return candidate

    def predict_by_pattern(self, window: WindowLike, rng: Optional[np.random.Generator] = None) -> str:
        """
        Sample a ticket whose digit sum lies within `sum_tolerance` of the
        window average and whose distinct-digit count follows the window.

        Always returns a ticket.
        """
        stats = self.analyze(window)
        rng = rng or np.random.default_rng()
        target_unique = stats.target_unique

        for attempt in range(self.max_attempts):
            candidate = self._sample_candidate(target_unique, rng)
            if abs(sum(candidate) - stats.avg_sum) < self.sum_tolerance:
                prediction = from_digits(candidate)
                logger.debug(f"{self.name}: accepted {prediction} after {attempt + 1} attempts "
                             f"(target_sum={stats.avg_sum:.2f}, target_unique={target_unique})")
                return prediction

        prediction = f"{int(rng.integers(0, 10000)):04d}"
        logger.debug(f"{self.name}: no conforming ticket in {self.max_attempts} attempts, using {prediction}")
        return prediction
