"""
Numbers4 - Cross-Position Correlation Model
===========================================

Counts how often (position i, digit a) appears together with
(position j, digit b) in the same draw, for every ordered pair i != j, and
builds a prediction whose digits reinforce each other.
"""

from typing import Dict, Optional

import numpy as np
from loguru import logger

from numbers4.draws import DIGITS, WindowLike, from_digits, require_non_empty


class CorrelationModel:
    """Joint (position, digit) co-occurrence within single draws"""

    name = "correlation"

    def joint_counts(self, window: WindowLike) -> np.ndarray:
        """
        Build the co-occurrence tensor.

        Returns:
            Integer array of shape (4, 10, 4, 10); joint[i, a, j, b] counts
            draws with digit a at position i and digit b at position j.
            Entries with i == j stay zero.

        Raises:
            InsufficientDataError: If the window is empty
        """
        matrix = require_non_empty(window, self.name)
        joint = np.zeros((DIGITS, 10, DIGITS, 10), dtype=np.int64)
        for row in matrix:
            for i in range(DIGITS):
                for j in range(DIGITS):
                    if i != j:
                        joint[i, row[i], j, row[j]] += 1
        return joint

    def predict_by_correlation(self, window: WindowLike, rng: Optional[np.random.Generator] = None) -> str:
        """
        Build a prediction position by position (0..3).

        The first position takes the digit with the most co-occurrences with
        any other position. Each later position takes the unused digit with
        the highest joint count against the digits already chosen. Ties go to
        the lowest digit. With no co-occurrence evidence at all, an unused
        digit is drawn uniformly from `rng`.
        """
        joint = self.joint_counts(window)
        rng = rng or np.random.default_rng()

        chosen: Dict[int, int] = {}
        used = set()

        for position in range(DIGITS):
            candidates = [d for d in range(10) if d not in used]
            if chosen:
                scores = {d: int(sum(joint[q, a, position, d] for q, a in chosen.items())) for d in candidates}
            else:
                scores = {d: int(joint[:, :, position, d].sum()) for d in candidates}

            best = max(scores.values())
            if best > 0:
                digit = min(d for d, score in scores.items() if score == best)
            else:
                digit = int(rng.choice(candidates))
                logger.debug(f"{self.name}: no co-occurrence evidence at position {position}, drew {digit}")

            chosen[position] = digit
            used.add(digit)

        prediction = from_digits(chosen[p] for p in range(DIGITS))
        logger.debug(f"{self.name}: predicted {prediction}")
        return prediction
