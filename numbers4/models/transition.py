"""
Numbers4 - Digit Transition Model
=================================

Learns, per position, which digit tends to follow which in consecutive draws
and predicts the next draw from the latest one.

    table[p, a, b] = number of times digit `a` at position p was followed by
                     digit `b` at position p in the next draw

Pairs are read in chronological order (older draw -> newer draw).
"""

from typing import Optional, Union

import numpy as np
from loguru import logger

from numbers4.draws import DIGITS, Draw, WindowLike, from_digits, normalize_winning_number, require_non_empty
from numbers4.exceptions import InsufficientDataError
from numbers4.models.frequency import FrequencyModel


class TransitionModel:
    """Empirical next-digit distribution conditioned on the previous draw"""

    name = "transition"

    def __init__(self, frequency_model: Optional[FrequencyModel] = None):
        self.frequency_model = frequency_model or FrequencyModel()

    def transition_table(self, window: WindowLike) -> np.ndarray:
        """
        Build the (4, 10, 10) transition count table.

        Args:
            window: Draws ordered most recent first

        Returns:
            Integer array of transition counts

        Raises:
            InsufficientDataError: If the window is empty
        """
        matrix = require_non_empty(window, self.name)
        chronological = matrix[::-1]
        table = np.zeros((DIGITS, 10, 10), dtype=np.int64)
        for current, following in zip(chronological[:-1], chronological[1:]):
            for position in range(DIGITS):
                table[position, current[position], following[position]] += 1
        return table

    def predict_next(self, window: WindowLike, last_draw: Union[Draw, str, None]) -> str:
        """
        Predict the next draw from `last_draw`.

        For each position, picks the digit that most often followed the last
        draw's digit (lowest digit on ties). A digit never seen as a
        transition source falls back to the position's most frequent digit.

        Raises:
            InsufficientDataError: If last_draw is missing or the window is empty
        """
        if last_draw is None:
            raise InsufficientDataError(f"{self.name}: a previous draw is required", required=1, available=0)

        last_number = last_draw.winning_number if isinstance(last_draw, Draw) else normalize_winning_number(last_draw)
        table = self.transition_table(window)
        frequencies = None

        digits = []
        for position in range(DIGITS):
            source = int(last_number[position])
            observed = table[position, source]
            if observed.sum() > 0:
                digits.append(int(np.argmax(observed)))
                continue

            # Cold start: no transition ever left this digit at this position
            if frequencies is None:
                frequencies = self.frequency_model.frequency_table(window)
            fallback = int(np.argmax(frequencies[position]))
            logger.debug(f"{self.name}: no transitions from {source} at position {position}, using frequency digit {fallback}")
            digits.append(fallback)

        prediction = from_digits(digits)
        logger.debug(f"{self.name}: {last_number} -> {prediction}")
        return prediction
