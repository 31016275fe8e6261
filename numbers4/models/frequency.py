"""
Numbers4 - Positional Frequency Model
=====================================

Counts how often each digit 0-9 lands on each of the four positions across a
history window and ranks digits per position.

Ranking rule: higher count first, ties resolved to the lowest digit. The rule
is explicit so two runs over the same window always agree.
"""

from dataclasses import dataclass
from itertools import permutations
from typing import Dict, List

import numpy as np
from loguru import logger

from numbers4.draws import DIGITS, WindowLike, from_digits, require_non_empty


@dataclass
class FrequencyAnalysis:
    """Per-position digit distribution for display"""
    digit_frequency: List[List[Dict[str, int]]]  # 4 positions, ranked entries
    most_frequent: List[str]
    sample_size: int

    def to_dict(self) -> Dict:
        return {
            'digitFrequency': self.digit_frequency,
            'mostFrequent': self.most_frequent,
            'sampleSize': self.sample_size,
        }


def rank_digits(counts: np.ndarray) -> List[int]:
    """Observed digits ordered by count desc, lowest digit first on ties"""
    observed = [d for d in range(10) if counts[d] > 0]
    return sorted(observed, key=lambda d: (-int(counts[d]), d))


class FrequencyModel:
    """
    Positional digit frequency over a window.

    The most frequent digit of every position, concatenated, is the legacy
    "kako" prediction.
    """

    name = "frequency"

    def frequency_table(self, window: WindowLike) -> np.ndarray:
        """
        Count digit occurrences per position.

        Args:
            window: Draws (or winning number strings) to count

        Returns:
            Integer array of shape (4, 10); table[p, d] is how often digit d
            appeared at position p

        Raises:
            InsufficientDataError: If the window is empty
        """
        matrix = require_non_empty(window, self.name)
        table = np.zeros((DIGITS, 10), dtype=np.int64)
        for position in range(DIGITS):
            table[position] = np.bincount(matrix[:, position], minlength=10)
        return table

    def ranked_digits(self, window: WindowLike, position: int) -> List[int]:
        """Digits observed at `position`, most frequent first"""
        return rank_digits(self.frequency_table(window)[position])

    def most_frequent_digits(self, window: WindowLike) -> str:
        """Top-ranked digit of every position"""
        table = self.frequency_table(window)
        # argmax returns the first maximum, i.e. the lowest digit on ties
        prediction = from_digits(int(np.argmax(table[p])) for p in range(DIGITS))
        logger.debug(f"{self.name}: most frequent digits {prediction} (window={int(table[0].sum())})")
        return prediction

    def second_most_frequent(self, window: WindowLike) -> str:
        """Second-ranked digit of every position, or the top digit when only one was seen"""
        table = self.frequency_table(window)
        digits = []
        for position in range(DIGITS):
            ranked = rank_digits(table[position])
            digits.append(ranked[1] if len(ranked) > 1 else ranked[0])
        return from_digits(digits)

    def analysis(self, window: WindowLike) -> FrequencyAnalysis:
        """Ranked counts and rounded percentages for each position"""
        table = self.frequency_table(window)
        sample_size = int(table[0].sum())
        positions = []
        for position in range(DIGITS):
            row = table[position]
            positions.append([
                {
                    'digit': str(d),
                    'count': int(row[d]),
                    'percentage': int(np.floor(row[d] / sample_size * 100 + 0.5)),
                }
                for d in rank_digits(row)
            ])
        return FrequencyAnalysis(
            digit_frequency=positions,
            most_frequent=[str(int(np.argmax(table[p]))) for p in range(DIGITS)],
            sample_size=sample_size,
        )

    def kako_predictions(self, window: WindowLike, limit: int = 10) -> List[str]:
        """
        Legacy multi-ticket frequency set.

        Starts from the most frequent number, then swaps in second-ranked
        digits one position at a time, then adds orderings of the base digits
        generated from the base's own positions (or, when the base repeats a
        digit, swapped variants of the mixed numbers) until `limit` tickets
        are collected.
        """
        most = list(self.most_frequent_digits(window))
        second = list(self.second_most_frequent(window))

        predictions: Dict[str, None] = {''.join(most): None}

        for i in range(DIGITS):
            pattern = list(most)
            pattern[i] = second[i]
            predictions[''.join(pattern)] = None

        if len(set(most)) >= DIGITS:
            for ordering in (''.join(p) for p in permutations(most)):
                if len(predictions) >= limit:
                    break
                predictions[ordering] = None
        else:
            for i in range(DIGITS):
                if len(predictions) >= limit:
                    break
                mixed = list(most)
                mixed[i] = second[i]
                for j in range(DIGITS):
                    if len(predictions) >= limit:
                        break
                    if i != j:
                        mixed[i], mixed[j] = mixed[j], mixed[i]
                        predictions[''.join(mixed)] = None

        result = list(predictions)[:limit]
        logger.debug(f"{self.name}: generated {len(result)} kako predictions from base {''.join(most)}")
        return result
